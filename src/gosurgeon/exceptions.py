# Custom exceptions for gosurgeon

from typing import Optional


class GoSurgeonError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ParserError(GoSurgeonError):
    """Raised when a Go file cannot be parsed by tree-sitter."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")


class SymbolNotFoundError(GoSurgeonError):
    """Raised when a symbol, declaration or file cannot be found."""
    def __init__(self, name: str, file_path: Optional[str] = None, kind: str = "symbol"):
        self.name = name
        self.file_path = file_path
        self.kind = kind
        if file_path:
            message = f"{kind} {name} not found in {file_path}"
        else:
            message = f"{kind} {name} not found"
        super().__init__(message)


class UnsupportedKindError(GoSurgeonError):
    """Raised when an operation is requested for a declaration kind that has no mutator."""
    def __init__(self, kind: str, operation: str):
        self.kind = kind
        self.operation = operation
        super().__init__(f"cannot {operation} symbol of kind {kind}")


class InvalidSymbolNameError(GoSurgeonError):
    """Raised when a symbol name does not have the shape an operation needs."""
    pass


class MoveError(GoSurgeonError):
    """Raised when a move request is rejected before any file is touched."""
    pass


class ConfigError(GoSurgeonError):
    """Raised for configuration-related problems."""
    pass
