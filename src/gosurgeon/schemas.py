from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class SymbolKind(str, Enum):
    """Kinds of top-level Go declarations the indexer produces."""
    FUNCTION = "function"
    METHOD = "method"
    STRUCT = "struct"
    INTERFACE = "interface"
    ALIAS = "alias"
    FIELD = "field"
    VARIABLE = "variable"
    CONSTANT = "constant"


class KindFilter(str, Enum):
    """Coarse categories accepted by the indexer's kind filter."""
    FUNCTION = "function"  # functions and methods
    TYPE = "type"  # structs, interfaces, aliases
    FIELD = "field"
    VARIABLE = "variable"
    CONSTANT = "constant"


KIND_CATEGORIES = {
    KindFilter.FUNCTION: frozenset({SymbolKind.FUNCTION, SymbolKind.METHOD}),
    KindFilter.TYPE: frozenset({SymbolKind.STRUCT, SymbolKind.INTERFACE, SymbolKind.ALIAS}),
    KindFilter.FIELD: frozenset({SymbolKind.FIELD}),
    KindFilter.VARIABLE: frozenset({SymbolKind.VARIABLE}),
    KindFilter.CONSTANT: frozenset({SymbolKind.CONSTANT}),
}

VALUE_KINDS = frozenset({SymbolKind.VARIABLE, SymbolKind.CONSTANT})


class Declaration(BaseModel):
    """
    A named top-level declaration found in one Go file.
    Produced fresh on every query, never persisted.
    """
    name: str  # "Recv.Method" for methods, "Parent.Field" for fields
    kind: SymbolKind
    file: str  # Absolute path
    line: int  # 1-indexed line of the declared identifier
    column: int  # 1-indexed byte column of the declared identifier
    end_line: int
    exported: bool
    signature: Optional[str] = None
    receiver: Optional[str] = None  # Receiver type as written, e.g. "*UserService"
    declared_type: Optional[str] = None
    value: Optional[str] = None
    parent: Optional[str] = None  # Enclosing struct for fields

    @model_validator(mode="after")
    def _check_invariants(self):
        if self.end_line < self.line:
            raise ValueError(f"end_line {self.end_line} precedes line {self.line}")
        if bool(self.parent) != (self.kind == SymbolKind.FIELD):
            raise ValueError("parent must be set exactly for fields")
        if bool(self.receiver) != (self.kind == SymbolKind.METHOD):
            raise ValueError("receiver must be set exactly for methods")
        return self

    @property
    def bare_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


class FindResult(BaseModel):
    success: bool = True
    query: str
    matches: List[Declaration] = Field(default_factory=list)
    count: int = 0


class SymbolLocation(BaseModel):
    """
    Exact byte span of one declaration in a file's current bytes.
    Computed from a fresh parse immediately before every read or mutation.
    """
    file_path: str
    symbol_name: str
    kind: SymbolKind
    start_byte: int  # Inclusive
    end_byte: int  # Exclusive
    start_line: int  # Line number (1-indexed)
    end_line: int  # Line number (1-indexed)
    receiver: Optional[str] = None
    signature: Optional[str] = None
    declared_type: Optional[str] = None
    value: Optional[str] = None
    tag: Optional[str] = None
    parent: Optional[str] = None


class ReadResult(BaseModel):
    success: bool = True
    name: str
    kind: SymbolKind
    file: str
    line: int
    end_line: int
    code: str
    receiver: Optional[str] = None
    signature: Optional[str] = None
    declared_type: Optional[str] = None
    value: Optional[str] = None
    tag: Optional[str] = None
    parent: Optional[str] = None


class ReadResults(BaseModel):
    success: bool = True
    results: List[ReadResult] = Field(default_factory=list)
    count: int = 0


class ModifyResult(BaseModel):
    """
    Result of a mutating operation (replace/delete/add/move).
    `file` is the path the operation targeted; `files_changed` lists every path written.
    """
    success: bool = True
    file: str
    message: str
    files_changed: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)  # Non-fatal, e.g. formatting skipped


class SymbolsResult(BaseModel):
    success: bool = True
    path: str
    package: Optional[str] = None
    symbols: List[Declaration] = Field(default_factory=list)
    count: int = 0


class PackageAPIResult(BaseModel):
    success: bool = True
    package: Optional[str] = None
    path: str
    symbols: List[Declaration] = Field(default_factory=list)
    num_files: int = 0


class FormatResult(BaseModel):
    success: bool = True
    files_changed: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class DeclarationFamily(str, Enum):
    """Span mutator variants; every non-field kind belongs to exactly one."""
    FUNC = "func"
    TYPE = "type"
    VALUE = "value"
