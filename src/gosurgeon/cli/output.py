"""
CLI Output Utilities

JSON on stdout by default (machine mode); rich tables and syntax-highlighted
code with --human.
"""

import json
from typing import Callable, List, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from gosurgeon.exceptions import (
    ConfigError,
    GoSurgeonError,
    InvalidSymbolNameError,
    MoveError,
    ParserError,
    SymbolNotFoundError,
    UnsupportedKindError,
)
from gosurgeon.logging_config import logger
from gosurgeon.schemas import (
    Declaration,
    FindResult,
    FormatResult,
    ModifyResult,
    PackageAPIResult,
    ReadResults,
    SymbolsResult,
)
from .config import CLIConfig

_console = Console()

# Most specific class first
ERROR_CODES = [
    (SymbolNotFoundError, "SYMBOL_NOT_FOUND"),
    (ParserError, "PARSE_ERROR"),
    (UnsupportedKindError, "UNSUPPORTED_KIND"),
    (InvalidSymbolNameError, "INVALID_NAME"),
    (MoveError, "MOVE_REJECTED"),
    (ConfigError, "CONFIG_ERROR"),
    (GoSurgeonError, "ERROR"),
    (OSError, "IO_ERROR"),
]


def get_console() -> Console:
    return _console


def print_json(data: dict) -> None:
    """Minified JSON in machine mode, indented otherwise."""
    if CLIConfig.is_machine_mode():
        typer.echo(json.dumps(data, separators=(',', ':')))
    else:
        typer.echo(json.dumps(data, indent=2))


def error_code(error: Exception) -> str:
    for error_type, code in ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return "ERROR"


def structured_error(code: str, message: str, input_value: Optional[str] = None) -> dict:
    """
    Create a structured failure record.

    Args:
        code: Error code (e.g., "SYMBOL_NOT_FOUND", "PARSE_ERROR")
        message: Human-readable error message
        input_value: The input that caused the error

    Returns:
        {"success": false, "error": ..., "code": ...}
    """
    error_obj = {
        "success": False,
        "error": message,
        "code": code,
    }
    if input_value:
        error_obj["input"] = input_value
    return error_obj


def emit_error(error: Exception, input_value: Optional[str] = None) -> None:
    if CLIConfig.is_machine_mode():
        print_json(structured_error(error_code(error), str(error), input_value))
    else:
        _console.print(f"[red]Error:[/red] {error}")


def fail(code: str, message: str) -> None:
    """Report a usage problem and exit 1."""
    if CLIConfig.is_machine_mode():
        print_json(structured_error(code, message))
    else:
        _console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _declaration_table(title: str, records: List[Declaration]) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Location")
    table.add_column("Detail", style="dim")
    for record in records:
        detail = record.signature or record.declared_type or record.value or ""
        table.add_row(record.name, record.kind.value, f"{record.file}:{record.line}", detail)
    return table


def render_human(result: BaseModel) -> None:
    """Pretty-print a result model with rich."""
    if isinstance(result, FindResult):
        _console.print(_declaration_table(f"Matches for '{result.query}' ({result.count})", result.matches))
    elif isinstance(result, SymbolsResult):
        _console.print(_declaration_table(f"package {result.package} ({result.count} symbols)", result.symbols))
    elif isinstance(result, PackageAPIResult):
        title = f"package {result.package} API ({len(result.symbols)} exported, {result.num_files} files)"
        _console.print(_declaration_table(title, result.symbols))
    elif isinstance(result, ReadResults):
        for read in result.results:
            _console.print(f"[bold cyan]{read.name}[/bold cyan] ({read.kind.value}) {read.file}:{read.line}-{read.end_line}")
            _console.print(Syntax(read.code, "go", line_numbers=True, start_line=read.line))
    elif isinstance(result, ModifyResult):
        _console.print(f"[green]OK[/green] {result.message} ({', '.join(result.files_changed)})")
        for warning in result.warnings:
            _console.print(f"[yellow]Warning:[/yellow] {warning}")
    elif isinstance(result, FormatResult):
        _console.print(f"[green]Formatted {len(result.files_changed)} files[/green]")
        for path in result.files_changed:
            _console.print(f"  {path}")
        for error in result.errors:
            _console.print(f"[yellow]Warning:[/yellow] {error}")
    else:
        print_json(result.model_dump(mode="json"))


def emit(result: BaseModel) -> None:
    if CLIConfig.is_machine_mode():
        print_json(result.model_dump(mode="json"))
    else:
        render_human(result)


def execute(action: Callable[[], BaseModel], input_value: Optional[str] = None) -> None:
    """
    Run one library call at the CLI boundary.

    Library errors and I/O errors become a failure record and exit code 1;
    nothing propagates past this point.
    """
    try:
        result = action()
    except (GoSurgeonError, OSError) as e:
        logger.debug(f"Command failed: {e}")
        emit_error(e, input_value)
        raise typer.Exit(code=1)
    emit(result)
