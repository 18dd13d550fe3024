"""
CLI Mutation Commands

replace, delete, add, move, format
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from gosurgeon.mutation import KindDispatcher, format_target
from gosurgeon.mutation.formatter import CodeFormatter
from gosurgeon.mutation.config import get_mutation_config
from .config import CLIConfig
from .output import execute, fail


def _read_code(code: Optional[str], code_file: Optional[Path]) -> str:
    """New code from --code, --code-file, or stdin, in that order."""
    if code is not None:
        return code
    if code_file is not None:
        try:
            return code_file.read_text(encoding="utf-8")
        except OSError as e:
            fail("FILE_READ_ERROR", f"Failed to read code file: {e}")
    if not sys.stdin.isatty():
        text = sys.stdin.read()
        if text.strip():
            return text
    fail("MISSING_ARGUMENT", "Must provide --code, --code-file, or code on stdin")


def _dispatcher() -> KindDispatcher:
    return KindDispatcher(CLIConfig.DEFAULT_ROOT)


def replace_cmd(
    name: str = typer.Argument(..., help="Declaration to replace"),
    file: Optional[str] = typer.Argument(None, help="File holding the declaration (resolved when omitted)"),
    code: Optional[str] = typer.Option(None, "--code", "-c", help="New code inline"),
    code_file: Optional[Path] = typer.Option(None, "--code-file", "-f", help="Path to file with new code"),
):
    """
    Replace a declaration's source with new code.
    """
    new_code = _read_code(code, code_file)
    execute(lambda: _dispatcher().replace(name, file, new_code), input_value=name)


def delete_cmd(
    name: str = typer.Argument(..., help="Declaration to delete"),
    file: Optional[str] = typer.Argument(None, help="File holding the declaration (resolved when omitted)"),
):
    """
    Delete a declaration and the line breaks that follow it.
    """
    execute(lambda: _dispatcher().delete(name, file), input_value=name)


def add_cmd(
    file: str = typer.Argument(..., help="File to append to"),
    code: Optional[str] = typer.Option(None, "--code", "-c", help="Code inline"),
    code_file: Optional[Path] = typer.Option(None, "--code-file", "-f", help="Path to file with the code"),
):
    """
    Append code to the end of a file.
    """
    new_code = _read_code(code, code_file)
    execute(lambda: _dispatcher().add(file, new_code), input_value=file)


def move_cmd(
    name: str = typer.Argument(..., help="Declaration to move"),
    dst: str = typer.Argument(..., help="Destination file in the same package"),
):
    """
    Move a declaration to another file of the same package.

    Not atomic: if writing the destination fails after the source was
    rewritten, the declaration is in neither file.
    """
    execute(lambda: _dispatcher().move(name, dst), input_value=name)


def format_cmd(
    target: str = typer.Argument("./...", help="File, package directory, or ./... for the whole tree"),
):
    """
    Run goimports/gofmt over files.
    """
    execute(
        lambda: format_target(target, CodeFormatter(get_mutation_config(Path(CLIConfig.DEFAULT_ROOT)))),
        input_value=target,
    )
