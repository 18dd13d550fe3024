"""
CLI Query Commands

find, read, symbols, api
"""

from typing import Optional

import typer

from gosurgeon.index import find_symbol, list_symbols, package_api
from gosurgeon.mutation import KindDispatcher
from gosurgeon.schemas import KindFilter
from .config import CLIConfig
from .output import execute


def find_cmd(
    name: str = typer.Argument(..., help="Name query (exact, case-insensitive or substring)"),
    directory: str = typer.Argument(".", help="Directory (or single file) to search"),
    kind: Optional[KindFilter] = typer.Option(None, "--kind", "-k", help="Restrict to one category"),
):
    """
    Find declarations matching a name across a source tree.
    """
    execute(lambda: find_symbol(name, directory, kind), input_value=name)


def read_cmd(
    name: str = typer.Argument(..., help="Declaration name: Func, Type.Method, Type, Type.Field, Var"),
    file: Optional[str] = typer.Argument(None, help="Limit the lookup to this file"),
):
    """
    Print the exact source of every declaration named NAME.
    """
    execute(lambda: KindDispatcher(CLIConfig.DEFAULT_ROOT).read(name, file), input_value=name)


def symbols_cmd(
    path: str = typer.Argument(".", help="Go file, package directory or package name"),
):
    """
    List the declarations of a file or package.
    """
    execute(lambda: list_symbols(path, CLIConfig.DEFAULT_ROOT), input_value=path)


def api_cmd(
    package: str = typer.Argument(".", help="Package directory or package name"),
):
    """
    Show the exported API of a package.
    """
    execute(lambda: package_api(package, CLIConfig.DEFAULT_ROOT), input_value=package)
