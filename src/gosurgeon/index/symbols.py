"""
Package-level symbol listing and exported API summaries.
"""

import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from gosurgeon.exceptions import ParserError, SymbolNotFoundError
from gosurgeon.logging_config import logger
from gosurgeon.parser import extract_declarations, package_name, parse_go_file
from gosurgeon.scanner import iter_package_dirs, list_package_files
from gosurgeon.schemas import Declaration, PackageAPIResult, SymbolKind, SymbolsResult


def _without_fields(records: List[Declaration]) -> List[Declaration]:
    return [r for r in records if r.kind != SymbolKind.FIELD]


def find_package_by_name(name: str, root: Union[str, Path] = ".") -> Optional[str]:
    """
    First directory under root whose first non-test Go file declares `package name`.
    """
    for directory in iter_package_dirs(root):
        files = list_package_files(directory)
        if not files:
            continue
        try:
            declared = package_name(parse_go_file(files[0]))
        except (ParserError, OSError) as e:
            logger.debug(f"Skipping package candidate '{directory}': {e}")
            continue
        if declared == name:
            return directory
    return None


def resolve_package_dir(pkg: Union[str, Path], root: Union[str, Path] = ".") -> str:
    """
    Turn a package directory or a package name into an absolute directory.

    Raises:
        SymbolNotFoundError: If pkg is neither a directory nor a known package name.
    """
    if os.path.isdir(str(pkg)):
        return os.path.abspath(str(pkg))
    directory = find_package_by_name(str(pkg), root)
    if directory is None:
        raise SymbolNotFoundError(str(pkg), kind="package")
    return directory


def _package_declarations(directory: str) -> Tuple[Optional[str], List[Declaration], int]:
    package = None
    records: List[Declaration] = []
    files = list_package_files(directory)

    for file_path in files:
        try:
            parsed = parse_go_file(file_path)
        except (ParserError, OSError) as e:
            logger.debug(f"Skipping '{file_path}': {e}")
            continue
        if package is None:
            package = package_name(parsed)
        records.extend(extract_declarations(parsed))

    return package, records, len(files)


def list_symbols(path: Union[str, Path], root: Union[str, Path] = ".") -> SymbolsResult:
    """
    List the declarations of a file, a package directory, or a package name.

    A single file must parse; files of a package that fail to parse are skipped.
    Struct fields are not listed.
    """
    if os.path.isfile(str(path)):
        file_path = os.path.abspath(str(path))
        parsed = parse_go_file(file_path)
        symbols = _without_fields(extract_declarations(parsed))
        return SymbolsResult(path=file_path, package=package_name(parsed), symbols=symbols, count=len(symbols))

    directory = resolve_package_dir(path, root)
    package, records, _ = _package_declarations(directory)
    symbols = _without_fields(records)
    return SymbolsResult(path=directory, package=package, symbols=symbols, count=len(symbols))


def package_api(pkg: Union[str, Path] = ".", root: Union[str, Path] = ".") -> PackageAPIResult:
    """Exported declarations of one package plus its non-test file count."""
    directory = resolve_package_dir(pkg, root)
    package, records, num_files = _package_declarations(directory)
    exported = [r for r in _without_fields(records) if r.exported]
    logger.debug(f"Package '{package}' at {directory}: {len(exported)} exported symbols in {num_files} files")
    return PackageAPIResult(package=package, path=directory, symbols=exported, num_files=num_files)
