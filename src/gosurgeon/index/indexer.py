"""
Symbol indexing over a Go source tree.

Nothing is cached: each query walks the tree and re-parses every file, so
results always reflect the bytes currently on disk.
"""

from pathlib import Path
from typing import List, Optional, Union

from gosurgeon.exceptions import ParserError
from gosurgeon.logging_config import logger
from gosurgeon.parser import extract_declarations, parse_go_file
from gosurgeon.scanner import iter_go_files
from gosurgeon.schemas import Declaration, FindResult, KindFilter
from .matcher import declaration_matches


def coerce_kind_filter(kind_filter: Union[KindFilter, str, None]) -> Optional[KindFilter]:
    if kind_filter is None or kind_filter == "":
        return None
    return KindFilter(kind_filter)


def index_file(file_path: str, kind_filter: Optional[KindFilter] = None) -> List[Declaration]:
    """
    Declaration records of one file. Unreadable or unparsable files yield
    no records; the failure is logged and the caller keeps going.
    """
    try:
        parsed = parse_go_file(file_path)
    except (ParserError, OSError) as e:
        logger.debug(f"Skipping '{file_path}': {e}")
        return []
    return extract_declarations(parsed, kind_filter)


def search_symbols(
    query: str,
    root: Union[str, Path] = ".",
    kind_filter: Union[KindFilter, str, None] = None,
) -> List[Declaration]:
    """
    Search a file or directory tree for declarations matching a name query.

    Args:
        query: Name query, matched leniently (see match_name)
        root: Directory to walk or single file to parse
        kind_filter: Optional category restriction

    Returns:
        Matching records in walk order, then in-file declaration order
    """
    category = coerce_kind_filter(kind_filter)
    matches: List[Declaration] = []
    file_count = 0

    for file_path in iter_go_files(root):
        file_count += 1
        matches.extend(r for r in index_file(file_path, category) if declaration_matches(r, query))

    logger.debug(f"Search '{query}' under '{root}': {len(matches)} matches in {file_count} files")
    return matches


def find_symbol(
    query: str,
    root: Union[str, Path] = ".",
    kind_filter: Union[KindFilter, str, None] = None,
) -> FindResult:
    matches = search_symbols(query, root, kind_filter)
    return FindResult(query=query, matches=matches, count=len(matches))
