from pathlib import Path
from typing import List, Union

from gosurgeon.exceptions import SymbolNotFoundError
from gosurgeon.schemas import Declaration, KindFilter, VALUE_KINDS
from .indexer import search_symbols
from .matcher import names_declaration


def pick_declaration(records: List[Declaration], name: str, kind: str = "symbol") -> Declaration:
    """
    Choose one record out of a search result.

    The first record whose qualified name equals `name` wins; otherwise the
    first record in walk order. This is a fixed rule, not a relevance ranking:
    a query of "Delete" that only hits "UserDelete" resolves to "UserDelete".

    Raises:
        SymbolNotFoundError: If records is empty.
    """
    if not records:
        raise SymbolNotFoundError(name, kind=kind)
    for record in records:
        if record.name == name:
            return record
    return records[0]


def locate_symbol(
    name: str,
    root: Union[str, Path] = ".",
    kind_filter: Union[KindFilter, str, None] = None,
    kind: str = "symbol",
) -> Declaration:
    """Search then pick: the declaration a name query resolves to under root."""
    return pick_declaration(search_symbols(name, root, kind_filter), name, kind=kind)


def locate_value(name: str, root: Union[str, Path] = ".") -> Declaration:
    """Resolve a package-level variable or constant, whichever matches first."""
    records = [r for r in search_symbols(name, root) if r.kind in VALUE_KINDS]
    return pick_declaration(records, name, kind="var/const")


def mutation_target(record: Declaration, name: str, kind: str = "symbol") -> str:
    """
    Name a resolved record is edited by.

    The resolver falls back to the first lenient match, so the record may
    only contain `name` ("helperInit" for "helper"). Such a record is never
    edited. A method reached by its bare name is addressed as "Recv.Method".

    Raises:
        SymbolNotFoundError: If the record does not answer to `name` exactly.
    """
    if not names_declaration(record, name):
        raise SymbolNotFoundError(name, kind=kind)
    return record.name


def exact_matches(records: List[Declaration], name: str) -> List[Declaration]:
    """Records whose qualified, bare or receiver-written name equals name."""
    return [r for r in records if names_declaration(r, name)]
