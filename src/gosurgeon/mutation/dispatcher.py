"""
KindDispatcher: kind-agnostic read/replace/delete/move/add.

Resolves a name to one declaration, then routes the operation to the span
mutator family of that declaration's kind.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from gosurgeon.exceptions import MoveError, ParserError, SymbolNotFoundError, UnsupportedKindError
from gosurgeon.index import (
    declaration_matches,
    exact_matches,
    mutation_target,
    pick_declaration,
    search_symbols,
)
from gosurgeon.logging_config import logger
from gosurgeon.parser import extract_declarations, package_name, parse_go_file
from gosurgeon.schemas import (
    Declaration,
    DeclarationFamily,
    ModifyResult,
    ReadResults,
    SymbolKind,
)

from .facade import MutationFacade
from .mover import SymbolMover


KIND_FAMILIES: Dict[SymbolKind, Optional[DeclarationFamily]] = {
    SymbolKind.FUNCTION: DeclarationFamily.FUNC,
    SymbolKind.METHOD: DeclarationFamily.FUNC,
    SymbolKind.STRUCT: DeclarationFamily.TYPE,
    SymbolKind.INTERFACE: DeclarationFamily.TYPE,
    SymbolKind.ALIAS: DeclarationFamily.TYPE,
    SymbolKind.VARIABLE: DeclarationFamily.VALUE,
    SymbolKind.CONSTANT: DeclarationFamily.VALUE,
    SymbolKind.FIELD: None,  # fields are read-only
}

if set(KIND_FAMILIES) != set(SymbolKind):
    raise RuntimeError(f"KIND_FAMILIES is missing kinds: {set(SymbolKind) - set(KIND_FAMILIES)}")


def family_for(kind: Union[SymbolKind, str], operation: str) -> DeclarationFamily:
    """
    Map a declaration kind to its mutator family.

    Raises:
        UnsupportedKindError: For fields and for values that are not a SymbolKind.
    """
    try:
        symbol_kind = SymbolKind(kind)
    except ValueError:
        raise UnsupportedKindError(str(kind), operation) from None

    family = KIND_FAMILIES[symbol_kind]
    if family is None:
        raise UnsupportedKindError(symbol_kind.value, operation)
    return family


class KindDispatcher:
    """
    Entry point for operations that do not name a declaration kind.
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        config: Optional[Dict[str, Any]] = None,
        facade: Optional[MutationFacade] = None,
    ):
        self.root = str(root)
        self.facade = facade or MutationFacade(root, config)
        self.mover = SymbolMover(self.facade)

    def _search(self, name: str, file: Optional[str]) -> List[Declaration]:
        if not file:
            return search_symbols(name, self.root)
        # A named file must parse; only tree-wide searches skip broken files
        parsed = parse_go_file(os.path.abspath(file))
        return [r for r in extract_declarations(parsed) if declaration_matches(r, name)]

    def _resolve(self, name: str, file: Optional[str]) -> Tuple[Declaration, str]:
        """Pick a record for name and return it with the name to edit it by."""
        record = pick_declaration(self._search(name, file), name)
        return record, mutation_target(record, name)

    def read(self, name: str, file: Optional[str] = None) -> ReadResults:
        """
        Read every declaration whose qualified or bare name equals name.

        Scoped to file when given, else the whole project root.
        """
        records = exact_matches(self._search(name, file), name)
        if not records:
            raise SymbolNotFoundError(name, file)

        results = []
        for record in records:
            if record.kind == SymbolKind.FIELD:
                results.append(self.facade.read_field(record.name, record.file))
            else:
                results.append(self.facade.read(family_for(record.kind, "read"), record.name, record.file))
        return ReadResults(results=results, count=len(results))

    def replace(self, name: str, file: Optional[str], new_code: str) -> ModifyResult:
        record, target = self._resolve(name, file)
        family = family_for(record.kind, "replace")
        return self.facade.replace(family, target, record.file, new_code)

    def delete(self, name: str, file: Optional[str] = None) -> ModifyResult:
        record, target = self._resolve(name, file)
        family = family_for(record.kind, "delete")
        return self.facade.delete(family, target, record.file)

    def add(self, file: str, new_code: str) -> ModifyResult:
        return self.facade.add(file, new_code)

    def move(self, name: str, dst_file: str) -> ModifyResult:
        """
        Move a declaration into dst_file from another file of the same package.

        Only the destination's directory tree is searched, and only files
        declaring the destination's package are candidates.

        Raises:
            MoveError: If the destination's package cannot be read, or the
                declaration already lives in dst_file
            SymbolNotFoundError: If no candidate matches
        """
        dst_path = os.path.abspath(dst_file)
        try:
            dst_package = package_name(parse_go_file(dst_path))
        except (ParserError, OSError) as e:
            raise MoveError(f"cannot determine package of {dst_path}: {e}") from e

        packages: Dict[str, Optional[str]] = {dst_path: dst_package}

        def package_of(path: str) -> Optional[str]:
            if path not in packages:
                try:
                    packages[path] = package_name(parse_go_file(path))
                except (ParserError, OSError):
                    packages[path] = None
            return packages[path]

        candidates = [
            r for r in search_symbols(name, os.path.dirname(dst_path))
            if package_of(r.file) == dst_package
        ]
        if not candidates:
            raise SymbolNotFoundError(name, kind=f"symbol (package {dst_package})")

        record = pick_declaration(candidates, name)
        target = mutation_target(record, name)
        if record.file == dst_path:
            raise MoveError(f"symbol {target} is already in {dst_path}")

        family = family_for(record.kind, "move")
        logger.debug(f"Moving {record.kind.value} '{target}' from {record.file}")
        return self.mover.move(family, target, dst_path, src_file=record.file)
