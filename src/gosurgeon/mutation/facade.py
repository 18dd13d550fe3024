"""
MutationFacade: per-family read/replace/delete/add of Go declarations.

Every operation follows the same cycle: read the file's current bytes, parse
them fresh, compute the span, transform the bytes, format, write back.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from gosurgeon.index import locate_symbol, locate_value, mutation_target
from gosurgeon.logging_config import logger
from gosurgeon.parser import ParsedFile
from gosurgeon.schemas import (
    DeclarationFamily,
    KindFilter,
    ModifyResult,
    ReadResult,
    SymbolLocation,
)

from .config import get_mutation_config
from .editor import CodeEditor
from .formatter import CodeFormatter, FormatOutcome
from .locator import SymbolLocator


class MutationFacade:
    """
    Main facade for span-addressed mutations.

    Pipeline for replace/delete:
    1. Resolve the file (given, or via the resolver under the project root)
    2. Parse fresh and locate the span (SymbolLocator)
    3. Splice or cut the bytes (CodeEditor)
    4. Format the buffer (CodeFormatter)
    5. Write atomically (CodeEditor)
    """

    def __init__(self, root: Union[str, Path] = ".", config: Optional[Dict[str, Any]] = None):
        """
        Initialize mutation facade.

        Args:
            root: Project root used when an operation is not given a file
            config: Optional config overrides (merges with get_mutation_config())
        """
        self.root = str(root)
        self.config = {**get_mutation_config(Path(root)), **(config or {})}

        self.locator = SymbolLocator()
        self.editor = CodeEditor()
        self.formatter = CodeFormatter(self.config)

        logger.debug(f"MutationFacade initialized for root '{self.root}'")

    # --- Resolution ----------------------------------------------------------

    def _resolve(self, family: DeclarationFamily, name: str, file: Optional[str]) -> Tuple[str, str]:
        """Return (absolute file path, name to locate in it)."""
        if file:
            return os.path.abspath(file), name

        if family == DeclarationFamily.FUNC:
            kind = "function"
            record = locate_symbol(name, self.root, KindFilter.FUNCTION, kind=kind)
        elif family == DeclarationFamily.TYPE:
            kind = "type"
            record = locate_symbol(name, self.root, KindFilter.TYPE, kind=kind)
        else:
            kind = "var/const"
            record = locate_value(name, self.root)
        return record.file, mutation_target(record, name, kind=kind)

    def _read_result(self, parsed: ParsedFile, location: SymbolLocation, code: str) -> ReadResult:
        return ReadResult(
            name=location.symbol_name,
            kind=location.kind,
            file=parsed.path,
            line=location.start_line,
            end_line=location.end_line,
            code=code,
            receiver=location.receiver,
            signature=location.signature,
            declared_type=location.declared_type,
            value=location.value,
            tag=location.tag,
            parent=location.parent,
        )

    def _warnings(self, file_path: str, outcome: FormatOutcome) -> List[str]:
        if not outcome.degraded:
            return []
        return [f"formatting skipped for {file_path}: {'; '.join(outcome.errors)}"]

    def _commit(self, file_path: str, content: bytes, chain: str = "source") -> List[str]:
        """Format then write content; returns formatting warnings."""
        outcome = self.formatter.format_source(content, chain)
        self.editor.write(file_path, outcome.content)
        return self._warnings(file_path, outcome)

    # --- Generic operations --------------------------------------------------

    def read(self, family: DeclarationFamily, name: str, file: Optional[str] = None) -> ReadResult:
        """
        Read the exact source text of a declaration.

        Raises:
            SymbolNotFoundError: If the declaration is not in the file (or project)
            ParserError: If the target file does not parse
        """
        file_path, target = self._resolve(family, name, file)
        parsed = self.locator.load(file_path)
        location = self.locator.locate(family, parsed, target)
        code = parsed.source[location.start_byte:location.end_byte].decode("utf-8", errors="replace")
        return self._read_result(parsed, location, code)

    def replace(self, family: DeclarationFamily, name: str, file: Optional[str], new_code: str) -> ModifyResult:
        """Replace a declaration's span with new_code, then format and write."""
        file_path, target = self._resolve(family, name, file)
        parsed = self.locator.load(file_path)
        location = self.locator.locate(family, parsed, target)

        modified = self.editor.splice(parsed.source, location, new_code)
        warnings = self._commit(file_path, modified)

        logger.info(f"Replaced {location.kind.value} '{location.symbol_name}' in {file_path}")
        return ModifyResult(
            file=file_path,
            message=f"replaced {location.kind.value} {location.symbol_name}",
            files_changed=[file_path],
            warnings=warnings,
        )

    def delete(self, family: DeclarationFamily, name: str, file: Optional[str]) -> ModifyResult:
        """Remove a declaration's span plus the line breaks right after it."""
        file_path, target = self._resolve(family, name, file)
        parsed = self.locator.load(file_path)
        location = self.locator.locate(family, parsed, target)

        modified = self.editor.cut(parsed.source, location)
        warnings = self._commit(file_path, modified)

        logger.info(f"Deleted {location.kind.value} '{location.symbol_name}' from {file_path}")
        return ModifyResult(
            file=file_path,
            message=f"deleted {location.kind.value} {location.symbol_name}",
            files_changed=[file_path],
            warnings=warnings,
        )

    def add(self, file: str, new_code: str) -> ModifyResult:
        """Append new_code after a blank line at the end of file. No name lookup."""
        file_path = os.path.abspath(file)
        modified = self.editor.append(self.editor.read_source(file_path), new_code)
        warnings = self._commit(file_path, modified)

        logger.info(f"Added code to {file_path}")
        return ModifyResult(
            file=file_path,
            message="added code",
            files_changed=[file_path],
            warnings=warnings,
        )

    def format_file(self, file_path: str, chain: str = "imports") -> List[str]:
        """Reformat a file in place; returns formatting warnings."""
        _, outcome = self.formatter.format_file(file_path, chain)
        return self._warnings(file_path, outcome)

    # --- Per-family entry points ---------------------------------------------

    def read_func(self, name: str, file: Optional[str] = None) -> ReadResult:
        return self.read(DeclarationFamily.FUNC, name, file)

    def read_type(self, name: str, file: Optional[str] = None) -> ReadResult:
        return self.read(DeclarationFamily.TYPE, name, file)

    def read_value(self, name: str, file: Optional[str] = None) -> ReadResult:
        return self.read(DeclarationFamily.VALUE, name, file)

    def read_field(self, name: str, file: Optional[str] = None) -> ReadResult:
        """
        Read a struct field by "Type.Field".

        The code is rebuilt as "name type [tag]", so one name of a
        multi-name field ("A, B int") reads as "A int".
        """
        if file:
            file_path = os.path.abspath(file)
        else:
            record = locate_symbol(name, self.root, KindFilter.FIELD, kind="field")
            file_path, name = record.file, mutation_target(record, name, kind="field")

        parsed = self.locator.load(file_path)
        location = self.locator.locate_field(parsed, name)
        field_name = location.symbol_name.split(".", 1)[1]
        code = " ".join(part for part in (field_name, location.declared_type, location.tag) if part)
        return self._read_result(parsed, location, code)

    def replace_func(self, name: str, file: Optional[str], new_code: str) -> ModifyResult:
        return self.replace(DeclarationFamily.FUNC, name, file, new_code)

    def replace_type(self, name: str, file: Optional[str], new_code: str) -> ModifyResult:
        return self.replace(DeclarationFamily.TYPE, name, file, new_code)

    def replace_value(self, name: str, file: Optional[str], new_code: str) -> ModifyResult:
        return self.replace(DeclarationFamily.VALUE, name, file, new_code)

    def delete_func(self, name: str, file: Optional[str] = None) -> ModifyResult:
        return self.delete(DeclarationFamily.FUNC, name, file)

    def delete_type(self, name: str, file: Optional[str] = None) -> ModifyResult:
        return self.delete(DeclarationFamily.TYPE, name, file)

    def delete_value(self, name: str, file: Optional[str] = None) -> ModifyResult:
        return self.delete(DeclarationFamily.VALUE, name, file)
