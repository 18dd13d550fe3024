"""
SymbolMover: move a declaration from one file to another.

A move is read, delete from the source, append to the destination, then
reformat both files. It is not atomic: once the delete is written, a failure
to write the destination leaves the declaration in neither file, and the
error of the failing step is raised as-is.
"""

import os
from typing import Optional

from gosurgeon.exceptions import MoveError
from gosurgeon.logging_config import logger
from gosurgeon.schemas import DeclarationFamily, ModifyResult

from .facade import MutationFacade


class SymbolMover:
    """Moves a declaration as delete-then-append; not atomic, a failed append loses the declaration."""

    def __init__(self, facade: MutationFacade):
        self.facade = facade

    def move(
        self,
        family: DeclarationFamily,
        name: str,
        dst_file: str,
        src_file: Optional[str] = None,
    ) -> ModifyResult:
        """
        Move one declaration to the end of dst_file.

        Args:
            family: Span mutator family of the declaration
            name: Declaration name
            dst_file: Destination file (must already exist)
            src_file: Source file; resolved under the project root when omitted

        Raises:
            MoveError: If source and destination are the same file
        """
        dst_path = os.path.abspath(dst_file)
        read = self.facade.read(family, name, src_file)
        src_path = read.file

        if src_path == dst_path:
            raise MoveError(f"{read.name} is already in {dst_path}")

        delete_result = self.facade.delete(family, read.name, src_path)
        logger.debug(f"Removed {read.name} from {src_path}, appending to {dst_path}")

        # Loss window: the source is already rewritten at this point
        editor = self.facade.editor
        editor.write(dst_path, editor.append(editor.read_source(dst_path), read.code))

        warnings = list(delete_result.warnings)
        for path in (src_path, dst_path):
            warnings.extend(self.facade.format_file(path, chain="imports"))

        logger.info(f"Moved {read.kind.value} '{read.name}' from {src_path} to {dst_path}")
        return ModifyResult(
            file=dst_path,
            message=f"moved {read.name} from {src_path} to {dst_path}",
            files_changed=[src_path, dst_path],
            warnings=warnings,
        )
