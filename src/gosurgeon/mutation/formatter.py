"""
CodeFormatter: best-effort reformatting through external Go tools.

A structural edit is never blocked by formatting: each command of a chain is
tried in order and the first success wins; if every command is missing,
fails or times out, the unformatted buffer is returned together with the
reasons, so callers can surface a warning.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from gosurgeon.exceptions import ConfigError, SymbolNotFoundError
from gosurgeon.logging_config import logger
from gosurgeon.scanner import iter_go_files, list_package_files
from gosurgeon.schemas import FormatResult
from .config import DEFAULT_MUTATION_CONFIG, FORMATTERS
from .editor import atomic_write


@dataclass
class FormatOutcome:
    content: bytes
    formatter: Optional[str] = None  # Command that produced content, None if unformatted
    errors: List[str] = field(default_factory=list)

    @property
    def formatted(self) -> bool:
        return self.formatter is not None

    @property
    def degraded(self) -> bool:
        """True when formatting was attempted and every command failed."""
        return not self.formatted and bool(self.errors)


class CodeFormatter:
    """
    Run Go source through an ordered chain of external formatters.

    Chains:
    - "source": gofmt, then goimports (after replace/delete/add)
    - "imports": goimports, then gofmt (after moves and for the format command)
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize formatter with optional config.

        Args:
            config: Optional config overrides (merges with DEFAULT_MUTATION_CONFIG)
        """
        self.config = {**DEFAULT_MUTATION_CONFIG, **(config or {})}

    def chain(self, name: str) -> List[str]:
        chains = self.config["format_chains"]
        if name not in chains:
            raise ConfigError(f"Unknown formatter chain '{name}'")
        return list(chains[name])

    def _run(self, command: str, source: bytes) -> Tuple[Optional[bytes], Optional[str]]:
        """Run one formatter over source. Returns (output, None) or (None, reason)."""
        if not shutil.which(command):
            logger.debug(f"Formatter '{command}' not found in PATH, skipping")
            return None, f"{command}: not found in PATH"

        args = FORMATTERS.get(command, {}).get("args", [])
        timeout = self.config["format_timeout"]
        try:
            result = subprocess.run(
                [command] + args,
                input=source,
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return None, f"{command}: timed out after {timeout}s"
        except OSError as e:
            return None, f"{command}: {e}"

        if result.returncode != 0:
            message = (result.stderr or result.stdout or b"").decode("utf-8", errors="replace").strip()
            return None, f"{command}: {message or f'exit status {result.returncode}'}"

        return result.stdout, None

    def format_source(self, source: bytes, chain: str = "source") -> FormatOutcome:
        """
        Format a buffer with the first command of the chain that succeeds.

        Args:
            source: Go source bytes (already structurally edited)
            chain: Chain name, "source" or "imports"

        Returns:
            FormatOutcome; content is the original buffer when nothing succeeded
        """
        if not self.config["format_enabled"]:
            return FormatOutcome(content=source)

        errors: List[str] = []
        for command in self.chain(chain):
            output, error = self._run(command, source)
            if output is not None:
                logger.debug(f"Formatted buffer with {command}")
                return FormatOutcome(content=output, formatter=command, errors=errors)
            errors.append(error)

        if errors:
            logger.warning(f"Formatting skipped, every formatter failed: {'; '.join(errors)}")
        return FormatOutcome(content=source, errors=errors)

    def format_file(self, file_path: Union[str, Path], chain: str = "imports") -> Tuple[bool, FormatOutcome]:
        """
        Format a file in place. The file is rewritten only if its bytes change.

        Returns:
            (changed, outcome)
        """
        path = Path(file_path)
        original = path.read_bytes()
        outcome = self.format_source(original, chain)
        if outcome.content == original:
            return False, outcome
        atomic_write(path, outcome.content)
        logger.debug(f"Reformatted {path} with {outcome.formatter}")
        return True, outcome


def _target_files(target: str) -> List[str]:
    if target == "..." or target.endswith("/..."):
        base = target[:-3].rstrip("/") or "."
        return list(iter_go_files(base))
    if os.path.isdir(target):
        return list_package_files(target, include_tests=True)
    if os.path.isfile(target):
        return [os.path.abspath(target)]
    raise SymbolNotFoundError(target, kind="path")


def format_target(target: str = "./...", formatter: Optional[CodeFormatter] = None) -> FormatResult:
    """
    Format a file, a package directory, or a whole tree ("./...").

    Uses the import-normalising chain. Per-file failures are collected in
    `errors` and do not stop the remaining files.
    """
    formatter = formatter or CodeFormatter()
    files_changed: List[str] = []
    errors: List[str] = []

    for file_path in _target_files(target):
        try:
            changed, outcome = formatter.format_file(file_path, chain="imports")
        except OSError as e:
            errors.append(f"{file_path}: {e}")
            continue
        if outcome.degraded:
            errors.append(f"{file_path}: {'; '.join(outcome.errors)}")
        if changed:
            files_changed.append(file_path)

    logger.info(f"Formatted '{target}': {len(files_changed)} files changed, {len(errors)} errors")
    return FormatResult(success=not errors, files_changed=files_changed, errors=errors)
