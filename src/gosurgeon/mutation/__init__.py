"""
Mutation package: span-addressed editing of Go declarations.

Operations work on declaration names rather than line numbers; every span
is recomputed from the file's current bytes right before an edit.
"""

from .facade import MutationFacade
from .locator import SymbolLocator
from .editor import CodeEditor, atomic_write
from .formatter import CodeFormatter, FormatOutcome, format_target
from .mover import SymbolMover
from .dispatcher import KindDispatcher, KIND_FAMILIES, family_for
from .config import (
    FORMATTERS,
    DEFAULT_MUTATION_CONFIG,
    get_mutation_config,
)

__all__ = [
    # Main facades
    "MutationFacade",
    "KindDispatcher",

    # Components
    "SymbolLocator",
    "CodeEditor",
    "CodeFormatter",
    "FormatOutcome",
    "SymbolMover",

    # Functions
    "atomic_write",
    "format_target",
    "family_for",

    # Configuration
    "KIND_FAMILIES",
    "FORMATTERS",
    "DEFAULT_MUTATION_CONFIG",
    "get_mutation_config",
]
