"""
gosurgeon - Symbol indexing and span-addressed editing for Go source trees.

Locates named Go declarations and rewrites exactly their bytes, leaving the
rest of each file untouched.
"""

__version__ = "0.3.0"

# Core exports
from gosurgeon.index import find_symbol, search_symbols, locate_symbol, list_symbols, package_api
from gosurgeon.mutation import KindDispatcher, MutationFacade, SymbolMover, format_target
from gosurgeon.schemas import Declaration, DeclarationFamily, KindFilter, SymbolKind

__all__ = [
    "__version__",
    # Index
    "find_symbol",
    "search_symbols",
    "locate_symbol",
    "list_symbols",
    "package_api",
    # Mutation
    "KindDispatcher",
    "MutationFacade",
    "SymbolMover",
    "format_target",
    # Schemas
    "Declaration",
    "DeclarationFamily",
    "KindFilter",
    "SymbolKind",
]
