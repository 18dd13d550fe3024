"""
This facade exposes the public API for the index module: lenient name
matching, tree-wide symbol search, and the search-then-pick resolver.
"""
from .matcher import match_name, declaration_matches, names_declaration
from .indexer import search_symbols, find_symbol, index_file
from .resolver import pick_declaration, locate_symbol, locate_value, exact_matches, mutation_target
from .symbols import list_symbols, package_api, find_package_by_name

__all__ = [
    "match_name",
    "declaration_matches",
    "names_declaration",
    "search_symbols",
    "find_symbol",
    "index_file",
    "pick_declaration",
    "locate_symbol",
    "locate_value",
    "exact_matches",
    "mutation_target",
    "list_symbols",
    "package_api",
    "find_package_by_name",
]
