from typing import Dict

import tree_sitter_go as tsgo
from tree_sitter import Language, Parser

from gosurgeon.logging_config import logger

# Global cache for loaded languages to avoid repeated loading
_language_cache: Dict[str, Language] = {}


def get_language() -> Language:
    """
    Loads the tree-sitter Go grammar from the tree-sitter-go wheel.

    Caches the loaded language object for efficiency.
    """
    if "go" not in _language_cache:
        _language_cache["go"] = Language(tsgo.language())
        logger.debug("Successfully loaded language 'go'")
    return _language_cache["go"]


def get_parser() -> Parser:
    """Return a fresh parser bound to the Go grammar."""
    parser = Parser()
    parser.language = get_language()
    return parser
