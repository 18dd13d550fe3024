"""
This facade exposes the public API for the parser module.
"""
from .go_parser import (
    ParsedFile,
    parse_go_file,
    parse_go_source,
    extract_declarations,
    package_name,
)

__all__ = [
    "ParsedFile",
    "parse_go_file",
    "parse_go_source",
    "extract_declarations",
    "package_name",
]
