"""
SymbolLocator: map declaration names to exact byte spans.

Spans are always computed against a fresh parse of the file's current bytes,
never taken from an earlier index.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from tree_sitter import Node

from gosurgeon.exceptions import InvalidSymbolNameError, SymbolNotFoundError
from gosurgeon.parser import ParsedFile, parse_go_file
from gosurgeon.parser.config import (
    FUNCTION_NODES,
    TYPE_DECLARATION_NODE,
    TYPE_SPEC_NODES,
    VALUE_DECLARATION_NODES,
    VALUE_SPEC_NODES,
)
from gosurgeon.parser.go_parser import (
    format_signature,
    function_names,
    iter_specs,
    receiver_base,
    receiver_type,
    spec_names,
    struct_fields,
    type_kind,
    value_expressions,
)
from gosurgeon.schemas import DeclarationFamily, SymbolKind, SymbolLocation


def _span(parsed: ParsedFile, node: Node, name: str, kind: SymbolKind, **extra) -> SymbolLocation:
    return SymbolLocation(
        file_path=parsed.path,
        symbol_name=name,
        kind=kind,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_line=node.start_point[0] + 1,
        end_line=node.end_point[0] + 1,
        **extra,
    )


def split_field_name(name: str) -> Tuple[str, str]:
    """Split "Type.Field" into its parts."""
    parts = name.split(".")
    if len(parts) != 2 or not all(parts):
        raise InvalidSymbolNameError(f"field name must have the form Type.Field, got '{name}'")
    return parts[0], parts[1]


class SymbolLocator:
    """
    Locate Go declarations by name and return precise byte ranges.

    Each locate_* method scans the file's top-level declarations in source
    order and returns the first match.
    """

    def load(self, file_path: Union[str, Path]) -> ParsedFile:
        """Read and parse the file fresh. ParserError and OSError propagate."""
        return parse_go_file(file_path)

    def locate(self, family: DeclarationFamily, parsed: ParsedFile, name: str) -> SymbolLocation:
        locators = {
            DeclarationFamily.FUNC: self.locate_function,
            DeclarationFamily.TYPE: self.locate_type,
            DeclarationFamily.VALUE: self.locate_value,
        }
        return locators[DeclarationFamily(family)](parsed, name)

    def locate_function(self, parsed: ParsedFile, name: str) -> SymbolLocation:
        """
        Find a function or method.

        Accepts "Name", "Recv.Name" or the receiver as written ("*Recv.Name").
        The span runs from the func keyword through the closing brace; a
        preceding doc comment is not part of it. A plain function named
        "Name" wins over a method answering to the same bare name.
        """
        candidates = [
            node for node in parsed.root.named_children
            if node.type in FUNCTION_NODES and name in function_names(parsed, node)
        ]
        if not candidates:
            raise SymbolNotFoundError(name, parsed.path, kind="function")

        node = next((n for n in candidates if n.type != "method_declaration" or "." in name), candidates[0])
        bare = parsed.text(node.child_by_field_name("name"))
        if node.type == "method_declaration":
            receiver = receiver_type(parsed, node)
            return _span(
                parsed, node, f"{receiver_base(receiver)}.{bare}", SymbolKind.METHOD,
                receiver=receiver, signature=format_signature(parsed, node),
            )
        return _span(parsed, node, bare, SymbolKind.FUNCTION, signature=format_signature(parsed, node))

    def locate_type(self, parsed: ParsedFile, name: str) -> SymbolLocation:
        """Find a type; the span is the whole type declaration, group included."""
        for node in parsed.root.named_children:
            if node.type != TYPE_DECLARATION_NODE:
                continue
            for spec in iter_specs(node, TYPE_SPEC_NODES):
                if parsed.text(spec.child_by_field_name("name")) != name:
                    continue
                type_node = spec.child_by_field_name("type")
                kind = type_kind(type_node)
                declared_type = None
                if kind == SymbolKind.ALIAS and type_node is not None:
                    declared_type = parsed.compact_text(type_node)
                return _span(parsed, node, name, kind, declared_type=declared_type)

        raise SymbolNotFoundError(name, parsed.path, kind="type")

    def locate_value(self, parsed: ParsedFile, name: str) -> SymbolLocation:
        """
        Find a package-level var or const.

        The span is the whole var/const declaration: deleting one name of a
        grouped declaration removes the entire group.
        """
        for node in parsed.root.named_children:
            if node.type not in VALUE_DECLARATION_NODES:
                continue
            kind = SymbolKind(VALUE_DECLARATION_NODES[node.type])
            for spec in iter_specs(node, VALUE_SPEC_NODES):
                idents = spec_names(spec)
                for i, ident in enumerate(idents):
                    if parsed.text(ident) != name:
                        continue
                    type_node = spec.child_by_field_name("type")
                    values = value_expressions(spec)
                    return _span(
                        parsed, node, name, kind,
                        declared_type=parsed.compact_text(type_node) if type_node is not None else None,
                        value=parsed.text(values[i]) if i < len(values) else None,
                    )

        raise SymbolNotFoundError(name, parsed.path, kind="var/const")

    def locate_field(self, parsed: ParsedFile, name: str) -> SymbolLocation:
        """Find a struct field named "Type.Field"; the span is its field declaration."""
        type_name, field_name = split_field_name(name)

        struct_node = self._find_struct(parsed, type_name)
        if struct_node is not None:
            for field in struct_fields(struct_node):
                if field_name not in [parsed.text(n) for n in spec_names(field, "field_identifier")]:
                    continue
                type_node = field.child_by_field_name("type")
                tag_node = field.child_by_field_name("tag")
                return _span(
                    parsed, field, name, SymbolKind.FIELD,
                    declared_type=parsed.compact_text(type_node) if type_node is not None else None,
                    tag=parsed.text(tag_node) if tag_node is not None else None,
                    parent=type_name,
                )

        raise SymbolNotFoundError(name, parsed.path, kind="field")

    def _find_struct(self, parsed: ParsedFile, type_name: str) -> Optional[Node]:
        for node in parsed.root.named_children:
            if node.type != TYPE_DECLARATION_NODE:
                continue
            for spec in iter_specs(node, TYPE_SPEC_NODES):
                type_node = spec.child_by_field_name("type")
                if parsed.text(spec.child_by_field_name("name")) == type_name and type_kind(type_node) == SymbolKind.STRUCT:
                    return type_node
        return None
