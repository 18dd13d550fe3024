"""
Go source parsing on top of tree-sitter.

Turns one file's bytes into a ParsedFile and extracts the flat, ordered list
of top-level declaration records (functions, methods, types, struct fields,
package-level variables and constants).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from tree_sitter import Node, Tree

from gosurgeon.exceptions import ParserError
from gosurgeon.logging_config import logger
from gosurgeon.schemas import Declaration, KindFilter, KIND_CATEGORIES, SymbolKind
from .config import (
    FUNCTION_NODES,
    PARAMETER_NODES,
    SPEC_LIST_NODES,
    TYPE_DECLARATION_NODE,
    TYPE_SPEC_NODES,
    VALUE_DECLARATION_NODES,
    VALUE_SPEC_NODES,
)
from .language_manager import get_parser


@dataclass
class ParsedFile:
    """A Go file's raw bytes together with its syntax tree."""
    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def compact_text(self, node: Node) -> str:
        """Node text with runs of whitespace collapsed (types, signatures)."""
        return " ".join(self.text(node).split())


def parse_go_source(source: bytes, file_path: str = "<memory>") -> ParsedFile:
    """
    Parse Go source bytes.

    Raises:
        ParserError: If the tree contains syntax errors.
    """
    tree = get_parser().parse(source)
    if tree.root_node.has_error:
        line = _first_error_line(tree.root_node)
        raise ParserError(file_path, f"syntax error near line {line}")
    return ParsedFile(path=file_path, source=source, tree=tree)


def parse_go_file(file_path: Union[str, Path]) -> ParsedFile:
    """Read and parse one Go file. OSError propagates to the caller."""
    path = Path(file_path)
    logger.debug(f"Parsing Go file: {path}")
    return parse_go_source(path.read_bytes(), str(path))


def _first_error_line(node: Node) -> int:
    for child in node.children:
        if child.type == "ERROR" or child.is_missing:
            return child.start_point[0] + 1
        if child.has_error:
            return _first_error_line(child)
    return node.start_point[0] + 1


def package_name(parsed: ParsedFile) -> Optional[str]:
    for child in parsed.root.named_children:
        if child.type == "package_clause":
            for sub in child.named_children:
                if sub.type == "package_identifier":
                    return parsed.text(sub)
    return None


def is_exported(identifier: str) -> bool:
    return identifier[:1].isupper()


# --- Node helpers shared with the mutation locator --------------------------

def iter_specs(decl: Node, spec_types: Tuple[str, ...]) -> Iterator[Node]:
    """Yield the specs of a type/var/const declaration, grouped or not."""
    for child in decl.named_children:
        if child.type in spec_types:
            yield child
        elif child.type in SPEC_LIST_NODES:
            for spec in child.named_children:
                if spec.type in spec_types:
                    yield spec


def spec_names(spec: Node, identifier_type: str = "identifier") -> List[Node]:
    return [n for n in spec.children_by_field_name("name") if n.type == identifier_type]


def receiver_type(parsed: ParsedFile, method: Node) -> str:
    """Receiver type as written, e.g. "*UserService" or "List[T]"."""
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return ""
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            type_node = param.child_by_field_name("type")
            if type_node is not None:
                return parsed.compact_text(type_node)
    return ""


def receiver_base(receiver: str) -> str:
    """Strip pointer and type parameters: "*List[T]" -> "List"."""
    base = receiver.strip().strip("()").lstrip("*").strip()
    return base.split("[", 1)[0].strip()


def function_names(parsed: ParsedFile, node: Node) -> Tuple[str, ...]:
    """
    Every name a function or method answers to.

    Functions: ("Name",). Methods: ("Name", "Recv.Name", "*Recv.Name") where the
    last form is the receiver exactly as written.
    """
    name = parsed.text(node.child_by_field_name("name"))
    if node.type != "method_declaration":
        return (name,)
    receiver = receiver_type(parsed, node)
    forms = [name, f"{receiver_base(receiver)}.{name}"]
    if receiver and receiver != receiver_base(receiver):
        forms.append(f"{receiver}.{name}")
    return tuple(forms)


def _parameters(parsed: ParsedFile, plist: Optional[Node]) -> List[Tuple[List[str], str]]:
    params = []
    if plist is None:
        return params
    for param in plist.named_children:
        if param.type not in PARAMETER_NODES:
            continue
        type_node = param.child_by_field_name("type")
        ptype = parsed.compact_text(type_node) if type_node is not None else ""
        if param.type == "variadic_parameter_declaration":
            ptype = "..." + ptype
        names = [parsed.text(n) for n in spec_names(param)]
        params.append((names, ptype))
    return params


def _render_parameters(params: List[Tuple[List[str], str]]) -> str:
    rendered = []
    for names, ptype in params:
        if not names:
            rendered.append(ptype)
        else:
            rendered.extend(f"{n} {ptype}" for n in names)
    return ", ".join(rendered)


def format_signature(parsed: ParsedFile, node: Node) -> str:
    """Render a one-line signature: func (recv) Name[T](params) results."""
    parts = ["func "]
    if node.type == "method_declaration":
        parts.append(f"({receiver_type(parsed, node)}) ")
    parts.append(parsed.text(node.child_by_field_name("name")))

    type_params = node.child_by_field_name("type_parameters")
    if type_params is not None:
        parts.append(parsed.compact_text(type_params))

    parts.append("(" + _render_parameters(_parameters(parsed, node.child_by_field_name("parameters"))) + ")")

    result = node.child_by_field_name("result")
    if result is not None:
        if result.type == "parameter_list":
            results = _parameters(parsed, result)
            if len(results) == 1 and not results[0][0]:
                parts.append(" " + results[0][1])
            elif results:
                parts.append(" (" + _render_parameters(results) + ")")
        else:
            parts.append(" " + parsed.compact_text(result))

    return "".join(parts)


def type_kind(type_node: Optional[Node]) -> SymbolKind:
    if type_node is not None and type_node.type == "struct_type":
        return SymbolKind.STRUCT
    if type_node is not None and type_node.type == "interface_type":
        return SymbolKind.INTERFACE
    return SymbolKind.ALIAS


def struct_fields(struct_node: Node) -> Iterator[Node]:
    """Yield the field_declaration nodes of a struct_type."""
    for child in struct_node.named_children:
        if child.type != "field_declaration_list":
            continue
        for field in child.named_children:
            if field.type == "field_declaration":
                yield field


def value_expressions(spec: Node) -> List[Node]:
    values = spec.child_by_field_name("value")
    if values is None:
        return []
    return [v for v in values.named_children if v.type != "comment"]


# --- Record extraction -------------------------------------------------------

def _position(node: Node) -> Tuple[int, int]:
    return node.start_point[0] + 1, node.start_point[1] + 1


def _end_line(node: Node) -> int:
    return node.end_point[0] + 1


def _function_record(parsed: ParsedFile, node: Node) -> Declaration:
    name_node = node.child_by_field_name("name")
    bare = parsed.text(name_node)
    line, column = _position(name_node)

    receiver = None
    name = bare
    kind = SymbolKind.FUNCTION
    if node.type == "method_declaration":
        kind = SymbolKind.METHOD
        receiver = receiver_type(parsed, node)
        name = f"{receiver_base(receiver)}.{bare}"

    return Declaration(
        name=name,
        kind=kind,
        file=parsed.path,
        line=line,
        column=column,
        end_line=_end_line(node),
        exported=is_exported(bare),
        signature=format_signature(parsed, node),
        receiver=receiver,
    )


def _field_records(parsed: ParsedFile, type_name: str, struct_node: Node) -> Iterator[Declaration]:
    for field in struct_fields(struct_node):
        type_node = field.child_by_field_name("type")
        field_type = parsed.compact_text(type_node) if type_node is not None else None
        # Embedded fields carry no name and are skipped
        for ident in spec_names(field, "field_identifier"):
            field_name = parsed.text(ident)
            line, column = _position(ident)
            yield Declaration(
                name=f"{type_name}.{field_name}",
                kind=SymbolKind.FIELD,
                file=parsed.path,
                line=line,
                column=column,
                end_line=_end_line(field),
                exported=is_exported(field_name),
                declared_type=field_type,
                parent=type_name,
            )


def _type_records(parsed: ParsedFile, decl: Node) -> Iterator[Declaration]:
    for spec in iter_specs(decl, TYPE_SPEC_NODES):
        name_node = spec.child_by_field_name("name")
        type_node = spec.child_by_field_name("type")
        type_name = parsed.text(name_node)
        kind = type_kind(type_node)
        line, column = _position(name_node)

        yield Declaration(
            name=type_name,
            kind=kind,
            file=parsed.path,
            line=line,
            column=column,
            end_line=_end_line(spec),
            exported=is_exported(type_name),
            declared_type=parsed.compact_text(type_node) if kind == SymbolKind.ALIAS and type_node is not None else None,
        )

        if kind == SymbolKind.STRUCT:
            yield from _field_records(parsed, type_name, type_node)


def _value_records(parsed: ParsedFile, decl: Node) -> Iterator[Declaration]:
    kind = SymbolKind(VALUE_DECLARATION_NODES[decl.type])
    for spec in iter_specs(decl, VALUE_SPEC_NODES):
        type_node = spec.child_by_field_name("type")
        declared_type = parsed.compact_text(type_node) if type_node is not None else None
        values = value_expressions(spec)
        for i, ident in enumerate(spec_names(spec)):
            ident_name = parsed.text(ident)
            line, column = _position(ident)
            yield Declaration(
                name=ident_name,
                kind=kind,
                file=parsed.path,
                line=line,
                column=column,
                end_line=_end_line(spec),
                exported=is_exported(ident_name),
                declared_type=declared_type,
                # Grouped const specs may have fewer values than names (iota)
                value=parsed.text(values[i]) if i < len(values) else None,
            )


def extract_declarations(parsed: ParsedFile, kind_filter: Optional[KindFilter] = None) -> List[Declaration]:
    """
    Extract every top-level declaration record of a parsed file, in source order.

    Args:
        parsed: Parsed Go file
        kind_filter: Optional coarse category; only records of that category are kept

    Returns:
        Declaration records (a struct's fields follow the struct itself)
    """
    allowed = KIND_CATEGORIES[kind_filter] if kind_filter else None
    records: List[Declaration] = []

    for node in parsed.root.named_children:
        if node.type in FUNCTION_NODES:
            candidates = [_function_record(parsed, node)]
        elif node.type == TYPE_DECLARATION_NODE:
            candidates = _type_records(parsed, node)
        elif node.type in VALUE_DECLARATION_NODES:
            candidates = _value_records(parsed, node)
        else:
            continue
        records.extend(r for r in candidates if allowed is None or r.kind in allowed)

    return records
