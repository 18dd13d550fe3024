"""
Tests for Go parsing and per-file declaration extraction.
"""

import pytest

from gosurgeon.exceptions import ParserError
from gosurgeon.parser import extract_declarations, package_name, parse_go_file, parse_go_source
from gosurgeon.schemas import KindFilter, SymbolKind


@pytest.fixture
def sample_records(sample_file):
    return extract_declarations(parse_go_file(sample_file))


def by_name(records):
    return {r.name: r for r in records}


class TestParsing:

    def test_package_name(self, sample_file):
        assert package_name(parse_go_file(sample_file)) == "sample"

    def test_syntax_error_raises(self):
        with pytest.raises(ParserError) as exc:
            parse_go_source(b"package x\n\nfunc broken( {\n", "broken.go")
        assert "broken.go" in str(exc.value)

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            parse_go_file(tmp_path / "nope.go")


class TestExtraction:

    def test_source_order(self, sample_records):
        names = [r.name for r in sample_records]
        assert names == [
            "Version", "Dip", "GlobalConfig",
            "User", "User.ID", "User.Name", "User.Age",
            "UserService", "UserService.db", "UserService.ns",
            "Reader", "UserID",
            "UserService.Create", "UserService.List", "UserService.Delete",
            "ProcessOrder", "helper", "UserDelete",
        ]

    def test_method_record(self, sample_records):
        create = by_name(sample_records)["UserService.Create"]
        assert create.kind == SymbolKind.METHOD
        assert create.receiver == "*UserService"
        assert create.signature == "func (*UserService) Create(name string, age int) (*User, error)"
        assert (create.line, create.column, create.end_line) == (33, 23, 40)
        assert create.exported

    def test_value_receiver(self, sample_records):
        assert by_name(sample_records)["UserService.List"].receiver == "UserService"

    def test_function_signature_variadic(self, sample_records):
        record = by_name(sample_records)["ProcessOrder"]
        assert record.kind == SymbolKind.FUNCTION
        assert record.receiver is None
        assert record.signature == "func ProcessOrder(id int, items ...string) error"

    def test_unexported(self, sample_records):
        records = by_name(sample_records)
        assert not records["helper"].exported
        assert not records["UserService.db"].exported
        assert records["Version"].exported

    def test_type_kinds(self, sample_records):
        records = by_name(sample_records)
        assert records["User"].kind == SymbolKind.STRUCT
        assert records["Reader"].kind == SymbolKind.INTERFACE
        assert records["UserID"].kind == SymbolKind.ALIAS
        assert records["UserID"].declared_type == "int"

    def test_fields(self, sample_records):
        field = by_name(sample_records)["User.ID"]
        assert field.kind == SymbolKind.FIELD
        assert field.parent == "User"
        assert field.declared_type == "int"
        assert field.line == 17

    def test_grouped_constants(self, sample_records):
        records = by_name(sample_records)
        assert records["Version"].kind == SymbolKind.CONSTANT
        assert records["Version"].value == '"2.0.0"'
        assert records["Dip"].value == "true"
        assert records["Dip"].line == 10

    def test_variable(self, sample_records):
        config = by_name(sample_records)["GlobalConfig"]
        assert config.kind == SymbolKind.VARIABLE
        assert config.value == "map[string]string{}"
        assert config.declared_type is None

    def test_embedded_fields_skipped(self):
        parsed = parse_go_source(b"package p\n\ntype A struct {\n\t*Base\n\tio.Reader\n\tName string\n}\n", "a.go")
        names = [r.name for r in extract_declarations(parsed)]
        assert names == ["A", "A.Name"]

    def test_multi_name_specs(self):
        source = b"package p\n\nvar a, b int = 1, 2\n\nconst (\n\tX = iota\n\tY\n)\n\ntype P struct {\n\tLo, Hi int\n}\n"
        records = by_name(extract_declarations(parse_go_source(source, "p.go")))
        assert records["a"].value == "1"
        assert records["b"].value == "2"
        assert records["b"].declared_type == "int"
        assert records["Y"].value is None
        assert records["P.Lo"].declared_type == records["P.Hi"].declared_type == "int"

    def test_generic_receiver_stripped(self):
        source = b"package p\n\ntype List[T any] struct {\n\titems []T\n}\n\nfunc (l *List[T]) Len() int {\n\treturn len(l.items)\n}\n"
        records = by_name(extract_declarations(parse_go_source(source, "l.go")))
        assert records["List.Len"].receiver == "*List[T]"

    def test_type_group_and_alias_form(self):
        source = b"package p\n\ntype (\n\tA int\n\tB = string\n)\n"
        records = extract_declarations(parse_go_source(source, "t.go"))
        assert [(r.name, r.kind) for r in records] == [("A", SymbolKind.ALIAS), ("B", SymbolKind.ALIAS)]


class TestKindFilter:

    @pytest.mark.parametrize("kind_filter,expected", [
        (KindFilter.FUNCTION, {SymbolKind.FUNCTION, SymbolKind.METHOD}),
        (KindFilter.TYPE, {SymbolKind.STRUCT, SymbolKind.INTERFACE, SymbolKind.ALIAS}),
        (KindFilter.FIELD, {SymbolKind.FIELD}),
        (KindFilter.VARIABLE, {SymbolKind.VARIABLE}),
        (KindFilter.CONSTANT, {SymbolKind.CONSTANT}),
    ])
    def test_filter_restricts_category(self, sample_file, kind_filter, expected):
        records = extract_declarations(parse_go_file(sample_file), kind_filter)
        assert records
        assert {r.kind for r in records} == expected

    def test_field_filter_omits_struct(self, sample_file):
        records = extract_declarations(parse_go_file(sample_file), KindFilter.FIELD)
        assert "User" not in [r.name for r in records]
