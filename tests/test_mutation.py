"""
Tests for span-addressed reads and edits: SymbolLocator, CodeEditor,
MutationFacade.
"""

import os
import stat

import pytest

from gosurgeon.exceptions import InvalidSymbolNameError, ParserError, SymbolNotFoundError
from gosurgeon.mutation import CodeEditor, MutationFacade, SymbolLocator, atomic_write
from gosurgeon.parser import parse_go_source
from gosurgeon.schemas import SymbolKind, SymbolLocation

HELPER = 'func helper() string {\n\treturn "help"\n}'
VERSION_GROUP = 'const (\n\tVersion = "2.0.0"\n\tDip     = true\n)'


def squash(text):
    return "".join(text.split())


class TestCodeEditor:

    def _location(self, start, end):
        return SymbolLocation(
            file_path="x.go", symbol_name="x", kind=SymbolKind.FUNCTION,
            start_byte=start, end_byte=end, start_line=1, end_line=1,
        )

    def test_splice_preserves_outside_bytes(self):
        source = b"AAA[old]BBB"
        assert CodeEditor().splice(source, self._location(3, 8), "[new]") == b"AAA[new]BBB"

    def test_cut_consumes_trailing_breaks(self):
        source = b"keep\nDROP\r\n\nnext"
        assert CodeEditor().cut(source, self._location(5, 9)) == b"keep\nnext"

    def test_cut_at_end_of_file(self):
        assert CodeEditor().cut(b"keep\nDROP", self._location(5, 9)) == b"keep\n"

    def test_append_layout(self):
        assert CodeEditor().append(b"package p\n", "func F() {}") == b"package p\n\n\nfunc F() {}\n"

    def test_atomic_write_keeps_mode(self, tmp_path):
        work = tmp_path / "work"
        work.mkdir()
        path = work / "a.go"
        path.write_bytes(b"old")
        os.chmod(path, 0o600)

        atomic_write(path, b"new")

        assert path.read_bytes() == b"new"
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        assert [p.name for p in work.iterdir()] == ["a.go"]


class TestSymbolLocator:

    SOURCE = (
        b"package p\n\n"
        b"// Doc comment.\n"
        b"func (s *Svc) Run() {}\n\n"
        b"var (\n\tA = 1\n\tB = 2\n)\n\n"
        b"type T struct {\n\tX, Y int `json:\"xy\"`\n}\n"
    )

    @pytest.fixture
    def parsed(self):
        return parse_go_source(self.SOURCE, "p.go")

    def test_function_span_excludes_doc_comment(self, parsed):
        location = SymbolLocator().locate_function(parsed, "Run")
        assert self.SOURCE[location.start_byte:location.end_byte] == b"func (s *Svc) Run() {}"
        assert location.symbol_name == "Svc.Run"
        assert location.kind == SymbolKind.METHOD

    @pytest.mark.parametrize("name", ["Run", "Svc.Run", "*Svc.Run"])
    def test_method_name_forms(self, parsed, name):
        assert SymbolLocator().locate_function(parsed, name).receiver == "*Svc"

    def test_value_span_is_whole_group(self, parsed):
        location = SymbolLocator().locate_value(parsed, "B")
        assert self.SOURCE[location.start_byte:location.end_byte] == b"var (\n\tA = 1\n\tB = 2\n)"
        assert location.value == "2"

    def test_field_with_shared_declaration(self, parsed):
        location = SymbolLocator().locate_field(parsed, "T.Y")
        assert location.declared_type == "int"
        assert location.tag == '`json:"xy"`'
        assert location.parent == "T"

    def test_field_name_shape(self, parsed):
        with pytest.raises(InvalidSymbolNameError):
            SymbolLocator().locate_field(parsed, "T")

    def test_plain_function_wins_bare_name(self):
        source = b"package p\n\nfunc (s *Svc) Run() {}\n\nfunc Run() {}\n"
        parsed = parse_go_source(source, "p.go")
        assert SymbolLocator().locate_function(parsed, "Run").kind == SymbolKind.FUNCTION
        assert SymbolLocator().locate_function(parsed, "Svc.Run").kind == SymbolKind.METHOD

    def test_not_found_names_file(self, parsed):
        with pytest.raises(SymbolNotFoundError) as exc:
            SymbolLocator().locate_type(parsed, "Missing")
        assert "p.go" in str(exc.value)


class TestReads:

    def test_read_func(self, facade, sample_file):
        result = facade.read_func("helper", str(sample_file))
        assert result.code == HELPER
        assert result.kind == SymbolKind.FUNCTION
        assert (result.line, result.end_line) == (59, 61)

    def test_read_method_without_file(self, facade, sample_file):
        result = facade.read_func("UserService.Create")
        assert result.file == os.path.abspath(sample_file)
        assert result.receiver == "*UserService"
        assert result.code.startswith("func (s *UserService) Create(")

    def test_read_type(self, facade, sample_file):
        result = facade.read_type("User", str(sample_file))
        assert result.kind == SymbolKind.STRUCT
        assert result.code.startswith("type User struct {")
        assert result.code.endswith("}")

    def test_read_value_group(self, facade, sample_file):
        result = facade.read_value("Version", str(sample_file))
        assert result.code == VERSION_GROUP
        assert result.value == '"2.0.0"'
        assert result.kind == SymbolKind.CONSTANT

    def test_read_value_resolves_file(self, facade):
        assert facade.read_value("GlobalConfig").code == "var GlobalConfig = map[string]string{}"

    def test_read_field(self, facade, sample_file):
        result = facade.read_field("User.ID", str(sample_file))
        assert result.code == 'ID int `json:"id"`'
        assert result.parent == "User"

    def test_read_field_without_tag(self, facade):
        assert facade.read_field("User.Age").code == "Age int"

    def test_file_scoped_lookup(self, facade, other_file):
        with pytest.raises(SymbolNotFoundError):
            facade.read_func("helper", str(other_file))

    def test_broken_target_file(self, facade, write_go):
        path = write_go("broken.go", "package p\n\nfunc x( {\n")
        with pytest.raises(ParserError):
            facade.read_func("x", str(path))


class TestEdits:

    def test_replace_version_scenario(self, tmp_path):
        path = tmp_path / "v.go"
        path.write_text('package p\n\nconst Version = "2.0.0"\n')
        facade = MutationFacade(tmp_path, config={"format_enabled": False})

        facade.replace_value("Version", str(path), 'const Version = "3.0.0"')

        text = path.read_text()
        assert '"3.0.0"' in text
        assert '"2.0.0"' not in text

    def test_replace_preserves_surrounding_bytes(self, facade, sample_file):
        before = sample_file.read_bytes()
        new_code = 'func helper() string {\n\treturn "changed"\n}'

        result = facade.replace_func("helper", str(sample_file), new_code)

        after = sample_file.read_bytes()
        start = before.index(HELPER.encode())
        assert after == before[:start] + new_code.encode() + before[start + len(HELPER):]
        assert result.files_changed == [os.path.abspath(sample_file)]
        assert result.warnings == []

    @pytest.mark.parametrize("reader,replacer,name,new_code", [
        ("read_func", "replace_func", "UserService.Delete", "func (s *UserService) Delete(id int) {\n\ts.db[id] = nil\n}"),
        ("read_type", "replace_type", "Reader", "type Reader interface {\n\tRead() error\n}"),
        ("read_value", "replace_value", "GlobalConfig", "var GlobalConfig = map[string]string{\"env\": \"dev\"}"),
    ])
    def test_replace_then_read(self, facade, sample_file, reader, replacer, name, new_code):
        getattr(facade, replacer)(name, str(sample_file), new_code)
        assert squash(getattr(facade, reader)(name, str(sample_file)).code) == squash(new_code)

    def test_delete_helper_scenario(self, facade, sample_file):
        before = sample_file.read_text()

        facade.delete_func("helper", str(sample_file))

        assert sample_file.read_text() == before.replace(HELPER + "\n\n", "")

    def test_delete_twice(self, facade, sample_file):
        facade.delete_func("helper", str(sample_file))
        with pytest.raises(SymbolNotFoundError):
            facade.delete_func("helper", str(sample_file))

    def test_delete_twice_without_file(self, facade, go_project):
        tests_file = go_project / "sample_test.go"
        before = tests_file.read_bytes()

        facade.delete_func("helper")
        with pytest.raises(SymbolNotFoundError):
            facade.delete_func("helper")
        assert tests_file.read_bytes() == before

    def test_partial_name_never_edited(self, facade, sample_file):
        before = sample_file.read_bytes()
        with pytest.raises(SymbolNotFoundError):
            facade.replace_func("Proc", None, "func Proc() {}")
        assert sample_file.read_bytes() == before

    def test_delete_type_leaves_others(self, facade, sample_file):
        facade.delete_type("Reader", str(sample_file))
        text = sample_file.read_text()
        assert "type Reader interface" not in text
        assert "type UserID = int" in text

    def test_delete_value_removes_group(self, facade, sample_file):
        facade.delete_value("Dip", str(sample_file))
        text = sample_file.read_text()
        assert "Version" not in text.split("var GlobalConfig")[0]

    def test_add_appends(self, facade, other_file):
        before = other_file.read_bytes()

        facade.add(str(other_file), "func Added() {}")

        assert other_file.read_bytes() == before + b"\n\nfunc Added() {}\n"
        assert facade.read_func("Added", str(other_file)).code == "func Added() {}"

    def test_add_missing_file(self, facade, go_project):
        with pytest.raises(OSError):
            facade.add(str(go_project / "missing.go"), "func F() {}")
