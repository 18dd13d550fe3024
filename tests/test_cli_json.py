import json

import pytest
from typer.testing import CliRunner

from gosurgeon import __version__
from gosurgeon.main import app

runner = CliRunner()


@pytest.fixture
def project(go_project, monkeypatch):
    """Run the CLI inside the sample project with external formatters off."""
    config_path = go_project / ".gosurgeon" / "config.json"
    config_path.parent.mkdir()
    config_path.write_text(json.dumps({"formatting": {"enabled": False}}))
    monkeypatch.chdir(go_project)
    return go_project


def invoke(*args, **kwargs):
    result = runner.invoke(app, list(args), **kwargs)
    return result, json.loads(result.stdout) if result.stdout.strip().startswith("{") else None


def test_find_json(project):
    result, payload = invoke("find", "User", "--kind", "type")
    assert result.exit_code == 0
    assert payload["success"] is True
    assert payload["count"] == 3
    assert [m["name"] for m in payload["matches"]] == ["User", "UserService", "UserID"]
    assert payload["matches"][0]["kind"] == "struct"


def test_find_in_directory_argument(project):
    result, payload = invoke("find", "Describe", str(project))
    assert result.exit_code == 0
    assert payload["matches"][0]["file"].endswith("other.go")


def test_read_json(project):
    result, payload = invoke("read", "helper")
    assert result.exit_code == 0
    assert payload["count"] == 1
    assert payload["results"][0]["code"] == 'func helper() string {\n\treturn "help"\n}'


def test_read_not_found(project):
    result, payload = invoke("read", "NoSuchSymbol")
    assert result.exit_code == 1
    assert payload["success"] is False
    assert payload["code"] == "SYMBOL_NOT_FOUND"
    assert "NoSuchSymbol" in payload["error"]


def test_replace_with_code_option(project):
    result, payload = invoke("replace", "Version", "sample.go", "--code", 'const Version = "3.0.0"')
    assert result.exit_code == 0
    assert payload["success"] is True
    text = (project / "sample.go").read_text()
    assert '"3.0.0"' in text
    assert '"2.0.0"' not in text


def test_replace_from_stdin(project):
    result, payload = invoke("replace", "helper", input='func helper() string {\n\treturn "stdin"\n}')
    assert result.exit_code == 0
    assert '"stdin"' in (project / "sample.go").read_text()


def test_replace_from_code_file(project, tmp_path):
    code_file = tmp_path / "new.go.txt"
    code_file.write_text("type UserID = string")
    result, payload = invoke("replace", "UserID", "--code-file", str(code_file))
    assert result.exit_code == 0
    assert "type UserID = string" in (project / "sample.go").read_text()


def test_replace_without_code(project):
    result, payload = invoke("replace", "helper", input="")
    assert result.exit_code == 1
    assert payload["code"] == "MISSING_ARGUMENT"


def test_delete_then_delete_again(project):
    first, payload = invoke("delete", "helper", "sample.go")
    assert first.exit_code == 0
    assert payload["files_changed"][0].endswith("sample.go")

    second, payload = invoke("delete", "helper", "sample.go")
    assert second.exit_code == 1
    assert payload["code"] == "SYMBOL_NOT_FOUND"


def test_delete_again_does_not_hit_similar_name(project):
    tests_file = project / "sample_test.go"
    before = tests_file.read_bytes()

    first, _ = invoke("delete", "helper")
    assert first.exit_code == 0

    second, payload = invoke("delete", "helper")
    assert second.exit_code == 1
    assert payload["code"] == "SYMBOL_NOT_FOUND"
    assert tests_file.read_bytes() == before


def test_delete_field_unsupported(project):
    result, payload = invoke("delete", "User.Age")
    assert result.exit_code == 1
    assert payload["code"] == "UNSUPPORTED_KIND"


def test_parse_error_on_named_file(project):
    (project / "broken.go").write_text("package sample\n\nfunc broken( {\n")
    result, payload = invoke("delete", "broken", "broken.go")
    assert result.exit_code == 1
    assert payload["code"] == "PARSE_ERROR"


def test_add_and_move(project):
    result, _ = invoke("add", "other.go", "--code", "func Extra() int {\n\treturn 1\n}")
    assert result.exit_code == 0

    result, payload = invoke("move", "Extra", "sample.go")
    assert result.exit_code == 0
    assert len(payload["files_changed"]) == 2
    assert "func Extra() int" in (project / "sample.go").read_text()
    assert "func Extra() int" not in (project / "other.go").read_text()


def test_move_same_file_rejected(project):
    result, payload = invoke("move", "helper", "sample.go")
    assert result.exit_code == 1
    assert payload["code"] == "MOVE_REJECTED"


def test_symbols_and_api(project):
    result, payload = invoke("symbols", ".")
    assert result.exit_code == 0
    assert payload["package"] == "sample"
    assert payload["count"] == len(payload["symbols"])

    result, payload = invoke("api", "sample")
    assert result.exit_code == 0
    assert payload["num_files"] == 2
    assert all(s["exported"] for s in payload["symbols"])


def test_format_disabled_changes_nothing(project):
    before = (project / "sample.go").read_bytes()
    result, payload = invoke("format", "./...")
    assert result.exit_code == 0
    assert payload["files_changed"] == []
    assert (project / "sample.go").read_bytes() == before


def test_human_mode_table(project):
    result = runner.invoke(app, ["--human", "find", "ProcessOrder"], env={"COLUMNS": "200"})
    assert result.exit_code == 0
    assert "ProcessOrder" in result.stdout
    assert not result.stdout.lstrip().startswith("{")


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
