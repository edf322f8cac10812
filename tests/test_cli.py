import json

from typer.testing import CliRunner

from ablunit.cli import app

runner = CliRunner()

CLASS_SOURCE = """class CustomerTest:
    @Test.
    method public void testCreate():
        OpenEdge.Core.Assert:IsTrue(true).
    end method.
end class.
"""


def test_app_has_discover_command():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "discover" in result.stdout


def test_app_has_scan_command():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "scan" in result.stdout


def test_app_has_asserts_command():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "asserts" in result.stdout


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "ablunit version" in result.stdout


def test_scan_command_requires_file_path():
    result = runner.invoke(app, ["scan"])

    assert result.exit_code != 0


def test_scan_command_outputs_json(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / "CustomerTest.cls").write_text(CLASS_SOURCE)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["scan", "CustomerTest.cls"])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert [(e["kind"], e["name"]) for e in output] == [
        ("class", "CustomerTest"),
        ("method", "testCreate"),
    ]
    assert output[1]["parent"] == "CustomerTest"
    assert output[0]["path"] == "CustomerTest.cls"
    assert output[0]["range"] == {
        "start": {"line": 0, "column": 6},
        "end": {"line": 0, "column": 12},
    }


def test_scan_command_missing_file(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["scan", "Missing.cls"])

    assert result.exit_code == 1


def test_scan_command_unsupported_file(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / "notes.txt").write_text("hello")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["scan", "notes.txt"])

    assert result.exit_code == 1


def test_discover_command_with_root(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "CustomerTest.cls").write_text(CLASS_SOURCE)

    result = runner.invoke(app, ["discover", str(tmp_path)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert [e["path"] for e in output] == ["src/CustomerTest.cls", "src/CustomerTest.cls"]


def test_discover_command_detects_repository(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / "run.p").write_text("\n@Test.\nprocedure testRun:\n")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["discover"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)[0]["name"] == "testRun"


def test_asserts_command_lists_call_sites(tmp_path):
    test_file = tmp_path / "CustomerTest.cls"
    test_file.write_text(CLASS_SOURCE)

    result = runner.invoke(app, ["asserts", str(test_file)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output == [{
        "range": {
            "start": {"line": 3, "column": 8},
            "end": {"line": 3, "column": 41},
        },
        "text": "OpenEdge.Core.Assert:IsTrue(true)",
    }]


def test_asserts_command_missing_file(tmp_path):
    result = runner.invoke(app, ["asserts", str(tmp_path / "missing.cls")])

    assert result.exit_code == 1


def test_scan_and_discover_agree_on_undecodable_file(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / "Broken.cls").write_bytes(b"\xff\xfe\nclass Broken:\n@Test.\n  method public void run():\n")
    monkeypatch.chdir(tmp_path)

    scan_result = runner.invoke(app, ["scan", "Broken.cls"])
    discover_result = runner.invoke(app, ["discover"])

    assert scan_result.exit_code == 1
    assert discover_result.exit_code == 0
    assert '"name": "run"' not in discover_result.stdout


def test_asserts_command_undecodable_file(tmp_path):
    test_file = tmp_path / "Broken.cls"
    test_file.write_bytes(b"\xff OpenEdge.Core.Assert:IsTrue(x).\n")

    result = runner.invoke(app, ["asserts", str(test_file)])

    assert result.exit_code == 1
