"""Command-line interface tests."""

import io
import json

from clean_scaffold.main import main

from .conftest import USER_LITERAL


def write_literal(tmp_path, text=USER_LITERAL, name="user.json"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def flat(text):
    return " ".join(text.split())


def test_model_to_stdout(tmp_path, capsys):
    path = write_literal(tmp_path)

    assert main(["model", str(path), "--root-name", "User"]) == 0

    out = capsys.readouterr().out
    assert "class User {" in out
    assert "      isActive: json['is_active'] as bool? ?? false," in out


def test_model_to_file(tmp_path):
    path = write_literal(tmp_path)
    output = tmp_path / "user_model.dart"

    exit_code = main(
        ["model", str(path), "--root-name", "User", "-o", str(output), "--no-comments"]
    )

    assert exit_code == 0
    assert output.read_text(encoding="utf-8").startswith("class User {")


def test_model_legacy_wire_keys(tmp_path, capsys):
    path = write_literal(tmp_path, '{"user_ID": 1}')

    assert main(["model", str(path), "--root-name", "X", "--legacy-wire-keys"]) == 0
    assert "json['user_id']" in capsys.readouterr().out


def test_model_from_stdin_not_representable(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("[]"))

    assert main(["model", "--stdin", "--root-name", "Items"]) == 1
    assert "Cannot build Items" in capsys.readouterr().out


def test_model_requires_input(capsys):
    assert main(["model", "--root-name", "X"]) == 1
    assert "Input source required" in capsys.readouterr().out


def test_model_unsupported_language(tmp_path, capsys):
    path = write_literal(tmp_path)

    assert main(["model", str(path), "--language", "go"]) == 1
    assert "Unsupported language" in capsys.readouterr().out


def test_model_missing_file(tmp_path, capsys):
    assert main(["model", str(tmp_path / "missing.json")]) == 1
    assert "Failed to load input" in flat(capsys.readouterr().out)


def test_model_bad_config(tmp_path, capsys):
    path = write_literal(tmp_path)

    exit_code = main(["model", str(path), "--config", str(tmp_path / "nope.json")])

    assert exit_code == 1
    assert "Configuration error" in flat(capsys.readouterr().out)


def test_model_verbose_shows_metadata(tmp_path, capsys):
    path = write_literal(tmp_path, '{"user": {"id": 1}, "tags": []}')

    assert main(["model", str(path), "--root-name", "Root", "--verbose"]) == 0

    out = capsys.readouterr().out
    assert "Generation Metadata" in out
    assert "Class Count" in out
    assert "no element type information" in out


def test_list_languages(capsys):
    assert main(["model", "--list-languages"]) == 0

    out = capsys.readouterr().out
    assert "dart" in out
    assert "flutter" in out


def test_language_info(capsys):
    assert main(["model", "--language-info", "flutter"]) == 0
    assert "DartGenerator" in capsys.readouterr().out


def test_feature_writes_files(tmp_path, auth_feature_file, capsys):
    output = tmp_path / "lib"

    exit_code = main(["feature", str(auth_feature_file), "--output", str(output)])

    assert exit_code == 0
    assert (output / "auth" / "auth_di.dart").exists()
    assert (output / "auth" / "data" / "models" / "login_model.dart").exists()
    assert "Feature written to" in flat(capsys.readouterr().out)


def test_feature_refuses_existing_root(tmp_path, auth_feature_file, capsys):
    (tmp_path / "auth").mkdir()

    exit_code = main(["feature", str(auth_feature_file), "--output", str(tmp_path)])

    assert exit_code == 1
    assert "already exists" in flat(capsys.readouterr().out)
    assert list((tmp_path / "auth").iterdir()) == []


def test_feature_dry_run_writes_nothing(tmp_path, auth_feature_file, capsys):
    output = tmp_path / "lib"

    exit_code = main(
        ["feature", str(auth_feature_file), "--output", str(output), "--dry-run"]
    )

    assert exit_code == 0
    assert not output.exists()
    out = capsys.readouterr().out
    assert "auth_api_service.dart" in out
    assert "entities" in out


def test_feature_from_stdin(tmp_path, monkeypatch, auth_feature_file):
    monkeypatch.setattr(
        "sys.stdin", io.StringIO(auth_feature_file.read_text(encoding="utf-8"))
    )

    assert main(["feature", "-", "--output", str(tmp_path)]) == 0
    assert (tmp_path / "auth" / "auth_di.dart").exists()


def test_feature_invalid_description(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"name": "auth", "endpoints": []}), encoding="utf-8")

    assert main(["feature", str(path)]) == 1
    assert "Invalid feature description" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_log_file_receives_debug_records(tmp_path, auth_feature_file):
    log_file = tmp_path / "scaffold.log"

    main(
        [
            "--log-level",
            "error",
            "--log-file",
            str(log_file),
            "feature",
            str(auth_feature_file),
            "--output",
            str(tmp_path / "lib"),
        ]
    )
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in text
    assert "Wrote" in text
