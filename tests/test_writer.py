"""Artifact writer tests."""

import logging

import pytest

from clean_scaffold.codegen.core.config import load_config
from clean_scaffold.feature import (
    Artifact,
    FeatureScaffolder,
    ScaffoldError,
    ScaffoldResult,
    feature_root,
    write_artifacts,
)


def test_writes_layout_and_artifacts(tmp_path, auth_feature):
    result = FeatureScaffolder().scaffold(auth_feature)

    written = write_artifacts(result, tmp_path)

    root = tmp_path / "auth"
    assert feature_root(result, tmp_path) == root
    assert len(written) == len(result.artifacts)
    for directory in ["domain/entities", "presentation/pages", "presentation/widgets"]:
        assert (root / directory).is_dir()
    di = (root / "auth_di.dart").read_text(encoding="utf-8")
    assert di == result.get("auth_di.dart").source_text


def test_existing_feature_root_is_left_alone(tmp_path, auth_feature, caplog):
    root = tmp_path / "auth"
    root.mkdir()
    (root / "keep.txt").write_text("mine", encoding="utf-8")
    result = FeatureScaffolder().scaffold(auth_feature)

    with caplog.at_level(logging.WARNING, logger="clean_scaffold"):
        written = write_artifacts(result, tmp_path)

    assert written == []
    assert [p.name for p in root.iterdir()] == ["keep.txt"]
    assert "already exists" in caplog.text


def test_line_endings_are_written_as_generated(tmp_path, auth_feature):
    config = load_config("dart", {"line_ending": "\r\n"})
    result = FeatureScaffolder(config).scaffold(auth_feature)

    write_artifacts(result, tmp_path)

    raw = (tmp_path / "auth" / "auth_di.dart").read_bytes()
    assert b"\r\n" in raw
    assert b"\n" not in raw.replace(b"\r\n", b"")


def test_failed_write_removes_partial_root(tmp_path, auth_feature):
    # the second artifact collides with a layout directory
    result = ScaffoldResult(
        feature=auth_feature,
        artifacts=[
            Artifact("auth_di.dart", "void authDI() {}\n"),
            Artifact("domain/entities", "not a file\n"),
        ],
    )

    with pytest.raises(ScaffoldError, match="Failed to write feature auth"):
        write_artifacts(result, tmp_path)

    assert not (tmp_path / "auth").exists()
    retry = FeatureScaffolder().scaffold(auth_feature)
    assert len(write_artifacts(retry, tmp_path)) == len(retry.artifacts)
