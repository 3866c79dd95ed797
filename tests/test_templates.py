"""Template engine tests."""

import pytest

from clean_scaffold.codegen.core.templates import (
    TemplateError,
    create_template_engine,
    dart_string,
)


@pytest.fixture
def engine(tmp_path):
    (tmp_path / "class.dart.j2").write_text(
        "class {{ name }} {\n{% for f in fields %}\n  final {{ f }};\n{% endfor %}\n}\n",
        encoding="utf-8",
    )
    return create_template_engine(tmp_path)


def test_dart_string_escapes_quotes_dollars_and_backslashes():
    assert dart_string("a'b$c\\d") == "'a\\'b\\$c\\\\d'"
    assert dart_string("is_active") == "'is_active'"


def test_file_system_templates(engine):
    rendered = engine.render_template("class.dart.j2", {"name": "A", "fields": ["int x"]})

    assert rendered == "class A {\n  final int x;\n}\n"


def test_template_exists(engine):
    assert engine.template_exists("class.dart.j2")
    assert not engine.template_exists("other.j2")


def test_undefined_variables_raise(engine):
    with pytest.raises(TemplateError, match="class.dart.j2"):
        engine.render_template("class.dart.j2", {"fields": []})


def test_missing_template_raises(engine):
    with pytest.raises(TemplateError, match="nope.j2"):
        engine.render_template("nope.j2", {})


def test_engine_without_directory_has_no_templates():
    engine = create_template_engine()

    assert not engine.template_exists("model.dart.j2")
