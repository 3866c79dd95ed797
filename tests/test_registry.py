"""Generator registry and convenience API tests."""

import pytest

from clean_scaffold.codegen import (
    GenerationResult,
    generate_model,
)
from clean_scaffold.codegen.core.generator import CodeGenerator
from clean_scaffold.codegen.languages.dart import DartGenerator
from clean_scaffold.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)

from .conftest import USER_LITERAL


def test_dart_is_registered_with_flutter_alias():
    assert list_supported_languages() == ["dart"]
    assert is_language_supported("dart")
    assert is_language_supported("Flutter")
    assert not is_language_supported("go")


def test_get_generator_by_alias():
    assert isinstance(get_generator("flutter"), DartGenerator)


def test_get_generator_with_dict_config():
    generator = get_generator("dart", {"add_comments": False})
    assert generator.config.add_comments is False


def test_get_generator_with_config_file(tmp_path):
    path = tmp_path / "c.json"
    path.write_text('{"locator_name": "sl"}', encoding="utf-8")

    assert get_generator("dart", path).config.locator_name == "sl"


def test_unknown_language():
    with pytest.raises(RegistryError, match="Available: dart"):
        get_generator("cobol")


def test_register_rejects_non_generators():
    with pytest.raises(RegistryError):
        GeneratorRegistry().register("x", object)


def test_alias_conflicts():
    registry = GeneratorRegistry()
    registry.register("dart", DartGenerator, aliases=["flutter"])

    with pytest.raises(RegistryError):
        registry.register("other", DartGenerator, aliases=["flutter"])
    with pytest.raises(RegistryError):
        registry.register("other", DartGenerator, aliases=["dart"])


def test_language_info():
    info = get_language_info("flutter")

    assert info["name"] == "dart"
    assert info["file_extension"] == ".dart"
    assert info["aliases"] == ["flutter"]
    assert info["class"] == "DartGenerator"
    assert issubclass(DartGenerator, CodeGenerator)


def test_generate_model():
    result = generate_model(USER_LITERAL, "User")

    assert isinstance(result, GenerationResult)
    assert result.success
    assert "class User {" in result.code
    assert result.metadata["language"] == "dart"


def test_generate_model_not_representable():
    result = generate_model("[]", "Items")

    assert not result.success
    assert result.error_message.startswith("Cannot build Items")
