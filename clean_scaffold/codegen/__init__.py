"""
Model code generation.

Infers class trees from sample JSON payloads and emits model source.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import (
    ClassSchema,
    FieldSchema,
    FieldType,
    NotRepresentable,
    infer_schema,
)
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config


def generate_model(
    literal_text: str,
    root_name: str,
    language: str = "dart",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> GenerationResult:
    """
    Infer a model from a sample payload and generate its source.

    Args:
        literal_text: Sample JSON object or array of objects
        root_name: Name for the root class
        language: Target language name
        config: Generator configuration

    Returns:
        GenerationResult; unsuccessful when the literal has no class shape
    """
    generator = get_generator(language, config)
    schema = generator.infer(literal_text, root_name)
    if not schema:
        return GenerationResult.error(f"Cannot build {root_name}: {schema.reason}")
    return generate_code(generator, schema, literal_text)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "ClassSchema",
    "FieldSchema",
    "FieldType",
    "NotRepresentable",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "generate_code",
    "generate_model",
    "get_generator",
    "get_language_info",
    "get_registry",
    "infer_schema",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
]
