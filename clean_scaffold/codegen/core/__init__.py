"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    ClassSchema,
    FieldSchema,
    FieldType,
    InferenceResult,
    NotRepresentable,
    SchemaBuilder,
    infer_schema,
    iter_schemas,
)
from .naming import (
    NameSanitizer,
    NamingCase,
    singularize,
    to_field_case,
    to_type_case,
    to_wire_case,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine, dart_string

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema inference
    "ClassSchema",
    "FieldSchema",
    "FieldType",
    "InferenceResult",
    "NotRepresentable",
    "SchemaBuilder",
    "infer_schema",
    "iter_schemas",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "singularize",
    "to_field_case",
    "to_type_case",
    "to_wire_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    "dart_string",
]
