"""
Dart code generator implementation.

Generates null-safe Dart model classes with fromJson/toJson from an
inferred ClassSchema tree.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import to_wire_case
from ...core.schema import ClassSchema, FieldSchema
from ...core.templates import dart_string
from .config import DartConfig, get_dart_config
from .naming import DART_BUILTIN_TYPES, dart_field_reserved_words

logger = get_logger(__name__)

MODEL_TEMPLATE = "model.dart.j2"

# Continuation indent for multi-line fromJson expressions
_CONTINUATION = " " * 10


class DartGenerator(CodeGenerator):
    """Code generator for Dart model classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Dart generator with configuration."""
        super().__init__(config)
        self.dart_config: DartConfig = get_dart_config(self.config.language_config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Dart templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "dart"

    @property
    def file_extension(self) -> str:
        """Return Dart file extension."""
        return ".dart"

    @property
    def reserved_words(self) -> set:
        return dart_field_reserved_words()

    @property
    def builtin_types(self) -> set:
        return set(DART_BUILTIN_TYPES)

    def generate(
        self, schema: ClassSchema, original_literal: Optional[str] = None
    ) -> str:
        """Generate Dart source for a class tree, nested classes first."""
        chunks = [self.generate(nested) for nested in schema.nested_classes]
        chunks.append(self.generate_single_schema(schema, original_literal))
        return "\n\n".join(chunk.rstrip("\n") for chunk in chunks) + "\n"

    def generate_single_schema(
        self, schema: ClassSchema, original_literal: Optional[str] = None
    ) -> str:
        """Generate one Dart class, without its nested classes."""
        if not self.template_exists(MODEL_TEMPLATE):
            raise GeneratorError(f"{MODEL_TEMPLATE} template not found")

        context = {
            "class_name": schema.name,
            "doc_lines": self._doc_lines(original_literal),
            "fields": [self._field_data(field) for field in schema.fields],
        }
        return self.render_template(MODEL_TEMPLATE, context)

    def _doc_lines(self, original_literal: Optional[str]) -> List[str]:
        """Literal lines for the doc block, with outer blank lines dropped."""
        if not self.config.add_comments or not original_literal:
            return []

        lines = [line.rstrip() for line in original_literal.splitlines()]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return lines

    def wire_key(self, field: FieldSchema) -> str:
        """JSON key a field is read from and written to."""
        if self.config.preserve_wire_keys:
            return field.wire_name
        return to_wire_case(field.name)

    def _field_data(self, field: FieldSchema) -> Dict[str, Any]:
        """Template context for one field."""
        key = dart_string(self.wire_key(field))
        return {
            "name": field.name,
            "type": self.dart_config.declared_type(field),
            "required": not field.nullable,
            "key": key,
            "from_json": self._from_json(field, f"json[{key}]"),
            "to_json": self.to_json_expression(field),
        }

    def _from_json(self, field: FieldSchema, access: str) -> str:
        """Dart expression that decodes a field from the json map."""
        element_type = self.dart_config.element_type(field)

        if field.is_collection:
            if field.is_complex:
                decoded = f"({access} as List).map((e) => {element_type}.fromJson(e)).toList()"
            else:
                decoded = f"List<{element_type}>.from({access})"
            fallback = "null" if field.nullable else "[]"
            return self._null_guard(access, decoded, fallback)

        if field.is_complex:
            if field.nullable:
                fallback = "null"
            else:
                fallback = f"throw Exception('{field.name} is required')"
            return self._null_guard(access, f"{element_type}.fromJson({access})", fallback)

        if self.dart_config.is_dynamic(field):
            return access

        expression = f"{access} as {element_type}?"
        default = self.dart_config.default_value(field)
        if not field.nullable and default is not None:
            expression = f"{expression} ?? {default}"
        return expression

    @staticmethod
    def _null_guard(access: str, decoded: str, fallback: str) -> str:
        return (
            f"{access} != null\n"
            f"{_CONTINUATION}? {decoded}\n"
            f"{_CONTINUATION}: {fallback}"
        )

    @staticmethod
    def to_json_expression(field: FieldSchema) -> str:
        """Dart expression that encodes a field for the json map."""
        if not field.is_complex:
            return field.name

        access = f"{field.name}?" if field.nullable else field.name
        if field.is_collection:
            return f"{access}.map((e) => e.toJson()).toList()"
        return f"{access}.toJson()"
