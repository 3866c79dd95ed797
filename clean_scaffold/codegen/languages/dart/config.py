"""
Dart-specific configuration and type mappings.

Maps inferred field types to Dart types and supplies the fallback
literals used when a non-nullable primitive is absent from the payload.
"""

from typing import Any, Dict, Optional

from ...core.schema import FieldSchema, FieldType


# Dart type mappings
DART_TYPE_MAP = {
    FieldType.STRING: "String",
    FieldType.INTEGER: "int",
    FieldType.DOUBLE: "double",
    FieldType.BOOLEAN: "bool",
    FieldType.DYNAMIC: "dynamic",
}

# Fallbacks for absent non-nullable primitives; dynamic has none
DART_DEFAULT_VALUES = {
    FieldType.STRING: "''",
    FieldType.INTEGER: "0",
    FieldType.DOUBLE: "0.0",
    FieldType.BOOLEAN: "false",
}


class DartConfig:
    """Dart-specific configuration."""

    def __init__(self, **kwargs: Any):
        """Initialize Dart configuration."""
        self.string_type = kwargs.get("string_type", "String")
        self.int_type = kwargs.get("int_type", "int")
        self.double_type = kwargs.get("double_type", "double")
        self.bool_type = kwargs.get("bool_type", "bool")
        self.dynamic_type = kwargs.get("dynamic_type", "dynamic")

        # Build type map with configured types
        self.type_map: Dict[FieldType, str] = DART_TYPE_MAP.copy()
        self.type_map[FieldType.STRING] = self.string_type
        self.type_map[FieldType.INTEGER] = self.int_type
        self.type_map[FieldType.DOUBLE] = self.double_type
        self.type_map[FieldType.BOOLEAN] = self.bool_type
        self.type_map[FieldType.DYNAMIC] = self.dynamic_type

    def element_type(self, field: FieldSchema) -> str:
        """Dart type of the field value, or of its elements for lists."""
        if field.is_complex:
            return field.ref
        return self.type_map.get(field.type, self.dynamic_type)

    def declared_type(self, field: FieldSchema) -> str:
        """Full declared Dart type of a field."""
        dart_type = self.element_type(field)
        if field.is_collection:
            dart_type = f"List<{dart_type}>"

        # dynamic is already nullable
        if field.nullable and dart_type != self.dynamic_type:
            dart_type = f"{dart_type}?"

        return dart_type

    def is_dynamic(self, field: FieldSchema) -> bool:
        return not field.is_complex and field.type == FieldType.DYNAMIC

    def default_value(self, field: FieldSchema) -> Optional[str]:
        """Fallback literal for an absent non-nullable primitive."""
        return DART_DEFAULT_VALUES.get(field.type)


def get_dart_config(language_config: Optional[Dict[str, Any]] = None) -> DartConfig:
    """Build a DartConfig from a generator's language_config dict."""
    return DartConfig(**(language_config or {}))
