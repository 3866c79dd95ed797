"""
Dart code generator module.

Generates null-safe Dart model classes with fromJson/toJson.
"""

from .config import DartConfig, get_dart_config
from .generator import DartGenerator
from .naming import (
    DART_BUILTIN_TYPES,
    DART_RESERVED_WORDS,
    is_valid_dart_identifier,
)

__all__ = [
    "DartGenerator",
    "DartConfig",
    "DART_BUILTIN_TYPES",
    "DART_RESERVED_WORDS",
    "get_dart_config",
    "is_valid_dart_identifier",
]
