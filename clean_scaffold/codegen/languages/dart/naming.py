"""
Dart-specific naming utilities and sanitization.

Handles Dart reserved words, core library types, and members that
generated model classes already declare.
"""

# Dart reserved words (cannot be identifiers)
DART_RESERVED_WORDS = {
    "assert",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "for",
    "if",
    "in",
    "is",
    "new",
    "null",
    "rethrow",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "var",
    "void",
    "while",
    "with",
    # Contextual keywords that read badly as field names
    "late",
    "required",
    "dynamic",
}

# Members every generated model declares or inherits
DART_MODEL_MEMBERS = {
    "fromJson",
    "toJson",
    "hashCode",
    "runtimeType",
    "toString",
    "noSuchMethod",
}

# dart:core types and scaffold base types a nested class must not shadow
DART_BUILTIN_TYPES = {
    "BigInt",
    "Comparable",
    "DateTime",
    "Duration",
    "Enum",
    "Error",
    "Exception",
    "Function",
    "Future",
    "Iterable",
    "Iterator",
    "List",
    "Map",
    "MapEntry",
    "Never",
    "Null",
    "Object",
    "Pattern",
    "Record",
    "RegExp",
    "Set",
    "StackTrace",
    "Stream",
    "String",
    "Symbol",
    "Type",
    "Uri",
    "bool",
    "double",
    "int",
    "num",
    # Scaffold base types
    "BaseState",
    "DataState",
    "HttpResponse",
    "UseCase",
}


def dart_field_reserved_words() -> set:
    """Names a generated field may not take verbatim."""
    return DART_RESERVED_WORDS | DART_MODEL_MEMBERS


def is_valid_dart_identifier(name: str) -> bool:
    """Check whether a name can be used as a Dart method or variable name."""
    if not name or name in DART_RESERVED_WORDS:
        return False
    if name[0].isdigit():
        return False
    return all(ch.isalnum() or ch in "_$" for ch in name) and name.isascii()
