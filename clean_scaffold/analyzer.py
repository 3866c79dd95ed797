"""Parsing and value-kind classification for sample payloads.

Every JSON value reaching the schema builder is first tagged with a
``ValueKind``; the builder matches on the tag instead of probing types at
each call site.
"""

import json
from enum import Enum
from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)


class ValueKind(Enum):
    """Kind of a parsed JSON value."""

    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


class LiteralParseError(ValueError):
    """Raised when literal text is not a JSON document."""

    pass


def classify(value: Any) -> ValueKind:
    """Tag a parsed JSON value with its kind."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, str):
        return ValueKind.STRING
    return ValueKind.UNKNOWN


def parse_literal(text: str) -> Any:
    """Parse literal text as JSON.

    Args:
        text: Sample payload as typed by the user.

    Returns:
        The parsed value.

    Raises:
        LiteralParseError: If the text is blank or not valid JSON.
    """
    if text is None or not text.strip():
        raise LiteralParseError("Literal is empty")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug("Literal is not valid JSON: %s", e)
        raise LiteralParseError(f"Invalid JSON literal: {e}") from e
    except RecursionError as e:
        logger.debug("Literal nests too deeply to parse")
        raise LiteralParseError("Invalid JSON literal: nesting too deep") from e


def summarize_literal(value: Any) -> dict:
    """Summarize the shape of a parsed value.

    Used for verbose CLI output; arrays are summarized by their first
    element only, matching what schema inference samples.
    """
    kind = classify(value)

    if kind == ValueKind.OBJECT:
        return {
            "type": kind.value,
            "children": {key: summarize_literal(val) for key, val in value.items()},
        }

    if kind == ValueKind.ARRAY:
        if not value:
            return {"type": kind.value, "length": 0}
        return {
            "type": kind.value,
            "length": len(value),
            "child": summarize_literal(value[0]),
        }

    return {"type": kind.value}
