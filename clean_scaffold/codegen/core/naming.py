"""
Naming utilities for safe code generation.

Converts between wire-style keys (snake_case, possibly hyphenated) and
code-style identifiers, and allocates collision-free names for a single
generation batch.
"""

import re
from typing import Callable, Dict, Optional, Set
from enum import Enum

_SEPARATORS = re.compile(r"[_-]")
_LOWER_UPPER_RUN = re.compile(r"([a-z])([A-Z]+)")


def to_wire_case(identifier: str) -> str:
    """
    Convert a code-style identifier to snake_case.

    Not an exact inverse of to_field_case: keys with digits next to
    letters, acronyms or leading/trailing separators do not round-trip.
    """
    return _LOWER_UPPER_RUN.sub(r"\1_\2", identifier).lower()


def to_type_case(identifier: str) -> str:
    """Convert a wire-style key to a type name (UpperCamel)."""
    parts = _SEPARATORS.split(identifier)
    return "".join(part[:1].upper() + part[1:] for part in parts)


def to_field_case(identifier: str) -> str:
    """Convert a wire-style key to a field name (lowerCamel)."""
    parts = _SEPARATORS.split(identifier)
    head = parts[0].lower()
    return head + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def singularize(identifier: str) -> str:
    """Strip exactly one trailing 's'. No linguistic rules."""
    if identifier.endswith("s"):
        return identifier[:-1]
    return identifier


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


_CASE_CONVERTERS: Dict[NamingCase, Callable[[str], str]] = {
    NamingCase.SNAKE_CASE: to_wire_case,
    NamingCase.CAMEL_CASE: to_field_case,
    NamingCase.PASCAL_CASE: to_type_case,
}


class NameSanitizer:
    """
    Handles name sanitization and collision-free allocation.

    One instance is one name-allocation table. Create a fresh sanitizer
    per batch (per class for field names, per tree for class names);
    instances are never shared between generation calls.
    """

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        builtin_types: Optional[Set[str]] = None,
        disambiguate: bool = True,
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
            disambiguate: Append a counter to names that are already taken
        """
        self.reserved_words = set(reserved_words or ())
        self.builtin_types = set(builtin_types or ())
        self.disambiguate = disambiguate
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix added to reserved words and builtins

        Returns:
            Sanitized name, unique within this sanitizer
        """
        converted = _CASE_CONVERTERS[target_case](self.clean(name))
        return self.allocate(converted, suffix_on_conflict)

    def allocate(self, name: str, suffix_on_conflict: str = "_") -> str:
        """Reserve an already-cased name, resolving conflicts."""
        final_name = self._resolve_conflicts(name, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def clean(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
        cleaned = cleaned.strip("_-")

        if cleaned and cleaned[0].isdigit():
            cleaned = f"field_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words or name in self.builtin_types:
            name = f"{name}{suffix}"

        if not self.disambiguate:
            return name

        candidate = name
        counter = 1
        while candidate in self._used_names:
            candidate = f"{name}{counter}"
            counter += 1

        return candidate

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
