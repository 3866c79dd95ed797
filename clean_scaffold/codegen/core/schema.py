"""
Core schema representation for code generation.

Infers a typed class tree from a sample JSON payload. The tree is
language-agnostic; generators turn it into source text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Union
from enum import Enum

from ...analyzer import LiteralParseError, ValueKind, classify, parse_literal
from ...logging_config import get_logger
from .naming import NameSanitizer, NamingCase, singularize, to_type_case

logger = get_logger(__name__)


class FieldType(Enum):
    """Field types inferred from sample values."""

    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DYNAMIC = "dynamic"
    OBJECT = "object"  # reference to a nested ClassSchema


PRIMITIVE_TYPES = {
    ValueKind.STRING: FieldType.STRING,
    ValueKind.INTEGER: FieldType.INTEGER,
    ValueKind.DOUBLE: FieldType.DOUBLE,
    ValueKind.BOOLEAN: FieldType.BOOLEAN,
}


@dataclass(frozen=True)
class FieldSchema:
    """Represents a single field in a class."""

    name: str
    type: FieldType
    wire_name: str  # original JSON key
    nullable: bool = False
    is_collection: bool = False
    ref: Optional[str] = None  # nested class name when type is OBJECT

    @property
    def is_complex(self) -> bool:
        """Whether the field (or its elements) is a nested class."""
        return self.type == FieldType.OBJECT

    @property
    def type_name(self) -> str:
        """Nested class name for complex fields, primitive tag otherwise."""
        if self.is_complex:
            return self.ref
        return self.type.value


@dataclass
class ClassSchema:
    """Represents the structure of one class and the classes it owns."""

    name: str
    fields: List[FieldSchema] = field(default_factory=list)
    nested_classes: List["ClassSchema"] = field(default_factory=list)

    def add_field(self, field: FieldSchema) -> None:
        """Add a field to this schema."""
        self.fields.append(field)

    def add_nested(self, schema: "ClassSchema") -> None:
        """Take ownership of a nested class."""
        self.nested_classes.append(schema)

    def get_max_depth(self, current_depth: int = 1) -> int:
        """Get maximum nesting depth of this schema."""
        max_depth = current_depth
        for nested in self.nested_classes:
            max_depth = max(max_depth, nested.get_max_depth(current_depth + 1))
        return max_depth


@dataclass(frozen=True)
class NotRepresentable:
    """
    Inference result for literals that carry no class shape.

    A plain result variant, not an exception: callers skip the artifact
    and carry on with the rest of the batch.
    """

    reason: str

    def __bool__(self) -> bool:
        return False


InferenceResult = Union[ClassSchema, NotRepresentable]


class SchemaBuilder:
    """Builds ClassSchema trees from sample payloads."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        builtin_types: Optional[Set[str]] = None,
        disambiguate: bool = True,
        type_suffix: str = "Model",
    ):
        """
        Initialize schema builder.

        Args:
            reserved_words: Words that cannot be used as field names
            builtin_types: Type names that nested classes must not shadow
            disambiguate: Suffix colliding names with a counter
            type_suffix: Appended to nested class names that hit a builtin
        """
        self.reserved_words = set(reserved_words or ())
        self.builtin_types = set(builtin_types or ())
        self.disambiguate = disambiguate
        self.type_suffix = type_suffix

    def build(self, literal_text: str, root_name: str) -> InferenceResult:
        """
        Infer a class tree from literal text.

        Args:
            literal_text: Sample JSON object, or array of objects
            root_name: Name of the root class

        Returns:
            ClassSchema, or NotRepresentable when the literal has no shape
        """
        try:
            value = parse_literal(literal_text)
        except LiteralParseError as e:
            return NotRepresentable(str(e))

        kind = classify(value)
        if kind == ValueKind.ARRAY:
            if not value:
                return NotRepresentable("Array literal is empty")
            value = value[0]
            kind = classify(value)
            if kind != ValueKind.OBJECT:
                return NotRepresentable(
                    f"First array element is {kind.value}, not an object"
                )
        elif kind != ValueKind.OBJECT:
            return NotRepresentable(f"Top-level {kind.value} literal has no fields")

        # One class-name table per call; shared by the whole tree.
        class_names = NameSanitizer(
            builtin_types=self.builtin_types, disambiguate=self.disambiguate
        )
        class_names.add_used_name(root_name)

        try:
            return self._build_class(value, root_name, class_names)
        except RecursionError:
            return NotRepresentable("Literal nests too deeply")

    def _build_class(
        self, obj: Dict[str, Any], name: str, class_names: NameSanitizer
    ) -> ClassSchema:
        schema = ClassSchema(name=name)
        field_names = NameSanitizer(
            reserved_words=self.reserved_words, disambiguate=self.disambiguate
        )

        for key, value in obj.items():
            field_name = field_names.sanitize_name(key, NamingCase.CAMEL_CASE)
            kind = classify(value)

            if kind == ValueKind.OBJECT:
                nested_name = self._nested_name(key, class_names, plural=False)
                schema.add_nested(self._build_class(value, nested_name, class_names))
                schema.add_field(
                    FieldSchema(
                        name=field_name,
                        type=FieldType.OBJECT,
                        wire_name=key,
                        ref=nested_name,
                    )
                )

            elif kind == ValueKind.ARRAY:
                schema.add_field(
                    self._build_array_field(key, field_name, value, schema, class_names)
                )

            elif kind == ValueKind.NULL:
                schema.add_field(
                    FieldSchema(
                        name=field_name,
                        type=FieldType.DYNAMIC,
                        wire_name=key,
                        nullable=True,
                    )
                )

            else:
                schema.add_field(
                    FieldSchema(
                        name=field_name,
                        type=PRIMITIVE_TYPES.get(kind, FieldType.DYNAMIC),
                        wire_name=key,
                    )
                )

        logger.debug("Inferred class %s with %d fields", name, len(schema.fields))
        return schema

    def _build_array_field(
        self,
        key: str,
        field_name: str,
        items: List[Any],
        owner: ClassSchema,
        class_names: NameSanitizer,
    ) -> FieldSchema:
        if not items:
            return FieldSchema(
                name=field_name,
                type=FieldType.DYNAMIC,
                wire_name=key,
                is_collection=True,
            )

        # Only the first element is sampled.
        first = items[0]
        first_kind = classify(first)

        if first_kind == ValueKind.OBJECT:
            nested_name = self._nested_name(key, class_names, plural=True)
            owner.add_nested(self._build_class(first, nested_name, class_names))
            return FieldSchema(
                name=field_name,
                type=FieldType.OBJECT,
                wire_name=key,
                is_collection=True,
                ref=nested_name,
            )

        return FieldSchema(
            name=field_name,
            type=PRIMITIVE_TYPES.get(first_kind, FieldType.DYNAMIC),
            wire_name=key,
            is_collection=True,
        )

    def _nested_name(self, key: str, class_names: NameSanitizer, plural: bool) -> str:
        candidate = to_type_case(class_names.clean(key))
        if plural:
            candidate = singularize(candidate)
        return class_names.allocate(candidate, self.type_suffix)


def infer_schema(
    literal_text: str,
    root_name: str,
    reserved_words: Optional[Set[str]] = None,
    builtin_types: Optional[Set[str]] = None,
    disambiguate: bool = True,
) -> InferenceResult:
    """
    Infer a ClassSchema from literal text.

    Args:
        literal_text: Sample JSON payload
        root_name: Name for the root class
        reserved_words: Words that cannot be used as field names
        builtin_types: Type names nested classes must not shadow
        disambiguate: Suffix colliding names with a counter

    Returns:
        ClassSchema or NotRepresentable
    """
    builder = SchemaBuilder(reserved_words, builtin_types, disambiguate)
    return builder.build(literal_text, root_name)


def iter_schemas(root_schema: ClassSchema) -> Iterator[ClassSchema]:
    """Yield every class in the tree, children before their parent."""
    for nested in root_schema.nested_classes:
        yield from iter_schemas(nested)
    yield root_schema
