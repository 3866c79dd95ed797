"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import (
    ClassSchema,
    FieldType,
    InferenceResult,
    SchemaBuilder,
    iter_schemas,
)
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'dart')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.dart')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    @abstractmethod
    def reserved_words(self) -> set:
        """Words that cannot be used as field names."""
        pass

    @property
    @abstractmethod
    def builtin_types(self) -> set:
        """Type names generated classes must not shadow."""
        pass

    def infer(self, literal_text: str, root_name: str) -> InferenceResult:
        """
        Infer a class tree using this language's naming rules.

        Args:
            literal_text: Sample JSON payload
            root_name: Name of the root class

        Returns:
            ClassSchema, or NotRepresentable when the literal has no shape
        """
        builder = SchemaBuilder(
            reserved_words=self.reserved_words,
            builtin_types=self.builtin_types,
            disambiguate=self.config.disambiguate_names,
        )
        return builder.build(literal_text, root_name)

    @abstractmethod
    def generate(
        self, schema: ClassSchema, original_literal: Optional[str] = None
    ) -> str:
        """
        Generate source for a class tree.

        Args:
            schema: Root schema; nested classes are emitted before it
            original_literal: Sample payload to embed as documentation

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_schema(
        self, schema: ClassSchema, original_literal: Optional[str] = None
    ) -> str:
        """Generate code for one class, without its nested classes."""
        pass

    def emit(self, schema: ClassSchema, original_literal: Optional[str] = None) -> str:
        """Generate and format source for a class tree."""
        return self.format_code(self.generate(schema, original_literal))

    def validate_schemas(self, schema: ClassSchema) -> List[str]:
        """
        Validate a class tree for structural issues worth reporting.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for current in iter_schemas(schema):
            if not current.fields:
                warnings.append(f"Class '{current.name}' has no fields")

            for field in current.fields:
                if field.type != FieldType.DYNAMIC:
                    continue
                if field.is_collection:
                    warnings.append(
                        f"List field {current.name}.{field.name} has no element type information"
                    )
                elif field.nullable:
                    warnings.append(
                        f"Field {current.name}.{field.name} is null in the sample - typed as dynamic"
                    )
                else:
                    warnings.append(f"Unknown type in {current.name}.{field.name}")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines, and
        applies the configured line ending.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        text = "\n".join(formatted_lines).strip("\n") + "\n"
        return text.replace("\n", self.config.line_ending)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    schema: ClassSchema,
    original_literal: Optional[str] = None,
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schema: Root schema to generate code for
        original_literal: Sample payload to embed as documentation

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schemas(schema)
        code = generator.generate(schema, original_literal)
        formatted_code = generator.format_code(code)

        all_schemas = list(iter_schemas(schema))
        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "class_count": len(all_schemas),
            "root_class": schema.name,
            "max_depth": schema.get_max_depth(),
            "has_dynamic": any(
                field.type == FieldType.DYNAMIC
                for current in all_schemas
                for field in current.fields
            ),
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation for %s failed: %s", schema.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
