"""
Clean-architecture feature scaffolding.

Turns a FeatureSpec into the ordered list of Dart artifacts for one
feature: models, API service, repository pair, use cases, cubit, state
and dependency registration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..codegen.core.config import GeneratorConfig, load_config
from ..codegen.core.schema import ClassSchema, FieldSchema
from ..codegen.core.templates import TemplateError, create_template_engine, dart_string
from ..codegen.languages.dart import DartGenerator
from ..logging_config import get_logger
from .models import Artifact, EndpointSpec, FeatureSpec

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

MODELS_DIR = "data/models"
DATA_SOURCES_DIR = "data/data_sources"
DATA_REPOSITORIES_DIR = "data/repositories"
DOMAIN_REPOSITORIES_DIR = "domain/repositories"
USE_CASES_DIR = "domain/use_cases"
MANAGER_DIR = "presentation/manager"

# Every directory of the layout, including the ones left empty
FEATURE_DIRECTORIES = (
    DATA_REPOSITORIES_DIR,
    DATA_SOURCES_DIR,
    MODELS_DIR,
    DOMAIN_REPOSITORIES_DIR,
    USE_CASES_DIR,
    "domain/entities",
    MANAGER_DIR,
    "presentation/pages",
    "presentation/widgets",
)


class ScaffoldError(Exception):
    """Exception raised when a feature cannot be scaffolded."""

    pass


@dataclass
class EndpointPlan:
    """An endpoint together with the models inferred for it."""

    endpoint: EndpointSpec
    request: Optional[ClassSchema] = None
    response: Optional[ClassSchema] = None


@dataclass
class ScaffoldResult:
    """Artifacts for one feature, plus the warnings raised while building them."""

    feature: FeatureSpec
    artifacts: List[Artifact] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    directories: tuple = FEATURE_DIRECTORIES

    @property
    def root(self) -> str:
        return self.feature.name

    def paths(self) -> List[str]:
        return [artifact.relative_path for artifact in self.artifacts]

    def get(self, relative_path: str) -> Optional[Artifact]:
        for artifact in self.artifacts:
            if artifact.relative_path == relative_path:
                return artifact
        return None


class FeatureScaffolder:
    """Builds feature artifacts from a FeatureSpec."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        generator: Optional[DartGenerator] = None,
    ):
        """
        Initialize scaffolder.

        Args:
            config: Generator configuration, Dart defaults when omitted
            generator: Model generator; one is built from config when omitted
        """
        self.config = config or load_config("dart")
        self.generator = generator or DartGenerator(self.config)
        self.templates = create_template_engine(TEMPLATE_DIR)

    @property
    def core_imports(self) -> List[str]:
        """Import URIs providing DataState, BaseRepository, UseCase and friends."""
        value = self.config.custom.get("core_imports", [])
        if isinstance(value, str):
            return [value]
        return list(value)

    def scaffold(self, feature: FeatureSpec) -> ScaffoldResult:
        """
        Build every artifact for a feature.

        Args:
            feature: Validated feature description

        Returns:
            ScaffoldResult with artifacts in emission order

        Raises:
            FeatureSpecError: If the feature description is invalid
            ScaffoldError: If a template fails to render
        """
        feature.validate()
        result = ScaffoldResult(feature=feature)

        plans = []
        for endpoint in feature.endpoints:
            plan = EndpointPlan(endpoint)
            plan.request = self._model(
                endpoint.request_literal,
                endpoint.request_model_name,
                endpoint.request_file_name,
                result,
            )
            plan.response = self._model(
                endpoint.response_literal,
                endpoint.response_model_name,
                endpoint.response_file_name,
                result,
            )
            plans.append(plan)

        endpoints = [self._endpoint_context(plan) for plan in plans]
        context = {"feature": feature, "endpoints": endpoints}
        stem = feature.file_stem

        result.artifacts.append(
            self._render(
                f"{DATA_SOURCES_DIR}/{stem}_api_service.dart",
                "api_service.dart.j2",
                context,
                imports=_model_imports(plans, "../models/"),
            )
        )
        result.artifacts.append(
            self._render(
                f"{DOMAIN_REPOSITORIES_DIR}/{stem}_repository.dart",
                "repository.dart.j2",
                context,
                imports=self.core_imports + _model_imports(plans, "../../data/models/"),
            )
        )
        result.artifacts.append(
            self._render(
                f"{DATA_REPOSITORIES_DIR}/{stem}_repository_impl.dart",
                "repository_impl.dart.j2",
                context,
                imports=self.core_imports
                + [
                    f"../../{DOMAIN_REPOSITORIES_DIR}/{stem}_repository.dart",
                    f"../data_sources/{stem}_api_service.dart",
                ]
                + _model_imports(plans, "../models/"),
            )
        )

        for plan, endpoint in zip(plans, endpoints):
            result.artifacts.append(
                self._render(
                    f"{USE_CASES_DIR}/{endpoint['use_case_file']}",
                    "use_case.dart.j2",
                    dict(context, ep=endpoint),
                    imports=self.core_imports
                    + [f"../repositories/{stem}_repository.dart"]
                    + _model_imports([plan], "../../data/models/"),
                )
            )

        result.artifacts.append(
            self._render(
                f"{MANAGER_DIR}/{stem}_cubit.dart",
                "cubit.dart.j2",
                context,
                imports=self.core_imports
                + [f"../../{USE_CASES_DIR}/{ep['use_case_file']}" for ep in endpoints]
                + _model_imports(plans, "../../data/models/"),
            )
        )
        result.artifacts.append(
            self._render(
                f"{MANAGER_DIR}/{stem}_state.dart", "state.dart.j2", context, imports=[]
            )
        )
        result.artifacts.append(
            self._render(
                f"{stem}_di.dart",
                "di.dart.j2",
                dict(context, locator=self.config.locator_name),
                imports=self.core_imports
                + [
                    f"{DATA_SOURCES_DIR}/{stem}_api_service.dart",
                    f"{DATA_REPOSITORIES_DIR}/{stem}_repository_impl.dart",
                    f"{DOMAIN_REPOSITORIES_DIR}/{stem}_repository.dart",
                ]
                + [f"{USE_CASES_DIR}/{ep['use_case_file']}" for ep in endpoints]
                + [f"{MANAGER_DIR}/{stem}_cubit.dart"],
            )
        )

        logger.info(
            "Scaffolded feature %s: %d artifacts, %d warnings",
            feature.name,
            len(result.artifacts),
            len(result.warnings),
        )
        return result

    def _model(
        self,
        literal: Optional[str],
        class_name: str,
        file_name: str,
        result: ScaffoldResult,
    ) -> Optional[ClassSchema]:
        """Infer and emit one model; None when there is nothing to model."""
        if not literal or not literal.strip():
            return None

        schema = self.generator.infer(literal, class_name)
        if not schema:
            message = f"Skipping {class_name}: {schema.reason}"
            logger.warning(message)
            result.warnings.append(message)
            return None

        result.warnings.extend(self.generator.validate_schemas(schema))
        result.artifacts.append(
            Artifact(f"{MODELS_DIR}/{file_name}", self.generator.emit(schema, literal))
        )
        return schema

    def _endpoint_context(self, plan: EndpointPlan) -> Dict[str, Any]:
        endpoint = plan.endpoint
        request_type = plan.request.name if plan.request else None
        body = request_type is not None and endpoint.sends_body

        query_params = []
        if plan.request and not body:
            query_params = [self._query_param(f) for f in plan.request.fields]

        if body:
            call_args = "request"
        else:
            call_args = ", ".join(param["value"] for param in query_params)

        return {
            "method": endpoint.method_name,
            "verb": endpoint.verb.value,
            "path": dart_string(endpoint.path),
            "use_case": f"{endpoint.type_name}UseCase",
            "use_case_field": f"_{endpoint.method_name}UseCase",
            "use_case_file": f"{endpoint.file_stem}_use_case.dart",
            "state_field": f"{endpoint.method_name}State",
            "request_type": request_type,
            "request_file": endpoint.request_file_name if plan.request else None,
            "response_type": plan.response.name if plan.response else "dynamic",
            "response_file": endpoint.response_file_name if plan.response else None,
            "params_type": request_type or "void",
            "signature": f"{request_type} request" if request_type else "",
            "body": body,
            "query_params": query_params,
            "call_args": call_args,
        }

    def _query_param(self, field: FieldSchema) -> Dict[str, str]:
        """A GET parameter model field expanded into a query parameter."""
        dart_config = self.generator.dart_config

        if field.is_complex:
            dart_type = "Map<String, dynamic>"
        else:
            dart_type = dart_config.element_type(field)
        if field.is_collection:
            dart_type = f"List<{dart_type}>"
        if dart_type != dart_config.dynamic_type:
            dart_type = f"{dart_type}?"

        return {
            "key": dart_string(self.generator.wire_key(field)),
            "type": dart_type,
            "name": field.name,
            "value": f"request.{self.generator.to_json_expression(field)}",
        }

    def _render(
        self,
        relative_path: str,
        template_name: str,
        context: Dict[str, Any],
        imports: List[str],
    ) -> Artifact:
        try:
            text = self.templates.render_template(
                template_name, dict(context, imports=_unique(imports))
            )
        except TemplateError as e:
            raise ScaffoldError(f"Failed to build {relative_path}: {e}") from e

        logger.debug("Rendered %s", relative_path)
        return Artifact(relative_path, self.generator.format_code(text))


def _model_imports(plans: List[EndpointPlan], prefix: str) -> List[str]:
    imports = []
    for plan in plans:
        if plan.request:
            imports.append(prefix + plan.endpoint.request_file_name)
        if plan.response:
            imports.append(prefix + plan.endpoint.response_file_name)
    return imports


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def scaffold_feature(
    feature: FeatureSpec, config: Optional[GeneratorConfig] = None
) -> ScaffoldResult:
    """Convenience wrapper around FeatureScaffolder."""
    return FeatureScaffolder(config).scaffold(feature)
