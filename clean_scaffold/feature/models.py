"""
Feature descriptions and scaffold artifacts.

A feature is a named group of HTTP endpoints; each endpoint may carry
sample request and response payloads from which models are inferred.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..codegen.core.naming import to_type_case, to_wire_case
from ..codegen.languages.dart.naming import is_valid_dart_identifier


class FeatureSpecError(Exception):
    """Exception raised for invalid feature descriptions."""

    pass


class HttpVerb(Enum):
    """HTTP verbs an endpoint may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_body(self) -> bool:
        """Whether request payloads travel in the body rather than the query."""
        return self is not HttpVerb.GET

    @classmethod
    def parse(cls, value: str) -> "HttpVerb":
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(verb.value for verb in cls)
            raise FeatureSpecError(
                f"Unknown HTTP verb: {value!r} (expected one of {allowed})"
            ) from None


def type_name(name: str) -> str:
    """PascalCase form of an endpoint or feature name."""
    return to_type_case(name.strip())


def member_name(name: str) -> str:
    """lowerCamelCase form that keeps inner capitals (getUsers stays getUsers)."""
    pascal = type_name(name)
    return pascal[:1].lower() + pascal[1:]


def file_name(name: str) -> str:
    """snake_case form used for Dart file names."""
    return to_wire_case(type_name(name))


@dataclass
class EndpointSpec:
    """One HTTP operation of a feature."""

    name: str
    path: str
    verb: HttpVerb = HttpVerb.GET
    request_literal: Optional[str] = None
    response_literal: Optional[str] = None

    @property
    def type_name(self) -> str:
        return type_name(self.name)

    @property
    def method_name(self) -> str:
        return member_name(self.name)

    @property
    def file_stem(self) -> str:
        return file_name(self.name)

    @property
    def has_request(self) -> bool:
        return bool(self.request_literal and self.request_literal.strip())

    @property
    def has_response(self) -> bool:
        return bool(self.response_literal and self.response_literal.strip())

    @property
    def sends_body(self) -> bool:
        """Body-shaped request: a body verb with a request payload."""
        return self.verb.sends_body and self.has_request

    @property
    def request_model_name(self) -> str:
        suffix = "BodyModel" if self.sends_body else "ParamModel"
        return f"{self.type_name}{suffix}"

    @property
    def request_file_name(self) -> str:
        suffix = "body_model" if self.sends_body else "param_model"
        return f"{self.file_stem}_{suffix}.dart"

    @property
    def response_model_name(self) -> str:
        return f"{self.type_name}Model"

    @property
    def response_file_name(self) -> str:
        return f"{self.file_stem}_model.dart"

    def model_files(self) -> List[Tuple[str, str]]:
        """(class name, file name) of each model this endpoint generates."""
        files = []
        if self.has_request:
            files.append((self.request_model_name, self.request_file_name))
        if self.has_response:
            files.append((self.response_model_name, self.response_file_name))
        return files

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EndpointSpec":
        """Build an endpoint from a JSON object; literals may be text or JSON values."""
        if not isinstance(data, dict):
            raise FeatureSpecError(f"Endpoint must be an object, got {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str):
            raise FeatureSpecError("Endpoint is missing a 'name'")

        return cls(
            name=name,
            path=_text(data, "path", f"Endpoint {name!r}"),
            verb=HttpVerb.parse(data.get("verb", data.get("method", "GET"))),
            request_literal=_literal_text(data.get("request")),
            response_literal=_literal_text(data.get("response")),
        )


@dataclass
class FeatureSpec:
    """A named feature and its endpoints."""

    name: str
    endpoints: List[EndpointSpec] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        return type_name(self.name)

    @property
    def member_name(self) -> str:
        return member_name(self.name)

    @property
    def file_stem(self) -> str:
        return file_name(self.name)

    def validate(self) -> None:
        """
        Check the description can be scaffolded.

        Raises:
            FeatureSpecError: On a blank name, no endpoints, bad endpoint names,
                or two endpoints producing the same model
        """
        if not self.name or not self.name.strip():
            raise FeatureSpecError("Feature name must not be blank")

        if not _is_identifier(self.type_name):
            raise FeatureSpecError(f"Feature name is not usable as a class name: {self.name!r}")

        if not self.endpoints:
            raise FeatureSpecError(f"Feature {self.name!r} has no endpoints")

        seen = set()
        models = {}
        for endpoint in self.endpoints:
            if not (
                _is_identifier(endpoint.name)
                and is_valid_dart_identifier(endpoint.method_name)
            ):
                raise FeatureSpecError(
                    f"Endpoint name is not a valid identifier: {endpoint.name!r}"
                )
            if endpoint.method_name in seen:
                raise FeatureSpecError(f"Duplicate endpoint name: {endpoint.name!r}")
            seen.add(endpoint.method_name)

            for model_name, model_file in endpoint.model_files():
                for key in (model_name, model_file):
                    if key in models:
                        raise FeatureSpecError(
                            f"Endpoints {models[key]!r} and {endpoint.name!r} "
                            f"both produce {key}"
                        )
                    models[key] = endpoint.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureSpec":
        """
        Build and validate a feature from a JSON object.

        Expected shape::

            {"name": "auth",
             "endpoints": [{"name": "login", "path": "/auth/login",
                            "verb": "POST", "request": {...}, "response": {...}}]}
        """
        if not isinstance(data, dict):
            raise FeatureSpecError("Feature description must be a JSON object")

        endpoints = data.get("endpoints", [])
        if not isinstance(endpoints, list):
            raise FeatureSpecError("'endpoints' must be a list")

        feature = cls(
            name=_text(data, "name", "Feature"),
            endpoints=[EndpointSpec.from_dict(item) for item in endpoints],
        )
        feature.validate()
        return feature


@dataclass(frozen=True)
class Artifact:
    """A generated file, relative to the feature root."""

    relative_path: str
    source_text: str


def _text(data: Dict[str, Any], key: str, owner: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise FeatureSpecError(
            f"{owner} '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _literal_text(value: Any) -> Optional[str]:
    """Sample payloads are kept as text; inline JSON values are serialized."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and name.isascii()
