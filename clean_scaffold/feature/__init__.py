"""
Feature scaffolding for Flutter clean-architecture modules.
"""

from .models import (
    Artifact,
    EndpointSpec,
    FeatureSpec,
    FeatureSpecError,
    HttpVerb,
)
from .scaffold import (
    FEATURE_DIRECTORIES,
    FeatureScaffolder,
    ScaffoldError,
    ScaffoldResult,
    scaffold_feature,
)
from .writer import feature_root, write_artifacts

__all__ = [
    "Artifact",
    "EndpointSpec",
    "FEATURE_DIRECTORIES",
    "FeatureScaffolder",
    "FeatureSpec",
    "FeatureSpecError",
    "HttpVerb",
    "ScaffoldError",
    "ScaffoldResult",
    "feature_root",
    "scaffold_feature",
    "write_artifacts",
]
