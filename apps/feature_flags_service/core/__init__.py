"""Deterministic feature flag evaluation core."""

from apps.feature_flags_service.core.engine import evaluate
from apps.feature_flags_service.core.errors import InvalidConfiguration
from apps.feature_flags_service.core.hashing import compute_bucket, stable_hash
from apps.feature_flags_service.core.models import EvaluationResult, FlagDefinition
from apps.feature_flags_service.core.rollout import passes
from apps.feature_flags_service.core.variants import select_variant

__all__ = [
    "evaluate",
    "InvalidConfiguration",
    "compute_bucket",
    "stable_hash",
    "EvaluationResult",
    "FlagDefinition",
    "passes",
    "select_variant",
]
