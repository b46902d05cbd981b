"""Immutable value types consumed and produced by the evaluation engine."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class FlagDefinition:
    """Snapshot of a flag as read from the store."""

    key: str
    enabled: bool
    rollout: int = 100
    variants: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        # Detach from the caller's dict so the snapshot cannot change under us.
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one flag for one user."""

    key: str
    matched: bool
    variant: Optional[str] = None
