"""Weighted variant selection keyed by the rollout bucket."""

from typing import Mapping, Optional

from .errors import InvalidConfiguration
from .hashing import BUCKET_COUNT


def select_variant(variants: Mapping[str, int], bucket: int) -> Optional[str]:
    """Pick a variant for ``bucket`` by weighted roulette.

    Variants are walked in lexicographic order of their names. The bucket is
    scaled into weight space with ``bucket * total // 100`` and the first
    variant whose cumulative weight exceeds that target wins.

    Returns None when ``variants`` is empty.

    Raises:
        InvalidConfiguration: if the weights do not sum to a positive number.
        ValueError: if ``bucket`` is outside [0, 99].
    """
    if not variants:
        return None

    if not 0 <= bucket < BUCKET_COUNT:
        raise ValueError(f"bucket must be in [0, {BUCKET_COUNT - 1}], got {bucket}")

    ordered = sorted(variants.items())
    total_weight = sum(weight for _, weight in ordered)
    if total_weight <= 0:
        raise InvalidConfiguration(
            f"variant weights must sum to a positive number, got {total_weight}"
        )

    target = bucket * total_weight // BUCKET_COUNT
    cumulative = 0
    for name, weight in ordered:
        cumulative += weight
        if cumulative > target:
            return name

    # Unreachable for positive totals: target < total_weight.
    raise InvalidConfiguration(
        f"no variant covers target {target} of total weight {total_weight}"
    )
