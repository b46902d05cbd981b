"""Flag evaluation: enablement, rollout gate, then variant selection."""

from .hashing import compute_bucket
from .models import EvaluationResult, FlagDefinition
from .rollout import passes
from .variants import select_variant


def evaluate(flag: FlagDefinition, user_id: str) -> EvaluationResult:
    """Evaluate ``flag`` for ``user_id``.

    Pure and stateless; safe to call from any thread or task. The same
    bucket drives the rollout decision and the variant choice, so a user in
    the rollout keeps the same variant across evaluations.

    Raises:
        InvalidConfiguration: propagated from variant selection.
    """
    if not flag.enabled:
        return EvaluationResult(key=flag.key, matched=False)

    bucket = compute_bucket(flag.key, user_id)

    if not passes(flag.rollout, bucket):
        return EvaluationResult(key=flag.key, matched=False)

    if not flag.variants:
        return EvaluationResult(key=flag.key, matched=True)

    return EvaluationResult(
        key=flag.key,
        matched=True,
        variant=select_variant(flag.variants, bucket),
    )
