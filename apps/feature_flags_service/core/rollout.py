"""Percentage rollout gate."""


def passes(rollout_percentage: int, bucket: int) -> bool:
    """True if ``bucket`` falls inside the first ``rollout_percentage`` buckets."""
    return bucket < rollout_percentage
