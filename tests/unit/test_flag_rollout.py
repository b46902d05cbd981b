"""Unit tests for the rollout gate."""

import pytest

from apps.feature_flags_service.core.rollout import passes


class TestRolloutGate:
    """Test percentage gating."""

    @pytest.mark.parametrize("bucket", [0, 1, 50, 99])
    def test_zero_percent_never_passes(self, bucket):
        assert passes(0, bucket) is False

    @pytest.mark.parametrize("bucket", [0, 1, 50, 99])
    def test_hundred_percent_always_passes(self, bucket):
        assert passes(100, bucket) is True

    def test_boundary_is_exclusive(self):
        """Test bucket equal to the percentage is outside the rollout."""
        assert passes(30, 29) is True
        assert passes(30, 30) is False

    def test_exactly_n_buckets_pass(self):
        """Test an N% rollout admits exactly N buckets."""
        for pct in (1, 25, 50, 99):
            assert sum(passes(pct, b) for b in range(100)) == pct
