"""Unit tests for the simulated progress curve."""

import pytest
import pytest_check as check

from docchat.session.progress import PROGRESS_CAP, estimate_progress


class TestEstimateProgress:
    def test_starts_at_zero(self) -> None:
        assert estimate_progress(0.0, 2.0) == 0.0

    def test_negative_elapsed_counts_as_zero(self) -> None:
        assert estimate_progress(-5.0, 2.0) == 0.0

    def test_non_decreasing_and_below_cap(self) -> None:
        """Samples over a long horizon never decrease and never reach the cap."""
        samples = [estimate_progress(t / 10, 2.0) for t in range(0, 10_000, 7)]

        for earlier, later in zip(samples, samples[1:]):
            check.less_equal(earlier, later)
        for value in samples:
            check.less(value, PROGRESS_CAP)

    def test_stays_below_cap_for_huge_elapsed(self) -> None:
        """Rounding cannot push the estimate to the cap."""
        check.less(estimate_progress(1e9, 2.0), PROGRESS_CAP)
        check.greater(estimate_progress(1e9, 2.0), 89.0)

    def test_time_constant_shapes_curve(self) -> None:
        """After one time constant the estimate is ~63% of the cap."""
        assert estimate_progress(2.0, 2.0) == pytest.approx(PROGRESS_CAP * 0.632, rel=1e-2)
        assert estimate_progress(1.0, 1.0) == pytest.approx(estimate_progress(2.0, 2.0))

    def test_rejects_non_positive_time_constant(self) -> None:
        with pytest.raises(ValueError, match="time_constant"):
            estimate_progress(1.0, 0.0)
