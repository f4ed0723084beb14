"""Simulated upload progress.

The upload transport reports no byte-level progress, so the bar follows a
saturating curve of elapsed time. The curve approaches but never reaches
``PROGRESS_CAP``; only completion of the remote call yields ``PROGRESS_DONE``.
"""

import math

PROGRESS_CAP = 90.0
PROGRESS_DONE = 100.0


def estimate_progress(elapsed: float, time_constant: float) -> float:
    """Return the estimated percentage after ``elapsed`` seconds in flight.

    Args:
        elapsed: Seconds since the attempt started. Negative values count as 0.
        time_constant: Seconds to reach ~63% of the cap.

    Returns:
        A value in ``[0, PROGRESS_CAP)``, non-decreasing in ``elapsed``.
    """
    if time_constant <= 0:
        raise ValueError("time_constant must be positive")
    elapsed = max(0.0, elapsed)
    value = PROGRESS_CAP * -math.expm1(-elapsed / time_constant)
    # expm1 rounds to exactly -1.0 for very large elapsed values
    return min(value, math.nextafter(PROGRESS_CAP, 0.0))
