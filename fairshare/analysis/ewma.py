"""
Exponentially weighted moving average over daily spend.

The running average is kept at full precision; only the value stored on each
point is rounded to 2 dp. A point is an anomaly when it exceeds
anomaly_factor times the previous point's baseline, so a spike never raises
its own threshold. The first point has no baseline and is never flagged.
"""

from typing import List, Sequence

from fairshare.models.signal import DailyCategorySpend, EWMAPoint

DEFAULT_ALPHA = 0.3
DEFAULT_ANOMALY_FACTOR = 2.5


def _check_alpha(alpha: float) -> None:
    if not 0 < alpha <= 1:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")


def compute_ewma(values: Sequence[float], alpha: float = DEFAULT_ALPHA) -> List[float]:
    """Smooth a series. Lower alpha = more smoothing."""
    _check_alpha(alpha)
    if not values:
        return []

    ewma = [float(values[0])]
    for value in values[1:]:
        # alpha*value + (1-alpha)*prev; exact for a constant series
        ewma.append(ewma[-1] + alpha * (value - ewma[-1]))
    return ewma


def compute_ewma_with_anomalies(
    series: Sequence[DailyCategorySpend],
    alpha: float = DEFAULT_ALPHA,
    anomaly_factor: float = DEFAULT_ANOMALY_FACTOR,
) -> List[EWMAPoint]:
    """Smoothed baseline for one category with spike flags."""
    smoothed = compute_ewma([day.total for day in series], alpha)

    points: List[EWMAPoint] = []
    for i, (day, ewma) in enumerate(zip(series, smoothed)):
        is_anomaly = i > 0 and day.total > anomaly_factor * smoothed[i - 1]
        point = EWMAPoint(
            date=day.date,
            actual=day.total,
            ewma=round(ewma, 2),
            is_anomaly=is_anomaly,
        )
        point._smoothed = ewma
        points.append(point)
    return points


def current_baseline(points: Sequence[EWMAPoint]) -> float:
    """Last smoothed value at full precision, 0 for an empty series."""
    if not points:
        return 0.0
    return points[-1].smoothed


def ewma_trend(points: Sequence[EWMAPoint]) -> float:
    """Delta between the last two smoothed values."""
    if len(points) < 2:
        return 0.0
    return points[-1].smoothed - points[-2].smoothed
