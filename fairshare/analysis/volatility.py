from typing import List, Sequence

import statistics

LOW_VOLATILITY = 0.3
HIGH_VOLATILITY = 0.6


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return statistics.fmean(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation."""
    if not values:
        return 0.0
    return statistics.pstdev(values)


def volatility(values: Sequence[float]) -> float:
    """
    Coefficient of variation: stddev / mean.
    Higher value = more volatile. 0 for empty or zero-mean series.
    """
    if not values:
        return 0.0
    avg = mean(values)
    if avg == 0:
        return 0.0
    return standard_deviation(values) / avg


def classify_volatility(
    vol: float,
    low: float = LOW_VOLATILITY,
    high: float = HIGH_VOLATILITY,
) -> str:
    if vol < low:
        return "LOW"
    if vol < high:
        return "NORMAL"
    return "HIGH"


def rolling_volatility(values: Sequence[float], window_size: int = 7) -> List[float]:
    """Volatility of the trailing window ending at each point."""
    if window_size < 1:
        raise ValueError(f"window_size must be positive, got {window_size}")
    result = []
    for i in range(len(values)):
        start = max(0, i - window_size + 1)
        result.append(volatility(values[start:i + 1]))
    return result
