from typing import Sequence

from fairshare.analysis.volatility import mean, standard_deviation

OUTLIER_THRESHOLD = 2.0
MEDIUM_Z = 2.5
HIGH_Z = 3.0


def z_score(value: float, mean_value: float, std: float) -> float:
    """Number of standard deviations from the mean (0 when std is 0)."""
    if std == 0:
        return 0.0
    return (value - mean_value) / std


def z_score_in_series(value: float, series: Sequence[float]) -> float:
    return z_score(value, mean(series), standard_deviation(series))


def is_outlier(value: float, series: Sequence[float], threshold: float = OUTLIER_THRESHOLD) -> bool:
    return abs(z_score_in_series(value, series)) > threshold


def outlier_severity(
    z: float,
    low: float = OUTLIER_THRESHOLD,
    medium: float = MEDIUM_Z,
    high: float = HIGH_Z,
) -> str:
    abs_z = abs(z)
    if abs_z < low:
        return "NONE"
    if abs_z < medium:
        return "LOW"
    if abs_z < high:
        return "MEDIUM"
    return "HIGH"
