from __future__ import annotations

from dataclasses import dataclass

from fairshare.core.config import Settings, settings


@dataclass(frozen=True)
class SignalPolicy:
    """Thresholds that decide when a signal fires and how severe it is."""

    ewma_alpha: float = 0.3
    anomaly_factor: float = 2.5
    min_days: int = 7

    # trend, absolute % change of the baseline
    trend_min_pct: float = 1.0
    trend_medium_pct: float = 10.0
    trend_high_pct: float = 20.0

    # anomaly, actual / baseline
    anomaly_low_multiplier: float = 3.0
    anomaly_high_multiplier: float = 5.0

    # volatility, coefficient of variation
    volatility_low: float = 0.3
    volatility_high: float = 0.6

    # outliers, absolute z-score
    outlier_low_z: float = 2.0
    outlier_medium_z: float = 2.5
    outlier_high_z: float = 3.0

    # budget pressure, spent / expected-by-now
    budget_under_ratio: float = 0.8
    budget_medium_ratio: float = 1.1
    budget_high_ratio: float = 1.3

    @classmethod
    def from_settings(cls, config: Settings = settings) -> SignalPolicy:
        return cls(
            ewma_alpha=config.SIGNAL_EWMA_ALPHA,
            anomaly_factor=config.SIGNAL_ANOMALY_FACTOR,
            min_days=config.SIGNAL_MIN_DAYS,
            trend_min_pct=config.SIGNAL_TREND_MIN_PCT,
            trend_medium_pct=config.SIGNAL_TREND_MEDIUM_PCT,
            trend_high_pct=config.SIGNAL_TREND_HIGH_PCT,
            anomaly_low_multiplier=config.SIGNAL_ANOMALY_LOW_MULTIPLIER,
            anomaly_high_multiplier=config.SIGNAL_ANOMALY_HIGH_MULTIPLIER,
            volatility_low=config.SIGNAL_VOLATILITY_LOW,
            volatility_high=config.SIGNAL_VOLATILITY_HIGH,
            outlier_low_z=config.SIGNAL_OUTLIER_LOW_Z,
            outlier_medium_z=config.SIGNAL_OUTLIER_MEDIUM_Z,
            outlier_high_z=config.SIGNAL_OUTLIER_HIGH_Z,
            budget_under_ratio=config.SIGNAL_BUDGET_UNDER_RATIO,
            budget_medium_ratio=config.SIGNAL_BUDGET_MEDIUM_RATIO,
            budget_high_ratio=config.SIGNAL_BUDGET_HIGH_RATIO,
        )


DEFAULT_POLICY = SignalPolicy.from_settings()
