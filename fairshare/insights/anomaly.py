from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from fairshare.analysis.ewma import compute_ewma_with_anomalies, current_baseline
from fairshare.analysis.zscore import outlier_severity, z_score_in_series
from fairshare.insights.policy import DEFAULT_POLICY, SignalPolicy
from fairshare.models.signal import DailyCategorySpend, Signal, SignalSeverity, SignalType


def _short_date(day: str) -> str:
    parsed = date.fromisoformat(day)
    return f"{parsed:%b} {parsed.day}"


def build_anomaly_signal(
    user_id: str,
    category: str,
    data: Sequence[DailyCategorySpend],
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Optional[Signal]:
    """Most recent spike above the smoothed baseline, if any."""
    if len(data) < policy.min_days:
        return None

    points = compute_ewma_with_anomalies(data, policy.ewma_alpha, policy.anomaly_factor)

    latest = next((p for p in reversed(points) if p.is_anomaly), None)
    if latest is None:
        return None

    baseline = current_baseline(points)
    multiplier = latest.actual / baseline if baseline > 0 else 0.0

    severity = SignalSeverity.MEDIUM
    if multiplier > policy.anomaly_high_multiplier:
        severity = SignalSeverity.HIGH
    elif multiplier < policy.anomaly_low_multiplier:
        severity = SignalSeverity.LOW

    z = z_score_in_series(latest.actual, [p.actual for p in points])
    when = _short_date(latest.date)

    return Signal(
        type=SignalType.ANOMALY,
        user_id=user_id,
        category=category,
        value=latest.actual,
        confidence=min(multiplier / 10, 1.0),
        severity=severity,
        title="Unusual large expense detected",
        message=(
            f"Your {category.lower()} spending was {multiplier:.1f}x higher than usual on {when} "
            f"(${latest.actual:,.0f} vs baseline ${baseline:,.0f})"
        ),
        date_range=when,
        metadata={
            "baseline": round(baseline),
            "multiplier": round(multiplier, 1),
            "date": latest.date,
            "z_score": round(z, 2),
            "outlier": outlier_severity(
                z, policy.outlier_low_z, policy.outlier_medium_z, policy.outlier_high_z
            ),
        },
    )
