from __future__ import annotations

from typing import Optional, Sequence

from fairshare.analysis.ewma import compute_ewma_with_anomalies, current_baseline, ewma_trend
from fairshare.insights.policy import DEFAULT_POLICY, SignalPolicy
from fairshare.models.signal import DailyCategorySpend, Signal, SignalSeverity, SignalType


def build_trend_signal(
    user_id: str,
    category: str,
    data: Sequence[DailyCategorySpend],
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Optional[Signal]:
    """
    Spending direction (UP/DOWN) from the last two smoothed values.

    Silent on a zero baseline or a change under trend_min_pct.
    """
    if len(data) < 1:
        return None

    points = compute_ewma_with_anomalies(data, policy.ewma_alpha, policy.anomaly_factor)
    trend = ewma_trend(points)
    baseline = current_baseline(points)

    if baseline == 0:
        return None

    change_pct = trend / baseline * 100
    abs_change_pct = abs(change_pct)
    if abs_change_pct < policy.trend_min_pct:
        return None

    severity = SignalSeverity.LOW
    if abs_change_pct > policy.trend_high_pct:
        severity = SignalSeverity.HIGH
    elif abs_change_pct > policy.trend_medium_pct:
        severity = SignalSeverity.MEDIUM

    direction = "UP" if trend > 0 else "DOWN"
    verb = "increased" if direction == "UP" else "decreased"

    return Signal(
        type=SignalType.TREND,
        user_id=user_id,
        category=category,
        value=direction,
        confidence=min(abs_change_pct / 30, 1.0),
        severity=severity,
        title=f"{category} spending is trending {direction.lower()}",
        message=(
            f"Your {category.lower()} spending has {verb} by {abs_change_pct:.0f}% "
            f"compared to your baseline of ${baseline:,.0f}"
        ),
        date_range=f"Last {len(data)} days",
        metadata={
            "delta": round(trend),
            "baseline": round(baseline),
            "change_pct": round(change_pct),
        },
    )
