from __future__ import annotations

import calendar
from datetime import date
from typing import Optional, Sequence

from fairshare.analysis.ewma import compute_ewma_with_anomalies, current_baseline
from fairshare.insights.policy import DEFAULT_POLICY, SignalPolicy
from fairshare.models.signal import DailyCategorySpend, Signal, SignalSeverity, SignalType


def build_budget_pressure_signal(
    user_id: str,
    category: str,
    data: Sequence[DailyCategorySpend],
    monthly_budget: Optional[float] = None,
    today: Optional[date] = None,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Optional[Signal]:
    """
    Time-aware budget check for the current month.

    expected_by_now = budget * day_of_month / days_in_month
    pressure_ratio  = spent_so_far / expected_by_now

    On-track ratios (between budget_under_ratio and budget_medium_ratio)
    produce no signal.
    """
    if not monthly_budget:
        return None
    if not data:
        return None

    today = today or date.today()
    spent_so_far = sum(d.total for d in data)

    days_in_month = calendar.monthrange(today.year, today.month)[1]
    day_of_month = today.day
    days_left = days_in_month - day_of_month

    expected_by_now = monthly_budget * day_of_month / days_in_month
    pressure_ratio = spent_so_far / expected_by_now

    if pressure_ratio > policy.budget_high_ratio:
        risk = SignalSeverity.HIGH
        status_text = "significantly ahead of budget"
    elif pressure_ratio > policy.budget_medium_ratio:
        risk = SignalSeverity.MEDIUM
        status_text = "slightly ahead of budget"
    elif pressure_ratio < policy.budget_under_ratio:
        risk = SignalSeverity.LOW
        status_text = "under budget"
    else:
        return None

    points = compute_ewma_with_anomalies(data, policy.ewma_alpha, policy.anomaly_factor)
    daily_baseline = current_baseline(points)
    projected_monthly = spent_so_far + daily_baseline * days_left

    title_state = "on track" if risk == SignalSeverity.LOW else "at risk"

    return Signal(
        type=SignalType.BUDGET_PRESSURE,
        user_id=user_id,
        category=category,
        value=risk.value,
        confidence=min(abs(pressure_ratio - 1), 1.0),
        severity=risk,
        title=f"{category} budget {title_state}",
        message=(
            f"You've spent ${spent_so_far:,.0f} of ${monthly_budget:,.0f} ({status_text}). "
            f"Expected: ${expected_by_now:,.0f}. Projected monthly: ${projected_monthly:,.0f}"
        ),
        date_range=f"{days_left} days remaining",
        metadata={
            "spent_so_far": round(spent_so_far),
            "expected_by_now": round(expected_by_now),
            "pressure_ratio": round(pressure_ratio, 2),
            "projected_monthly": round(projected_monthly),
            "days_left": days_left,
            "budget": monthly_budget,
        },
    )
