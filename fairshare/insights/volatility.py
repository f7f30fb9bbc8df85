from __future__ import annotations

from typing import Optional, Sequence

from fairshare.analysis.volatility import classify_volatility, volatility
from fairshare.insights.policy import DEFAULT_POLICY, SignalPolicy
from fairshare.models.signal import DailyCategorySpend, Signal, SignalSeverity, SignalType


def build_volatility_signal(
    user_id: str,
    category: str,
    data: Sequence[DailyCategorySpend],
    policy: SignalPolicy = DEFAULT_POLICY,
) -> Optional[Signal]:
    """Spending predictability. NORMAL volatility is not worth reporting."""
    if len(data) < policy.min_days:
        return None

    vol = volatility([d.total for d in data])
    classification = classify_volatility(vol, policy.volatility_low, policy.volatility_high)

    if classification == "NORMAL":
        return None

    if classification == "HIGH":
        severity = SignalSeverity.MEDIUM
        title = f"{category} spending is unstable"
        detail = "varies significantly day-to-day (high volatility)"
    else:
        severity = SignalSeverity.LOW
        title = f"{category} spending is stable"
        detail = "is very consistent (low volatility)"

    return Signal(
        type=SignalType.VOLATILITY,
        user_id=user_id,
        category=category,
        value=classification,
        confidence=min(vol, 1.0),
        severity=severity,
        title=title,
        message=f"Your {category.lower()} spending {detail}. Volatility score: {vol * 100:.0f}%",
        date_range=f"Last {len(data)} days",
        metadata={
            "score": round(vol, 2),
            "std_ratio": round(vol, 2),
        },
    )
