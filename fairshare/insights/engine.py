"""
Signal orchestration.

Per category every builder runs; empty results are dropped and the rest
ordered HIGH, MEDIUM, LOW. Across categories signals are re-ordered by
severity, then by confidence (highest first).
"""
from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from fairshare.insights.anomaly import build_anomaly_signal
from fairshare.insights.budget_pressure import build_budget_pressure_signal
from fairshare.insights.policy import DEFAULT_POLICY, SignalPolicy
from fairshare.insights.trend import build_trend_signal
from fairshare.insights.volatility import build_volatility_signal
from fairshare.models.signal import (
    SEVERITY_RANK,
    DailyCategorySpend,
    Signal,
    SignalSeverity,
    SignalSummary,
)


def generate_signals_for_category(
    user_id: str,
    category: str,
    data: Sequence[DailyCategorySpend],
    monthly_budget: Optional[float] = None,
    today: Optional[date] = None,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> List[Signal]:
    candidates = [
        build_trend_signal(user_id, category, data, policy),
        build_anomaly_signal(user_id, category, data, policy),
        build_volatility_signal(user_id, category, data, policy),
        build_budget_pressure_signal(user_id, category, data, monthly_budget, today, policy),
    ]
    signals = [s for s in candidates if s is not None]
    return sorted(signals, key=lambda s: SEVERITY_RANK[s.severity])


def generate_all_signals(
    user_id: str,
    category_data: Mapping[str, Sequence[DailyCategorySpend]],
    budgets: Optional[Mapping[str, float]] = None,
    today: Optional[date] = None,
    policy: SignalPolicy = DEFAULT_POLICY,
) -> List[Signal]:
    budgets = budgets or {}
    all_signals: List[Signal] = []
    for category, data in category_data.items():
        all_signals.extend(generate_signals_for_category(
            user_id, category, data, budgets.get(category), today, policy
        ))
    return sorted(all_signals, key=lambda s: (SEVERITY_RANK[s.severity], -s.confidence))


def summarize_signals(signals: Sequence[Signal]) -> SignalSummary:
    by_type: Dict[str, int] = Counter(s.type.value for s in signals)
    by_severity: Dict[str, int] = Counter(s.severity.value for s in signals)
    return SignalSummary(
        total=len(signals),
        by_type=dict(by_type),
        by_severity=dict(by_severity),
        high_priority=sum(1 for s in signals if s.severity == SignalSeverity.HIGH),
    )
