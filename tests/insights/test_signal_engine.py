from datetime import date

from fairshare.insights.engine import (
    generate_all_signals,
    generate_signals_for_category,
    summarize_signals,
)
from fairshare.models.signal import DailyCategorySpend, SEVERITY_RANK, SignalSeverity, SignalType


def _series(totals, category):
    return [
        DailyCategorySpend(date=f"2026-06-{i + 1:02d}", category=category, total=t, count=1)
        for i, t in enumerate(totals)
    ]


def test_category_signals_ordered_by_severity():
    data = _series([100] * 6 + [500], "Food")

    signals = generate_signals_for_category(
        "u1", "Food", data, monthly_budget=300, today=date(2026, 6, 10)
    )

    types = {s.type for s in signals}
    assert SignalType.TREND in types
    assert SignalType.ANOMALY in types
    assert SignalType.BUDGET_PRESSURE in types
    ranks = [SEVERITY_RANK[s.severity] for s in signals]
    assert ranks == sorted(ranks)


def test_quiet_category_produces_nothing():
    # flat, short, no budget
    assert generate_signals_for_category("u1", "Food", _series([50, 50, 50], "Food")) == []


def test_all_signals_sorted_by_severity_then_confidence():
    category_data = {
        "Food": _series([100] * 6 + [500], "Food"),
        "Travel": _series([100, 90], "Travel"),
        "Rent_utilities": _series([500, 500], "Rent_utilities"),
    }

    signals = generate_all_signals(
        "u1",
        category_data,
        budgets={"Rent_utilities": 2000},
        today=date(2026, 6, 10),
    )

    keys = [(SEVERITY_RANK[s.severity], -s.confidence) for s in signals]
    assert keys == sorted(keys)
    assert signals[0].severity == SignalSeverity.HIGH
    assert {s.category for s in signals} == {"Food", "Travel", "Rent_utilities"}


def test_summary_counts():
    signals = generate_all_signals(
        "u1",
        {"Food": _series([100] * 6 + [500], "Food")},
        budgets={"Food": 300},
        today=date(2026, 6, 10),
    )

    summary = summarize_signals(signals)

    assert summary.total == len(signals)
    assert sum(summary.by_type.values()) == len(signals)
    assert summary.by_type["ANOMALY"] == 1
    assert summary.high_priority == sum(1 for s in signals if s.severity == SignalSeverity.HIGH)


def test_empty_summary():
    summary = summarize_signals([])

    assert summary.total == 0
    assert summary.by_type == {}
    assert summary.high_priority == 0
