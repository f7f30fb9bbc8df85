from datetime import date, datetime, timezone

from fairshare.models.personal_expense import PersonalExpense
from fairshare.utils.aggregation import (
    aggregate_daily_category_spend,
    month_bounds,
    monthly_category_breakdown,
)


def _row(day: datetime, amount_cents: int, category: str = "Food") -> PersonalExpense:
    return PersonalExpense(user_id="u1", amount_cents=amount_cents, category=category, date=day)


def test_month_bounds():
    start, end = month_bounds(date(2024, 2, 17))

    assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert end.date() == date(2024, 2, 29)
    assert end.tzinfo == timezone.utc


def test_daily_totals_per_category():
    rows = [
        _row(datetime(2026, 6, 2, 18, tzinfo=timezone.utc), 1250),
        _row(datetime(2026, 6, 1, 9, tzinfo=timezone.utc), 1000),
        _row(datetime(2026, 6, 2, 8, tzinfo=timezone.utc), 750),
        _row(datetime(2026, 6, 1, 12, tzinfo=timezone.utc), 4000, "Travel"),
    ]

    result = aggregate_daily_category_spend(rows)

    food = result["Food"]
    assert [d.date for d in food] == ["2026-06-01", "2026-06-02"]
    assert [d.total for d in food] == [10.0, 20.0]
    assert [d.count for d in food] == [1, 2]
    assert result["Travel"][0].total == 40.0


def test_daily_totals_empty():
    assert aggregate_daily_category_spend([]) == {}


def test_monthly_breakdown():
    rows = [
        _row(datetime(2026, 3, 5, tzinfo=timezone.utc), 1000, "Food"),
        _row(datetime(2026, 2, 5, tzinfo=timezone.utc), 500, "Travel"),
        _row(datetime(2026, 3, 9, tzinfo=timezone.utc), 250, "Groceries"),
        _row(datetime(2026, 3, 9, tzinfo=timezone.utc), 999, "Unlisted"),
    ]

    result = monthly_category_breakdown(rows)

    assert [r["month"] for r in result] == ["February 2026", "March 2026"]
    march = result[1]
    assert march["Food"] == 10.0
    assert march["Groceries"] == 2.5
    assert march["Travel"] == 0
    assert march["total"] == 12.5
    assert "Unlisted" not in march
