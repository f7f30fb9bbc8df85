"""Aggregation of personal expense rows into the series the insight engine reads."""
import calendar
from collections import defaultdict
from datetime import date, datetime, time, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fairshare.core.config import EXPENSE_CATEGORIES
from fairshare.models.personal_expense import PersonalExpense
from fairshare.models.signal import DailyCategorySpend


def month_bounds(month: Optional[date] = None) -> Tuple[datetime, datetime]:
    """First and last instant (UTC) of the month containing `month`."""
    month = month or datetime.now(timezone.utc).date()
    last_day = calendar.monthrange(month.year, month.month)[1]
    start = datetime.combine(month.replace(day=1), time.min, tzinfo=timezone.utc)
    end = datetime.combine(month.replace(day=last_day), time.max, tzinfo=timezone.utc)
    return start, end


def aggregate_daily_category_spend(
    expenses: Iterable[PersonalExpense],
) -> Dict[str, List[DailyCategorySpend]]:
    """
    Group by category and calendar day, summing amounts.

    Sums run in integer cents and are converted to currency units once per
    day. Every category's list is ordered by date.
    """
    buckets: Dict[str, Dict[str, List[int]]] = defaultdict(dict)

    for expense in expenses:
        day_key = expense.date.date().isoformat()
        bucket = buckets[expense.category].setdefault(day_key, [0, 0])
        bucket[0] += expense.amount_cents
        bucket[1] += 1

    result: Dict[str, List[DailyCategorySpend]] = {}
    for category, days in buckets.items():
        result[category] = [
            DailyCategorySpend(
                date=day_key,
                category=category,
                total=total_cents / 100,
                count=count,
            )
            for day_key, (total_cents, count) in sorted(days.items())
        ]
    return result


def monthly_category_breakdown(
    expenses: Iterable[PersonalExpense],
    categories: Sequence[str] = EXPENSE_CATEGORIES,
) -> List[Dict[str, object]]:
    """
    Per month, totals per known category plus an overall total.

    Rows are ordered chronologically and labelled like "March 2026".
    Categories outside `categories` are not counted.
    """
    months: Dict[Tuple[int, int], Dict[str, int]] = {}

    for expense in expenses:
        key = (expense.date.year, expense.date.month)
        totals = months.setdefault(key, {c: 0 for c in categories})
        if expense.category in totals:
            totals[expense.category] += abs(expense.amount_cents)

    rows = []
    for (year, month), totals in sorted(months.items()):
        row: Dict[str, object] = {"month": f"{calendar.month_name[month]} {year}"}
        row.update({category: cents / 100 for category, cents in totals.items()})
        row["total"] = sum(totals.values()) / 100
        rows.append(row)
    return rows
