"""Mini README: Period reports built from ledger entries.

Structure:
    * ReportPeriod - bucket size (daily, weekly, monthly, yearly).
    * PeriodSummary - income, expense and savings for one bucket.
    * Report / build_report - chronological buckets within a date range.
    * default_report_range - the range restored by "Reset Filters".
    * export_report_csv - CSV text behind the "Export Report" button.

Reports also carry per-category income and expense slices for the entries
in range, feeding the two category charts of the reports page.

Buckets with no entries are omitted. Savings is income minus expense and
may be negative.
"""

from __future__ import annotations

import calendar
import csv
import io
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .charts import ChartSlice
from .ledger import EntryKind, LedgerEntry, category_breakdown
from .ledger.entries import ZERO
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


class ReportPeriod(str, Enum):
    """Granularity of report buckets."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def bucket(self, day: date) -> Tuple[date, str]:
        """Return the bucket start date and its display label."""

        if self is ReportPeriod.DAILY:
            return day, day.strftime("%d %b")
        if self is ReportPeriod.WEEKLY:
            start = day - timedelta(days=day.weekday())
            return start, f"Week of {start.strftime('%d %b %Y')}"
        if self is ReportPeriod.MONTHLY:
            start = day.replace(day=1)
            return start, start.strftime("%b %Y")
        start = day.replace(month=1, day=1)
        return start, str(start.year)


@dataclass(slots=True)
class PeriodSummary:
    """Totals for one report bucket."""

    label: str
    starts_on: date
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def savings(self) -> Decimal:
        return self.income - self.expense

    def as_dict(self) -> Dict[str, str]:
        return {
            "label": self.label,
            "starts_on": self.starts_on.isoformat(),
            "income": str(self.income),
            "expense": str(self.expense),
            "savings": str(self.savings),
        }


@dataclass(slots=True)
class Report:
    """Chronological period summaries for a date range."""

    start: date
    end: date
    period: ReportPeriod
    rows: List[PeriodSummary] = field(default_factory=list)
    income_categories: List[ChartSlice] = field(default_factory=list)
    expense_categories: List[ChartSlice] = field(default_factory=list)

    @property
    def total_income(self) -> Decimal:
        return sum((row.income for row in self.rows), ZERO)

    @property
    def total_expense(self) -> Decimal:
        return sum((row.expense for row in self.rows), ZERO)

    @property
    def total_savings(self) -> Decimal:
        return self.total_income - self.total_expense

    def as_dict(self) -> Dict[str, object]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "period": self.period.value,
            "rows": [row.as_dict() for row in self.rows],
            "total_income": str(self.total_income),
            "total_expense": str(self.total_expense),
            "total_savings": str(self.total_savings),
            "income_categories": [item.as_dict() for item in self.income_categories],
            "expense_categories": [item.as_dict() for item in self.expense_categories],
        }


def build_report(
    entries: Iterable[LedgerEntry],
    start: date,
    end: date,
    period: ReportPeriod = ReportPeriod.MONTHLY,
) -> Report:
    """Group entries inside ``[start, end]`` into period buckets."""

    if start > end:
        raise ValueError("Report start date must not be after its end date.")
    period = ReportPeriod(period)
    buckets: Dict[date, PeriodSummary] = {}
    in_range = [entry for entry in entries if start <= entry.entry_date <= end]
    for entry in in_range:
        starts_on, label = period.bucket(entry.entry_date)
        summary = buckets.setdefault(starts_on, PeriodSummary(label=label, starts_on=starts_on))
        if entry.kind is EntryKind.INCOME:
            summary.income += entry.amount
        else:
            summary.expense += entry.amount
    rows = [buckets[key] for key in sorted(buckets)]
    LOGGER.debug("Built %s report %s..%s with %s rows", period.value, start, end, len(rows))
    return Report(
        start=start,
        end=end,
        period=period,
        rows=rows,
        income_categories=category_breakdown(in_range, kind=EntryKind.INCOME),
        expense_categories=category_breakdown(in_range, kind=EntryKind.EXPENSE),
    )


def default_report_range(today: date) -> Tuple[date, date]:
    """First day of the month six months back through the end of this month."""

    month_index = today.year * 12 + (today.month - 1) - 6
    start = date(month_index // 12, month_index % 12 + 1, 1)
    end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    return start, end


def export_report_csv(report: Report) -> str:
    """Serialise report rows and totals as CSV text."""

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["period", "income", "expense", "savings"])
    for row in report.rows:
        writer.writerow([row.label, f"{row.income:.2f}", f"{row.expense:.2f}", f"{row.savings:.2f}"])
    writer.writerow(
        [
            "Total",
            f"{report.total_income:.2f}",
            f"{report.total_expense:.2f}",
            f"{report.total_savings:.2f}",
        ]
    )
    return buffer.getvalue()
