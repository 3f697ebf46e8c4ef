"""Mini README: Platform-wide figures for the admin reports page.

Structure:
    * AdminTimeframe - the "Last 7/30/90/365 days" selector.
    * UserActivity - account counts by status plus recent activity.
    * TransactionStats - ledger totals and the average per transaction.
    * AdminReport / build_admin_report - everything the page renders.

Figures are derived from the user directory and the ledger entries handed
in by the caller; nothing here is generated at random.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..ledger import EntryKind, LedgerEntry
from ..ledger.entries import ZERO
from ..logging_utils import get_logger
from ..reports import Report, ReportPeriod, build_report
from .users import AccountStatus, UserAccount

LOGGER = get_logger(__name__)

_TIMEFRAME_DAYS = {"week": 7, "month": 30, "quarter": 90, "year": 365}


class AdminTimeframe(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def days(self) -> int:
        return _TIMEFRAME_DAYS[self.value]

    def window(self, today: date) -> Tuple[date, date]:
        """Inclusive date range ending ``today`` and spanning ``days`` days."""

        return today - timedelta(days=self.days - 1), today


@dataclass(slots=True)
class UserActivity:
    total: int
    active: int
    pending: int
    inactive: int
    recently_active: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "active": self.active,
            "pending": self.pending,
            "inactive": self.inactive,
            "recently_active": self.recently_active,
        }


@dataclass(slots=True)
class TransactionStats:
    """Ledger totals for the selected timeframe."""

    count: int = 0
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def average(self) -> Decimal:
        if self.count == 0:
            return ZERO
        return (self.income + self.expense) / self.count

    def as_dict(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "income": str(self.income),
            "expense": str(self.expense),
            "average": str(self.average),
        }


@dataclass(slots=True)
class AdminReport:
    timeframe: AdminTimeframe
    start: date
    end: date
    users: UserActivity
    transactions: TransactionStats
    activity: Report
    top_by_transactions: List[UserAccount] = field(default_factory=list)
    top_by_amount: List[UserAccount] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "timeframe": self.timeframe.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "users": self.users.as_dict(),
            "transactions": self.transactions.as_dict(),
            "activity": [row.as_dict() for row in self.activity.rows],
            "top_by_transactions": [account.as_dict() for account in self.top_by_transactions],
            "top_by_amount": [account.as_dict() for account in self.top_by_amount],
        }


def build_admin_report(
    accounts: Iterable[UserAccount],
    entries: Iterable[LedgerEntry],
    timeframe: AdminTimeframe = AdminTimeframe.MONTH,
    today: Optional[date] = None,
    limit: int = 5,
) -> AdminReport:
    """Summarise accounts and ledger activity inside the timeframe window.

    Top users are ranked by transaction count and by total amount, keeping
    directory order among equals. The activity series buckets entries by day.
    """

    timeframe = AdminTimeframe(timeframe)
    start, end = timeframe.window(today or date.today())
    accounts = list(accounts)
    in_window = [entry for entry in entries if start <= entry.entry_date <= end]

    by_status = {status: 0 for status in AccountStatus}
    for account in accounts:
        by_status[account.status] += 1
    users = UserActivity(
        total=len(accounts),
        active=by_status[AccountStatus.ACTIVE],
        pending=by_status[AccountStatus.PENDING],
        inactive=by_status[AccountStatus.INACTIVE],
        recently_active=sum(1 for account in accounts if start <= account.last_active <= end),
    )

    stats = TransactionStats(count=len(in_window))
    for entry in in_window:
        if entry.kind is EntryKind.INCOME:
            stats.income += entry.amount
        else:
            stats.expense += entry.amount

    LOGGER.debug(
        "Admin report %s..%s: %s accounts, %s transactions", start, end, users.total, stats.count
    )
    return AdminReport(
        timeframe=timeframe,
        start=start,
        end=end,
        users=users,
        transactions=stats,
        activity=build_report(in_window, start, end, ReportPeriod.DAILY),
        top_by_transactions=sorted(accounts, key=lambda account: -account.transactions)[:limit],
        top_by_amount=sorted(accounts, key=lambda account: -account.total_amount)[:limit],
    )
