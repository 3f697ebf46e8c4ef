"""Mini README: Data providers feeding the ledger and group computations.

Structure:
    * LedgerRepository / GroupRepository - abstract interfaces the views
      depend on.
    * InMemoryLedgerRepository / InMemoryGroupRepository - session-scoped
      implementations seeded with deterministic demo data.

The computational core never generates or fetches data itself; the
presentation layer asks a repository for entries or groups and hands them to
the pure functions in ``fintrack.ledger`` and ``fintrack.groups``. Swapping
in a persistent store only means implementing these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from .groups import Group, GroupExpense, GroupMember
from .ledger import EntryKind, LedgerEntry, filter_by_kind
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


class LedgerRepository(ABC):
    """Source of income and expense entries."""

    @abstractmethod
    def list_entries(self, kind: Optional[Union[EntryKind, str]] = None) -> List[LedgerEntry]:
        """Return entries, most recent first, optionally of a single kind."""

    @abstractmethod
    def add_entry(self, entry: LedgerEntry) -> LedgerEntry:
        """Store a new entry and return it."""

    @abstractmethod
    def next_id(self) -> str:
        """Reserve an identifier for a new entry."""


class GroupRepository(ABC):
    """Source of shared-expense groups."""

    @abstractmethod
    def list_groups(self) -> List[Group]:
        """Return groups in creation order."""

    @abstractmethod
    def get_group(self, group_id: str) -> Group:
        """Return a group, raising ``KeyError`` when it does not exist."""

    @abstractmethod
    def add_group(self, group: Group) -> Group:
        """Store a new group and return it."""

    @abstractmethod
    def next_id(self) -> str:
        """Reserve an identifier for a new group."""


def _demo_entries() -> List[LedgerEntry]:
    """Income and expense records shown on first launch."""

    income = [
        ("2023-04-01", "Monthly Salary", "3500", "Regular salary payment", "Salary"),
        ("2023-04-05", "Freelance Project", "500", "Website design for client", "Freelance"),
        ("2023-04-10", "Dividend Payment", "120", "Quarterly dividend from investments", "Investments"),
        ("2023-04-15", "Apartment Rent", "800", "Rent from tenant", "Rental"),
        ("2023-04-20", "Online Store", "350", "Monthly revenue from online store", "Side Business"),
    ]
    expenses = [
        ("2023-04-03", "Grocery Store", "85.40", "Weekly groceries", "Food"),
        ("2023-04-05", "Rent", "1200", "Monthly apartment rent", "Rent"),
        ("2023-04-10", "Electric Company", "75.30", "Monthly electricity bill", "Utilities"),
        ("2023-04-15", "Movie Theater", "35.50", "Movie tickets and snacks", "Entertainment"),
        ("2023-04-18", "Gas Station", "45.80", "Car fuel", "Transport"),
    ]
    entries: List[LedgerEntry] = []
    for kind, rows in ((EntryKind.INCOME, income), (EntryKind.EXPENSE, expenses)):
        for occurred_on, counterparty, amount, description, category in rows:
            entries.append(
                LedgerEntry(
                    entry_id=f"txn_{len(entries) + 1:04d}",
                    kind=kind,
                    entry_date=date.fromisoformat(occurred_on),
                    counterparty=counterparty,
                    amount=amount,
                    category=category,
                    description=description,
                )
            )
    return entries


def _demo_groups() -> List[Group]:
    """Shared-expense groups shown on first launch."""

    return [
        Group(
            group_id="1",
            name="Hiking Trip",
            description="Weekend hiking trip to the mountains",
            group_date=date(2023, 5, 15),
            total_amount="435.65",
            members=[
                GroupMember("1", "John Doe", paid="200", should_pay="145.22"),
                GroupMember("2", "Jane Smith", paid="150", should_pay="145.22"),
                GroupMember("3", "Robert Johnson", paid="85.65", should_pay="145.22"),
            ],
            expenses=[
                GroupExpense("1", "Food supplies", "120", "John Doe", date(2023, 5, 10)),
                GroupExpense("2", "Transportation", "150", "Jane Smith", date(2023, 5, 12)),
                GroupExpense("3", "Equipment rental", "80", "John Doe", date(2023, 5, 14)),
                GroupExpense("4", "Cabin booking", "85.65", "Robert Johnson", date(2023, 5, 8)),
            ],
        ),
        Group(
            group_id="2",
            name="Birthday Party",
            description="Sarah's surprise birthday party",
            group_date=date(2023, 6, 10),
            total_amount="320.45",
            members=[
                GroupMember("1", "John Doe", paid="120", should_pay="80.11"),
                GroupMember("2", "Jane Smith", paid="80", should_pay="80.11"),
                GroupMember("3", "Robert Johnson", paid="60.45", should_pay="80.11"),
                GroupMember("4", "Emily Davis", paid="60", should_pay="80.11"),
            ],
            expenses=[
                GroupExpense("1", "Cake and desserts", "80", "Jane Smith", date(2023, 6, 8)),
                GroupExpense("2", "Decorations", "60", "Emily Davis", date(2023, 6, 7)),
                GroupExpense("3", "Food and drinks", "120", "John Doe", date(2023, 6, 9)),
                GroupExpense("4", "Gift", "60.45", "Robert Johnson", date(2023, 6, 5)),
            ],
        ),
    ]


class InMemoryLedgerRepository(LedgerRepository):
    """Keep entries for the lifetime of the process."""

    def __init__(self, entries: Optional[Iterable[LedgerEntry]] = None) -> None:
        self._entries: Dict[str, LedgerEntry] = {}
        self._sequence = 0
        for entry in _demo_entries() if entries is None else entries:
            self._register(entry)
        LOGGER.debug("Ledger repository initialised with %s entries", len(self._entries))

    def _register(self, entry: LedgerEntry) -> None:
        if entry.entry_id in self._entries:
            raise ValueError(f"Entry {entry.entry_id} already exists.")
        self._entries[entry.entry_id] = entry
        suffix = entry.entry_id.split("_")[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def next_id(self) -> str:
        self._sequence += 1
        return f"txn_{self._sequence:04d}"

    def list_entries(self, kind: Optional[Union[EntryKind, str]] = None) -> List[LedgerEntry]:
        ordered = sorted(
            self._entries.values(),
            key=lambda entry: (entry.entry_date, entry.entry_id),
            reverse=True,
        )
        return filter_by_kind(ordered, kind)

    def add_entry(self, entry: LedgerEntry) -> LedgerEntry:
        self._register(entry)
        LOGGER.info("Recorded %s entry %s of %s", entry.kind.value, entry.entry_id, entry.amount)
        return entry


class InMemoryGroupRepository(GroupRepository):
    """Keep groups for the lifetime of the process."""

    def __init__(self, groups: Optional[Iterable[Group]] = None) -> None:
        self._groups: Dict[str, Group] = {}
        for group in _demo_groups() if groups is None else groups:
            self.add_group(group)

    def list_groups(self) -> List[Group]:
        return list(self._groups.values())

    def get_group(self, group_id: str) -> Group:
        if group_id not in self._groups:
            raise KeyError(f"Group {group_id} not found")
        return self._groups[group_id]

    def add_group(self, group: Group) -> Group:
        if group.group_id in self._groups:
            raise ValueError(f"Group {group.group_id} already exists.")
        self._groups[group.group_id] = group
        LOGGER.info("Registered group %s (%s)", group.group_id, group.name)
        return group

    def next_id(self) -> str:
        # Matches the "number of groups + 1" identifiers of the demo data.
        candidate = len(self._groups) + 1
        while str(candidate) in self._groups:
            candidate += 1
        return str(candidate)
