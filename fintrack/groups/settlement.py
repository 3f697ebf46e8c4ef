"""Mini README: Shared-expense groups and their settlement figures.

Structure:
    * GroupMember / GroupExpense / Group - in-memory group model.
    * SettlementStatus / MemberSettlement - one member's net position.
    * GroupStatistics / GroupSettlement - aggregate results for a group.
    * settle_member, settle_group, per_person_share, most_expensive_expense -
      the settlement computations.
    * expense_breakdown / contribution_breakdown - chart projections.

Settlement reports each member's net position (paid minus fair share). It
does not pair debtors with creditors into individual transfers. Members'
``should_pay`` values are taken as given; when they do not add up to the
group total the discrepancy is logged rather than rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from ..charts import GROUP_PALETTE, ChartSlice, slices_from_pairs
from ..formatting import format_currency
from ..ledger.entries import ZERO, parse_amount, parse_date
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class GroupMember:
    """Participant in a shared-expense group."""

    member_id: str
    name: str
    paid: Decimal
    should_pay: Decimal

    def __post_init__(self) -> None:
        self.paid = parse_amount(self.paid)
        self.should_pay = parse_amount(self.should_pay)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.member_id,
            "name": self.name,
            "paid": str(self.paid),
            "should_pay": str(self.should_pay),
        }


@dataclass(slots=True)
class GroupExpense:
    """Single cost recorded against a group."""

    expense_id: str
    description: str
    amount: Decimal
    paid_by: str
    expense_date: date

    def __post_init__(self) -> None:
        self.amount = parse_amount(self.amount)
        self.expense_date = parse_date(self.expense_date)
        if self.amount < ZERO:
            raise ValueError(f"Group expense {self.expense_id} has a negative amount.")

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.expense_id,
            "description": self.description,
            "amount": str(self.amount),
            "paid_by": self.paid_by,
            "date": self.expense_date.isoformat(),
        }


@dataclass(slots=True)
class Group:
    """Collection of members sharing a set of expenses."""

    group_id: str
    name: str
    description: str
    group_date: date
    total_amount: Decimal
    members: List[GroupMember] = field(default_factory=list)
    expenses: List[GroupExpense] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.group_date = parse_date(self.group_date)
        self.total_amount = parse_amount(self.total_amount)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.group_id,
            "name": self.name,
            "description": self.description,
            "date": self.group_date.isoformat(),
            "total_amount": str(self.total_amount),
            "members": [member.as_dict() for member in self.members],
            "expenses": [expense.as_dict() for expense in self.expenses],
        }


def new_group(group_id: str, name: str, description: str = "", today: Optional[date] = None) -> Group:
    """Create an empty group as produced by the "Create Group" dialog."""

    if not name or not name.strip():
        raise ValueError("Group name is required.")
    return Group(
        group_id=group_id,
        name=name.strip(),
        description=description.strip(),
        group_date=today or date.today(),
        total_amount=ZERO,
    )


class SettlementStatus(str, Enum):
    """Classification of a member's net position."""

    CREDITOR = "creditor"
    DEBTOR = "debtor"
    SETTLED = "settled"


@dataclass(slots=True)
class MemberSettlement:
    """Net position of one member: positive balances are owed to them."""

    member: GroupMember
    balance: Decimal
    status: SettlementStatus

    @property
    def amount(self) -> Decimal:
        """Magnitude the member should receive or pay."""

        return abs(self.balance)

    def describe(self, currency_symbol: str = "$") -> str:
        """Sentence shown in the "Who owes whom" summary."""

        rounded = format_currency(self.amount, currency_symbol)
        if self.status is SettlementStatus.CREDITOR:
            return f"Should receive {rounded}"
        if self.status is SettlementStatus.DEBTOR:
            return f"Should pay {rounded}"
        return "All settled"

    def as_dict(self, currency_symbol: str = "$") -> Dict[str, object]:
        return {
            "member_id": self.member.member_id,
            "name": self.member.name,
            "balance": str(self.balance),
            "status": self.status.value,
            "amount": str(self.amount),
            "summary": self.describe(currency_symbol),
        }


def settle_member(member: GroupMember) -> MemberSettlement:
    """Compute ``paid - should_pay`` and classify the member."""

    balance = member.paid - member.should_pay
    if balance > ZERO:
        status = SettlementStatus.CREDITOR
    elif balance < ZERO:
        status = SettlementStatus.DEBTOR
    else:
        status = SettlementStatus.SETTLED
    return MemberSettlement(member=member, balance=balance, status=status)


def per_person_share(total_amount: Decimal, member_count: int) -> Decimal:
    """Even split of the total, zero for a group without members."""

    if member_count <= 0:
        return ZERO
    return parse_amount(total_amount) / member_count


def most_expensive_expense(expenses: Iterable[GroupExpense]) -> Optional[GroupExpense]:
    """Return the largest expense, keeping the first one on ties; ``None`` if empty."""

    largest: Optional[GroupExpense] = None
    for expense in expenses:
        if largest is None or expense.amount > largest.amount:
            largest = expense
    return largest


def share_discrepancy(group: Group) -> Decimal:
    """Difference between the group total and the members' combined shares."""

    return group.total_amount - sum((member.should_pay for member in group.members), ZERO)


@dataclass(slots=True)
class GroupStatistics:
    """Summary figures shown in the group statistics card."""

    total_amount: Decimal
    per_person_share: Decimal
    most_expensive_expense: Optional[GroupExpense]

    def as_dict(self) -> Dict[str, object]:
        largest = self.most_expensive_expense
        return {
            "total_amount": str(self.total_amount),
            "per_person_share": str(self.per_person_share),
            "most_expensive_expense": largest.as_dict() if largest else None,
        }


@dataclass(slots=True)
class GroupSettlement:
    """Settlement result for a whole group."""

    group: Group
    members: List[MemberSettlement]
    statistics: GroupStatistics

    def _with_status(self, status: SettlementStatus) -> List[MemberSettlement]:
        return [settlement for settlement in self.members if settlement.status is status]

    @property
    def creditors(self) -> List[MemberSettlement]:
        return self._with_status(SettlementStatus.CREDITOR)

    @property
    def debtors(self) -> List[MemberSettlement]:
        return self._with_status(SettlementStatus.DEBTOR)

    @property
    def settled(self) -> List[MemberSettlement]:
        return self._with_status(SettlementStatus.SETTLED)

    def as_dict(self, currency_symbol: str = "$") -> Dict[str, object]:
        return {
            "group_id": self.group.group_id,
            "name": self.group.name,
            "members": [settlement.as_dict(currency_symbol) for settlement in self.members],
            "statistics": self.statistics.as_dict(),
            "expense_breakdown": [item.as_dict() for item in expense_breakdown(self.group)],
            "contribution_breakdown": [item.as_dict() for item in contribution_breakdown(self.group)],
        }


def settle_group(group: Group) -> GroupSettlement:
    """Compute every member's net position plus the group statistics."""

    discrepancy = share_discrepancy(group)
    if group.members and discrepancy != ZERO:
        LOGGER.warning(
            "Group %s shares differ from its total by %s", group.group_id, discrepancy
        )
    settlements = [settle_member(member) for member in group.members]
    statistics = GroupStatistics(
        total_amount=group.total_amount,
        per_person_share=per_person_share(group.total_amount, len(group.members)),
        most_expensive_expense=most_expensive_expense(group.expenses),
    )
    LOGGER.debug(
        "Settled group %s: %s members, share %s",
        group.group_id,
        len(settlements),
        statistics.per_person_share,
    )
    return GroupSettlement(group=group, members=settlements, statistics=statistics)


def expense_breakdown(group: Group, palette: Sequence[str] = GROUP_PALETTE) -> List[ChartSlice]:
    """Project each expense to a chart slice labelled by its description."""

    return slices_from_pairs(
        ((expense.description, expense.amount) for expense in group.expenses), palette
    )


def contribution_breakdown(group: Group, palette: Sequence[str] = GROUP_PALETTE) -> List[ChartSlice]:
    """Project each member to a chart slice of the amount they paid."""

    return slices_from_pairs(((member.name, member.paid) for member in group.members), palette)
