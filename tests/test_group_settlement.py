"""Mini README: Tests covering group settlement and statistics.

These tests pin member classification (creditor, debtor, settled), the even
per-person share including the empty-group guard, the most expensive item
tie-break, and the chart projections used by the group detail view.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from fintrack.formatting import round_currency
from fintrack.groups import (
    Group,
    GroupExpense,
    GroupMember,
    SettlementStatus,
    contribution_breakdown,
    expense_breakdown,
    most_expensive_expense,
    new_group,
    per_person_share,
    settle_group,
    settle_member,
    share_discrepancy,
)


def _hiking_trip() -> Group:
    return Group(
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
    )


def test_settlement_classifies_creditors_and_debtors() -> None:
    """Overpayers should receive money and underpayers should pay."""

    result = settle_group(_hiking_trip())
    john, jane, robert = result.members

    assert john.status is SettlementStatus.CREDITOR
    assert round_currency(john.amount) == Decimal("54.78")
    assert jane.status is SettlementStatus.CREDITOR
    assert round_currency(jane.amount) == Decimal("4.78")
    assert robert.status is SettlementStatus.DEBTOR
    assert round_currency(robert.amount) == Decimal("59.57")
    assert robert.balance == Decimal("-59.57")
    assert [item.member.name for item in result.creditors] == ["John Doe", "Jane Smith"]
    assert [item.member.name for item in result.debtors] == ["Robert Johnson"]


def test_settlement_descriptions_match_summary_text() -> None:
    result = settle_group(_hiking_trip())

    assert [item.describe() for item in result.members] == [
        "Should receive $54.78",
        "Should receive $4.78",
        "Should pay $59.57",
    ]


def test_everyone_settled_when_paid_equals_share() -> None:
    group = Group(
        group_id="9",
        name="Dinner",
        description="",
        group_date="2023-07-01",
        total_amount="90",
        members=[
            GroupMember("1", "A", paid="30", should_pay="30"),
            GroupMember("2", "B", paid="30.00", should_pay="30"),
            GroupMember("3", "C", paid="30", should_pay="30"),
        ],
    )

    result = settle_group(group)

    assert all(item.status is SettlementStatus.SETTLED for item in result.members)
    assert result.creditors == []
    assert result.debtors == []
    assert settle_member(group.members[0]).describe() == "All settled"


def test_per_person_share_divides_total_and_guards_empty_groups() -> None:
    share = per_person_share(Decimal("435.65"), 3)

    assert share.quantize(Decimal("0.0000001")) == Decimal("145.2166667")
    assert round_currency(share) == Decimal("145.22")
    assert per_person_share(Decimal("435.65"), 0) == Decimal("0")


def test_empty_group_statistics_use_defined_zero_and_sentinel() -> None:
    group = new_group("3", "Road Trip", "Summer drive", today=date(2023, 8, 1))

    stats = settle_group(group).statistics

    assert stats.total_amount == Decimal("0")
    assert stats.per_person_share == Decimal("0")
    assert stats.most_expensive_expense is None
    assert stats.as_dict()["most_expensive_expense"] is None


def test_most_expensive_expense_prefers_first_on_ties() -> None:
    expenses = _hiking_trip().expenses

    assert most_expensive_expense(expenses).description == "Transportation"
    assert most_expensive_expense([]) is None

    tied = [
        GroupExpense("1", "First", "60", "A", date(2023, 6, 1)),
        GroupExpense("2", "Second", "60", "B", date(2023, 6, 2)),
    ]
    assert most_expensive_expense(tied).expense_id == "1"


def test_share_discrepancy_is_reported_not_enforced(caplog) -> None:
    """Shares that do not add up still settle, with a warning logged."""

    group = _hiking_trip()
    assert share_discrepancy(group) == Decimal("-0.01")

    with caplog.at_level(logging.WARNING, logger="fintrack.groups.settlement"):
        result = settle_group(group)

    assert len(result.members) == 3
    assert "differ from its total" in caplog.text


def test_breakdowns_project_expenses_and_contributions() -> None:
    group = _hiking_trip()

    expense_slices = expense_breakdown(group)
    member_slices = contribution_breakdown(group)

    assert [(item.label, item.value) for item in expense_slices][:2] == [
        ("Food supplies", Decimal("120")),
        ("Transportation", Decimal("150")),
    ]
    assert [item.color for item in expense_slices] == ["#9b87f5", "#6D28D9", "#22c55e", "#ea384c"]
    assert [item.value for item in member_slices] == [Decimal("200"), Decimal("150"), Decimal("85.65")]


def test_new_group_requires_a_name() -> None:
    with pytest.raises(ValueError):
        new_group("3", "   ")


def test_negative_group_expense_is_rejected() -> None:
    with pytest.raises(ValueError):
        GroupExpense("1", "Refund", "-10", "A", date(2023, 6, 1))


def test_settlement_export_uses_configured_currency_symbol() -> None:
    exported = settle_group(_hiking_trip()).as_dict("€")

    assert [member["summary"] for member in exported["members"]] == [
        "Should receive €54.78",
        "Should receive €4.78",
        "Should pay €59.57",
    ]
