"""Mini README: Group expense splitting for fintrack.

The ``settlement`` module models groups of members sharing costs and computes
who should pay or receive money, along with the statistics and chart data
shown in a group's detail view.
"""

from .settlement import (
    Group,
    GroupExpense,
    GroupMember,
    GroupSettlement,
    GroupStatistics,
    MemberSettlement,
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

__all__ = [
    "Group",
    "GroupExpense",
    "GroupMember",
    "GroupSettlement",
    "GroupStatistics",
    "MemberSettlement",
    "SettlementStatus",
    "contribution_breakdown",
    "expense_breakdown",
    "most_expensive_expense",
    "new_group",
    "per_person_share",
    "settle_group",
    "settle_member",
    "share_discrepancy",
]
