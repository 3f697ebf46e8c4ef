"""Mini README: Administrator tooling for fintrack.

Exposes the user directory used by the admin pages to list, filter and edit
accounts, and the platform analytics behind the admin reports page.
"""

from .analytics import AdminReport, AdminTimeframe, build_admin_report
from .users import AccountStatus, UserAccount, UserDirectory

__all__ = [
    "AccountStatus",
    "AdminReport",
    "AdminTimeframe",
    "UserAccount",
    "UserDirectory",
    "build_admin_report",
]
