"""Mini README: Core package initializer for fintrack.

fintrack tracks personal income and expenses and splits shared group costs.
The computational core lives in ``fintrack.ledger`` and ``fintrack.groups``;
``fintrack.interface`` wraps it in a small local dashboard. Only the logger
factory is re-exported here so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
