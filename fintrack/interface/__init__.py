"""Mini README: Interactive interfaces (web/CLI) for fintrack.

Exports the FastAPI application factory that powers the local dashboard.
"""

from .web_app import create_application

__all__ = ["create_application"]
