"""Mini README: FastAPI-powered local dashboard for fintrack.

Structure:
    * create_application - application factory wiring routes and templates.
    * Session gate - protected routes answer 401 until the session store
      reports a login, and admin routes answer 403 for non-admin users.

The routes mirror the dashboard pages: overview, income, expenses, groups,
reports, settings and admin. Each handler fetches data from a repository,
runs the pure ledger or settlement functions and returns plain JSON (or the
rendered dashboard page). Formatting of amounts happens only here.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ..admin import AdminTimeframe, UserDirectory, build_admin_report
from ..configuration import FintrackSettings, get_settings
from ..errors import FormValidationError
from ..formatting import format_currency, format_display_date, format_percentage
from ..groups import new_group, settle_group
from ..ledger import (
    EntryKind,
    TransactionForm,
    category_breakdown,
    filter_entries,
    summarise_balances,
)
from ..loading import load_after_delay
from ..logging_utils import get_logger
from ..reports import ReportPeriod, build_report, default_report_range, export_report_csv
from ..repositories import (
    GroupRepository,
    InMemoryGroupRepository,
    InMemoryLedgerRepository,
    LedgerRepository,
)
from ..session import AuthState, SessionStore, UserProfile, change_password

LOGGER = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: str
    email: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class GroupCreate(BaseModel):
    name: str
    description: str = ""


class UserCreate(BaseModel):
    name: str
    email: str
    role: str = "user"


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None


def _form_error(error: FormValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=error.as_notification())


def create_application(
    *,
    settings: Optional[FintrackSettings] = None,
    ledger: Optional[LedgerRepository] = None,
    groups: Optional[GroupRepository] = None,
    users: Optional[UserDirectory] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    ledger = ledger or InMemoryLedgerRepository()
    groups = groups or InMemoryGroupRepository()
    users = users or UserDirectory()
    session_store = session_store or SessionStore(settings.session_path)

    app = FastAPI(title="fintrack", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["currency"] = lambda amount: format_currency(amount, settings.currency_symbol)
    templates.env.filters["display_date"] = format_display_date
    templates.env.filters["percentage"] = format_percentage
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    def current_state() -> AuthState:
        return session_store.load()

    def require_login(state: AuthState = Depends(current_state)) -> AuthState:
        if not state.authenticated:
            raise HTTPException(status_code=401, detail="Login required.")
        return state

    def require_admin(state: AuthState = Depends(require_login)) -> AuthState:
        if not state.is_admin:
            raise HTTPException(status_code=403, detail="Administrator access required.")
        return state

    @app.get("/", response_class=HTMLResponse)
    async def landing(request: Request, state: AuthState = Depends(current_state)) -> Response:
        """Send signed-in users to the dashboard, everyone else to the landing page."""

        if state.authenticated:
            return RedirectResponse("/dashboard", status_code=303)
        return templates.TemplateResponse(request, "index.html", {})

    @app.post("/login")
    async def login(payload: LoginRequest) -> JSONResponse:
        """Mark the session as signed in for the given email."""

        if not payload.email.strip() or not payload.password:
            raise _form_error(FormValidationError())
        known = {account.email: account for account in users.list_accounts()}
        account = known.get(payload.email.strip())
        if account is not None:
            profile = UserProfile(name=account.name, email=account.email, role=account.role)
        else:
            fallback_name = payload.email.split("@")[0]
            profile = UserProfile(name=payload.name or fallback_name, email=payload.email.strip())
        state = session_store.login(profile)
        return JSONResponse({"authenticated": True, "user": state.display_user.as_dict()})

    @app.post("/logout")
    async def logout() -> JSONResponse:
        session_store.logout()
        return JSONResponse(
            {"title": "Logged out", "description": "You have been logged out successfully."}
        )

    @app.get("/dashboard", response_class=HTMLResponse)
    async def dashboard(request: Request, state: AuthState = Depends(require_login)) -> HTMLResponse:
        """Render balance cards, category charts and recent transactions."""

        entries = ledger.list_entries()
        summary = summarise_balances(entries)
        LOGGER.debug(
            "Dashboard totals -> income: %s expenses: %s", summary.total_income, summary.total_expenses
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "user": state.display_user,
                "summary": summary,
                "income_slices": category_breakdown(entries, kind=EntryKind.INCOME),
                "expense_slices": category_breakdown(entries, kind=EntryKind.EXPENSE),
                "transactions": entries[:10],
            },
        )

    @app.get("/api/summary")
    async def summary(state: AuthState = Depends(require_login)) -> JSONResponse:
        return JSONResponse(summarise_balances(ledger.list_entries()).as_dict())

    @app.get("/api/transactions")
    async def transactions(
        kind: str = Query("all"), state: AuthState = Depends(require_login)
    ) -> JSONResponse:
        """Recent transactions with the All/Income/Expenses toggle."""

        try:
            entries = ledger.list_entries(kind)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"entries": [entry.as_dict() for entry in entries]})

    def _filtered(kind: EntryKind, on: Optional[date], category: Optional[str]) -> JSONResponse:
        result = filter_entries(ledger.list_entries(kind), date_filter=on, category_filter=category)
        payload = result.as_dict()
        payload["formatted_total"] = format_currency(result.total, settings.currency_symbol)
        payload["categories"] = list(kind.categories)
        return JSONResponse(payload)

    @app.get("/api/income")
    async def income(
        on: Optional[date] = Query(None, alias="date"),
        category: Optional[str] = Query(None),
        state: AuthState = Depends(require_login),
    ) -> JSONResponse:
        return _filtered(EntryKind.INCOME, on, category)

    @app.get("/api/expenses")
    async def expenses(
        on: Optional[date] = Query(None, alias="date"),
        category: Optional[str] = Query(None),
        state: AuthState = Depends(require_login),
    ) -> JSONResponse:
        return _filtered(EntryKind.EXPENSE, on, category)

    @app.get("/api/charts/{kind}")
    async def category_chart(kind: str, state: AuthState = Depends(require_login)) -> JSONResponse:
        """Category chart data, delivered after the simulated fetch delay."""

        try:
            entry_kind = EntryKind.from_str(kind)
        except ValueError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        slices = await load_after_delay(
            settings.simulated_delay_seconds,
            lambda: category_breakdown(ledger.list_entries(entry_kind), kind=entry_kind),
        )
        return JSONResponse({"kind": entry_kind.value, "slices": [item.as_dict() for item in slices]})

    @app.post("/api/transactions")
    async def add_transaction(
        payload: Dict[str, Any] = Body(...), state: AuthState = Depends(require_login)
    ) -> JSONResponse:
        """Validate and record a transaction from the "Add Transaction" form."""

        try:
            form = TransactionForm.submit(payload)
        except FormValidationError as error:
            raise _form_error(error) from error
        entry = ledger.add_entry(form.to_entry(ledger.next_id()))
        amount = format_currency(entry.amount, settings.currency_symbol)
        return JSONResponse(
            {
                "entry": entry.as_dict(),
                "notification": {
                    "title": "Transaction Added",
                    "description": f"Your {entry.kind.value} of {amount} has been added successfully.",
                },
            },
            status_code=201,
        )

    @app.get("/api/groups")
    async def list_groups(state: AuthState = Depends(require_login)) -> JSONResponse:
        return JSONResponse({"groups": [group.as_dict() for group in groups.list_groups()]})

    @app.post("/api/groups")
    async def create_group(payload: GroupCreate, state: AuthState = Depends(require_login)) -> JSONResponse:
        try:
            group = new_group(groups.next_id(), payload.name, payload.description)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        groups.add_group(group)
        return JSONResponse(group.as_dict(), status_code=201)

    @app.get("/api/groups/{group_id}/settlement")
    async def group_settlement(group_id: str, state: AuthState = Depends(require_login)) -> JSONResponse:
        """Who owes whom plus the group statistics and chart data."""

        try:
            group = groups.get_group(group_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        settlement = settle_group(group)
        LOGGER.info(
            "Settlement for group %s: %s creditors, %s debtors",
            group_id,
            len(settlement.creditors),
            len(settlement.debtors),
        )
        return JSONResponse(settlement.as_dict(settings.currency_symbol))

    def _report_from_query(start: Optional[date], end: Optional[date], period: str):
        default_start, default_end = default_report_range(date.today())
        try:
            return build_report(
                ledger.list_entries(),
                start or default_start,
                end or default_end,
                ReportPeriod(period),
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @app.get("/api/reports")
    async def reports(
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        period: str = Query(ReportPeriod.MONTHLY.value),
        state: AuthState = Depends(require_login),
    ) -> JSONResponse:
        return JSONResponse(_report_from_query(start, end, period).as_dict())

    @app.get("/api/reports/export")
    async def export_report(
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        period: str = Query(ReportPeriod.MONTHLY.value),
        state: AuthState = Depends(require_login),
    ) -> Response:
        report = _report_from_query(start, end, period)
        return Response(
            export_report_csv(report),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="report.csv"'},
        )

    @app.get("/api/settings/profile")
    async def read_profile(state: AuthState = Depends(require_login)) -> JSONResponse:
        return JSONResponse(state.display_user.as_dict())

    @app.put("/api/settings/profile")
    async def update_profile(payload: ProfileUpdate, state: AuthState = Depends(require_login)) -> JSONResponse:
        try:
            updated = session_store.update_profile(payload.name, payload.email)
        except FormValidationError as error:
            raise _form_error(error) from error
        return JSONResponse(
            {
                "user": updated.display_user.as_dict(),
                "notification": {
                    "title": "Profile Updated",
                    "description": "Your profile information has been updated successfully.",
                },
            }
        )

    @app.post("/api/settings/password")
    async def update_password(payload: PasswordChange, state: AuthState = Depends(require_login)) -> JSONResponse:
        try:
            change_password(payload.current_password, payload.new_password, payload.confirm_password)
        except FormValidationError as error:
            raise _form_error(error) from error
        return JSONResponse(
            {"title": "Password Updated", "description": "Your password has been updated successfully."}
        )

    @app.get("/api/admin/users")
    async def admin_users(
        search: str = Query(""),
        role: Optional[str] = Query(None),
        status: Optional[str] = Query(None),
        state: AuthState = Depends(require_admin),
    ) -> JSONResponse:
        accounts = users.search(search, role=role, status=status)
        return JSONResponse({"users": [account.as_dict() for account in accounts]})

    @app.get("/api/admin/reports")
    async def admin_reports(
        timeframe: str = Query(AdminTimeframe.MONTH.value),
        as_of: Optional[date] = Query(None),
        state: AuthState = Depends(require_admin),
    ) -> JSONResponse:
        """User and transaction analytics for the selected timeframe."""

        try:
            selected = AdminTimeframe(timeframe)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=f"Unknown timeframe: {timeframe}") from error
        report = build_admin_report(
            users.list_accounts(), ledger.list_entries(), selected, today=as_of or date.today()
        )
        return JSONResponse(report.as_dict())

    @app.post("/api/admin/users")
    async def admin_create_user(payload: UserCreate, state: AuthState = Depends(require_admin)) -> JSONResponse:
        try:
            account = users.create(payload.name, payload.email, role=payload.role)
        except FormValidationError as error:
            raise _form_error(error) from error
        return JSONResponse(account.as_dict(), status_code=201)

    @app.put("/api/admin/users/{user_id}")
    async def admin_update_user(
        user_id: str, payload: UserUpdate, state: AuthState = Depends(require_admin)
    ) -> JSONResponse:
        try:
            account = users.update(user_id, **payload.model_dump())
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except FormValidationError as error:
            raise _form_error(error) from error
        return JSONResponse(account.as_dict())

    @app.delete("/api/admin/users/{user_id}")
    async def admin_delete_user(user_id: str, state: AuthState = Depends(require_admin)) -> JSONResponse:
        try:
            account = users.delete(user_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse({"deleted": account.user_id})

    return app
