"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the operations
the presentation layer is allowed to call:
1. Reads (dashboard metrics, category breakdown, expense list)
2. Mutations (submit, remove, set budget/currency/mode, reset)

DESIGN DECISION: The operations are pure functions from BudgetData to a
new BudgetData. BudgetSession is the thin stateful layer on top that
persists each new value whole, audits it, and turns storage failures
into warnings instead of exceptions.

Nothing in here raises on bad user input: invalid entries are dropped and
invalid settings leave the data unchanged.
"""

from decimal import Decimal
from typing import Annotated, Callable, Iterable, Optional, Union

import structlog
from pydantic import Strict

from src.analytics import get_category_breakdown, get_dashboard_metrics
from src.audit import AuditLogger, configure_logging
from src.catalog import (
    categories_for,
    format_currency,
    is_known_currency,
    resolve_currency,
)
from src.config import StorageSettings, get_settings
from src.ledger import ExpenseLedger, now_ms
from src.models.expense import (
    BudgetData,
    CategorySlice,
    Currency,
    DashboardMetrics,
    Expense,
    ExpenseEntry,
    ExpenseMode,
)
from src.models.session import AnalyticsView, EntryDraft
from src.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    PersistentValue,
    StorageError,
    StorageWriteError,
)
from src.validation import ExpenseEntryValidator, parse_amount


DEFAULT_BUDGET_KEY: str = StorageSettings.model_fields["budget_key"].default
DEFAULT_THEME_KEY: str = StorageSettings.model_fields["theme_key"].default

# Strict so a corrupted flag such as "yes" falls back to the default.
ThemeFlag = Annotated[bool, Strict()]

logger = structlog.get_logger(__name__)


# =============================================================================
# PURE OPERATIONS
# =============================================================================

def reset_all() -> BudgetData:
    """Fresh default data: no budget, no expenses, USD, Personal."""
    return BudgetData()


def _apply_entries(
    data: BudgetData,
    entries: Iterable[ExpenseEntry],
    timestamp: Optional[int],
) -> tuple[BudgetData, ExpenseLedger, list[Expense]]:
    ledger = ExpenseLedger(data.expenses)
    committed = ledger.add(entries, timestamp=timestamp)
    if not committed:
        return data, ledger, committed
    return data.model_copy(update={"expenses": ledger.expenses}), ledger, committed


def submit_expenses(
    data: BudgetData,
    entries: Iterable[ExpenseEntry],
    now: Optional[int] = None,
) -> BudgetData:
    """
    Append the valid staged entries as new expenses.

    Args:
        data: Current budget data
        entries: Staged rows; invalid ones are dropped
        now: Capture time in epoch ms (defaults to the current time)
    """
    updated, _, _ = _apply_entries(data, entries, now)
    return updated


def remove_expense(data: BudgetData, expense_id: str) -> BudgetData:
    """Remove one expense by id. Unknown ids return data unchanged."""
    ledger = ExpenseLedger(data.expenses)
    if not ledger.remove(expense_id):
        return data
    return data.model_copy(update={"expenses": ledger.expenses})


def set_budget(data: BudgetData, amount: Union[Decimal, float, int, str, None]) -> BudgetData:
    """
    Set the monthly budget.

    Blank or unparseable input clears the budget to 0. Negative input is
    ignored and data is returned unchanged.
    """
    value = parse_amount(amount)
    if value is None:
        value = Decimal("0")
    if value < 0:
        logger.info("budget_input_ignored", value=str(amount), reason="negative")
        return data
    return data.model_copy(update={"monthly_budget": value})


def set_currency(data: BudgetData, code: str) -> BudgetData:
    """Select a display currency. Unknown codes leave data unchanged."""
    if not is_known_currency(code):
        logger.info("currency_input_ignored", value=str(code), reason="unknown currency")
        return data
    return data.model_copy(update={"currency": code.strip().upper()})


def set_mode(data: BudgetData, mode: Union[ExpenseMode, str]) -> BudgetData:
    """
    Switch the expense mode.

    Recorded expenses keep their categories; only new entries are affected.
    """
    try:
        new_mode = ExpenseMode(mode)
    except ValueError:
        logger.info("mode_input_ignored", value=str(mode), reason="unknown mode")
        return data
    return data.model_copy(update={"mode": new_mode})


# =============================================================================
# SESSION
# =============================================================================

class BudgetSession:
    """
    One user's working session.

    Owns:
    - the persisted BudgetData (mirrored in memory)
    - the persisted dark-mode flag
    - transient view state (analytics panel, chart type, staged entries)

    CRITICAL: A failed save never rolls back what the user sees. The
    change stays in memory and a warning is queued for the UI, because
    it will be gone after a reload.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        budget_key: str = DEFAULT_BUDGET_KEY,
        theme_key: str = DEFAULT_THEME_KEY,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._audit = audit_logger or AuditLogger()
        self._clock = clock or now_ms
        self._validator = ExpenseEntryValidator()
        self.warnings: list[str] = []

        store.on_load_recovered = self._audit.log_load_recovered
        self._store = store
        self._data: PersistentValue[BudgetData] = PersistentValue(
            store, budget_key, BudgetData(), BudgetData
        )
        self._dark_mode: PersistentValue[bool] = PersistentValue(
            store, theme_key, False, ThemeFlag
        )

        # Never persisted
        self.view = AnalyticsView()
        self.draft = EntryDraft()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def data(self) -> BudgetData:
        return self._data.value

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode.value

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    @property
    def currency(self) -> Currency:
        return resolve_currency(self.data.currency)

    def categories(self) -> tuple[str, ...]:
        """Categories offered for new entries in the current mode."""
        return categories_for(self.data.mode)

    def metrics(self) -> DashboardMetrics:
        return get_dashboard_metrics(self.data)

    def breakdown(self) -> list[CategorySlice]:
        return get_category_breakdown(self.data)

    def expenses_by_recency(self) -> list[Expense]:
        return ExpenseLedger(self.data.expenses).list_by_recency()

    def format(self, amount: Union[Decimal, float, int]) -> str:
        """Format an amount in the session's display currency."""
        return format_currency(amount, self.data.currency)

    def pop_warnings(self) -> list[str]:
        """Return and clear queued user-facing warnings."""
        warnings, self.warnings = self.warnings, []
        return warnings

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def submit(self, entries: Iterable[ExpenseEntry]) -> list[Expense]:
        """
        Commit a batch of staged entries.

        Returns:
            The expenses actually added (invalid entries are skipped)
        """
        entries = list(entries)
        updated, ledger, committed = _apply_entries(self.data, entries, self._clock())

        rejected = [r for r in ledger.last_validation if not r.is_valid]
        if rejected:
            self._audit.log_entries_rejected(
                len(rejected),
                [issue.message for r in rejected for issue in r.issues],
            )
        if not committed:
            return []

        self._commit(updated)
        self._audit.log_expenses_added(
            [e.id for e in committed],
            str(sum((e.amount for e in committed), Decimal("0"))),
            rejected=len(rejected),
        )
        return committed

    def submit_draft(self) -> str:
        """
        Submit the staged form rows.

        The draft is reset only when at least one row was committed, so a
        fully invalid form keeps what the user typed.

        Returns:
            A short message describing what happened
        """
        rows = list(self.draft.rows)
        committed = self.submit(rows)
        if committed:
            self.draft.reset()
        return self._validator.get_user_friendly_summary(
            [self._validator.validate(row) for row in rows]
        )

    def remove(self, expense_id: str) -> bool:
        updated = remove_expense(self.data, expense_id)
        found = updated is not self.data
        if found:
            self._commit(updated)
        self._audit.log_expense_removed(expense_id, found)
        return found

    def set_budget(self, amount: Union[Decimal, float, int, str, None]) -> bool:
        previous = self.data.monthly_budget
        updated = set_budget(self.data, amount)
        if updated is self.data:
            self._audit.log_input_ignored("budget", str(amount), "budget cannot be negative")
            return False
        self._commit(updated)
        self._audit.log_budget_set(str(previous), str(updated.monthly_budget))
        return True

    def set_currency(self, code: str) -> bool:
        previous = self.data.currency
        updated = set_currency(self.data, code)
        if updated is self.data:
            self._audit.log_input_ignored("currency", str(code), "unknown currency code")
            return False
        self._commit(updated)
        self._audit.log_currency_changed(previous, updated.currency)
        return True

    def set_mode(self, mode: Union[ExpenseMode, str]) -> bool:
        """Switch mode and clear the staged entry form."""
        previous = self.data.mode
        updated = set_mode(self.data, mode)
        if updated is self.data:
            self._audit.log_input_ignored("mode", str(mode), "unknown expense mode")
            return False
        self.draft.reset()
        self._commit(updated)
        self._audit.log_mode_changed(previous.value, updated.mode.value)
        return True

    def toggle_dark_mode(self) -> bool:
        dark_mode = not self.dark_mode
        try:
            self._dark_mode.set(dark_mode)
        except StorageWriteError as e:
            self._save_failed(self._dark_mode.key, e)
        self._audit.log_theme_changed(dark_mode)
        return dark_mode

    def reset_all(self) -> BudgetData:
        """
        Replace everything with defaults. Call only after the user confirmed.
        """
        expense_count = len(self.data.expenses)
        fresh = reset_all()
        self.draft.reset()
        self._commit(fresh)
        self._audit.log_data_reset(expense_count)
        return fresh

    def _commit(self, data: BudgetData) -> bool:
        try:
            self._data.set(data)
        except StorageWriteError as e:
            self._save_failed(self._data.key, e)
            return False
        return True

    def _save_failed(self, key: str, error: StorageError) -> None:
        self._audit.log_save_failed(key, str(error))
        self.warnings.append(
            "Your change could not be saved and will be lost when the page "
            f"reloads ({error})."
        )


def create_app_components(
    use_storage: bool = True,
) -> tuple[BudgetSession, KeyValueStoreInterface]:
    """
    Factory function to create the application session.

    Args:
        use_storage: Whether to persist to the configured data directory.
                    Set to False for an in-memory session.

    Returns:
        (session, store)
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)
    storage_settings = settings.storage

    store: KeyValueStoreInterface
    if use_storage:
        try:
            store = JsonFileStore(
                storage_settings.data_dir,
                max_bytes=storage_settings.max_bytes,
            )
        except StorageError as e:
            # Data directory unusable - continue without persistence
            logger.warning("storage_unavailable", error=str(e))
            store = InMemoryStore(max_bytes=storage_settings.max_bytes)
    else:
        store = InMemoryStore(max_bytes=storage_settings.max_bytes)

    session = BudgetSession(
        store,
        budget_key=storage_settings.budget_key,
        theme_key=storage_settings.theme_key,
    )
    if isinstance(store, InMemoryStore) and use_storage:
        session.warnings.append(
            "Local storage is unavailable; your data will not be kept after this session."
        )
    return session, store
