"""
Expense Ledger

The ordered collection of recorded expenses. This is the only place
Expense records are created, and the only place the "Other" sentinel is
translated, so nothing downstream ever has to special-case it.
"""

import time
from typing import Callable, Iterable, Iterator, Optional

import structlog

from src.models.expense import Expense, ExpenseEntry, new_expense_id
from src.validation import EntryValidation, ExpenseEntryValidator


logger = structlog.get_logger(__name__)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class ExpenseLedger:
    """
    In-memory, insertion-ordered list of expenses.

    Args:
        expenses: Existing records, kept in the given order
        clock: Returns the capture time in epoch milliseconds
        validator: Validates staged entries before they are committed
    """

    def __init__(
        self,
        expenses: Iterable[Expense] = (),
        clock: Optional[Callable[[], int]] = None,
        validator: Optional[ExpenseEntryValidator] = None,
    ):
        self._expenses: list[Expense] = list(expenses)
        self._clock = clock or now_ms
        self._validator = validator or ExpenseEntryValidator()
        self.last_validation: list[EntryValidation] = []

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot in insertion order."""
        return tuple(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    def __contains__(self, expense_id: object) -> bool:
        return any(e.id == expense_id for e in self._expenses)

    def add(
        self,
        entries: Iterable[ExpenseEntry],
        timestamp: Optional[int] = None,
    ) -> list[Expense]:
        """
        Commit a batch of staged entries.

        Invalid entries are dropped without error. Valid ones share one
        capture timestamp and are appended in submission order.

        Returns:
            The expenses that were committed (possibly empty)
        """
        results = [self._validator.validate(entry) for entry in entries]
        self.last_validation = results

        valid = [r for r in results if r.is_valid]
        rejected = len(results) - len(valid)
        if rejected:
            logger.debug(
                "ledger_entries_dropped",
                dropped=rejected,
                issues=[i.message for r in results for i in r.issues],
            )
        if not valid:
            return []

        captured_at = self._clock() if timestamp is None else timestamp
        taken = {e.id for e in self._expenses}
        committed = []
        for result in valid:
            expense_id = new_expense_id()
            while expense_id in taken:
                expense_id = new_expense_id()
            taken.add(expense_id)
            committed.append(Expense(
                id=expense_id,
                category=result.category,
                amount=result.amount,
                timestamp=captured_at,
            ))

        self._expenses.extend(committed)
        return committed

    def remove(self, expense_id: str) -> bool:
        """
        Remove the expense with this id.

        Returns:
            True if a record was removed, False if no record matched
        """
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                del self._expenses[index]
                return True
        return False

    def list_by_recency(self) -> list[Expense]:
        """Most recent first; equal timestamps keep insertion order."""
        return sorted(self._expenses, key=lambda e: e.timestamp, reverse=True)

    def clear(self) -> None:
        self._expenses.clear()
