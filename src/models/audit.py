"""
Audit Models for Expense Tracker

Every change to the budget data is logged for audit purposes.
This provides:
1. Traceability of what the user did and when
2. Debugging information when storage misbehaves
3. A record of input that was dropped instead of saved

DESIGN DECISION: Audit events describe what happened; they never carry
enough data to rebuild state. BudgetData in storage is the only source
of truth.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger
    EXPENSES_ADDED = "expenses_added"
    ENTRIES_REJECTED = "entries_rejected"
    EXPENSE_REMOVED = "expense_removed"

    # Settings on the aggregate root
    BUDGET_SET = "budget_set"
    CURRENCY_CHANGED = "currency_changed"
    MODE_CHANGED = "mode_changed"
    THEME_CHANGED = "theme_changed"
    DATA_RESET = "data_reset"
    INPUT_IGNORED = "input_ignored"

    # Persistence
    LOAD_RECOVERED = "load_recovered"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'storage')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expenses_added(expense_ids, total)
        event = AuditEventBuilder.save_failed(key, error_message)
    """

    @staticmethod
    def expenses_added(
        expense_ids: list[str],
        total_amount: str,
        rejected: int = 0,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_ADDED,
            entity_type="expense",
            description=f"{len(expense_ids)} expense(s) added totalling {total_amount}",
            details={
                "expense_ids": expense_ids,
                "total_amount": total_amount,
                "rejected_entries": rejected,
            },
            is_user_action=True,
        )

    @staticmethod
    def entries_rejected(count: int, reasons: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_REJECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            description=f"{count} staged entr{'y' if count == 1 else 'ies'} dropped",
            details={"reasons": reasons},
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense removed" if found else "Remove ignored: expense not found"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def budget_set(previous: str, current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            description=f"Monthly budget changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def currency_changed(previous: str, current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_CHANGED,
            entity_type="budget",
            description=f"Currency changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def mode_changed(previous: str, current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MODE_CHANGED,
            entity_type="budget",
            description=f"Expense mode changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def theme_changed(dark_mode: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_CHANGED,
            entity_type="preferences",
            description=f"Dark mode {'enabled' if dark_mode else 'disabled'}",
            details={"dark_mode": dark_mode},
            is_user_action=True,
        )

    @staticmethod
    def data_reset(expense_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_RESET,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            description=f"All data cleared ({expense_count} expenses discarded)",
            details={"expense_count": expense_count},
            is_user_action=True,
        )

    @staticmethod
    def input_ignored(field: str, value: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_IGNORED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            description=f"Ignored {field} input: {reason}",
            details={"field": field, "value": value, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def load_recovered(key: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_RECOVERED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Stored value for '{key}' unusable, defaults loaded",
            error_message=reason,
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Could not save '{key}'; changes will be lost on reload",
            error_message=error_message,
        )
