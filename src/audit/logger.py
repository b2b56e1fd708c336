"""
Audit Logger

DESIGN DECISION: Every change to the budget data is logged.
This provides:
1. Traceability of user actions
2. Debugging capability when storage fails
3. A record of input that was dropped rather than saved

The audit logger:
- Is synchronous (the whole app is)
- Never raises: a logging problem must not undo a user action
- Writes structured JSON lines through structlog
"""

import logging

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging and structlog for local structured logs.

    Safe to call more than once; the last level wins.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Events are logged locally and also kept in a bounded in-memory
    history so the UI can show recent activity.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (ValueError, TypeError, OSError) as e:
            logging.getLogger(__name__).error("audit log write failed: %s", e)

    def log_expenses_added(
        self,
        expense_ids: list[str],
        total_amount: str,
        rejected: int = 0,
    ) -> None:
        self.log(AuditEventBuilder.expenses_added(expense_ids, total_amount, rejected))

    def log_entries_rejected(self, count: int, reasons: list[str]) -> None:
        self.log(AuditEventBuilder.entries_rejected(count, reasons))

    def log_expense_removed(self, expense_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id, found))

    def log_budget_set(self, previous: str, current: str) -> None:
        self.log(AuditEventBuilder.budget_set(previous, current))

    def log_currency_changed(self, previous: str, current: str) -> None:
        self.log(AuditEventBuilder.currency_changed(previous, current))

    def log_mode_changed(self, previous: str, current: str) -> None:
        self.log(AuditEventBuilder.mode_changed(previous, current))

    def log_theme_changed(self, dark_mode: bool) -> None:
        self.log(AuditEventBuilder.theme_changed(dark_mode))

    def log_data_reset(self, expense_count: int) -> None:
        self.log(AuditEventBuilder.data_reset(expense_count))

    def log_input_ignored(self, field: str, value: str, reason: str) -> None:
        self.log(AuditEventBuilder.input_ignored(field, value, reason))

    def log_load_recovered(self, key: str, reason: str) -> None:
        self.log(AuditEventBuilder.load_recovered(key, reason))

    def log_save_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(key, error_message))

