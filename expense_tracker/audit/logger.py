"""
Audit Logger

DESIGN DECISION: Every store mutation and every degraded path is logged.
This provides:
1. Traceability of what the user changed
2. Debugging capability when storage misbehaves
3. A visible record of inputs that were rejected

The audit logger:
- Writes structured JSON lines through structlog
- Never raises (a logging failure must not break a user action)
"""

import logging
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
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


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(name)
        self._events_logged = 0

    @property
    def events_logged(self) -> int:
        return self._events_logged

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event at its severity.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        self._events_logged += 1
        return True

    def log_expense_added(self, expense_id: str, category: str, amount: str) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, category, amount))

    def log_expense_updated(self, expense_id: str, fields: list[str]) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, fields))

    def log_expense_deleted(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_expense_not_found(self, expense_id: str, operation: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id, operation))

    def log_expenses_loaded(self, count: int, source: str) -> None:
        self.log(AuditEventBuilder.expenses_loaded(count, source))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(issues))

    def log_calculation_failed(self, expression: str, error_message: str) -> None:
        self.log(AuditEventBuilder.calculation_failed(expression, error_message))

    def log_storage_read_failed(self, source: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_read_failed(source, error_message))

    def log_storage_write_failed(self, source: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_write_failed(source, error_message))

    def log_record_skipped(self, source: str, index: int, error_message: str) -> None:
        self.log(AuditEventBuilder.record_skipped(source, index, error_message))
