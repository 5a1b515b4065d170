"""
Audit Logger

DESIGN DECISION: Every significant calculator action is logged.
This provides:
1. Traceability of what was computed in a session
2. Debugging capability when a result looks wrong

The audit logger:
- Is synchronous, like every calculator transition
- Gracefully handles failures (a broken sink never breaks the calculator)
- Tags events with the session ID so one view's events can be grouped
"""

import logging
from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from finance_calculator.models.audit import AuditEvent, AuditEventBuilder


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
    """Route structlog output to stderr at the given stdlib level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


AuditSink = Callable[[AuditEvent], None]


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (e.g. an in-memory list in tests)
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Callable receiving every event after it is logged.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if one is configured.

        Returns True if the sink accepted the event (or no sink is configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                self._sink(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_calculation(self, expression: str, session_id: Optional[UUID] = None) -> None:
        """Log a completed calculation (one new history entry)."""
        self.log(AuditEventBuilder.calculation_completed(expression, session_id))

    def log_arithmetic_error(
        self,
        command: str,
        display: str,
        session_id: Optional[UUID] = None,
    ) -> None:
        """Log a transition into the error state."""
        self.log(AuditEventBuilder.arithmetic_error(command, display, session_id))

    def log_memory_updated(
        self,
        command: str,
        value: float,
        memory: float,
        session_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.memory_updated(command, value, memory, session_id))

    def log_memory_cleared(self, session_id: Optional[UUID] = None) -> None:
        self.log(AuditEventBuilder.memory_cleared(session_id))

    def log_history_cleared(self, entries: int, session_id: Optional[UUID] = None) -> None:
        self.log(AuditEventBuilder.history_cleared(entries, session_id))

    def log_formula(
        self,
        mode: str,
        inputs: dict,
        result: dict,
        session_id: Optional[UUID] = None,
    ) -> None:
        """Log a financial calculator recomputation."""
        self.log(AuditEventBuilder.formula_evaluated(mode, inputs, result, session_id))

    def log_listener_attached(self, session_id: UUID) -> None:
        self.log(AuditEventBuilder.listener_attached(session_id))

    def log_listener_detached(self, session_id: UUID) -> None:
        self.log(AuditEventBuilder.listener_detached(session_id))

    def log_notification_failed(
        self,
        message: str,
        error_message: str,
        session_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.notification_failed(message, error_message, session_id))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        session_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(error_type, error_message, details, session_id))


def create_session_id() -> UUID:
    """
    Create a new ID for one mounted calculator view.

    Every audit event the view produces carries it.
    """
    return uuid4()
