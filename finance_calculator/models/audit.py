"""
Audit Models for Finance Calculator

Significant calculator actions are logged as structured events.
This provides:
1. A trace of what the user computed in a session
2. Debugging information when a result looks wrong
3. A single place that decides what a "notable" action is

DESIGN DECISION: Events are append-only records. The engine never
reads them back; they exist only for the log.
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
    # Basic calculator
    CALCULATION_COMPLETED = "calculation_completed"
    ARITHMETIC_ERROR = "arithmetic_error"
    MEMORY_UPDATED = "memory_updated"
    MEMORY_CLEARED = "memory_cleared"
    HISTORY_CLEARED = "history_cleared"

    # Financial calculators
    FORMULA_EVALUATED = "formula_evaluated"

    # View lifecycle
    LISTENER_ATTACHED = "listener_attached"
    LISTENER_DETACHED = "listener_detached"

    # System events
    NOTIFICATION_FAILED = "notification_failed"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
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

    # Correlation - all events of one calculator view share this
    session_id: Optional[UUID] = Field(
        default=None,
        description="ID of the calculator session that produced the event"
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
            "session_id": str(self.session_id) if self.session_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.calculation_completed("7 × 2 = 14", session_id)
        event = AuditEventBuilder.arithmetic_error("division_by_zero", session_id)
    """

    @staticmethod
    def calculation_completed(
        expression: str,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CALCULATION_COMPLETED,
            session_id=session_id,
            description=f"Calculated {expression}",
            details={"expression": expression},
            is_user_action=True,
        )

    @staticmethod
    def arithmetic_error(
        command: str,
        display: str,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ARITHMETIC_ERROR,
            severity=AuditSeverity.WARNING,
            session_id=session_id,
            description=f"Invalid operation on {command}",
            details={"command": command, "display": display},
            is_user_action=True,
        )

    @staticmethod
    def memory_updated(
        command: str,
        value: float,
        memory: float,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MEMORY_UPDATED,
            session_id=session_id,
            description=f"Memory {command}: {value}",
            details={"command": command, "value": value, "memory": memory},
            is_user_action=True,
        )

    @staticmethod
    def memory_cleared(session_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MEMORY_CLEARED,
            session_id=session_id,
            description="Memory cleared",
            is_user_action=True,
        )

    @staticmethod
    def history_cleared(
        entries: int,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_CLEARED,
            session_id=session_id,
            description=f"History cleared ({entries} entries)",
            details={"entries": entries},
            is_user_action=True,
        )

    @staticmethod
    def formula_evaluated(
        mode: str,
        inputs: dict,
        result: dict,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORMULA_EVALUATED,
            severity=AuditSeverity.DEBUG,
            session_id=session_id,
            description=f"{mode} calculator recomputed",
            details={"mode": mode, "inputs": inputs, "result": result},
        )

    @staticmethod
    def listener_attached(session_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LISTENER_ATTACHED,
            severity=AuditSeverity.DEBUG,
            session_id=session_id,
            description="Keyboard listener attached",
        )

    @staticmethod
    def listener_detached(session_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LISTENER_DETACHED,
            severity=AuditSeverity.DEBUG,
            session_id=session_id,
            description="Keyboard listener detached",
        )

    @staticmethod
    def notification_failed(
        message: str,
        error_message: str,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_FAILED,
            severity=AuditSeverity.WARNING,
            session_id=session_id,
            description="Notification could not be delivered",
            error_message=error_message,
            details={"message": message},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        session_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            session_id=session_id,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
