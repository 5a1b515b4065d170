"""Audit logging package."""

from finance_calculator.audit.logger import AuditLogger, configure_logging, create_session_id

__all__ = ["AuditLogger", "configure_logging", "create_session_id"]
