"""
Data Models Package

This package contains all Pydantic models used in the Finance Calculator.
All data flowing between dispatcher, engine, formulas and views conforms
to these schemas.
"""

from finance_calculator.models.calculator import (
    CalculatorMode,
    CalculatorState,
    Command,
    CommandType,
    Operator,
)
from finance_calculator.models.financial import (
    AmortizationRow,
    ExpenseSplitInputs,
    LoanInputs,
    LoanResult,
    SavingsInputs,
    SavingsResult,
    SplitResult,
)
from finance_calculator.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Calculator models
    "CalculatorMode",
    "CalculatorState",
    "Command",
    "CommandType",
    "Operator",
    # Financial models
    "AmortizationRow",
    "ExpenseSplitInputs",
    "LoanInputs",
    "LoanResult",
    "SavingsInputs",
    "SavingsResult",
    "SplitResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
