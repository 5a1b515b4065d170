"""
Core Calculator Models

These models define the data that flows between the input dispatcher,
the arithmetic engine and the presentation layer.

DESIGN DECISION: Both the state and the commands are frozen pydantic
models. A transition never mutates; it returns a fresh snapshot built
with model_copy(update=...). The view can therefore hold on to any
snapshot without it changing underneath it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Operator(str, Enum):
    """
    Binary operators. Values are the symbols shown on the buttons
    and written into history entries.
    """
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"


class CommandType(str, Enum):
    """
    Every transition the engine knows about.

    Keyboard and button input are both translated into these,
    never into anything else.
    """
    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    CLEAR_ENTRY = "clear_entry"
    BACKSPACE = "backspace"
    NEGATE = "negate"
    PERCENT = "percent"
    SQUARE = "square"
    SQUARE_ROOT = "square_root"
    MEMORY_CLEAR = "memory_clear"
    MEMORY_RECALL = "memory_recall"
    MEMORY_ADD = "memory_add"
    MEMORY_SUBTRACT = "memory_subtract"
    CLEAR_HISTORY = "clear_history"


class CalculatorMode(str, Enum):
    """The calculator tabs."""
    BASIC = "basic"
    SPLIT = "split"
    SAVINGS = "savings"
    EMI = "emi"


# =============================================================================
# COMMANDS
# =============================================================================

class Command(BaseModel):
    """
    A single request to the arithmetic engine.

    Only DIGIT carries a digit and only OPERATOR carries an operator.

    Usage:
        Command.digit("7")
        Command.operator(Operator.ADD)
        Command.of(CommandType.EQUALS)
    """
    model_config = ConfigDict(frozen=True)

    kind: CommandType
    digit: Optional[str] = Field(
        default=None,
        pattern="^[0-9]$",
        description="Digit for DIGIT commands"
    )
    operator: Optional[Operator] = Field(
        default=None,
        description="Operator for OPERATOR commands"
    )

    @model_validator(mode='after')
    def validate_payload(self) -> 'Command':
        """Payload must match the command kind."""
        if self.kind == CommandType.DIGIT:
            if self.digit is None:
                raise ValueError("Digit command requires a digit")
        elif self.digit is not None:
            raise ValueError(f"{self.kind.value} command does not take a digit")

        if self.kind == CommandType.OPERATOR:
            if self.operator is None:
                raise ValueError("Operator command requires an operator")
        elif self.operator is not None:
            raise ValueError(f"{self.kind.value} command does not take an operator")

        return self

    @classmethod
    def of(cls, kind: CommandType) -> 'Command':
        return cls(kind=kind)

    @classmethod
    def digit_of(cls, digit: str) -> 'Command':
        return cls(kind=CommandType.DIGIT, digit=digit)

    @classmethod
    def operator_of(cls, operator: Operator) -> 'Command':
        return cls(kind=CommandType.OPERATOR, operator=operator)


# =============================================================================
# STATE
# =============================================================================

class CalculatorState(BaseModel):
    """
    Snapshot of the basic calculator.

    CRITICAL: display always parses to a finite number, except while
    is_error is set, when it holds the error marker.

    A fresh state ("0", idle, empty memory and history) is created for
    every mounted view. Nothing here is persisted.
    """
    model_config = ConfigDict(frozen=True)

    display: str = Field(
        default="0",
        min_length=1,
        description="Current operand as shown on screen"
    )
    pending_operand: Optional[str] = Field(
        default=None,
        description="Left-hand operand saved when an operator was pressed"
    )
    pending_operator: Optional[Operator] = Field(
        default=None,
        description="Operator awaiting its right-hand operand"
    )
    memory: float = Field(
        default=0.0,
        description="Memory register; survives Clear"
    )
    history: tuple[str, ...] = Field(
        default=(),
        description="Completed calculations, most recent first"
    )
    is_error: bool = Field(
        default=False,
        description="Set after division by zero or a negative square root"
    )

    @property
    def is_idle(self) -> bool:
        """True when no operation is in progress."""
        return self.pending_operand is None and self.pending_operator is None
