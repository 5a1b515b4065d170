"""
Arithmetic Engine

The basic calculator as a state machine: apply(state, command) -> state.

DESIGN DECISION: Transitions are total. No command raises, whatever the
state. Anything that would put NaN or Infinity on the display (division
by zero, square root of a negative, overflow) lands in the error state
instead, and the next digit starts over from a fresh value.

Operators fold strictly left to right: 3 + 4 × 2 = 14, not 11. Pressing
a second operator resolves the pending one first, exactly like Equals.
"""

import math
from typing import Callable, Optional

from finance_calculator.config.settings import CalculatorSettings
from finance_calculator.formatting import format_number, is_finite, parse_display
from finance_calculator.models.calculator import (
    CalculatorState,
    Command,
    CommandType,
    Operator,
)

DEFAULT_HISTORY_LIMIT = 5
DEFAULT_ERROR_MARKER = "Error"


_BINARY: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: lambda a, b: a / b,
}


class ArithmeticEngine:
    """
    Applies commands to calculator states.

    The engine itself holds only configuration (history depth and
    error marker), so one instance can serve any number of views.
    """

    def __init__(
        self,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        error_marker: str = DEFAULT_ERROR_MARKER,
    ):
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self._history_limit = history_limit
        self._error_marker = error_marker
        self._handlers: dict[CommandType, Callable[[CalculatorState, Command], CalculatorState]] = {
            CommandType.DIGIT: self._digit,
            CommandType.DECIMAL: self._decimal,
            CommandType.OPERATOR: self._operator,
            CommandType.EQUALS: lambda state, _: self._equals(state),
            CommandType.CLEAR: self._clear,
            CommandType.CLEAR_ENTRY: self._clear_entry,
            CommandType.BACKSPACE: self._backspace,
            CommandType.NEGATE: self._unary(lambda v: -v),
            CommandType.PERCENT: self._unary(lambda v: v / 100),
            CommandType.SQUARE: self._unary(lambda v: v * v),
            CommandType.SQUARE_ROOT: self._unary(self._square_root),
            CommandType.MEMORY_CLEAR: self._memory_clear,
            CommandType.MEMORY_RECALL: self._memory_recall,
            CommandType.MEMORY_ADD: self._memory_adjust(1),
            CommandType.MEMORY_SUBTRACT: self._memory_adjust(-1),
            CommandType.CLEAR_HISTORY: self._clear_history,
        }

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> "ArithmeticEngine":
        """Build an engine from CalculatorSettings."""
        return cls(
            history_limit=settings.history_limit,
            error_marker=settings.error_marker,
        )

    @property
    def history_limit(self) -> int:
        return self._history_limit

    @property
    def error_marker(self) -> str:
        return self._error_marker

    def initial_state(self) -> CalculatorState:
        """A fresh calculator: "0", idle, empty memory and history."""
        return CalculatorState()

    def apply(self, state: CalculatorState, command: Command) -> CalculatorState:
        """Return the state that results from applying command to state."""
        return self._handlers[command.kind](state, command)

    # -------------------------------------------------------------------------
    # State helpers
    # -------------------------------------------------------------------------

    def _error(self, state: CalculatorState) -> CalculatorState:
        return state.model_copy(update={
            "display": self._error_marker,
            "pending_operand": None,
            "pending_operator": None,
            "is_error": True,
        })

    def _show(self, state: CalculatorState, value: float) -> CalculatorState:
        """Put a computed value on the display, or fail into the error state."""
        if not is_finite(value):
            return self._error(state)
        return state.model_copy(update={
            "display": format_number(value),
            "is_error": False,
        })

    @staticmethod
    def _show_text(state: CalculatorState, text: str) -> CalculatorState:
        """Put typed text on the display if it still reads as a finite number."""
        if not is_finite(parse_display(text)):
            return state
        return state.model_copy(update={"display": text, "is_error": False})

    # -------------------------------------------------------------------------
    # Entry
    # -------------------------------------------------------------------------

    def _digit(self, state: CalculatorState, command: Command) -> CalculatorState:
        if state.is_error or state.display == "0":
            return self._show_text(state, command.digit)
        return self._show_text(state, state.display + command.digit)

    def _decimal(self, state: CalculatorState, command: Command) -> CalculatorState:
        if state.is_error:
            return self._show_text(state, "0.")
        if "." in state.display:
            return state
        return self._show_text(state, state.display + ".")

    def _backspace(self, state: CalculatorState, command: Command) -> CalculatorState:
        if state.is_error:
            return self._clear_entry(state, command)
        text = state.display[:-1]
        if not is_finite(parse_display(text)):
            text = "0"
        return state.model_copy(update={"display": text})

    def _clear(self, state: CalculatorState, command: Command) -> CalculatorState:
        return state.model_copy(update={
            "display": "0",
            "pending_operand": None,
            "pending_operator": None,
            "is_error": False,
        })

    def _clear_entry(self, state: CalculatorState, command: Command) -> CalculatorState:
        return state.model_copy(update={"display": "0", "is_error": False})

    # -------------------------------------------------------------------------
    # Binary operations
    # -------------------------------------------------------------------------

    def _operator(self, state: CalculatorState, command: Command) -> CalculatorState:
        if state.is_error:
            return state

        if state.pending_operator is not None:
            state = self._equals(state)
            if state.is_error:
                return state

        return state.model_copy(update={
            "pending_operand": state.display,
            "pending_operator": command.operator,
            "display": "0",
        })

    def _equals(self, state: CalculatorState) -> CalculatorState:
        operator = state.pending_operator
        if state.pending_operand is None or operator is None:
            return state.model_copy(update={"pending_operator": None})

        left = parse_display(state.pending_operand)
        right = parse_display(state.display)

        if operator == Operator.DIVIDE and right == 0:
            return self._error(state)

        result = _BINARY[operator](left, right)
        if not (is_finite(left) and is_finite(right) and is_finite(result)):
            return self._error(state)

        entry = (
            f"{format_number(left)} {operator.value} "
            f"{format_number(right)} = {format_number(result)}"
        )
        history = (entry,) + state.history[: self._history_limit - 1]

        return state.model_copy(update={
            "display": format_number(result),
            "pending_operand": None,
            "pending_operator": None,
            "history": history,
            "is_error": False,
        })

    # -------------------------------------------------------------------------
    # Unary operations
    # -------------------------------------------------------------------------

    def _unary(self, fn: Callable[[float], float]):
        def transition(state: CalculatorState, command: Command) -> CalculatorState:
            return self._show(state, fn(parse_display(state.display)))
        return transition

    @staticmethod
    def _square_root(value: float) -> float:
        if math.isnan(value) or value < 0:
            return math.nan
        return math.sqrt(value)

    # -------------------------------------------------------------------------
    # Memory and history
    # -------------------------------------------------------------------------

    def _memory_adjust(self, sign: int):
        def transition(state: CalculatorState, command: Command) -> CalculatorState:
            if state.is_error:
                return state
            memory = state.memory + sign * parse_display(state.display)
            if not is_finite(memory):
                return state
            return state.model_copy(update={"memory": memory})
        return transition

    def _memory_recall(self, state: CalculatorState, command: Command) -> CalculatorState:
        return self._show(state, state.memory)

    def _memory_clear(self, state: CalculatorState, command: Command) -> CalculatorState:
        return state.model_copy(update={"memory": 0.0})

    def _clear_history(self, state: CalculatorState, command: Command) -> CalculatorState:
        return state.model_copy(update={"history": ()})


_default_engine = ArithmeticEngine()


def apply(state: CalculatorState, command: Command) -> CalculatorState:
    """Apply a command with the default engine (5-entry history)."""
    return _default_engine.apply(state, command)


def render_display(state: CalculatorState) -> str:
    """The main display line: the typed or computed value, or the error marker."""
    return state.display


def render_pending(state: CalculatorState) -> str:
    """The small "<operand> <operator>" line above the display."""
    if state.pending_operand is None or state.pending_operator is None:
        return ""
    return f"{state.pending_operand} {state.pending_operator.value}"


def last_calculation(state: CalculatorState) -> Optional[str]:
    """Most recent history entry, if any."""
    return state.history[0] if state.history else None
