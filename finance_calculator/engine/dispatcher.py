"""
Input Dispatcher

Turns key presses and button clicks into engine commands.

DESIGN DECISION: There is exactly one command vocabulary. The keyboard
table and the keypad table both point into it, and both paths end in
the same engine.apply() call, so pressing "7" on the keyboard and
clicking the "7" button cannot behave differently.

The dispatcher does no arithmetic. It translates and forwards.
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict

from finance_calculator.engine.arithmetic import ArithmeticEngine
from finance_calculator.errors import UnknownButtonError
from finance_calculator.models.calculator import (
    CalculatorState,
    Command,
    CommandType,
    Operator,
)


class KeyEvent(BaseModel):
    """A key press as captured by the host view (DOM-style key names)."""
    model_config = ConfigDict(frozen=True)

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False


class DispatchResult(NamedTuple):
    """Outcome of handling one key event."""
    state: CalculatorState
    command: Optional[Command]
    prevent_default: bool

    @property
    def handled(self) -> bool:
        return self.command is not None


_DIGITS = "0123456789"

# Plain keys, modifiers ignored
KEY_COMMANDS: dict[str, Command] = {
    **{d: Command.digit_of(d) for d in _DIGITS},
    "+": Command.operator_of(Operator.ADD),
    "-": Command.operator_of(Operator.SUBTRACT),
    "*": Command.operator_of(Operator.MULTIPLY),
    "/": Command.operator_of(Operator.DIVIDE),
    ".": Command.of(CommandType.DECIMAL),
    "=": Command.of(CommandType.EQUALS),
    "Enter": Command.of(CommandType.EQUALS),
    "Escape": Command.of(CommandType.CLEAR),
    "Backspace": Command.of(CommandType.BACKSPACE),
}

# Ctrl-qualified keys, matched case-insensitively
CTRL_KEY_COMMANDS: dict[str, Command] = {
    "m": Command.of(CommandType.MEMORY_ADD),
    "r": Command.of(CommandType.MEMORY_RECALL),
}

BUTTON_COMMANDS: dict[str, Command] = {
    **{d: Command.digit_of(d) for d in _DIGITS},
    "MC": Command.of(CommandType.MEMORY_CLEAR),
    "MR": Command.of(CommandType.MEMORY_RECALL),
    "M+": Command.of(CommandType.MEMORY_ADD),
    "M-": Command.of(CommandType.MEMORY_SUBTRACT),
    "C": Command.of(CommandType.CLEAR),
    "CE": Command.of(CommandType.CLEAR_ENTRY),
    "⌫": Command.of(CommandType.BACKSPACE),
    "÷": Command.operator_of(Operator.DIVIDE),
    "×": Command.operator_of(Operator.MULTIPLY),
    "-": Command.operator_of(Operator.SUBTRACT),
    "+": Command.operator_of(Operator.ADD),
    "±": Command.of(CommandType.NEGATE),
    ".": Command.of(CommandType.DECIMAL),
    "=": Command.of(CommandType.EQUALS),
    "x²": Command.of(CommandType.SQUARE),
    "√": Command.of(CommandType.SQUARE_ROOT),
    "%": Command.of(CommandType.PERCENT),
}

# Keypad as rendered, row by row
BUTTON_LAYOUT: tuple[tuple[str, ...], ...] = (
    ("MC", "MR", "M+", "M-"),
    ("C", "CE", "⌫", "÷"),
    ("7", "8", "9", "×"),
    ("4", "5", "6", "-"),
    ("1", "2", "3", "+"),
    ("±", "0", ".", "="),
    ("x²", "√", "%"),
)

KEYBOARD_SHORTCUTS: tuple[tuple[str, str], ...] = (
    ("0-9", "Numbers"),
    ("+ - * /", "Operations"),
    ("Enter", "Equals"),
    ("Escape", "Clear"),
    (".", "Decimal"),
    ("Backspace", "Delete"),
    ("Ctrl+M", "Memory Add"),
    ("Ctrl+R", "Memory Recall"),
)


def translate_key(event: KeyEvent) -> Optional[Command]:
    """Command for a key event, or None if the calculator ignores the key."""
    if event.ctrl:
        command = CTRL_KEY_COMMANDS.get(event.key.lower())
        if command is not None:
            return command
    return KEY_COMMANDS.get(event.key)


def translate_button(label: str) -> Command:
    """
    Command for a keypad button.

    Raises:
        UnknownButtonError: If label is not on the keypad.
    """
    try:
        return BUTTON_COMMANDS[label]
    except KeyError:
        raise UnknownButtonError(label) from None


class InputDispatcher:
    """
    Routes keyboard and keypad input into an ArithmeticEngine.

    Usage:
        dispatcher = InputDispatcher(engine)
        result = dispatcher.handle_key(state, KeyEvent(key="7"))
        state = dispatcher.handle_button(result.state, "+")
    """

    def __init__(self, engine: Optional[ArithmeticEngine] = None):
        self._engine = engine or ArithmeticEngine()

    @property
    def engine(self) -> ArithmeticEngine:
        return self._engine

    def handle_key(self, state: CalculatorState, event: KeyEvent) -> DispatchResult:
        """
        Apply the command bound to a key, if any.

        prevent_default is True exactly for keys the calculator consumes;
        the host must then suppress the browser's own handling.
        """
        command = translate_key(event)
        if command is None:
            return DispatchResult(state=state, command=None, prevent_default=False)
        return DispatchResult(
            state=self._engine.apply(state, command),
            command=command,
            prevent_default=True,
        )

    def handle_button(self, state: CalculatorState, label: str) -> CalculatorState:
        """Apply the command bound to a keypad button."""
        return self._engine.apply(state, translate_button(label))

    def handle_command(self, state: CalculatorState, command: Command) -> CalculatorState:
        """Apply an already-built command (e.g. the "Clear History" link)."""
        return self._engine.apply(state, command)
