"""Exceptions raised by the calculator package.

Arithmetic problems are never exceptions; they become the engine's
error state. These cover misuse of the API by the hosting view.
"""


class CalculatorError(Exception):
    """Base exception for calculator errors."""
    pass


class UnknownButtonError(CalculatorError, ValueError):
    """A button label that is not part of the calculator keypad."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown calculator button: {label!r}")


class SessionStateError(CalculatorError):
    """Session lifecycle misuse (e.g. mounting twice)."""
    pass
