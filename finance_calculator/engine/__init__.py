"""
Calculator Engine Package

The arithmetic state machine, the financial formulas and the
input dispatcher that feeds the state machine.
"""

from finance_calculator.engine.arithmetic import (
    ArithmeticEngine,
    apply,
    last_calculation,
    render_display,
    render_pending,
)
from finance_calculator.engine.dispatcher import (
    BUTTON_LAYOUT,
    KEYBOARD_SHORTCUTS,
    DispatchResult,
    InputDispatcher,
    KeyEvent,
    translate_button,
    translate_key,
)
from finance_calculator.engine.formulas import (
    amortization_schedule,
    calculate_emi,
    compute,
    project_savings,
    split_expense,
)

__all__ = [
    # Arithmetic
    "ArithmeticEngine",
    "apply",
    "last_calculation",
    "render_display",
    "render_pending",
    # Dispatcher
    "BUTTON_LAYOUT",
    "KEYBOARD_SHORTCUTS",
    "DispatchResult",
    "InputDispatcher",
    "KeyEvent",
    "translate_button",
    "translate_key",
    # Formulas
    "amortization_schedule",
    "calculate_emi",
    "compute",
    "project_savings",
    "split_expense",
]
