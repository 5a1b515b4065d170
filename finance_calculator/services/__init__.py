"""
Services Package

Interfaces to the calculator's host (notifications, keyboard capture)
and in-process implementations of them.
"""

from finance_calculator.services.interface import (
    KeyboardHostInterface,
    KeyListener,
    NotificationLevel,
    NotifierInterface,
)
from finance_calculator.services.local import (
    CollectingNotifier,
    LocalKeyboardHost,
    LogNotifier,
)

__all__ = [
    # Interfaces
    "KeyboardHostInterface",
    "KeyListener",
    "NotificationLevel",
    "NotifierInterface",
    # Local implementations
    "CollectingNotifier",
    "LocalKeyboardHost",
    "LogNotifier",
]
