"""
Abstract Collaborator Interfaces

DESIGN DECISION: The calculator talks to its host only through these
two interfaces. This allows us to:
1. Run the whole session headless in tests
2. Swap the toast library without touching calculator code
3. Keep the keyboard listener's lifetime owned by the host view

Both are intentionally tiny.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from finance_calculator.engine.dispatcher import KeyEvent


class NotificationLevel(str, Enum):
    """How a transient notification should be styled."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


KeyListener = Callable[[KeyEvent], bool]
"""Receives a key event; returns True when the host must suppress the default action."""


class NotifierInterface(ABC):
    """
    Transient user-facing notifications ("Added 5 to memory").

    Delivery is best effort. Calculator correctness never depends on it.
    """

    @abstractmethod
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        """
        Show a message to the user.

        Args:
            message: Text to show
            level: Styling hint
        """
        pass


class KeyboardHostInterface(ABC):
    """
    The view-side owner of key capture.

    A session registers its listener on mount and removes it on unmount.
    """

    @abstractmethod
    def add_listener(self, listener: KeyListener) -> None:
        """Start delivering key events to listener."""
        pass

    @abstractmethod
    def remove_listener(self, listener: KeyListener) -> None:
        """
        Stop delivering key events to listener.

        Removing a listener that is not registered is a no-op.
        """
        pass
