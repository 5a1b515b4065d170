"""
In-Process Collaborators

Implementations of the collaborator interfaces that need no UI:
used by tests, by headless sessions and as fallbacks in the app.
"""

from typing import Optional

import structlog

from finance_calculator.engine.dispatcher import KeyEvent
from finance_calculator.services.interface import (
    KeyboardHostInterface,
    KeyListener,
    NotificationLevel,
    NotifierInterface,
)


class LogNotifier(NotifierInterface):
    """Writes notifications to the structured log."""

    def __init__(self):
        self._logger = structlog.get_logger(__name__)

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        if level == NotificationLevel.ERROR:
            self._logger.warning("notification", message=message, level=level.value)
        else:
            self._logger.info("notification", message=message, level=level.value)


class CollectingNotifier(NotifierInterface):
    """Keeps every notification in memory, oldest first."""

    def __init__(self):
        self.messages: list[tuple[str, NotificationLevel]] = []

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        self.messages.append((message, level))

    @property
    def last(self) -> Optional[str]:
        return self.messages[-1][0] if self.messages else None


class LocalKeyboardHost(KeyboardHostInterface):
    """
    Delivers key events to registered listeners, in registration order.

    press() stands in for the browser's keydown dispatch: it returns True
    if any listener asked for the default action to be suppressed.
    """

    def __init__(self):
        self._listeners: list[KeyListener] = []

    def add_listener(self, listener: KeyListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def press(self, key: str, **modifiers: bool) -> bool:
        event = KeyEvent(key=key, **modifiers)
        prevent_default = False
        for listener in list(self._listeners):
            prevent_default = listener(event) or prevent_default
        return prevent_default

    def type_text(self, text: str) -> bool:
        """Press each character of text in turn."""
        prevent_default = False
        for char in text:
            prevent_default = self.press(char) or prevent_default
        return prevent_default
