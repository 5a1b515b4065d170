"""
Calculator Session

This module ties the calculator components together for one view:
dispatcher → engine → new state, plus the side channels (audit log,
toast notifications, keyboard listener registration).

DESIGN DECISION: The session enforces the boundaries:
- State changes only through engine transitions, one per input event
- Notifications and audit logging happen after the transition and can
  never change its outcome
- The keyboard listener lives exactly as long as the mount

Each mounted view gets its own session; there is no shared register.
"""

from typing import Any, Mapping, Optional
from uuid import UUID

from finance_calculator.audit import AuditLogger, create_session_id
from finance_calculator.config import get_settings
from finance_calculator.engine.arithmetic import ArithmeticEngine
from finance_calculator.engine.dispatcher import (
    InputDispatcher,
    KeyEvent,
    translate_button,
)
from finance_calculator.engine.formulas import FinancialResult, compute
from finance_calculator.errors import SessionStateError
from finance_calculator.formatting import format_number, parse_display
from finance_calculator.models.calculator import (
    CalculatorMode,
    CalculatorState,
    Command,
    CommandType,
)
from finance_calculator.services import (
    KeyboardHostInterface,
    LogNotifier,
    NotificationLevel,
    NotifierInterface,
)


class CalculatorSession:
    """
    Owns the calculator state of one mounted view.

    Flow for every input:
    1. Translate → InputDispatcher maps the key/button to a command
    2. Apply → ArithmeticEngine returns the next state
    3. Swap → the session replaces its snapshot in one assignment
    4. Report → audit log and notifications describe what happened
    """

    def __init__(
        self,
        engine: Optional[ArithmeticEngine] = None,
        notifier: Optional[NotifierInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        session_id: Optional[UUID] = None,
    ):
        self._dispatcher = InputDispatcher(engine)
        self._notifier = notifier
        self._audit_logger = audit_logger
        self._session_id = session_id or create_session_id()
        self._state = self._dispatcher.engine.initial_state()
        self._host: Optional[KeyboardHostInterface] = None

    @property
    def state(self) -> CalculatorState:
        """Current snapshot. Safe to keep; it never changes."""
        return self._state

    @property
    def session_id(self) -> UUID:
        return self._session_id

    @property
    def is_mounted(self) -> bool:
        return self._host is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def mount(self, host: KeyboardHostInterface) -> None:
        """
        Start a fresh calculator and listen to host's keyboard.

        Raises:
            SessionStateError: If the session is already mounted.
        """
        if self._host is not None:
            raise SessionStateError("Calculator session is already mounted")

        self._state = self._dispatcher.engine.initial_state()
        host.add_listener(self.key_down)
        self._host = host

        if self._audit_logger:
            self._audit_logger.log_listener_attached(self._session_id)

    def unmount(self) -> None:
        """Stop listening to the keyboard. Calling it twice is harmless."""
        if self._host is None:
            return

        self._host.remove_listener(self.key_down)
        self._host = None

        if self._audit_logger:
            self._audit_logger.log_listener_detached(self._session_id)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def key_down(self, event: KeyEvent) -> bool:
        """
        Keyboard listener.

        Returns True when the host must suppress the key's default action.
        """
        before = self._state
        result = self._dispatcher.handle_key(before, event)
        if result.handled:
            self._commit(before, result.state, result.command)
        return result.prevent_default

    def press(self, label: str) -> CalculatorState:
        """
        Handle a keypad button click.

        Raises:
            UnknownButtonError: If label is not on the keypad.
        """
        return self.apply(translate_button(label))

    def apply(self, command: Command) -> CalculatorState:
        """Apply a command directly and return the new state."""
        before = self._state
        after = self._dispatcher.handle_command(before, command)
        self._commit(before, after, command)
        return after

    def clear_history(self) -> CalculatorState:
        return self.apply(Command.of(CommandType.CLEAR_HISTORY))

    # -------------------------------------------------------------------------
    # Financial calculators
    # -------------------------------------------------------------------------

    def evaluate(self, mode: CalculatorMode, fields: Mapping[str, Any]) -> FinancialResult:
        """Recompute one of the financial tabs from its raw field values."""
        result = compute(mode, fields)
        if self._audit_logger:
            self._audit_logger.log_formula(
                mode=mode.value,
                inputs={name: str(value) for name, value in fields.items()},
                result=result.model_dump(),
                session_id=self._session_id,
            )
        return result

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def _commit(
        self,
        before: CalculatorState,
        after: CalculatorState,
        command: Command,
    ) -> None:
        self._state = after
        kind = command.kind

        if after.is_error and not before.is_error:
            if self._audit_logger:
                self._audit_logger.log_arithmetic_error(
                    command=kind.value,
                    display=before.display,
                    session_id=self._session_id,
                )
        elif after.history != before.history and after.history:
            if self._audit_logger:
                self._audit_logger.log_calculation(after.history[0], self._session_id)

        if kind in (CommandType.MEMORY_ADD, CommandType.MEMORY_SUBTRACT):
            value = parse_display(before.display)
            if not before.is_error and (after.memory != before.memory or value == 0):
                self._memory_changed(kind, value, after.memory)
        elif kind == CommandType.MEMORY_CLEAR:
            if self._audit_logger:
                self._audit_logger.log_memory_cleared(self._session_id)
            self._notify("Memory cleared")
        elif kind == CommandType.CLEAR_HISTORY and before.history:
            if self._audit_logger:
                self._audit_logger.log_history_cleared(len(before.history), self._session_id)
            self._notify("History cleared")

    def _memory_changed(self, kind: CommandType, value: float, memory: float) -> None:
        if self._audit_logger:
            self._audit_logger.log_memory_updated(
                command=kind.value,
                value=value,
                memory=memory,
                session_id=self._session_id,
            )
        if kind == CommandType.MEMORY_ADD:
            self._notify(f"Added {format_number(value)} to memory")
        else:
            self._notify(f"Subtracted {format_number(value)} from memory")

    def _notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        if not self._notifier:
            return
        try:
            self._notifier.notify(message, level)
        except Exception as e:
            # Notifications are best effort
            if self._audit_logger:
                self._audit_logger.log_notification_failed(message, str(e), self._session_id)


def create_calculator_session(
    notifier: Optional[NotifierInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> CalculatorSession:
    """
    Factory function to create a session from application settings.

    Args:
        notifier: Toast collaborator. Defaults to logging notifications.
        audit_logger: Defaults to a local-only AuditLogger.
    """
    settings = get_settings()
    engine = ArithmeticEngine.from_settings(settings.calculator)

    return CalculatorSession(
        engine=engine,
        notifier=notifier or LogNotifier(),
        audit_logger=audit_logger or AuditLogger(),
    )
