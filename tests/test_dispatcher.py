"""Tests for key and button translation."""

import pytest

from finance_calculator.engine.arithmetic import ArithmeticEngine
from finance_calculator.engine.dispatcher import (
    BUTTON_COMMANDS,
    BUTTON_LAYOUT,
    InputDispatcher,
    KeyEvent,
    translate_button,
    translate_key,
)
from finance_calculator.errors import CalculatorError, UnknownButtonError
from finance_calculator.models.calculator import (
    CalculatorState,
    Command,
    CommandType,
    Operator,
)


class TestKeyTranslation:

    @pytest.mark.parametrize("key", list("0123456789"))
    def test_digits(self, key):
        assert translate_key(KeyEvent(key=key)) == Command.digit_of(key)

    @pytest.mark.parametrize("key, operator", [
        ("+", Operator.ADD),
        ("-", Operator.SUBTRACT),
        ("*", Operator.MULTIPLY),
        ("/", Operator.DIVIDE),
    ])
    def test_operators(self, key, operator):
        assert translate_key(KeyEvent(key=key)) == Command.operator_of(operator)

    @pytest.mark.parametrize("key, kind", [
        (".", CommandType.DECIMAL),
        ("=", CommandType.EQUALS),
        ("Enter", CommandType.EQUALS),
        ("Escape", CommandType.CLEAR),
        ("Backspace", CommandType.BACKSPACE),
    ])
    def test_commands(self, key, kind):
        assert translate_key(KeyEvent(key=key)) == Command.of(kind)

    @pytest.mark.parametrize("key, kind", [
        ("m", CommandType.MEMORY_ADD),
        ("M", CommandType.MEMORY_ADD),
        ("r", CommandType.MEMORY_RECALL),
        ("R", CommandType.MEMORY_RECALL),
    ])
    def test_ctrl_shortcuts(self, key, kind):
        assert translate_key(KeyEvent(key=key, ctrl=True)) == Command.of(kind)

    @pytest.mark.parametrize("key", ["m", "r", "a", "Tab", "F1", "ArrowLeft", " "])
    def test_ignored_keys(self, key):
        assert translate_key(KeyEvent(key=key)) is None

    def test_ctrl_other_key_ignored(self):
        assert translate_key(KeyEvent(key="c", ctrl=True)) is None

    def test_ctrl_digit_still_digit(self):
        assert translate_key(KeyEvent(key="5", ctrl=True)) == Command.digit_of("5")


class TestButtonTranslation:

    def test_every_layout_button_is_mapped(self):
        labels = [label for row in BUTTON_LAYOUT for label in row]
        assert sorted(labels) == sorted(BUTTON_COMMANDS)

    @pytest.mark.parametrize("label, command", [
        ("7", Command.digit_of("7")),
        ("×", Command.operator_of(Operator.MULTIPLY)),
        ("÷", Command.operator_of(Operator.DIVIDE)),
        ("±", Command.of(CommandType.NEGATE)),
        ("√", Command.of(CommandType.SQUARE_ROOT)),
        ("x²", Command.of(CommandType.SQUARE)),
        ("%", Command.of(CommandType.PERCENT)),
        ("CE", Command.of(CommandType.CLEAR_ENTRY)),
        ("⌫", Command.of(CommandType.BACKSPACE)),
        ("M-", Command.of(CommandType.MEMORY_SUBTRACT)),
    ])
    def test_buttons(self, label, command):
        assert translate_button(label) == command

    def test_unknown_button(self):
        with pytest.raises(UnknownButtonError) as exc_info:
            translate_button("sin")
        assert exc_info.value.label == "sin"
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, CalculatorError)


class TestInputDispatcher:

    def setup_method(self):
        self.dispatcher = InputDispatcher(ArithmeticEngine())
        self.state = CalculatorState()

    def test_handled_key(self):
        result = self.dispatcher.handle_key(self.state, KeyEvent(key="4"))
        assert result.handled is True
        assert result.prevent_default is True
        assert result.command == Command.digit_of("4")
        assert result.state.display == "4"

    def test_ignored_key_keeps_default(self):
        result = self.dispatcher.handle_key(self.state, KeyEvent(key="Tab"))
        assert result.handled is False
        assert result.prevent_default is False
        assert result.state is self.state

    def test_button(self):
        state = self.dispatcher.handle_button(self.state, "9")
        assert state.display == "9"

    def test_unknown_button_leaves_state(self):
        with pytest.raises(UnknownButtonError):
            self.dispatcher.handle_button(self.state, "?")

    @pytest.mark.parametrize("keys, buttons", [
        (["3", "+", "4", "*", "2", "Enter"], ["3", "+", "4", "×", "2", "="]),
        (["1", "/", "0", "="], ["1", "÷", "0", "="]),
        (["9", ".", "5", "Backspace", "-", "1", "="], ["9", ".", "5", "⌫", "-", "1", "="]),
        (["7", "Escape", "2"], ["7", "C", "2"]),
    ])
    def test_keyboard_and_buttons_are_equivalent(self, keys, buttons):
        by_key = self.state
        for key in keys:
            by_key = self.dispatcher.handle_key(by_key, KeyEvent(key=key)).state

        by_button = self.state
        for label in buttons:
            by_button = self.dispatcher.handle_button(by_button, label)

        assert by_key == by_button

    def test_memory_shortcuts_match_buttons(self):
        by_key = self.dispatcher.handle_key(self.state, KeyEvent(key="6")).state
        by_key = self.dispatcher.handle_key(by_key, KeyEvent(key="m", ctrl=True)).state
        by_key = self.dispatcher.handle_key(by_key, KeyEvent(key="Escape")).state
        by_key = self.dispatcher.handle_key(by_key, KeyEvent(key="r", ctrl=True)).state

        by_button = self.state
        for label in ["6", "M+", "C", "MR"]:
            by_button = self.dispatcher.handle_button(by_button, label)

        assert by_key == by_button
        assert by_key.display == "6"
        assert by_key.memory == 6.0
