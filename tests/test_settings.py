"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from finance_calculator.config import (
    AppSettings,
    CalculatorSettings,
    FinancialDefaults,
    get_settings,
    validate_all_settings,
)
from finance_calculator.engine.arithmetic import ArithmeticEngine


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCalculatorSettings:

    def test_defaults(self):
        settings = CalculatorSettings()
        assert settings.history_limit == 5
        assert settings.error_marker == "Error"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CALCULATOR_HISTORY_LIMIT", "3")
        assert CalculatorSettings().history_limit == 3

    def test_history_limit_bounds(self, monkeypatch):
        monkeypatch.setenv("CALCULATOR_HISTORY_LIMIT", "0")
        with pytest.raises(ValidationError):
            CalculatorSettings()

    def test_numeric_error_marker_rejected(self):
        with pytest.raises(ValidationError, match="must not be numeric"):
            CalculatorSettings(error_marker="0")

    def test_engine_from_settings(self):
        engine = ArithmeticEngine.from_settings(CalculatorSettings(history_limit=2, error_marker="E"))
        assert engine.history_limit == 2
        assert engine.error_marker == "E"


class TestOtherSettings:

    def test_financial_defaults(self):
        defaults = FinancialDefaults()
        assert defaults.split_num_people == 2
        assert defaults.emi_loan_amount == 200000.0
        assert defaults.max_schedule_months == 1200

    def test_log_level_normalised(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")


class TestValidateAllSettings:

    def test_all_valid(self):
        status = validate_all_settings()
        assert status["calculator"] is True
        assert status["finance"] is True
        assert status["app"] is True

    def test_reports_broken_section(self, monkeypatch):
        monkeypatch.setenv("FINANCE_SPLIT_NUM_PEOPLE", "0")
        status = validate_all_settings()
        assert status["finance"] is False
        assert "finance_error" in status
        assert status["calculator"] is True
