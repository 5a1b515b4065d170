"""Configuration package."""

from finance_calculator.config.settings import (
    AppSettings,
    CalculatorSettings,
    FinancialDefaults,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "CalculatorSettings",
    "FinancialDefaults",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
