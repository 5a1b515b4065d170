"""
Configuration Management for Finance Calculator

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The engine and formulas receive plain values; only the session, the
app and the tests ever touch settings objects.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CalculatorSettings(BaseSettings):
    """Basic calculator behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="CALCULATOR_",
        extra="ignore"
    )

    history_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many completed calculations the history keeps"
    )
    error_marker: str = Field(
        default="Error",
        min_length=1,
        max_length=20,
        description="Text shown on the display after an invalid operation"
    )

    @field_validator('error_marker')
    @classmethod
    def validate_error_marker(cls, v: str) -> str:
        """The marker must never be mistaken for a number."""
        try:
            float(v)
        except ValueError:
            return v
        raise ValueError(f"Error marker must not be numeric: {v!r}")


class FinancialDefaults(BaseSettings):
    """
    Initial field values for the financial calculator tabs.

    These only seed the input widgets; formulas never read them.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        extra="ignore"
    )

    # Expense split
    split_num_people: int = Field(default=2, ge=1)
    split_tip_percentage: float = Field(default=15.0, ge=0.0, le=50.0)
    split_tax_percentage: float = Field(default=8.0, ge=0.0, le=20.0)

    # Savings
    savings_principal: float = Field(default=1000.0, ge=0.0)
    savings_monthly_contribution: float = Field(default=100.0, ge=0.0)
    savings_annual_rate: float = Field(default=5.0, ge=0.0)
    savings_years: float = Field(default=10.0, ge=0.0)

    # Loan / EMI
    emi_loan_amount: float = Field(default=200000.0, ge=0.0)
    emi_interest_rate: float = Field(default=7.5, ge=0.0)
    emi_loan_term: float = Field(default=20.0, ge=0.0)

    max_schedule_months: int = Field(
        default=1200,
        ge=1,
        description="Upper bound on amortization schedule rows (100 years)"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def calculator(self) -> CalculatorSettings:
        return CalculatorSettings()

    @property
    def finance(self) -> FinancialDefaults:
        return FinancialDefaults()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    sections = {
        "calculator": lambda: settings.calculator,
        "finance": lambda: settings.finance,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
