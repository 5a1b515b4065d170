"""
Financial Calculator Models

Inputs and results for the expense-split, savings and EMI calculators.

DESIGN DECISION: Input models are forgiving on purpose. Every numeric
field goes through a "before" validator that turns missing or garbled
text into 0, so building an input model from whatever the user has
typed so far never raises. Result models are plain derived values.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_calculator.formatting import coerce_count, coerce_number


_TRUTHY = {"1", "true", "yes", "on"}


# =============================================================================
# INPUTS
# =============================================================================

class ExpenseSplitInputs(BaseModel):
    """Bill to be shared between a group, with tip and tax on top."""
    model_config = ConfigDict(frozen=True)

    total_amount: float = 0.0
    num_people: int = 1
    tip_percentage: float = 0.0
    tax_percentage: float = 0.0
    round_up: bool = False

    @field_validator('total_amount', 'tip_percentage', 'tax_percentage', mode='before')
    @classmethod
    def coerce_amounts(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator('num_people', mode='before')
    @classmethod
    def coerce_people(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator('round_up', mode='before')
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() in _TRUTHY


class SavingsInputs(BaseModel):
    """Initial deposit plus a fixed monthly contribution, compounded monthly."""
    model_config = ConfigDict(frozen=True)

    principal: float = 0.0
    monthly_contribution: float = 0.0
    annual_rate: float = 0.0
    years: float = 0.0

    @field_validator('*', mode='before')
    @classmethod
    def coerce_fields(cls, v: Any) -> float:
        return coerce_number(v)

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 100 / 12

    @property
    def months(self) -> float:
        return self.years * 12


class LoanInputs(BaseModel):
    """Amortizing loan. loan_term is in years, interest_rate is annual percent."""
    model_config = ConfigDict(frozen=True)

    loan_amount: float = 0.0
    interest_rate: float = 0.0
    loan_term: float = 0.0

    @field_validator('*', mode='before')
    @classmethod
    def coerce_fields(cls, v: Any) -> float:
        return coerce_number(v)

    @property
    def monthly_rate(self) -> float:
        return self.interest_rate / 100 / 12

    @property
    def months(self) -> float:
        return self.loan_term * 12


# =============================================================================
# RESULTS
# =============================================================================

class SplitResult(BaseModel):
    """What each person pays."""

    total: float = Field(..., description="Bill including tip and tax")
    per_person: float
    tip_amount: float
    tax_amount: float
    rounded: bool = Field(
        default=False,
        description="per_person was rounded up to a whole unit"
    )


class SavingsResult(BaseModel):
    """Projected value of a savings plan."""

    future_value: float
    total_invested: float
    interest_earned: float
    roi_percent: float = Field(
        default=0.0,
        description="interest_earned as a percentage of total_invested"
    )


class LoanResult(BaseModel):
    """Monthly installment and loan totals."""

    emi: float
    total_payment: float
    total_interest: float


class AmortizationRow(BaseModel):
    """One month of an amortization schedule."""

    month: int = Field(ge=1)
    payment: float
    interest: float
    principal: float
    balance: float = Field(ge=0.0)
