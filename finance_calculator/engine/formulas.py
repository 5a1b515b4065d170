"""
Financial Formulas

Stateless calculators for the expense-split, savings and EMI tabs.

DESIGN DECISION: Every formula is recomputed from scratch on each input
change. Inputs are tiny and human-paced, so there is nothing to cache.
Garbled input is already 0 by the time it reaches here (see the input
models), and every result is clamped to a finite number: a degenerate
loan term shows an EMI of 0, never NaN.
"""

import math
from typing import Any, Mapping, Union

from finance_calculator.models.calculator import CalculatorMode
from finance_calculator.models.financial import (
    AmortizationRow,
    ExpenseSplitInputs,
    LoanInputs,
    LoanResult,
    SavingsInputs,
    SavingsResult,
    SplitResult,
)

DEFAULT_MAX_SCHEDULE_MONTHS = 1200

FinancialResult = Union[SplitResult, SavingsResult, LoanResult]


def _finite(value: float) -> float:
    """Clamp NaN, +/-Infinity and anything that is not a real number to 0."""
    if not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _growth(rate: float, periods: float) -> float:
    """
    (1 + rate) ** periods as a real number.

    A negative base with a fractional exponent has no real value and
    gives NaN; overflow and a zero base with a negative exponent give
    Infinity. Callers clamp both through _finite.
    """
    base = 1 + rate
    if base < 0 and not float(periods).is_integer():
        return math.nan
    try:
        return base ** periods
    except (OverflowError, ZeroDivisionError):
        return math.inf


# =============================================================================
# EXPENSE SPLIT
# =============================================================================

def split_expense(inputs: ExpenseSplitInputs) -> SplitResult:
    """
    Share a bill, with tip and tax on top, between num_people.

    Fewer than one person counts as one. With round_up the per-person
    share is rounded up to the next whole unit.
    """
    amount = inputs.total_amount
    tip_amount = amount * inputs.tip_percentage / 100
    tax_amount = amount * inputs.tax_percentage / 100
    total = amount * (1 + (inputs.tip_percentage + inputs.tax_percentage) / 100)

    per_person = _finite(total / max(inputs.num_people, 1))
    if inputs.round_up:
        per_person = float(math.ceil(per_person))

    return SplitResult(
        total=_finite(total),
        per_person=per_person,
        tip_amount=_finite(tip_amount),
        tax_amount=_finite(tax_amount),
        rounded=inputs.round_up,
    )


# =============================================================================
# SAVINGS
# =============================================================================

def project_savings(inputs: SavingsInputs) -> SavingsResult:
    """
    Future value of a principal plus monthly contributions.

    FV = P(1+r)^n + PMT((1+r)^n - 1)/r, with r the monthly rate and n the
    number of months. At r = 0 growth is straight-line: P + PMT*n.
    """
    principal = inputs.principal
    contribution = inputs.monthly_contribution
    rate = inputs.monthly_rate
    months = inputs.months

    total_invested = _finite(principal + contribution * months)

    if rate == 0:
        future_value = total_invested
    else:
        growth = _growth(rate, months)
        future_value = _finite(principal * growth + contribution * (growth - 1) / rate)

    interest_earned = _finite(future_value - total_invested)
    roi = interest_earned / total_invested * 100 if total_invested > 0 else 0.0

    return SavingsResult(
        future_value=future_value,
        total_invested=total_invested,
        interest_earned=interest_earned,
        roi_percent=_finite(roi),
    )


# =============================================================================
# LOANS
# =============================================================================

def calculate_emi(inputs: LoanInputs) -> LoanResult:
    """
    Equated monthly installment for an amortizing loan.

    EMI = P r (1+r)^n / ((1+r)^n - 1); at r = 0 it is simply P / n.
    A zero or negative term yields zeros across the board.
    """
    principal = inputs.loan_amount
    rate = inputs.monthly_rate
    months = inputs.months

    if months <= 0:
        return LoanResult(emi=0.0, total_payment=0.0, total_interest=0.0)

    if rate == 0:
        emi = principal / months
    else:
        growth = _growth(rate, months)
        denominator = growth - 1
        emi = principal * rate * growth / denominator if denominator else math.nan

    emi = _finite(emi)
    if emi == 0:
        return LoanResult(emi=0.0, total_payment=0.0, total_interest=0.0)

    total_payment = _finite(emi * months)
    return LoanResult(
        emi=emi,
        total_payment=total_payment,
        total_interest=_finite(total_payment - principal),
    )


def amortization_schedule(
    inputs: LoanInputs,
    max_months: int = DEFAULT_MAX_SCHEDULE_MONTHS,
) -> list[AmortizationRow]:
    """
    Month-by-month breakdown of paying the loan off at its EMI.

    Returns an empty schedule when there is nothing to amortize
    (no balance, no installment) or the installment never covers the
    interest. The last payment is trimmed to the remaining balance.
    """
    balance = inputs.loan_amount
    rate = inputs.monthly_rate
    payment = calculate_emi(inputs).emi

    if balance <= 0 or payment <= 0:
        return []
    if payment <= balance * rate:
        return []

    schedule = []
    month = 0
    # Sub-cent remainders are float noise from the EMI formula
    while balance > 0.005 and month < max_months:
        month += 1
        interest = balance * rate
        principal = payment - interest
        if principal > balance:
            principal = balance
        balance -= principal
        schedule.append(AmortizationRow(
            month=month,
            payment=interest + principal,
            interest=interest,
            principal=principal,
            balance=max(0.0, balance),
        ))

    return schedule


# =============================================================================
# MODE DISPATCH
# =============================================================================

def compute(mode: CalculatorMode, fields: Mapping[str, Any]) -> FinancialResult:
    """
    Recompute a financial tab from its raw field values.

    Unknown field names are ignored and missing ones default to 0, so a
    partially filled form is always computable.

    Raises:
        ValueError: For CalculatorMode.BASIC, which has no formula.
    """
    if mode == CalculatorMode.SPLIT:
        return split_expense(ExpenseSplitInputs(**_known(ExpenseSplitInputs, fields)))
    if mode == CalculatorMode.SAVINGS:
        return project_savings(SavingsInputs(**_known(SavingsInputs, fields)))
    if mode == CalculatorMode.EMI:
        return calculate_emi(LoanInputs(**_known(LoanInputs, fields)))
    raise ValueError(f"No financial formula for mode: {mode.value}")


def _known(model, fields: Mapping[str, Any]) -> dict:
    return {name: value for name, value in fields.items() if name in model.model_fields}
