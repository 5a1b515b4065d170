"""Tests for the financial calculators."""

import pytest

from finance_calculator.engine.formulas import (
    amortization_schedule,
    calculate_emi,
    compute,
    project_savings,
    split_expense,
)
from finance_calculator.models.calculator import CalculatorMode
from finance_calculator.models.financial import (
    ExpenseSplitInputs,
    LoanInputs,
    LoanResult,
    SavingsInputs,
    SavingsResult,
    SplitResult,
)


class TestExpenseSplit:

    def test_split_with_tip_and_tax(self):
        result = split_expense(ExpenseSplitInputs(
            total_amount=100, num_people=4, tip_percentage=15, tax_percentage=8,
        ))
        assert result.total == pytest.approx(123.0)
        assert result.per_person == pytest.approx(30.75)
        assert result.tip_amount == pytest.approx(15.0)
        assert result.tax_amount == pytest.approx(8.0)
        assert result.rounded is False

    def test_round_up(self):
        result = split_expense(ExpenseSplitInputs(
            total_amount=100, num_people=3, round_up=True,
        ))
        assert result.per_person == 34.0
        assert result.rounded is True

    @pytest.mark.parametrize("people", [0, -2, "", "many"])
    def test_fewer_than_one_person_counts_as_one(self, people):
        result = split_expense(ExpenseSplitInputs(total_amount=50, num_people=people))
        assert result.per_person == 50.0

    def test_empty_form(self):
        result = split_expense(ExpenseSplitInputs(total_amount="", tip_percentage="x"))
        assert result.total == 0.0
        assert result.per_person == 0.0


class TestSavingsProjection:

    def test_zero_rate_is_straight_line(self):
        result = project_savings(SavingsInputs(
            principal=1000, monthly_contribution=100, annual_rate=0, years=1,
        ))
        assert result.future_value == pytest.approx(2200.0)
        assert result.total_invested == pytest.approx(2200.0)
        assert result.interest_earned == pytest.approx(0.0)
        assert result.roi_percent == pytest.approx(0.0)

    def test_unparsable_rate_is_zero_rate(self):
        result = project_savings(SavingsInputs(
            principal=1000, monthly_contribution=100, annual_rate="", years=1,
        ))
        assert result.future_value == pytest.approx(2200.0)

    def test_compound_growth_principal_only(self):
        result = project_savings(SavingsInputs(principal=1000, annual_rate=12, years=1))
        assert result.future_value == pytest.approx(1000 * 1.01 ** 12)
        assert result.total_invested == 1000.0

    def test_compound_growth_with_contributions(self):
        result = project_savings(SavingsInputs(
            principal=1000, monthly_contribution=100, annual_rate=5, years=10,
        ))
        r = 5 / 100 / 12
        growth = (1 + r) ** 120
        expected = 1000 * growth + 100 * (growth - 1) / r
        assert result.future_value == pytest.approx(expected)
        assert result.total_invested == pytest.approx(13000.0)
        assert result.interest_earned == pytest.approx(expected - 13000.0)
        assert result.roi_percent == pytest.approx((expected - 13000.0) / 13000.0 * 100)

    def test_nothing_invested(self):
        result = project_savings(SavingsInputs())
        assert result == SavingsResult(
            future_value=0.0, total_invested=0.0, interest_earned=0.0, roi_percent=0.0,
        )

    def test_overflow_clamped(self):
        result = project_savings(SavingsInputs(principal=1, annual_rate=1000, years=10000))
        assert result.future_value == 0.0


class TestEMI:

    def test_zero_rate(self):
        result = calculate_emi(LoanInputs(loan_amount=120000, interest_rate=0, loan_term=10))
        assert result.emi == pytest.approx(1000.0)
        assert result.total_payment == pytest.approx(120000.0)
        assert result.total_interest == pytest.approx(0.0)

    def test_standard_loan(self):
        result = calculate_emi(LoanInputs(loan_amount=200000, interest_rate=7.5, loan_term=20))
        r = 7.5 / 100 / 12
        growth = (1 + r) ** 240
        expected = 200000 * r * growth / (growth - 1)
        assert result.emi == pytest.approx(expected)
        assert result.emi == pytest.approx(1611.19, abs=0.01)
        assert result.total_payment == pytest.approx(expected * 240)
        assert result.total_interest == pytest.approx(expected * 240 - 200000)

    @pytest.mark.parametrize("term", [0, "", "abc", -5])
    def test_degenerate_term_is_zero(self, term):
        result = calculate_emi(LoanInputs(loan_amount=5000, interest_rate=0, loan_term=term))
        assert result == LoanResult(emi=0.0, total_payment=0.0, total_interest=0.0)

    def test_degenerate_term_with_interest(self):
        result = calculate_emi(LoanInputs(loan_amount=5000, interest_rate=10, loan_term=0))
        assert result.emi == 0.0

    def test_no_principal(self):
        result = calculate_emi(LoanInputs(loan_amount="", interest_rate=5, loan_term=5))
        assert result.emi == 0.0
        assert result.total_interest == 0.0


class TestAmortizationSchedule:

    def test_zero_rate_schedule(self):
        schedule = amortization_schedule(LoanInputs(loan_amount=1200, interest_rate=0, loan_term=1))
        assert len(schedule) == 12
        assert all(row.interest == 0.0 for row in schedule)
        assert schedule[0].principal == pytest.approx(100.0)
        assert schedule[-1].balance == pytest.approx(0.0)

    def test_schedule_pays_off_loan(self):
        inputs = LoanInputs(loan_amount=10000, interest_rate=6, loan_term=2)
        schedule = amortization_schedule(inputs)
        emi = calculate_emi(inputs).emi
        assert len(schedule) == 24
        assert schedule[0].interest == pytest.approx(50.0)
        assert schedule[0].payment == pytest.approx(emi)
        assert schedule[-1].balance == pytest.approx(0.0, abs=0.01)
        assert sum(row.principal for row in schedule) == pytest.approx(10000.0, abs=0.01)
        assert [row.month for row in schedule] == list(range(1, 25))

    def test_balance_decreases(self):
        schedule = amortization_schedule(LoanInputs(loan_amount=50000, interest_rate=9, loan_term=5))
        balances = [row.balance for row in schedule]
        assert balances == sorted(balances, reverse=True)

    def test_empty_for_degenerate_loan(self):
        assert amortization_schedule(LoanInputs(loan_amount=0, interest_rate=5, loan_term=5)) == []
        assert amortization_schedule(LoanInputs(loan_amount=1000, interest_rate=5, loan_term=0)) == []

    def test_max_months_cap(self):
        schedule = amortization_schedule(
            LoanInputs(loan_amount=1200, interest_rate=0, loan_term=1),
            max_months=6,
        )
        assert len(schedule) == 6
        assert schedule[-1].balance == pytest.approx(600.0)


class TestOutOfRangeRates:
    """Rates below -100% must still produce finite numbers, never raise."""

    def test_savings_negative_base_fractional_term(self):
        result = compute(CalculatorMode.SAVINGS, {
            "principal": "1000", "monthly_contribution": "100",
            "annual_rate": "-2400", "years": "0.125",
        })
        assert result.future_value == 0.0
        assert result.total_invested == pytest.approx(1150.0)
        assert result.interest_earned == pytest.approx(-1150.0)
        assert result.roi_percent == pytest.approx(-100.0)

    def test_emi_negative_base_fractional_term(self):
        result = compute(CalculatorMode.EMI, {
            "loan_amount": "1000", "interest_rate": "-2400", "loan_term": "0.125",
        })
        assert result == LoanResult(emi=0.0, total_payment=0.0, total_interest=0.0)

    def test_schedule_negative_base_fractional_term(self):
        inputs = LoanInputs(loan_amount="1000", interest_rate="-2400", loan_term="0.125")
        assert amortization_schedule(inputs) == []

    def test_savings_zero_base_negative_term(self):
        result = compute(CalculatorMode.SAVINGS, {
            "principal": "1000", "monthly_contribution": "100",
            "annual_rate": "-1200", "years": "-1",
        })
        assert result.future_value == 0.0
        assert result.total_invested == pytest.approx(-200.0)
        assert result.interest_earned == pytest.approx(200.0)
        assert result.roi_percent == 0.0

    def test_savings_zero_base_principal_only(self):
        result = compute(CalculatorMode.SAVINGS, {
            "principal": "500", "annual_rate": "-1200", "years": "-1",
        })
        assert result.future_value == 0.0

    def test_emi_zero_base_negative_term(self):
        result = compute(CalculatorMode.EMI, {
            "loan_amount": "1000", "interest_rate": "-1200", "loan_term": "-1",
        })
        assert result == LoanResult(emi=0.0, total_payment=0.0, total_interest=0.0)


class TestCompute:

    def test_split_mode(self):
        result = compute(CalculatorMode.SPLIT, {
            "total_amount": "100", "num_people": "4",
            "tip_percentage": "15", "tax_percentage": "8",
        })
        assert isinstance(result, SplitResult)
        assert result.per_person == pytest.approx(30.75)

    def test_savings_mode_ignores_unknown_fields(self):
        result = compute(CalculatorMode.SAVINGS, {
            "principal": "1000", "monthly_contribution": "100",
            "annual_rate": "0", "years": "1", "goal": "house",
        })
        assert isinstance(result, SavingsResult)
        assert result.future_value == pytest.approx(2200.0)

    def test_emi_mode_with_missing_fields(self):
        result = compute(CalculatorMode.EMI, {"loan_amount": "120000"})
        assert isinstance(result, LoanResult)
        assert result.emi == 0.0

    def test_basic_mode_has_no_formula(self):
        with pytest.raises(ValueError):
            compute(CalculatorMode.BASIC, {})
