"""Unit tests for auto and housing affordability."""

import pytest

from fincalc.sdk.affordability import (
    CREDIT_TIERS,
    calculate_auto_affordability,
    calculate_dti,
    calculate_loan_amount,
    calculate_loan_estimates,
    calculate_max_home_price,
    calculate_monthly_payment,
    calculate_mortgage,
    calculate_payment_approvals,
    calculate_pmi,
    calculate_rent_affordability,
    classify_dti,
    generate_auto_schedule,
    generate_mortgage_schedule,
    get_credit_tiers,
)
from fincalc.sdk.amortization import level_payment
from fincalc.sdk.errors import InvalidInput
from fincalc.sdk.schemas import PtiRatio


class TestPaymentApprovals:
    """PTI (payment-to-income) limits."""

    def test_three_ratios_in_order(self):
        approvals = calculate_payment_approvals(5000)
        assert [a.pti_type for a in approvals] == ["Conservative", "Standard", "Aggressive"]
        assert [a.max_payment for a in approvals] == pytest.approx([400.0, 600.0, 750.0])

    def test_descriptions(self):
        approvals = calculate_payment_approvals(5000)
        assert approvals[1].description == PtiRatio.STANDARD.description

    @pytest.mark.parametrize("income", [0, -100])
    def test_non_positive_income(self, income):
        with pytest.raises(InvalidInput):
            calculate_payment_approvals(income)


class TestLoanEstimates:
    """Loan amounts by credit tier."""

    def test_credit_tiers(self):
        tiers = get_credit_tiers()
        assert [t.name for t in tiers] == ["Excellent", "Good", "Fair", "Poor"]
        aprs = [t.apr for t in tiers]
        assert aprs == sorted(aprs)

    def test_loan_amount_falls_with_credit(self):
        estimates = calculate_loan_estimates(600)
        amounts = [e.loan_amount for e in estimates]
        assert len(amounts) == len(CREDIT_TIERS)
        assert all(a > b for a, b in zip(amounts, amounts[1:]))

    def test_total_cost_is_payment_times_term(self):
        for estimate in calculate_loan_estimates(500, 48):
            assert estimate.total_cost == 24000.0
            assert estimate.total_interest == pytest.approx(24000.0 - estimate.loan_amount)

    def test_zero_term_uses_default(self):
        assert calculate_loan_estimates(500, 0) == calculate_loan_estimates(500, 60)

    def test_affordability_uses_standard_payment(self):
        result = calculate_auto_affordability(5000)
        assert len(result.payment_approvals) == 3
        assert result.loan_estimates == calculate_loan_estimates(600.0)

    def test_loan_amount_inverts_payment(self):
        assert calculate_loan_amount(500, 0, 60) == 30000.0
        assert calculate_loan_amount(580, 5.99, 60) == pytest.approx(30000, abs=20)

    def test_monthly_payment_rounded(self):
        assert calculate_monthly_payment(30000, 5.99, 60) == round(level_payment(30000, 5.99, 60))

    def test_auto_schedule(self):
        rows = generate_auto_schedule(20000, 8.49, 48)
        assert len(rows) == 48
        assert rows[-1].balance == 0.0


class TestRent:
    """Rent affordability."""

    def test_limits(self):
        result = calculate_rent_affordability(5000)
        assert result.max_rent_30 == 1500.0
        assert result.max_rent_25 == 1250.0
        assert result.current_rent is None
        assert result.is_affordable is None

    def test_current_rent_over_limit(self):
        result = calculate_rent_affordability(5000, 1600)
        assert result.rent_percent == pytest.approx(32.0)
        assert result.is_affordable is False

    def test_current_rent_within_limit(self):
        assert calculate_rent_affordability(5000, 1200).is_affordable is True

    def test_negative_rent(self):
        with pytest.raises(InvalidInput):
            calculate_rent_affordability(5000, -1)


class TestMortgage:
    """Mortgage PITI."""

    def test_twenty_percent_down(self):
        result = calculate_mortgage(400000, 20, 6.5, 30, 1.2, 1500)
        assert result.down_payment == 80000.0
        assert result.loan_amount == 320000.0
        assert result.piti.pmi == 0.0
        assert result.piti.principal_interest == pytest.approx(2023, abs=1)
        assert result.piti.property_tax == 400.0
        assert result.piti.insurance == 125.0

    def test_pmi_below_twenty_percent(self):
        result = calculate_mortgage(400000, 10, 6.5, 30, 1.2, 1500)
        assert result.loan_amount == 360000.0
        assert result.piti.pmi == 150.0

    def test_total_is_sum_of_components(self):
        piti = calculate_mortgage(350000, 5, 7, 30, 1.0, 1200).piti
        parts = piti.principal_interest + piti.property_tax + piti.insurance + piti.pmi
        assert piti.total_monthly == pytest.approx(parts, abs=0.02)

    def test_total_interest(self):
        result = calculate_mortgage(400000, 20, 6.5, 30, 1.2, 1500)
        assert result.total_interest == pytest.approx(result.total_payments - result.loan_amount, abs=0.01)

    def test_zero_rate(self):
        result = calculate_mortgage(360000, 0, 0, 30, 0, 0)
        assert result.piti.principal_interest == 1000.0

    def test_pmi_on_tiny_loan_not_rounded_away(self):
        result = calculate_mortgage(10, 10, 6.5, 30, 1.2, 0)
        assert result.loan_amount == 9.0
        assert result.piti.pmi == 0.01

    def test_pmi_helper(self):
        assert calculate_pmi(240000, 19.99) == pytest.approx(100.0)
        assert calculate_pmi(240000, 20) == 0.0

    @pytest.mark.parametrize("args", [
        (0, 20, 6.5, 30, 1.2, 1500),
        (400000, 100, 6.5, 30, 1.2, 1500),
        (400000, -1, 6.5, 30, 1.2, 1500),
        (400000, 20, 6.5, 0, 1.2, 1500),
        (400000, 20, 6.5, 30, -1, 1500),
    ])
    def test_invalid(self, args):
        with pytest.raises(InvalidInput):
            calculate_mortgage(*args)


class TestDti:
    """Debt-to-income tiers."""

    def test_tier_boundaries_inclusive(self):
        assert classify_dti(28.0, 36.0).startswith("Excellent")
        assert classify_dti(28.1, 36.0).startswith("Good")
        assert classify_dti(31.0, 43.0).startswith("Good")
        assert classify_dti(31.0, 43.1).startswith("Fair")
        assert classify_dti(36.0, 50.0).startswith("Fair")
        assert classify_dti(36.1, 50.0).startswith("At risk")

    @pytest.mark.parametrize("housing,other,tier", [
        (2500, 1000, "Excellent"),
        (3000, 1000, "Good"),
        (3500, 1000, "Fair"),
        (4000, 0, "At risk"),
        (2000, 3500, "At risk"),
    ])
    def test_calculate_dti_tiers(self, housing, other, tier):
        result = calculate_dti(10000, housing, other)
        assert result.qualification.startswith(tier)

    def test_ratios(self):
        result = calculate_dti(6000, 1500, 600)
        assert result.front_end_dti == 25.0
        assert result.back_end_dti == 35.0
        assert result.is_affordable is True

    def test_not_affordable_over_back_end(self):
        assert calculate_dti(10000, 2500, 1500).is_affordable is False

    def test_invalid(self):
        with pytest.raises(InvalidInput):
            calculate_dti(0, 1000)
        with pytest.raises(InvalidInput):
            calculate_dti(5000, -1)


class TestMaxHomePrice:
    """Approximate maximum home price."""

    def test_estimate(self):
        result = calculate_max_home_price(10000)
        assert result.max_housing_payment == 2800.0
        assert 430000 < result.estimated_max_price < 460000
        assert result.assumptions.down_payment_percent == 20.0

    def test_estimate_pays_back_to_pi_share(self):
        """The loan on the estimated price costs about 80% of the housing cap."""
        result = calculate_max_home_price(10000, down_payment_percent=10, interest_rate=7)
        loan = result.estimated_max_price * 0.9
        assert level_payment(loan, 7, 360) == pytest.approx(2240, abs=2)

    def test_more_down_buys_more_house(self):
        low = calculate_max_home_price(8000, down_payment_percent=5)
        high = calculate_max_home_price(8000, down_payment_percent=25)
        assert high.estimated_max_price > low.estimated_max_price

    def test_invalid(self):
        with pytest.raises(InvalidInput):
            calculate_max_home_price(0)
        with pytest.raises(InvalidInput):
            calculate_max_home_price(8000, down_payment_percent=100)


class TestMortgageSchedule:
    """Mortgage schedule with cumulative totals."""

    def test_schedule(self):
        rows = generate_mortgage_schedule(320000, 6.5, 30)
        assert len(rows) == 360
        assert rows[-1].balance == 0.0
        assert rows[-1].cumulative_principal == pytest.approx(320000, abs=1)
        assert rows[-1].cumulative_interest > rows[0].cumulative_interest

    def test_invalid(self):
        with pytest.raises(InvalidInput):
            generate_mortgage_schedule(0, 6.5, 30)
