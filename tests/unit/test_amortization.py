"""Unit tests for level-payment amortization."""

import pytest

from fincalc.sdk.amortization import (
    generate_schedule,
    level_payment,
    reverse_amortize,
    schedule_totals,
)
from fincalc.sdk.errors import InvalidInput
from fincalc.sdk.rounding import round_cents, round_to, round_to_dollar


class TestRounding:
    """Half-away-from-zero rounding."""

    def test_half_rounds_up(self):
        assert round_to(2.5) == 3.0
        assert round_to_dollar(0.5) == 1.0

    def test_negative_half_rounds_away_from_zero(self):
        assert round_to(-2.5) == -3.0

    def test_cents(self):
        assert round_cents(0.125) == 0.13
        assert round_cents(10.0) == 10.0


class TestLevelPayment:
    """Tests for level_payment and reverse_amortize."""

    def test_auto_loan_payment(self):
        """$30,000 at 5.99% for 60 months is about $580/month."""
        payment = level_payment(30000, 5.99, 60)
        assert 570 < payment < 590

    def test_zero_rate_is_linear(self):
        assert level_payment(1200, 0, 12) == pytest.approx(100.0)
        assert reverse_amortize(100, 0, 12) == pytest.approx(1200.0)

    def test_quarterly_periods(self):
        monthly = level_payment(10000, 6, 12)
        quarterly = level_payment(10000, 6, 4, periods_per_year=4)
        assert quarterly > monthly * 3

    def test_reverse_is_inverse(self):
        payment = level_payment(250000, 6.5, 360)
        assert reverse_amortize(payment, 6.5, 360) == pytest.approx(250000, rel=1e-9)

    @pytest.mark.parametrize("principal,rate,term", [
        (0, 5, 60),
        (-100, 5, 60),
        (1000, -1, 60),
        (1000, 5, 0),
    ])
    def test_invalid_inputs(self, principal, rate, term):
        with pytest.raises(InvalidInput):
            level_payment(principal, rate, term)

    def test_reverse_rejects_non_positive_payment(self):
        with pytest.raises(InvalidInput):
            reverse_amortize(0, 5, 60)


class TestSchedule:
    """Tests for generate_schedule and schedule_totals."""

    def test_schedule_length_and_final_balance(self):
        rows = list(generate_schedule(30000, 5.99, 60))
        assert len(rows) == 60
        assert rows[0].period == 1
        assert rows[-1].period == 60
        assert rows[-1].balance == 0.0

    def test_balance_decreases(self):
        rows = list(generate_schedule(30000, 5.99, 60))
        balances = [row.balance for row in rows]
        assert all(a > b for a, b in zip(balances, balances[1:]))

    def test_interest_falls_principal_rises(self):
        rows = list(generate_schedule(100000, 6, 120))
        assert rows[0].interest > rows[-1].interest
        assert rows[0].principal < rows[-1].principal

    def test_first_period_interest(self):
        first = next(generate_schedule(120000, 6, 360))
        assert first.interest == 600.0

    def test_principal_sums_to_loan(self):
        rows = list(generate_schedule(30000, 5.99, 60))
        assert sum(row.principal for row in rows) == pytest.approx(30000, abs=1.0)

    def test_zero_rate_schedule(self):
        rows = list(generate_schedule(1200, 0, 12))
        assert all(row.interest == 0.0 for row in rows)
        assert all(row.payment == 100.0 for row in rows)
        assert rows[-1].balance == 0.0

    def test_invalid_inputs_raise_before_iteration(self):
        with pytest.raises(InvalidInput):
            generate_schedule(0, 5, 60)

    def test_totals(self):
        rows = list(generate_schedule(30000, 5.99, 60))
        totals = schedule_totals(rows)
        assert totals.periods == 60
        assert totals.total_principal == pytest.approx(30000, abs=1.0)
        assert totals.total_interest == pytest.approx(
            totals.total_paid - totals.total_principal, abs=0.01
        )

    def test_totals_of_empty_schedule(self):
        totals = schedule_totals([])
        assert totals.periods == 0
        assert totals.total_paid == 0.0
