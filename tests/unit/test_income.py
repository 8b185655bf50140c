"""Unit tests for income projection and date handling."""

from datetime import date

import pytest

from fincalc.sdk.errors import InvalidInput
from fincalc.sdk.income import (
    calculate_income,
    days_worked,
    income_from_annual,
    income_from_monthly,
    parse_date,
)


class TestParseDate:
    """Tests for YYYY-MM-DD parsing."""

    def test_valid(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)
        assert parse_date(" 2024-06-30 ") == date(2024, 6, 30)

    @pytest.mark.parametrize("value", [
        "2024/01/01",
        "2024-01",
        "2024-01-01-01",
        "2024-0a-01",
        "2024-0\u00b2-01",
        "2024--01",
        "2023-02-29",
        "2024-13-01",
        "",
    ])
    def test_invalid(self, value):
        with pytest.raises(InvalidInput):
            parse_date(value)


class TestDaysWorked:
    """Days are counted inclusively from the effective start."""

    def test_full_first_half(self):
        assert days_worked("2024-01-01", "2024-06-30") == 182

    def test_same_day(self):
        assert days_worked("2024-03-15", "2024-03-15") == 1

    def test_start_before_year_clamps_to_jan_1(self):
        assert days_worked("2023-06-01", "2024-01-31") == 31

    def test_mid_year_start(self):
        assert days_worked("2024-06-01", "2024-06-30") == 30

    def test_check_before_start(self):
        assert days_worked("2024-07-01", "2024-06-30") == 0


class TestCalculateIncome:
    """Tests for the YTD projection."""

    def test_projection(self):
        result = calculate_income(50000, "2024-01-01", "2024-06-30")
        assert result.days_worked == 182
        assert result.gross_annual == 100275.0
        assert result.gross_monthly == 8356.0
        assert result.gross_weekly == 1928.0
        assert result.gross_daily == 275.0
        assert result.max_auto_payment == 1003.0
        assert result.max_rent == 2507.0

    def test_check_date_before_start(self):
        with pytest.raises(InvalidInput, match="after start date"):
            calculate_income(50000, "2024-07-01", "2024-06-30")

    @pytest.mark.parametrize("ytd", [0, -1])
    def test_non_positive_ytd(self, ytd):
        with pytest.raises(InvalidInput):
            calculate_income(ytd, "2024-01-01", "2024-06-30")

    def test_malformed_date(self):
        with pytest.raises(InvalidInput):
            calculate_income(50000, "01/01/2024", "2024-06-30")


class TestDirectIncome:
    """Income entered as a monthly or annual figure."""

    def test_from_monthly(self):
        result = income_from_monthly(6000)
        assert result.gross_annual == 72000.0
        assert result.gross_monthly == 6000.0
        assert result.days_worked == 0
        assert result.max_auto_payment == 720.0
        assert result.max_rent == 1800.0

    def test_from_annual(self):
        result = income_from_annual(78000)
        assert result.gross_monthly == 6500.0
        assert result.gross_weekly == 1500.0

    def test_invalid(self):
        with pytest.raises(InvalidInput):
            income_from_monthly(0)
        with pytest.raises(InvalidInput):
            income_from_annual(-1)
