"""Unit tests for the 50/30/20 budget."""

import pytest

from fincalc.sdk.budget import calculate_budget_allocation, calculate_quick_reference
from fincalc.sdk.errors import InvalidInput


class TestBudgetAllocation:
    """Tests for calculate_budget_allocation."""

    def test_category_split(self):
        result = calculate_budget_allocation(5000)
        assert result.needs.monthly == 2500.0
        assert result.wants.monthly == 1500.0
        assert result.savings.monthly == 1000.0

    def test_categories_total_net(self):
        result = calculate_budget_allocation(4321)
        total = result.needs.percent + result.wants.percent + result.savings.percent
        assert total == 100.0
        monthly = result.needs.monthly + result.wants.monthly + result.savings.monthly
        assert monthly == pytest.approx(4321, abs=2)

    def test_subcategories_sum_to_category(self):
        result = calculate_budget_allocation(5000)
        for category in (result.needs, result.wants, result.savings):
            assert sum(sub.percent for sub in category.subcategories) == category.percent
            assert sum(sub.monthly for sub in category.subcategories) == category.monthly

    def test_weekly_and_daily(self):
        needs = calculate_budget_allocation(5000).needs
        assert needs.weekly == 577.0
        assert needs.daily == 83.0

    def test_subcategory_names(self):
        result = calculate_budget_allocation(5000)
        assert [s.name for s in result.needs.subcategories] == [
            "Housing", "Utilities", "Groceries", "Transportation",
        ]
        assert result.needs.subcategories[0].monthly == 1250.0

    @pytest.mark.parametrize("net", [0, -100])
    def test_invalid(self, net):
        with pytest.raises(InvalidInput):
            calculate_budget_allocation(net)


class TestQuickReference:
    """Tests for calculate_quick_reference."""

    def test_values(self):
        result = calculate_quick_reference(5000)
        assert result.daily_budget == 167.0
        assert result.hourly_rate == 29.0
        assert result.emergency_fund_3mo == 7500.0
        assert result.emergency_fund_6mo == 15000.0

    def test_part_time_hours(self):
        assert calculate_quick_reference(5000, hours_per_week=20).hourly_rate == 58.0

    def test_zero_hours_falls_back_to_forty(self):
        assert calculate_quick_reference(5000, 0) == calculate_quick_reference(5000, 40)

    def test_invalid(self):
        with pytest.raises(InvalidInput):
            calculate_quick_reference(0)
