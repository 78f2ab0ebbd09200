"""Tests for fintrack.domain.budget."""

from decimal import Decimal

import pytest

from fintrack.domain.budget import BalanceBearing, Budget
from fintrack.domain.models import EnforcementMode
from fintrack.errors import BudgetExceeded, InvalidAmount, InvalidField, InvalidMonth


def make_budget(goal_limit: str | None = "300", mode: EnforcementMode = EnforcementMode.REJECT) -> Budget:
    return Budget.create(
        "b1",
        "Household",
        initial_funding=Decimal("1000"),
        goal_limit=None if goal_limit is None else Decimal(goal_limit),
        mode=mode,
    )


class TestBudgetCreate:
    """Tests for Budget.create."""

    def test_seeds_january_with_initial_funding(self) -> None:
        """Should put initial funding in month 1 only."""
        budget = Budget.create("b1", "Household", initial_funding=Decimal("1000"))

        assert budget.monthly_income(1) == Decimal("1000")
        for month in range(2, 13):
            assert budget.monthly_income(month) == Decimal("0")
            assert budget.monthly_expenses(month) == Decimal("0")
        assert budget.balance() == Decimal("1000")

    def test_zero_funding(self) -> None:
        budget = Budget.create("b1", "Household")

        assert budget.balance() == Decimal("0")

    @pytest.mark.parametrize("budget_id,name", [("", "Household"), ("b1", ""), ("b1", "   ")])
    def test_rejects_empty_id_or_name(self, budget_id: str, name: str) -> None:
        with pytest.raises(InvalidField):
            Budget.create(budget_id, name, initial_funding=Decimal("10"))

    def test_rejects_negative_funding(self) -> None:
        with pytest.raises(InvalidAmount):
            Budget.create("b1", "Household", initial_funding=Decimal("-1"))

    def test_has_no_goal_limit_by_default(self) -> None:
        budget = Budget.create("b1", "Household")

        assert budget.goal_limit is None
        assert budget.enforced is False
        assert budget.exceeded is False


class TestAddIncomeAndExpense:
    """Tests for Budget.add_income and Budget.add_expense."""

    def test_add_income_to_month(self) -> None:
        budget = make_budget()
        budget.add_income(4, "Salary", Decimal("2500"))

        assert budget.monthly_income(4) == Decimal("2500")
        assert budget.balance() == Decimal("3500")

    @pytest.mark.parametrize("month", [0, 13])
    def test_out_of_range_month_rejected(self, month: int) -> None:
        """Should raise InvalidMonth for months 0 and 13 with everything else valid."""
        budget = make_budget()

        with pytest.raises(InvalidMonth):
            budget.add_income(month, "Salary", Decimal("10"))
        with pytest.raises(InvalidMonth):
            budget.add_expense(month, "Food", Decimal("10"))

    def test_empty_category_rejected(self) -> None:
        budget = make_budget()

        with pytest.raises(InvalidField):
            budget.add_expense(1, "", Decimal("10"))

        assert budget.monthly_expenses(1) == Decimal("0")

    def test_second_expense_over_limit_is_rejected(self) -> None:
        """200 then 150 against a 300 ceiling: second call fails, total stays 200."""
        budget = make_budget("300")
        budget.add_expense(1, "Food", Decimal("200"))

        with pytest.raises(BudgetExceeded):
            budget.add_expense(1, "Food", Decimal("150"))

        assert budget.monthly_expenses(1) == Decimal("200")
        assert budget.exceeded is False

    def test_rejected_expense_leaves_budget_unchanged(self) -> None:
        budget = make_budget("300")
        budget.add_expense(1, "Food", Decimal("200"))
        snapshot = budget.ledgers()

        with pytest.raises(BudgetExceeded):
            budget.add_expense(1, "Rent", Decimal("500"))

        assert budget.ledgers() == snapshot

    def test_limit_is_per_month(self) -> None:
        budget = make_budget("300")
        budget.add_expense(1, "Food", Decimal("300"))
        budget.add_expense(2, "Food", Decimal("300"))

        assert budget.monthly_expenses(1) == Decimal("300")
        assert budget.monthly_expenses(2) == Decimal("300")

    def test_warn_mode_applies_and_flags_exceeded(self) -> None:
        budget = make_budget("300", EnforcementMode.WARN)
        budget.add_expense(1, "Food", Decimal("200"))
        over = budget.add_expense(1, "Food", Decimal("150"))

        assert over is True
        assert budget.monthly_expenses(1) == Decimal("350")
        assert budget.exceeded is True
        assert budget.exceeded_months() == [1]

    def test_warn_mode_keeps_accepting_expenses(self) -> None:
        budget = make_budget("100", EnforcementMode.WARN)
        budget.add_expense(3, "Fun", Decimal("150"))
        budget.add_expense(3, "Fun", Decimal("10"))

        assert budget.monthly_expenses(3) == Decimal("160")


class TestReadAccessors:
    """Tests for the monthly accessors and balance."""

    @pytest.mark.parametrize("month", [0, 13])
    def test_accessors_reject_bad_month(self, month: int) -> None:
        budget = make_budget()

        with pytest.raises(InvalidMonth):
            budget.monthly_income(month)
        with pytest.raises(InvalidMonth):
            budget.monthly_expenses(month)

    def test_balance_sums_all_months(self) -> None:
        budget = make_budget(None)
        budget.add_income(6, "Bonus", Decimal("500"))
        budget.add_expense(2, "Car", Decimal("800"))
        budget.add_expense(12, "Gifts", Decimal("250.25"))

        assert budget.balance() == Decimal("449.75")
        assert budget.monthly_balance(2) == Decimal("-800")

    def test_ledger_returns_detached_copy(self) -> None:
        budget = make_budget()
        ledger = budget.ledger(1)
        ledger.add_income(Decimal("999"))

        assert budget.monthly_income(1) == Decimal("1000")

    def test_budget_is_balance_bearing(self) -> None:
        assert isinstance(make_budget(), BalanceBearing)


class TestReset:
    """Tests for Budget.reset and set_goal_limit."""

    def test_reset_zeroes_expenses_and_clears_exceeded(self) -> None:
        budget = make_budget("100", EnforcementMode.WARN)
        budget.add_expense(1, "Food", Decimal("150"))
        budget.add_expense(7, "Travel", Decimal("90"))
        assert budget.exceeded is True

        budget.reset(Decimal("500"))

        for month in range(1, 13):
            assert budget.monthly_expenses(month) == Decimal("0")
        assert budget.exceeded is False
        assert budget.goal_limit == Decimal("500")

    def test_reset_keeps_income(self) -> None:
        budget = make_budget()
        budget.add_income(5, "Salary", Decimal("2000"))
        budget.reset(Decimal("400"))

        assert budget.monthly_income(1) == Decimal("1000")
        assert budget.monthly_income(5) == Decimal("2000")
        assert budget.balance() == Decimal("3000")

    @pytest.mark.parametrize("limit", [Decimal("0"), Decimal("-10")])
    def test_reset_requires_positive_limit(self, limit: Decimal) -> None:
        budget = make_budget()
        budget.add_expense(1, "Food", Decimal("50"))

        with pytest.raises(InvalidAmount):
            budget.reset(limit)

        assert budget.monthly_expenses(1) == Decimal("50")
        assert budget.goal_limit == Decimal("300")

    def test_lowering_limit_marks_exceeded(self) -> None:
        budget = make_budget("300")
        budget.add_expense(1, "Food", Decimal("250"))
        budget.set_goal_limit(Decimal("200"))

        assert budget.exceeded is True
        assert budget.monthly_expenses(1) == Decimal("250")

    def test_disabling_limit(self) -> None:
        budget = make_budget("300")
        budget.set_goal_limit(0)
        budget.add_expense(1, "Rent", Decimal("5000"))

        assert budget.enforced is False
        assert budget.exceeded is False


class TestEquality:
    """Tests for structural equality."""

    def test_equal_when_all_fields_match(self) -> None:
        a = make_budget()
        b = make_budget()
        a.add_expense(2, "Food", Decimal("10"))
        b.add_expense(2, "Other", Decimal("10.00"))

        assert a == b

    def test_differs_on_totals(self) -> None:
        a = make_budget()
        b = make_budget()
        a.add_income(2, "Gift", Decimal("1"))

        assert a != b
