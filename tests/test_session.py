"""Tests for fintrack.session."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from fintrack.config import Settings
from fintrack.domain.models import EnforcementMode, TransactionKind
from fintrack.domain.transaction_store import TransactionStore
from fintrack.domain.transactions import Transaction, TransactionBuilder
from fintrack.errors import BudgetExceeded, DuplicateTransaction, NotFound, PersistenceFailure
from fintrack.session import Session
from fintrack.store.gateway import FileGateway


def expense(amount: str, category: str = "Food", on: date = date(2025, 1, 15)) -> Transaction:
    return TransactionBuilder().category(category).amount(amount).kind(TransactionKind.EXPENSE).occurred_on(on).build()


def income(amount: str, on: date = date(2025, 1, 1)) -> Transaction:
    return TransactionBuilder().category("Salary").amount(amount).kind(TransactionKind.INCOME).occurred_on(on).build()


@pytest.fixture
def settings() -> Settings:
    return Settings(goal_limit=Decimal("300"))


@pytest.fixture
def session(tmp_path: Path, settings: Settings) -> Session:
    return Session(FileGateway(tmp_path), settings)


class TestOpen:
    """Tests for Session.open and Session.budget."""

    def test_creates_budget_from_settings(self, session: Session) -> None:
        budget = session.open("alice", initial_funding=Decimal("1000"))

        assert budget.id == "alice"
        assert budget.name == "alice's budget"
        assert budget.goal_limit == Decimal("300")
        assert budget.mode is EnforcementMode.REJECT
        assert budget.monthly_income(1) == Decimal("1000")

    def test_open_twice_returns_same_budget(self, session: Session) -> None:
        assert session.open("alice") is session.open("alice")

    def test_budget_before_open_raises(self, session: Session) -> None:
        with pytest.raises(NotFound):
            session.budget("alice")


class TestAddTransaction:
    """Tests for Session.add_transaction."""

    def test_applies_and_records(self, session: Session) -> None:
        session.open("alice")
        session.add_transaction("alice", income("1000"))
        session.add_transaction("alice", expense("30"))
        session.add_transaction("alice", expense("45"))

        budget = session.budget("alice")
        assert budget.monthly_income(1) == Decimal("1000")
        assert budget.monthly_expenses(1) == Decimal("75")
        assert session.store.totals_by_category("alice") == {"Food": Decimal("75")}

    def test_uses_transaction_month(self, session: Session) -> None:
        session.open("alice")
        session.add_transaction("alice", expense("20", on=date(2025, 8, 3)))

        assert session.budget("alice").monthly_expenses(8) == Decimal("20")

    def test_rejected_expense_is_not_recorded(self, session: Session) -> None:
        session.open("alice")
        session.add_transaction("alice", expense("200"))

        with pytest.raises(BudgetExceeded):
            session.add_transaction("alice", expense("150"))

        assert len(session.transactions("alice")) == 1
        assert session.budget("alice").monthly_expenses(1) == Decimal("200")

    def test_warn_mode_records_and_reports_over(self, tmp_path: Path) -> None:
        session = Session(FileGateway(tmp_path), Settings(mode=EnforcementMode.WARN, goal_limit=Decimal("300")))
        session.open("alice")
        session.add_transaction("alice", expense("200"))

        assert session.add_transaction("alice", expense("150")) is True
        assert len(session.transactions("alice")) == 2

    def test_duplicate_leaves_budget_unchanged(self, session: Session) -> None:
        session.open("alice")
        txn = expense("10")
        session.add_transaction("alice", txn)

        with pytest.raises(DuplicateTransaction):
            session.add_transaction("alice", txn)

        assert session.budget("alice").monthly_expenses(1) == Decimal("10")

    def test_unopened_user_raises(self, session: Session) -> None:
        with pytest.raises(NotFound):
            session.add_transaction("ghost", expense("1"))


class TestLimitsAndQueries:
    """Tests for goal limit changes and exceeding."""

    def test_reset_keeps_history(self, session: Session) -> None:
        session.open("alice")
        session.add_transaction("alice", expense("250"))
        session.reset("alice", Decimal("600"))

        assert session.budget("alice").monthly_expenses(1) == Decimal("0")
        assert session.budget("alice").goal_limit == Decimal("600")
        assert len(session.transactions("alice")) == 1

    def test_exceeding_uses_goal_limit(self, session: Session) -> None:
        session.open("alice")
        session.set_goal_limit("alice", Decimal("0"))
        big = expense("500")
        session.add_transaction("alice", big)
        session.add_transaction("alice", expense("20"))
        session.set_goal_limit("alice", Decimal("300"))

        assert session.exceeding("alice") == [big]

    def test_exceeding_without_limit_is_empty(self, session: Session) -> None:
        session.open("alice")
        session.set_goal_limit("alice", None)
        session.add_transaction("alice", expense("5000"))

        assert session.exceeding("alice") == []


class TestSave:
    """Tests for persisting a session."""

    def test_saved_state_is_reloaded(self, tmp_path: Path, settings: Settings) -> None:
        first = Session(FileGateway(tmp_path), settings)
        first.open("alice", initial_funding=Decimal("1000"))
        first.add_transaction("alice", expense("99.95"))
        first.save("alice")

        second = Session(FileGateway(tmp_path), settings)
        budget = second.open("alice")

        assert budget == first.budget("alice")
        assert second.transactions("alice") == first.transactions("alice")

    def test_save_unopened_user_raises(self, session: Session) -> None:
        with pytest.raises(NotFound):
            session.save("alice")


class StoreFailingGateway(FileGateway):
    """FileGateway whose transaction writes always fail."""

    def save_transactions(self, store: TransactionStore) -> None:
        raise PersistenceFailure("disk full")


class TestSaveOrder:
    """Tests for what a failed save leaves behind."""

    def test_failed_store_save_leaves_budget_unsaved(self, tmp_path: Path, settings: Settings) -> None:
        session = Session(StoreFailingGateway(tmp_path), settings)
        session.open("alice")
        session.add_transaction("alice", expense("40"))

        with pytest.raises(PersistenceFailure):
            session.save("alice")

        assert FileGateway(tmp_path).load_budget("alice") is None
