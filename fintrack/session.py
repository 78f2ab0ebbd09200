"""Application session tying budgets, the transaction store and storage together.

One Session lives for one run of the application. It replaces a process-wide
user registry: whatever needs budgets or transactions is handed the session.
"""

import logging
from decimal import Decimal

from fintrack.config import Settings
from fintrack.domain.budget import Budget
from fintrack.domain.models import ZERO, TransactionKind, UserId
from fintrack.domain.money import validate_text
from fintrack.domain.transaction_store import TransactionStore
from fintrack.domain.transactions import Transaction
from fintrack.errors import DuplicateTransaction, NotFound
from fintrack.store.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class Session:
    """Holds open budgets and the shared transaction store.

    Not thread-safe; callers must not mutate a budget while it is being saved.
    """

    def __init__(self, gateway: PersistenceGateway, settings: Settings | None = None) -> None:
        self.gateway = gateway
        self.settings = settings or Settings()
        self.store: TransactionStore = gateway.load_transactions()
        self._budgets: dict[UserId, Budget] = {}

    def open(self, user_id: str, name: str | None = None, initial_funding: object = ZERO) -> Budget:
        """Load a user's budget from storage, or create it on first use.

        Args:
            user_id: Identifier supplied by the authentication layer.
            name: Budget name for a new budget (defaults to "<user_id>'s budget").
            initial_funding: Income seeded into January for a new budget.

        Returns:
            The user's Budget.
        """
        key = UserId(validate_text(user_id, "user_id"))
        if key in self._budgets:
            return self._budgets[key]

        budget = self.gateway.load_budget(key)
        if budget is None:
            budget = Budget.create(
                id=key,
                name=name or f"{key}'s budget",
                initial_funding=initial_funding,
                goal_limit=self.settings.goal_limit,
                mode=self.settings.mode,
            )
            logger.info("Created budget for %s", key)
        else:
            logger.debug("Opened saved budget for %s", key)

        self._budgets[key] = budget
        return budget

    def budget(self, user_id: str) -> Budget:
        """Return an already opened budget.

        Raises:
            NotFound: If the user's budget hasn't been opened in this session.
        """
        try:
            return self._budgets[UserId(user_id)]
        except KeyError:
            raise NotFound(f"No budget open for user {user_id!r}") from None

    def add_transaction(self, user_id: str, transaction: Transaction) -> bool:
        """Apply a transaction to the user's budget, then record it.

        Nothing is recorded when the budget rejects the transaction.

        Returns:
            True if the budget's month is now over its goal limit.

        Raises:
            NotFound: If the user's budget isn't open.
            BudgetExceeded: If the budget rejects the expense.
            DuplicateTransaction: If the transaction was already recorded.
        """
        budget = self.budget(user_id)
        if self.store.contains(user_id, transaction.id):
            raise DuplicateTransaction(transaction.id)

        over = False
        if transaction.kind is TransactionKind.INCOME:
            budget.add_income(transaction.month, transaction.category, transaction.amount)
        else:
            over = budget.add_expense(transaction.month, transaction.category, transaction.amount)

        self.store.record(user_id, transaction)
        if over:
            logger.info("Budget for %s is over its limit in month %d", user_id, transaction.month)
        return over

    def set_goal_limit(self, user_id: str, limit: object) -> None:
        self.budget(user_id).set_goal_limit(limit)

    def reset(self, user_id: str, new_goal_limit: object) -> None:
        """Zero the user's monthly expenses and install a new goal limit.

        Recorded transactions are kept; they remain the history of what happened.
        """
        self.budget(user_id).reset(new_goal_limit)
        logger.info("Reset budget for %s", user_id)

    def transactions(self, user_id: str) -> list[Transaction]:
        return self.store.transactions(user_id)

    def exceeding(self, user_id: str) -> list[Transaction]:
        """Expenses that on their own are above the user's goal limit."""
        limit = self.budget(user_id).goal_limit
        if limit is None or limit <= Decimal(0):
            return []
        return self.store.exceeding(user_id, limit)

    def save(self, user_id: str) -> None:
        """Persist the transaction store, then the user's budget.

        The two snapshots are written independently. The store goes first so a
        failed save never leaves a budget holding amounts the saved history lacks.

        Raises:
            NotFound: If the user's budget isn't open.
            PersistenceFailure: If storage fails.
        """
        budget = self.budget(user_id)
        self.gateway.save_transactions(self.store)
        self.gateway.save_budget(user_id, budget)
        logger.debug("Saved session for %s", user_id)
