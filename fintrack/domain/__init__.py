"""Domain models and types for fintrack.

This package contains the functional core:
- Budgets, monthly ledgers, transactions and the transaction store
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from fintrack.domain.budget import BalanceBearing, Budget
from fintrack.domain.ledger import MonthlyLedger
from fintrack.domain.models import CategoryName, EnforcementMode, Money, MonthIndex, TransactionKind, UserId
from fintrack.domain.transaction_store import TransactionStore
from fintrack.domain.transactions import Transaction, TransactionBuilder

__all__ = [
    "BalanceBearing",
    "Budget",
    "CategoryName",
    "EnforcementMode",
    "Money",
    "MonthIndex",
    "MonthlyLedger",
    "Transaction",
    "TransactionBuilder",
    "TransactionKind",
    "TransactionStore",
    "UserId",
]
