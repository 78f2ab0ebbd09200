"""Store layer - provides persistence for the application.

This module re-exports the public gateway, snapshot and schema functions.
"""

from fintrack.store.gateway import FileGateway, PersistenceGateway, SqliteGateway, open_gateway
from fintrack.store.schema import database_exists, get_db_path, init_database
from fintrack.store.snapshot import (
    budget_from_snapshot,
    budget_to_snapshot,
    decode_budget,
    decode_store,
    encode_budget,
    encode_store,
    store_from_snapshot,
    store_to_snapshot,
)

__all__ = [
    # Gateways
    "FileGateway",
    "PersistenceGateway",
    "SqliteGateway",
    "open_gateway",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Snapshots
    "budget_from_snapshot",
    "budget_to_snapshot",
    "decode_budget",
    "decode_store",
    "encode_budget",
    "encode_store",
    "store_from_snapshot",
    "store_to_snapshot",
]
