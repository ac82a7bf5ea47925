"""Environment-driven account store selection."""

from __future__ import annotations

import os

from .base import AccountStore
from .memory import InMemoryAccountStore


def create_store_from_env() -> AccountStore:
    """Create a Postgres store if a DSN is configured, otherwise in-memory."""
    dsn = os.getenv("TOKENIZE_PG_DSN") or os.getenv("DATABASE_URL")
    if dsn:
        from .postgres import PostgresAccountStore

        return PostgresAccountStore(dsn=dsn)
    return InMemoryAccountStore()
