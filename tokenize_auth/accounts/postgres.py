"""PostgreSQL account store using ``asyncpg``."""

from __future__ import annotations

import logging
from typing import Optional

import asyncpg

from ..utils.time import now_ms
from .base import AccountStore, StoredAccount

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS tokenize_accounts (
    account_id TEXT PRIMARY KEY,
    last_token_reset BIGINT NOT NULL DEFAULT 0
)
"""

SELECT_SQL = "SELECT account_id, last_token_reset FROM tokenize_accounts WHERE account_id=$1"

UPSERT_SQL = """
INSERT INTO tokenize_accounts (account_id, last_token_reset)
VALUES ($1, $2)
ON CONFLICT (account_id) DO UPDATE SET last_token_reset = EXCLUDED.last_token_reset
"""

RESET_SQL = """
UPDATE tokenize_accounts SET last_token_reset = $2
WHERE account_id = $1
RETURNING account_id, last_token_reset
"""


class PostgresAccountStore(AccountStore):
    """Store that reads and bumps ``last_token_reset`` in PostgreSQL."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 4,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresAccountStore.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )
        logger.info("Opened account store pool (min=%d, max=%d)", self._min_size, self._max_size)

    async def ensure_schema(self) -> None:
        """Create the ``tokenize_accounts`` table if it does not exist."""
        await self.connect()
        assert self._pool is not None
        async with self._pool.acquire() as conn:
            await conn.execute(CREATE_TABLE_SQL)

    async def get(self, account_id: str) -> Optional[StoredAccount]:
        await self.connect()
        assert self._pool is not None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(SELECT_SQL, account_id)
            return _to_account(row) if row else None

    async def save(self, account: StoredAccount) -> None:
        await self.connect()
        assert self._pool is not None
        async with self._pool.acquire() as conn:
            await conn.execute(UPSERT_SQL, account.account_id, account.last_token_reset)

    async def reset_tokens(self, account_id: str, at_ms: Optional[int] = None) -> StoredAccount:
        await self.connect()
        assert self._pool is not None
        reset_at = now_ms() if at_ms is None else at_ms
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(RESET_SQL, account_id, reset_at)
        if row is None:
            raise KeyError(account_id)
        return _to_account(row)

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Closed account store pool")


def _to_account(row: asyncpg.Record) -> StoredAccount:
    return StoredAccount(account_id=row["account_id"], last_token_reset=int(row["last_token_reset"]))
