import asyncio
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple

import pytest

import tokenize_auth.accounts.memory as memory_store
import tokenize_auth.utils.time as token_clock
from tokenize_auth import TokenInvalidated, Tokenize, UnknownAccount
from tokenize_auth.accounts import InMemoryAccountStore, StoredAccount, create_store_from_env


class FakeConnection:
    def __init__(self, rows: Dict[str, Dict[str, Any]]) -> None:
        self.rows = rows
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    async def execute(self, sql: str, *args: Any) -> str:
        self.calls.append((sql, args))
        if "INSERT INTO tokenize_accounts" in sql:
            self.rows[args[0]] = {"account_id": args[0], "last_token_reset": args[1]}
        return "OK"

    async def fetchrow(self, sql: str, *args: Any) -> Optional[Dict[str, Any]]:
        self.calls.append((sql, args))
        row = self.rows.get(args[0])
        if row is not None and sql.lstrip().startswith("UPDATE"):
            row["last_token_reset"] = args[1]
        return dict(row) if row else None


class FakePool:
    def __init__(self) -> None:
        self.conn = FakeConnection({})
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        yield self.conn

    async def close(self) -> None:
        self.closed = True


def test_in_memory_store_resolves_accounts_for_validation() -> None:
    async def run() -> None:
        store = InMemoryAccountStore()
        await store.save(StoredAccount(account_id="alice"))
        signer = Tokenize(b"store-secret")

        account = await signer.validate_async(signer.generate("alice"), store.get)
        assert account == StoredAccount(account_id="alice", last_token_reset=0)

        with pytest.raises(UnknownAccount):
            await signer.validate_async(signer.generate("bob"), store.get)

    asyncio.run(run())


def test_reset_tokens_invalidates_earlier_tokens(monkeypatch: pytest.MonkeyPatch) -> None:
    async def run() -> None:
        store = InMemoryAccountStore()
        await store.save(StoredAccount(account_id="alice"))
        signer = Tokenize(b"store-secret")

        clock = {"now": token_clock.now_ms()}
        monkeypatch.setattr(token_clock, "now_ms", lambda: clock["now"])
        monkeypatch.setattr(memory_store, "now_ms", lambda: clock["now"])
        old_token = signer.generate("alice")

        clock["now"] += 5_000
        updated = await store.reset_tokens("alice")
        assert updated.last_token_reset == clock["now"]

        with pytest.raises(TokenInvalidated):
            await signer.validate_async(old_token, store.get)

        clock["now"] += 1_000
        fresh_token = signer.generate("alice")
        assert await signer.validate_async(fresh_token, store.get) == updated

    asyncio.run(run())


def test_reset_tokens_unknown_account_raises() -> None:
    async def run() -> None:
        with pytest.raises(KeyError):
            await InMemoryAccountStore().reset_tokens("ghost", at_ms=1)

    asyncio.run(run())


def test_postgres_store_round_trip_with_pool() -> None:
    from tokenize_auth.accounts import PostgresAccountStore

    async def run() -> None:
        pool = FakePool()
        store = PostgresAccountStore(pool=pool)  # type: ignore[arg-type]

        await store.ensure_schema()
        await store.save(StoredAccount(account_id="alice", last_token_reset=10))
        assert await store.get("alice") == StoredAccount(account_id="alice", last_token_reset=10)
        assert await store.get("bob") is None

        updated = await store.reset_tokens("alice", at_ms=2_000)
        assert updated == StoredAccount(account_id="alice", last_token_reset=2_000)

        with pytest.raises(KeyError):
            await store.reset_tokens("bob", at_ms=2_000)

        assert "CREATE TABLE IF NOT EXISTS tokenize_accounts" in pool.conn.calls[0][0]

        await store.close()
        assert pool.closed is True

    asyncio.run(run())


def test_postgres_store_requires_dsn_or_pool() -> None:
    from tokenize_auth.accounts import PostgresAccountStore

    async def run() -> None:
        with pytest.raises(ValueError):
            await PostgresAccountStore().connect()

    asyncio.run(run())


def test_create_store_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    from tokenize_auth.accounts import PostgresAccountStore

    monkeypatch.delenv("TOKENIZE_PG_DSN", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert isinstance(create_store_from_env(), InMemoryAccountStore)

    monkeypatch.setenv("TOKENIZE_PG_DSN", "postgresql://localhost/tokens")
    assert isinstance(create_store_from_env(), PostgresAccountStore)
