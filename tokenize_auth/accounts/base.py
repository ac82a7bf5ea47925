"""Account store interface consumed by token validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredAccount:
    """Minimal account record carrying the token invalidation point."""

    account_id: str
    last_token_reset: int = 0


class AccountStore(ABC):
    """Abstract async backend resolving account ids for ``validate_async``.

    ``store.get`` can be passed directly as the account lookup.
    """

    @abstractmethod
    async def get(self, account_id: str) -> Optional[StoredAccount]:
        """Fetch an account by id, or ``None`` when it does not exist."""

    @abstractmethod
    async def save(self, account: StoredAccount) -> None:
        """Insert or replace an account record."""

    @abstractmethod
    async def reset_tokens(self, account_id: str, at_ms: Optional[int] = None) -> StoredAccount:
        """Invalidate every token issued for the account before ``at_ms`` (default: now).

        Raises ``KeyError`` for unknown accounts.
        """

    async def ensure_schema(self) -> None:
        """Create backing tables if the store needs them."""

    async def close(self) -> None:
        """Close store resources if needed."""
