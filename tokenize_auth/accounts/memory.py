"""In-memory account store."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

from ..utils.time import now_ms
from .base import AccountStore, StoredAccount


class InMemoryAccountStore(AccountStore):
    """Dictionary-backed store for tests and single-process services."""

    def __init__(self) -> None:
        self.accounts: Dict[str, StoredAccount] = {}

    async def get(self, account_id: str) -> Optional[StoredAccount]:
        return self.accounts.get(account_id)

    async def save(self, account: StoredAccount) -> None:
        self.accounts[account.account_id] = account

    async def reset_tokens(self, account_id: str, at_ms: Optional[int] = None) -> StoredAccount:
        account = self.accounts[account_id]
        updated = replace(account, last_token_reset=now_ms() if at_ms is None else at_ms)
        self.accounts[account_id] = updated
        return updated
