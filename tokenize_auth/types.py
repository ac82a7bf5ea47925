"""Token verification datatypes and collaborator contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Union


class Account(Protocol):
    """Anything the account lookup returns.

    ``last_token_reset`` is in milliseconds since the Unix epoch; tokens
    issued before it are rejected.
    """

    @property
    def last_token_reset(self) -> int: ...


AccountLookup = Callable[[str], Optional[Account]]
AsyncAccountLookup = Callable[[str], Union[Optional[Account], Awaitable[Optional[Account]]]]


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: str
    account: Optional[Any] = None
