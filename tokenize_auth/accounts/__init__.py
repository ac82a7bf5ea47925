"""Reference account stores implementing the token account lookup."""

from .base import AccountStore, StoredAccount
from .factory import create_store_from_env
from .memory import InMemoryAccountStore

__all__ = [
    "AccountStore",
    "StoredAccount",
    "InMemoryAccountStore",
    "PostgresAccountStore",
    "create_store_from_env",
]


def __getattr__(name: str):
    if name == "PostgresAccountStore":
        from .postgres import PostgresAccountStore

        return PostgresAccountStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
