"""Example: issue, validate and bulk-revoke account tokens."""

from __future__ import annotations

import asyncio
import logging
import os

from tokenize_auth import Tokenize, TokenInvalidated
from tokenize_auth.accounts import StoredAccount, create_store_from_env


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    os.environ.setdefault("TOKENIZE_SECRET", "example-secret")
    os.environ.setdefault("TOKENIZE_PREFIX", "example")

    signer = Tokenize.from_env()
    store = create_store_from_env()
    try:
        await store.ensure_schema()
        await store.save(StoredAccount(account_id="326359466171826176"))

        token = signer.generate("326359466171826176")
        print("issued:", token)

        account = await signer.validate_async(token, store.get)
        print("validated:", account)

        await store.reset_tokens("326359466171826176")
        try:
            await signer.validate_async(token, store.get)
        except TokenInvalidated as exc:
            print("rejected:", exc.reason)
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
