"""HMAC-SHA256 token signer and verifier."""

from __future__ import annotations

import hmac
import inspect
from hashlib import sha256
from typing import Optional, Tuple, Union

from . import codec
from .config import TokenizeConfig
from .constants import MAC_TAG, SEPARATOR, TOKENIZE_VERSION
from .errors import (
    DecodeError,
    EncodingError,
    MalformedToken,
    PrefixMismatch,
    SignatureMismatch,
    TokenInvalidated,
    UnknownAccount,
    ValidationError,
)
from .types import Account, AccountLookup, AsyncAccountLookup, VerificationResult
from .utils.time import current_token_time, issue_time_to_ms


class Tokenize:
    """Generate and validate compact signed account tokens.

    Instances are immutable; ``with_prefix`` returns a new signer. A single
    instance may be shared between threads.
    """

    def __init__(self, secret: Union[bytes, bytearray, memoryview, str], *, prefix: Optional[str] = None) -> None:
        if not isinstance(secret, (bytes, bytearray, memoryview, str)):
            raise TypeError(f"Tokenize secret must be bytes or str, got {type(secret).__name__}.")
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise ValueError("Tokenize secret must not be empty.")
        if prefix is not None:
            _check_prefix(prefix)
        self._secret = bytes(secret)
        self._prefix = prefix

    @classmethod
    def from_config(cls, config: TokenizeConfig) -> "Tokenize":
        return cls(config.secret, prefix=config.prefix)

    @classmethod
    def from_env(cls) -> "Tokenize":
        """Build a signer from ``TOKENIZE_SECRET`` and ``TOKENIZE_PREFIX``."""
        return cls.from_config(TokenizeConfig.from_env())

    @property
    def prefix(self) -> Optional[str]:
        return self._prefix

    def with_prefix(self, prefix: str) -> "Tokenize":
        """Return a signer sharing this secret that emits ``prefix.`` tokens."""
        return Tokenize(self._secret, prefix=prefix)

    current_token_time = staticmethod(current_token_time)

    def generate(self, account_id: str) -> str:
        """Issue a token for ``account_id`` stamped with the current time."""
        if not isinstance(account_id, str):
            raise EncodingError(f"Account id must be text, got {type(account_id).__name__}.")
        try:
            unsigned = codec.build_unsigned(self._prefix, account_id, current_token_time())
        except UnicodeEncodeError as exc:
            raise EncodingError("Account id cannot be encoded as UTF-8.") from exc
        return codec.join(unsigned, self.sign(unsigned))

    def signing_message(self, unsigned: str) -> bytes:
        """Return the domain-separated bytes fed to the MAC."""
        return f"{MAC_TAG}{SEPARATOR}{TOKENIZE_VERSION}{SEPARATOR}{unsigned}".encode("utf-8", "surrogatepass")

    def sign(self, unsigned: str) -> str:
        """Return the encoded signature segment for ``unsigned``."""
        digest = hmac.new(self._secret, self.signing_message(unsigned), sha256).digest()
        return codec.encode_segment(digest)

    def validate(self, token: str, account_lookup: AccountLookup) -> Account:
        """Verify ``token`` and return the account it was issued for.

        Checks run in a fixed order and the first failure is raised: segment
        count, prefix, signature, field decoding, account lookup, then
        freshness against the account's ``last_token_reset``.
        """
        account_id, issue_time = self._authenticate(token)
        return self._check_freshness(account_lookup(account_id), issue_time)

    async def validate_async(self, token: str, account_lookup: AsyncAccountLookup) -> Account:
        """Like :meth:`validate`, but awaits the lookup result when needed."""
        account_id, issue_time = self._authenticate(token)
        account = account_lookup(account_id)
        if inspect.isawaitable(account):
            account = await account
        return self._check_freshness(account, issue_time)

    def check(self, token: str, account_lookup: AccountLookup) -> VerificationResult:
        """Non-raising variant of :meth:`validate`."""
        try:
            account = self.validate(token, account_lookup)
        except ValidationError as exc:
            return VerificationResult(False, exc.reason)
        return VerificationResult(True, "ok", account=account)

    def _authenticate(self, token: str) -> Tuple[str, int]:
        segments = codec.split(token)
        expected_len = 4 if self._prefix is not None else 3
        if len(segments) < 3 or len(segments) > expected_len:
            raise MalformedToken()

        if self._prefix is not None:
            if segments[0] != self._prefix:
                raise PrefixMismatch()
            if len(segments) != expected_len:
                raise MalformedToken()

        unsigned = codec.join(*segments[: expected_len - 1])
        supplied = segments[expected_len - 1].encode("utf-8", "surrogatepass")
        if not hmac.compare_digest(self.sign(unsigned).encode("ascii"), supplied):
            raise SignatureMismatch()

        try:
            account_id = codec.decode_account_id(segments[expected_len - 3])
            issue_time = codec.decode_issue_time(segments[expected_len - 2])
        except DecodeError as exc:
            raise MalformedToken() from exc
        return account_id, issue_time

    def _check_freshness(self, account: Optional[Account], issue_time: int) -> Account:
        if account is None:
            raise UnknownAccount()
        if account.last_token_reset > issue_time_to_ms(issue_time):
            raise TokenInvalidated()
        return account


def _check_prefix(prefix: str) -> None:
    if not isinstance(prefix, str) or not prefix:
        raise ValueError("Token prefix must be a non-empty string.")
    if SEPARATOR in prefix:
        raise ValueError(f"Token prefix must not contain {SEPARATOR!r}.")
