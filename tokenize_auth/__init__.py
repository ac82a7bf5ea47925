"""Tokenize: compact HMAC-signed account tokens.

Tokens look like ``[prefix.]account.time.signature`` and can be revoked in
bulk per account by bumping the account's ``last_token_reset`` timestamp.
"""

from .config import TokenizeConfig
from .constants import MAC_TAG, TOKENIZE_EPOCH, TOKENIZE_VERSION
from .errors import (
    DecodeError,
    EncodingError,
    MalformedToken,
    PrefixMismatch,
    SignatureMismatch,
    TokenInvalidated,
    TokenizeError,
    UnknownAccount,
    ValidationError,
)
from .signer import Tokenize
from .types import Account, AccountLookup, AsyncAccountLookup, VerificationResult
from .utils.time import current_token_time, issue_time_to_ms

__all__ = [
    "Tokenize",
    "TokenizeConfig",
    "Account",
    "AccountLookup",
    "AsyncAccountLookup",
    "VerificationResult",
    "current_token_time",
    "issue_time_to_ms",
    "TOKENIZE_VERSION",
    "TOKENIZE_EPOCH",
    "MAC_TAG",
    "TokenizeError",
    "EncodingError",
    "DecodeError",
    "ValidationError",
    "MalformedToken",
    "PrefixMismatch",
    "SignatureMismatch",
    "UnknownAccount",
    "TokenInvalidated",
]
