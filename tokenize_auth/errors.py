"""Error hierarchy for token generation and validation."""

from __future__ import annotations

from typing import Optional


class TokenizeError(Exception):
    """Base class for every error raised by ``tokenize_auth``."""


class EncodingError(TokenizeError):
    """The account id could not be encoded into a token."""


class DecodeError(TokenizeError, ValueError):
    """A token segment is not valid unpadded base64."""


class ValidationError(TokenizeError):
    """A token was rejected.

    ``reason`` is a stable code callers can branch on; the message is meant
    for humans.
    """

    reason = "invalid_token"
    default_message = "Token is invalid"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class MalformedToken(ValidationError):
    reason = "malformed_token"
    default_message = "Token is invalid"


class PrefixMismatch(ValidationError):
    reason = "prefix_mismatch"
    default_message = "Token prefix doesn't match"


class SignatureMismatch(ValidationError):
    reason = "signature_mismatch"
    default_message = "Token signature doesn't match"


class UnknownAccount(ValidationError):
    reason = "unknown_account"
    default_message = "No account is tied to this id"


class TokenInvalidated(ValidationError):
    reason = "token_invalidated"
    default_message = "Token was invalidated"
