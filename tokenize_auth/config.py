"""Configuration model for token signers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TokenizeConfig:
    """Secret and optional prefix shared by a signer and its verifiers."""

    secret: bytes
    prefix: Optional[str] = None

    @classmethod
    def from_env(cls) -> "TokenizeConfig":
        """Read ``TOKENIZE_SECRET`` and the optional ``TOKENIZE_PREFIX``."""
        secret = os.getenv("TOKENIZE_SECRET")
        if not secret:
            raise ValueError("TOKENIZE_SECRET must be set to a non-empty value.")
        prefix = os.getenv("TOKENIZE_PREFIX") or None
        return cls(secret=secret.encode("utf-8"), prefix=prefix)

    def with_prefix(self, prefix: str) -> "TokenizeConfig":
        return TokenizeConfig(secret=self.secret, prefix=prefix)
