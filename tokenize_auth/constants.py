"""Wire-format constants shared by every Tokenize implementation."""

from __future__ import annotations

TOKENIZE_VERSION = 1
# 2019-01-01T00:00:00Z in milliseconds since the Unix epoch.
TOKENIZE_EPOCH = 1546300800000
MAC_TAG = "TTF"
SEPARATOR = "."

__all__ = ["TOKENIZE_VERSION", "TOKENIZE_EPOCH", "MAC_TAG", "SEPARATOR"]
