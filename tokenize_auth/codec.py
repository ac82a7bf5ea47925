"""Mapping between logical token fields and the dotted wire string.

A token is laid out as ``[prefix.]account_part.time_part.signature_part``.
Every part except the prefix is standard base64 with the padding stripped.
Nothing in this module touches the secret.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import List, Optional

from .constants import SEPARATOR
from .errors import DecodeError

_SEGMENT_RE = re.compile(r"[A-Za-z0-9+/]*")
# u64 range: at most 20 decimal digits.
_DIGITS_RE = re.compile(rb"[0-9]{1,20}")
_MAX_ISSUE_TIME = 2**64 - 1


def encode_segment(raw: bytes) -> str:
    """Encode ``raw`` as standard base64 without padding."""
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def decode_segment(segment: str) -> bytes:
    """Decode an unpadded standard base64 segment.

    Padding characters, the URL-safe alphabet and impossible lengths are all
    rejected with :class:`DecodeError`.
    """
    if not _SEGMENT_RE.fullmatch(segment) or len(segment) % 4 == 1:
        raise DecodeError("segment is not unpadded standard base64")
    try:
        return base64.b64decode(segment + "=" * (-len(segment) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("segment is not unpadded standard base64") from exc


def build_unsigned(prefix: Optional[str], account_id: str, issue_time: int) -> str:
    """Build the part of the token covered by the signature."""
    account_part = encode_segment(account_id.encode("utf-8"))
    time_part = encode_segment(str(issue_time).encode("ascii"))
    parts = [account_part, time_part]
    if prefix is not None:
        parts.insert(0, prefix)
    return SEPARATOR.join(parts)


def split(token: str) -> List[str]:
    return token.split(SEPARATOR)


def join(*segments: str) -> str:
    return SEPARATOR.join(segments)


def decode_account_id(segment: str) -> str:
    """Decode an account part into the account id text."""
    try:
        return decode_segment(segment).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("account id is not valid UTF-8") from exc


def decode_issue_time(segment: str) -> int:
    """Decode a time part into seconds since ``TOKENIZE_EPOCH``."""
    raw = decode_segment(segment)
    if not _DIGITS_RE.fullmatch(raw):
        raise DecodeError("issue time is not a decimal integer")
    issue_time = int(raw)
    if issue_time > _MAX_ISSUE_TIME:
        raise DecodeError("issue time is out of range")
    return issue_time
