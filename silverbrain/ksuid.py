"""K-sortable unique identifiers: a 4 byte timestamp and 16 random bytes, base62 encoded."""

from __future__ import annotations

import math
import os
from datetime import datetime, timezone

EPOCH = 1_400_000_000
"""Seconds since the Unix epoch at which KSUID timestamps start."""

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_INDEX = {char: index for index, char in enumerate(_ALPHABET)}
_LENGTH = 27
_PAYLOAD_BYTES = 16
_MAX_VALUE = (1 << 160) - 1
_MAX_TIMESTAMP = (1 << 32) - 1


def _encode(number: int) -> str:
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, 62)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(_LENGTH, "0")


def _decode(text: str) -> int:
    if len(text) != _LENGTH:
        raise ValueError(f"a KSUID has {_LENGTH} characters, got {len(text)}")
    number = 0
    for char in text:
        digit = _INDEX.get(char)
        if digit is None:
            raise ValueError(f"invalid KSUID character {char!r}")
        number = number * 62 + digit
    if number > _MAX_VALUE:
        raise ValueError("KSUID value is out of range")
    return number


def new_ksuid(when: datetime | None = None) -> str:
    """Return a new KSUID for the moment ``when``, or for now if it is ``None``.

    A moment without a time zone is taken to be in UTC.
    """
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    timestamp = math.floor(when.timestamp()) - EPOCH
    if not 0 <= timestamp <= _MAX_TIMESTAMP:
        raise ValueError(f"{when.isoformat()} cannot be represented in a KSUID")
    payload = int.from_bytes(os.urandom(_PAYLOAD_BYTES), "big")
    return _encode((timestamp << (_PAYLOAD_BYTES * 8)) | payload)


def ksuid_timestamp(value: str) -> datetime:
    """Return the UTC moment, to the second, stored in a KSUID."""
    timestamp = _decode(value) >> (_PAYLOAD_BYTES * 8)
    return datetime.fromtimestamp(timestamp + EPOCH, timezone.utc)