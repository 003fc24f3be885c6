"""Wallet address generation and validation."""

from __future__ import annotations

import re
import secrets
from typing import Callable

from wallet_ledger.exceptions import InvalidAddressError, RandomSourceError

ADDRESS_BYTES = 32
ADDRESS_LENGTH = ADDRESS_BYTES * 2

_ADDRESS_RE = re.compile(r"[0-9a-fA-F]{%d}" % ADDRESS_LENGTH)


def normalize_address(value: str) -> str:
    """Validate ``value`` as a wallet address and return its canonical lowercase form."""
    if not isinstance(value, str) or _ADDRESS_RE.fullmatch(value) is None:
        length = len(value) if isinstance(value, str) else None
        raise InvalidAddressError(
            f"address must be {ADDRESS_LENGTH} hexadecimal characters (got length {length})"
        )
    return value.lower()


class AddressGenerator:
    """Produces wallet addresses from a cryptographically secure random source.

    Uniqueness is not checked here; the wallet store rejects duplicates.
    """

    def __init__(self, entropy: Callable[[int], bytes] = secrets.token_bytes) -> None:
        self._entropy = entropy

    def generate(self) -> str:
        try:
            raw = self._entropy(ADDRESS_BYTES)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError("secure random source unavailable") from exc
        if len(raw) != ADDRESS_BYTES:
            raise RandomSourceError(
                f"random source returned {len(raw)} bytes, expected {ADDRESS_BYTES}"
            )
        return raw.hex()

    __call__ = generate
