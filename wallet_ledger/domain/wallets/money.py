"""Conversion between decimal amounts and stored minor units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from wallet_ledger.exceptions import InvalidAmountError

MINOR_UNIT_DIGITS = 2
CENT = Decimal(1).scaleb(-MINOR_UNIT_DIGITS)
# Largest balance or amount a signed 64-bit column can hold.
MAX_MINOR_UNITS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_MINOR_UNITS).scaleb(-MINOR_UNIT_DIGITS)


def _as_decimal(amount: Decimal | int | str) -> Decimal:
    # Floats are never exact; refuse them outright.
    if isinstance(amount, (bool, float)):
        raise InvalidAmountError(f"unsupported amount type: {type(amount).__name__}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(amount)
        except InvalidOperation as exc:
            raise InvalidAmountError(f"malformed amount: {amount!r}") from exc
    else:
        raise InvalidAmountError(f"unsupported amount type: {type(amount).__name__}")
    if not value.is_finite():
        raise InvalidAmountError(f"amount must be finite: {amount!r}")
    return value


def to_minor_units(amount: Decimal | int | str) -> int:
    """Return ``amount`` in cents, rejecting anything that is not a positive whole cent."""
    value = _as_decimal(amount)
    if value <= 0:
        raise InvalidAmountError(f"amount must be positive: {value}")
    if value > MAX_AMOUNT:
        raise InvalidAmountError(f"amount exceeds the maximum of {MAX_AMOUNT}: {value}")
    if value < CENT:
        raise InvalidAmountError(f"amount is smaller than one minor unit: {value}")
    cents = value.scaleb(MINOR_UNIT_DIGITS)
    if cents != cents.to_integral_value():
        raise InvalidAmountError(
            f"amount has more than {MINOR_UNIT_DIGITS} fractional digits: {value}"
        )
    return int(cents)


def from_minor_units(cents: int) -> Decimal:
    return (Decimal(cents) * CENT).quantize(CENT)
