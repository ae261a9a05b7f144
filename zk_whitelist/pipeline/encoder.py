"""Encode hex addresses into whitelist circuit arguments."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import ADDRESS_PREFIXES
from .errors import AddressDecodeError

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class CircuitInputs:
    """
    Decimal field elements for one address.

    ``a``/``b`` are the two halves of the address in decimal; ``c``/``d``
    repeat them as the public side of the circuit's equality assertions.
    """

    a: str
    b: str
    c: str
    d: str

    @property
    def decimal(self) -> str:
        return self.a + self.b

    def arguments(self) -> list[str]:
        """Arguments for ``compute-witness -a``, leading zeros removed."""
        return [to_field_argument(value) for value in (self.a, self.b, self.c, self.d)]


def strip_leading_zeros(value: str) -> str:
    return value.lstrip("0")


def to_field_argument(value: str) -> str:
    # The toolchain rejects leading zeros; an all-zero half still needs a digit.
    return strip_leading_zeros(value) or "0"


def address_to_int(address: str) -> int:
    digits = address
    for prefix in ADDRESS_PREFIXES:
        if digits.startswith(prefix):
            digits = digits[len(prefix):]
            break
    if not digits:
        raise AddressDecodeError(address, "no hex digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise AddressDecodeError(address, "invalid hex digit")
    return int(digits, 16)


def encode_address(address: str) -> CircuitInputs:
    """
    Split the decimal value of ``address`` into circuit inputs.

    The split point is ``len(decimal) // 2``, so the second half carries the
    extra digit when the length is odd.

    Raises:
        AddressDecodeError: If the address is not a hex number.
    """
    value = address_to_int(address)
    try:
        decimal = str(value)
    except ValueError as exc:
        raise AddressDecodeError(address, str(exc)) from exc
    mid = len(decimal) // 2
    a, b = decimal[:mid], decimal[mid:]
    return CircuitInputs(a=a, b=b, c=a, d=b)
