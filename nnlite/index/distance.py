"""Totally ordered, hashable keys for floating-point distances.

IEEE-754 doubles cannot be used directly as sort keys with bit-exact identity
(``0.0 == -0.0`` and NaN compares unequal to itself). :class:`OrderedDistance`
decodes the bit pattern into integer components instead, so two keys are equal
exactly when the source floats share a bit pattern, and keys order the same way
as the numbers they came from.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from functools import total_ordering

_FRACTION_MASK = (1 << 52) - 1
_IMPLICIT_BIT = 1 << 52
_EXPONENT_MASK = 0x7FF
_EXPONENT_OFFSET = 1023 + 52
_SPECIAL_EXPONENT = _EXPONENT_MASK - _EXPONENT_OFFSET


def float_to_bits(value: float) -> int:
    """Return the IEEE-754 binary64 bit pattern of ``value`` as an unsigned int."""
    return int.from_bytes(struct.pack(">d", float(value)), "big")


def integer_decode(value: float) -> tuple[int, int, int]:
    """Decode a float into ``(mantissa, exponent, sign)``.

    The decoded value satisfies ``value == sign * mantissa * 2**exponent`` for
    every finite input.

    Example:
        >>> integer_decode(1.97)
        (8872091265919877, -52, 1)
    """
    bits = float_to_bits(value)
    sign = 1 if bits >> 63 == 0 else -1
    biased_exponent = (bits >> 52) & _EXPONENT_MASK
    fraction = bits & _FRACTION_MASK
    if biased_exponent == 0:
        # Subnormal or zero: no implicit leading bit.
        mantissa = fraction << 1
    else:
        mantissa = fraction | _IMPLICIT_BIT
    return mantissa, biased_exponent - _EXPONENT_OFFSET, sign


@total_ordering
@dataclass(frozen=True, slots=True)
class OrderedDistance:
    """Distance key usable in sorts, sets and dict keys."""

    mantissa: int
    exponent: int
    sign: int

    @classmethod
    def from_float(cls, value: float) -> OrderedDistance:
        mantissa, exponent, sign = integer_decode(value)
        return cls(mantissa=mantissa, exponent=exponent, sign=sign)

    @property
    def sort_key(self) -> tuple[int, int, int]:
        # Exponent dominates mantissa; both flip for negative values so larger
        # magnitudes sort lower.
        return (self.sign, self.sign * self.exponent, self.sign * self.mantissa)

    @property
    def value(self) -> float:
        """Reconstruct the float this key was decoded from."""
        if self.exponent == _SPECIAL_EXPONENT:
            if self.mantissa == _IMPLICIT_BIT:
                return math.copysign(math.inf, self.sign)
            return math.nan
        return math.copysign(math.ldexp(self.mantissa, self.exponent), self.sign)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OrderedDistance):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __float__(self) -> float:
        return self.value
