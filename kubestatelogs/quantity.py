"""Kubernetes resource quantities: parsing, canonical form and conversions."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any, Union


class QuantityFormat(Enum):
    """How a quantity is written back out."""

    DECIMAL_SI = "DecimalSI"
    BINARY_SI = "BinarySI"
    DECIMAL_EXPONENT = "DecimalExponent"


_BINARY_POWERS = {"Ki": 1, "Mi": 2, "Gi": 3, "Ti": 4, "Pi": 5, "Ei": 6}
_BINARY_SUFFIXES = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei"]
_DECIMAL_EXPONENTS = {"n": -9, "u": -6, "m": -3, "": 0, "k": 3, "M": 6, "G": 9, "T": 12, "P": 15, "E": 18}
_DECIMAL_SUFFIXES = {exp: suffix for suffix, exp in _DECIMAL_EXPONENTS.items()}
_PATTERN = re.compile(
    r"([+-]?)(\d+(?:\.\d*)?|\.\d+)(?:[eE]([+-]?\d+)|(Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE])?)"
)
_NANO = 10**9


def _round_away(value: Fraction) -> int:
    magnitude = -(-abs(value).numerator // abs(value).denominator)
    return magnitude if value >= 0 else -magnitude


@dataclass(frozen=True)
class Quantity:
    """An exact amount with the format it was written in."""

    amount: Fraction
    format: QuantityFormat = QuantityFormat.DECIMAL_SI

    @classmethod
    def parse(cls, text: str) -> "Quantity":
        """Parse strings such as ``500m``, ``1Gi`` or ``1e3``; raise ValueError otherwise."""
        match = _PATTERN.fullmatch(text)
        if match is None:
            raise ValueError(f"quantities must match the regular expression: {text!r}")
        sign, number, exponent, suffix = match.groups()
        amount = Fraction(number)
        if exponent is not None:
            amount *= Fraction(10) ** int(exponent)
            fmt = QuantityFormat.DECIMAL_EXPONENT
        elif suffix in _BINARY_POWERS:
            amount *= 1024 ** _BINARY_POWERS[suffix]
            fmt = QuantityFormat.BINARY_SI
        else:
            amount *= Fraction(10) ** _DECIMAL_EXPONENTS[suffix or ""]
            fmt = QuantityFormat.DECIMAL_SI
        if sign == "-":
            amount = -amount
        amount = Fraction(_round_away(amount * _NANO), _NANO)
        return cls(amount, fmt)

    def __str__(self) -> str:
        if self.amount == 0:
            return "0"
        fmt = self.format
        if fmt is QuantityFormat.BINARY_SI and (-1024 < self.amount < 1024 or self.amount.denominator != 1):
            fmt = QuantityFormat.DECIMAL_SI
        if fmt is QuantityFormat.BINARY_SI:
            mantissa, power = int(self.amount), 0
            while mantissa % 1024 == 0 and power < len(_BINARY_SUFFIXES) - 1:
                mantissa //= 1024
                power += 1
            return f"{mantissa}{_BINARY_SUFFIXES[power]}"
        mantissa, exponent = _round_away(self.amount * _NANO), -9
        limit = 18 if fmt is QuantityFormat.DECIMAL_SI else None
        while mantissa % 1000 == 0 and (limit is None or exponent < limit):
            mantissa //= 1000
            exponent += 3
        if fmt is QuantityFormat.DECIMAL_SI:
            return f"{mantissa}{_DECIMAL_SUFFIXES[exponent]}"
        return f"{mantissa}e{exponent}" if exponent else str(mantissa)

    def value(self) -> int:
        """The amount rounded away from zero to a whole number."""
        return _round_away(self.amount)

    def milli_value(self) -> int:
        """The amount in thousandths, rounded away from zero."""
        return _round_away(self.amount * 1000)

    def as_approximate_float(self) -> float:
        """The amount as a float."""
        return float(self.amount)

    def is_zero(self) -> bool:
        """True when the amount is zero."""
        return self.amount == 0

    def cmp(self, other: "Quantity") -> int:
        """-1, 0 or 1 as this amount is below, equal to or above the other."""
        return (self.amount > other.amount) - (self.amount < other.amount)


QuantityLike = Union[Quantity, str, int]


def _coerce(quantity: QuantityLike) -> Quantity:
    if isinstance(quantity, Quantity):
        return quantity
    if isinstance(quantity, int):
        return Quantity(Fraction(quantity))
    return Quantity.parse(quantity)


def parse_quantity(quantity_str: str) -> Quantity | None:
    """Parse a quantity, returning None for empty or malformed input."""
    if quantity_str == "":
        return None
    try:
        return Quantity.parse(quantity_str)
    except ValueError:
        return None


def extract_resource_quantity(quantity: QuantityLike | None) -> str:
    """Canonical string of a quantity, or an empty string."""
    return "" if quantity is None else str(_coerce(quantity))


def extract_resource_quantity_as_int(quantity: QuantityLike | None) -> int:
    """Whole-number value of a quantity, or 0."""
    return 0 if quantity is None else _coerce(quantity).value()


def extract_resource_quantity_as_float(quantity: QuantityLike | None) -> float:
    """Float value of a quantity, or 0.0."""
    return 0.0 if quantity is None else _coerce(quantity).as_approximate_float()


def extract_resource_map(resource_list: Mapping[str, QuantityLike] | None) -> dict[str, str] | None:
    """Resource names mapped to canonical quantity strings."""
    if resource_list is None:
        return None
    return {str(name): str(_coerce(quantity)) for name, quantity in resource_list.items()}


def extract_resource_requests(requirements: Mapping[str, Any] | None) -> dict[str, str] | None:
    """The ``requests`` of a resource requirements mapping, or None."""
    if requirements is None or requirements.get("requests") is None:
        return None
    return extract_resource_map(requirements["requests"])


def extract_resource_limits(requirements: Mapping[str, Any] | None) -> dict[str, str] | None:
    """The ``limits`` of a resource requirements mapping, or None."""
    if requirements is None or requirements.get("limits") is None:
        return None
    return extract_resource_map(requirements["limits"])


def extract_specific_resource(resource_list: Mapping[str, QuantityLike] | None, resource_name: str) -> str:
    """Canonical string of one named resource, or an empty string."""
    if resource_list is None or resource_name not in resource_list:
        return ""
    return str(_coerce(resource_list[resource_name]))


def extract_cpu(resource_list: Mapping[str, QuantityLike] | None) -> str:
    """The ``cpu`` entry."""
    return extract_specific_resource(resource_list, "cpu")


def extract_memory(resource_list: Mapping[str, QuantityLike] | None) -> str:
    """The ``memory`` entry."""
    return extract_specific_resource(resource_list, "memory")


def extract_storage(resource_list: Mapping[str, QuantityLike] | None) -> str:
    """The ``storage`` entry."""
    return extract_specific_resource(resource_list, "storage")


def extract_ephemeral_storage(resource_list: Mapping[str, QuantityLike] | None) -> str:
    """The ``ephemeral-storage`` entry."""
    return extract_specific_resource(resource_list, "ephemeral-storage")


def convert_to_bytes(quantity: QuantityLike | None) -> int:
    """Whole-number value of a quantity, or 0."""
    return 0 if quantity is None else _coerce(quantity).value()


def convert_to_millicores(quantity: QuantityLike | None) -> int:
    """Value in thousandths, or 0."""
    return 0 if quantity is None else _coerce(quantity).milli_value()


def is_zero_quantity(quantity: QuantityLike | None) -> bool:
    """True for a missing or zero quantity."""
    return quantity is None or _coerce(quantity).is_zero()


def compare_quantities(q1: QuantityLike | None, q2: QuantityLike | None) -> int:
    """Compare two quantities; a missing one sorts first."""
    if q1 is None and q2 is None:
        return 0
    if q1 is None:
        return -1
    if q2 is None:
        return 1
    return _coerce(q1).cmp(_coerce(q2))