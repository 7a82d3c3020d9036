"""Typed coercion of raw path and query values.

Generated handlers call these helpers by name. The code generator
looks names up in ``COERCERS`` as well, so the emitted code and the
runtime always agree on which declared types are parsed.
"""

import math
import re
import struct
from collections.abc import Callable

from routesfile.errors import CoercionError

_INTEGER = re.compile(r"[+-]?[0-9]+")

_INT32 = (-(2**31), 2**31 - 1)
_INT64 = (-(2**63), 2**63 - 1)

type Coercer = Callable[[str, str, str], object]


def _parse_integer(value: str, name: str, declared_type: str, bounds: tuple[int, int]) -> int:
    if not _INTEGER.fullmatch(value):
        raise CoercionError(name, declared_type, value)
    number = int(value)
    low, high = bounds
    if not low <= number <= high:
        raise CoercionError(name, declared_type, value)
    return number


def _parse_float(value: str, name: str, declared_type: str) -> float:
    # float() tolerates surrounding whitespace and digit separators; the DSL does not
    if value != value.strip() or "_" in value:
        raise CoercionError(name, declared_type, value)
    try:
        return float(value)
    except ValueError:
        raise CoercionError(name, declared_type, value) from None


def to_int(value: str, name: str, declared_type: str = "Int") -> int:
    """Parse a signed 32-bit integer."""
    return _parse_integer(value, name, declared_type, _INT32)


def to_long(value: str, name: str, declared_type: str = "Long") -> int:
    """Parse a signed 64-bit integer."""
    return _parse_integer(value, name, declared_type, _INT64)


def to_double(value: str, name: str, declared_type: str = "Double") -> float:
    """Parse a 64-bit floating point number."""
    return _parse_float(value, name, declared_type)


def to_float(value: str, name: str, declared_type: str = "Float") -> float:
    """Parse a floating point number rounded to 32-bit precision.

    Magnitudes beyond the 32-bit range become infinities rather than errors.
    """
    number = _parse_float(value, name, declared_type)
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def to_boolean(value: str, name: str, declared_type: str = "Boolean") -> bool:
    """Parse exactly ``true`` or ``false``. No truthy spellings."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise CoercionError(name, declared_type, value)


# Declared type name (lower-cased, unqualified) -> coercer
COERCERS: dict[str, Coercer] = {
    "int": to_int,
    "integer": to_int,
    "long": to_long,
    "double": to_double,
    "float": to_float,
    "boolean": to_boolean,
}


def coercer_for(type_name: str) -> Coercer | None:
    """Return the coercer for a declared type, or ``None`` for raw strings.

    Matching is case-insensitive and ignores any qualifying prefix, so
    ``Int``, ``lang.Int``, and ``builtins.int`` all map to ``to_int``.
    """
    key = type_name.strip().rsplit(".", 1)[-1].lower()
    return COERCERS.get(key)
