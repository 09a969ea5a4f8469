"""
Numeric conversion for line tokens.

Tokens are converted greedily: the longest numeric prefix is read, and
anything left over is an error (the input format has no units or suffixes).

    "12"    -> 12
    "12abc" -> TrailingGarbage
    "3.14"  -> TrailingGarbage when an integer is expected
    ""      -> MissingRequiredValue on a mandatory field
    "abc"   -> MalformedNumber
"""

import re
from typing import Tuple, Type, Union

from datline.errors import MalformedNumber, MissingRequiredValue, TrailingGarbage

Number = Union[int, float]

_INT_PREFIX_RE = re.compile(r"\s*[+-]?\d+", re.ASCII)
_FLOAT_PREFIX_RE = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|infinity|inf|nan)",
    re.IGNORECASE | re.ASCII,
)


def parse_int_prefix(text: str) -> Tuple[int, int]:
    """
    Read the integer prefix of `text`.

    Returns:
        (value, pos) where pos is the offset of the first unconsumed character

    Raises:
        ValueError: If `text` does not start with an integer
    """
    match = _INT_PREFIX_RE.match(text)
    if match is None:
        raise ValueError(f"No integer at the start of '{text}'")
    return int(match.group(0)), match.end()


def parse_float_prefix(text: str) -> Tuple[float, int]:
    """
    Read the floating point prefix of `text`.

    Accepts decimal and exponent notation as well as inf/infinity/nan.

    Returns:
        (value, pos) where pos is the offset of the first unconsumed character

    Raises:
        ValueError: If `text` does not start with a number
    """
    match = _FLOAT_PREFIX_RE.match(text)
    if match is None:
        raise ValueError(f"No floating point number at the start of '{text}'")
    return float(match.group(0)), match.end()


def _type_label(number_type: Type) -> str:
    return "an integer" if number_type is int else "a floating point"


def convert_number(
    token: str,
    number_type: Type,
    field: str,
    section: str,
    length: int = 1,
    optional: bool = False,
) -> Number:
    """
    Convert `token` to `number_type` (int or float) with full validation.

    Args:
        token: Raw token, possibly empty
        number_type: int or float
        field: Component name, for diagnostics
        section: Section name, for diagnostics
        length: Number of values the field expects, for diagnostics
        optional: Whether the field may be omitted

    Raises:
        MissingRequiredValue: Empty token on a mandatory field
        MalformedNumber: Token has no numeric prefix
        TrailingGarbage: Characters remain after the numeric prefix
    """
    parse = parse_int_prefix if number_type is int else parse_float_prefix

    try:
        number, pos = parse(token)
    except ValueError:
        if not optional and not token:
            raise MissingRequiredValue(
                f"No value of variable '{field}' in '{section}' specified. Possibly you "
                f"didn't give enough input values. The variable '{field}' expects "
                f"{length} input values.",
                field=field, section=section, value=token,
            ) from None
        raise MalformedNumber(
            f"Failed to read the value '{token}' of variable '{field}' in '{section}'.",
            field=field, section=section, value=token,
        ) from None

    if pos != len(token):
        raise TrailingGarbage(
            f"Failed to read value '{token[pos:]}' while reading variable '{field}' in "
            f"'{section}'. Could only read '{number}', so the specified number format is "
            f"probably not supported. The variable '{field}' has to be "
            f"{_type_label(number_type)}.",
            field=field, section=section, value=token,
        )

    return number


__all__ = ["Number", "parse_int_prefix", "parse_float_prefix", "convert_number"]
