"""Lenient parsing of decimal numbers out of text."""

from __future__ import annotations

_MAX_INTEGER_SPAN = 9
_MAX_FRACTION_SPAN = 6


def str_to_float(text: str) -> float:
    """Parse the first number in text, returning 0.0 if there is none.

    Leading spaces and minus signs are skipped, a single '.' marks the
    decimal point, and parsing stops at the first other character.
    Numbers with too many integer or fraction digits give 0.0.
    """
    length = len(text)
    num_start = num_end = decimal = length
    negative = False

    for i, char in enumerate(text):
        if "0" <= char <= "9":
            num_end = i
            if num_start == length:
                num_start = i
            continue
        if num_start == length and char == "-":
            negative = True
            continue
        if num_start == length and char == " ":
            continue
        if decimal == length and char == ".":
            decimal = i
            continue
        break

    if num_start == length:
        return 0.0

    if decimal == length:
        too_big = num_end - num_start > _MAX_INTEGER_SPAN
    else:
        too_big = (
            decimal - num_start > _MAX_INTEGER_SPAN
            or num_end - decimal > _MAX_FRACTION_SPAN
        )
    if too_big:
        return 0.0

    value = 0.0
    for i in range(num_start, num_end + 1):
        if i == decimal:
            continue
        digit = ord(text[i]) - ord("0")
        if i < decimal:
            power = num_end - i if decimal == length else decimal - 1 - i
            value += digit * 10**power
        else:
            fraction = float(digit)
            for _ in range(i - decimal):
                fraction /= 10.0
            value += fraction

    return -value if negative else value