"""Batch statistics over a stream of non-negative integers.

Used by ``radixcalc --stats``: numbers separated by whitespace are read from
a text stream and their sample standard deviation is computed with exact
``Number`` arithmetic up to the final square root.
"""

from __future__ import annotations

from typing import Iterable, TextIO

from .logging_config import get_logger
from .number import Number
from .types import Message

logger = get_logger("stats")

_SEPARATORS = " \t\r\n"


def read_numbers(stream: TextIO) -> list[Number]:
    """Parse whitespace-separated decimal integers from ``stream``.

    Raises:
        Message: the stream cannot be read or holds a non-digit character
    """
    try:
        text = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise Message(f"Cannot read input: {e}") from e

    numbers: list[Number] = []
    current: int | None = None
    for ch in text:
        if ch in _SEPARATORS:
            if current is not None:
                numbers.append(Number(current))
                current = None
            continue
        if not ("0" <= ch <= "9"):
            raise Message(f"{ch} is not a digit")
        current = (current or 0) * 10 + ord(ch) - ord("0")
    if current is not None:
        numbers.append(Number(current))
    logger.debug(f"Read {len(numbers)} numbers")
    return numbers


def mean(numbers: Iterable[Number]) -> Number:
    values = list(numbers)
    if not values:
        raise Message("No numbers given")
    return sum(values, Number.zero()).div(len(values))


def standard_deviation(numbers: Iterable[Number]) -> Number:
    """Sample standard deviation (divides by ``n - 1``).

    Raises:
        Message: fewer than two numbers were given
    """
    values = list(numbers)
    if len(values) < 2:
        raise Message("At least two numbers are required")
    average = mean(values)
    squared = Number.zero()
    for value in values:
        squared = squared.add(value.sub(average).power(2))
    return squared.div(len(values) - 1).sqrt()
