"""Lexical analysis of infix expressions.

The scanner is a small state machine fed one character at a time. It emits
tokens lazily and cannot be restarted:

    >>> [str(token) for token in Scanner("2pi() + 0x1F")]
    ['2', 'pi', '(', ')', '+', '31']

Numeric literals are exact: ``0.1`` becomes the rational 1/10. A leading
``0b``/``0o``/``0x`` switches the radix of the digits that follow, including
digits after a radix point (``0b0.1`` is 1/2).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Union

from .number import Number
from .types import UnsupportedToken


class Bracket(Enum):
    PAREN_LEFT = "("
    PAREN_RIGHT = ")"
    VERTICAL_LINE = "|"


class Operator(Enum):
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    MODULO = "%"


@dataclass(frozen=True)
class NumberToken:
    value: Number

    def __str__(self) -> str:
        return self.value.to_string()


@dataclass(frozen=True)
class BracketToken:
    bracket: Bracket

    def __str__(self) -> str:
        return self.bracket.value


@dataclass(frozen=True)
class FactorialSign:
    def __str__(self) -> str:
        return "!"


@dataclass(frozen=True)
class Comma:
    def __str__(self) -> str:
        return ","


@dataclass(frozen=True)
class OperatorToken:
    operator: Operator

    def __str__(self) -> str:
        return self.operator.value


@dataclass(frozen=True)
class IdToken:
    name: str

    def __str__(self) -> str:
        return self.name


Token = Union[NumberToken, BracketToken, FactorialSign, Comma, OperatorToken, IdToken]

PAREN_LEFT = BracketToken(Bracket.PAREN_LEFT)
PAREN_RIGHT = BracketToken(Bracket.PAREN_RIGHT)
VERTICAL_LINE = BracketToken(Bracket.VERTICAL_LINE)

_SINGLE_CHAR_TOKENS: dict[str, Token] = {
    "(": PAREN_LEFT,
    ")": PAREN_RIGHT,
    "|": VERTICAL_LINE,
    "+": OperatorToken(Operator.PLUS),
    "-": OperatorToken(Operator.MINUS),
    "*": OperatorToken(Operator.MULTIPLY),
    "/": OperatorToken(Operator.DIVIDE),
    "^": OperatorToken(Operator.POWER),
    "%": OperatorToken(Operator.MODULO),
    "!": FactorialSign(),
    ",": Comma(),
}

# Words folded into operators instead of identifiers
_KEYWORD_OPERATORS: dict[str, Token] = {
    "mod": OperatorToken(Operator.MODULO),
}

_RADIX_PREFIXES = {"b": 2, "o": 8, "x": 16}

_DIGITS = "0123456789abcdef"


def _digit_value(ch: str, radix: int) -> int | None:
    """Value of ``ch`` as a digit in ``radix`` or None."""
    value = _DIGITS.find(ch.lower())
    return value if 0 <= value < radix else None


def _is_identifier_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_identifier_char(ch: str) -> bool:
    return _is_identifier_start(ch) or ("0" <= ch <= "9")


class _State(Enum):
    START = auto()
    IDENTIFIER = auto()
    NUMBER_START = auto()  # a leading '0' was read
    RADIX_START = auto()  # '0b', '0o' or '0x' was read, no digit yet
    NUMBER = auto()
    FRACTION_START = auto()  # a bare '.' was read
    FRACTION = auto()


class Scanner:
    """Turn a string into a forward-only sequence of tokens.

    ``next_token()`` returns ``None`` once the input is exhausted and keeps
    returning ``None`` afterwards. Iterating the scanner yields the remaining
    tokens.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._reset()

    def _reset(self) -> None:
        self._state = _State.START
        self._identifier = ""
        self._radix = 10
        self._numerator = 0
        self._fraction_digits = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Token | None:
        """Scan for the next token.

        Raises:
            UnsupportedToken: on a character that cannot start or continue a token
        """
        while self._pos < len(self._text):
            ch = self._text[self._pos]
            token = self._step(ch)
            if token is not None:
                return token
        return self._finish()

    def _step(self, ch: str) -> Token | None:
        """Feed one character. Advances the position unless ``ch`` ends a token
        and has to be read again from the START state."""
        state = self._state

        if state is _State.START:
            self._pos += 1
            if ch.isspace():
                return None
            if ch in _SINGLE_CHAR_TOKENS:
                return _SINGLE_CHAR_TOKENS[ch]
            if ch == "0":
                self._state = _State.NUMBER_START
            elif "1" <= ch <= "9":
                self._state = _State.NUMBER
                self._numerator = int(ch)
            elif ch == ".":
                self._state = _State.FRACTION_START
            elif _is_identifier_start(ch):
                self._state = _State.IDENTIFIER
                self._identifier = ch
            else:
                raise UnsupportedToken(self._pos - 1)
            return None

        if state is _State.IDENTIFIER:
            if _is_identifier_char(ch):
                self._identifier += ch
                self._pos += 1
                return None
            return self._emit()

        if state is _State.NUMBER_START:
            if ch in _RADIX_PREFIXES:
                self._radix = _RADIX_PREFIXES[ch]
                self._state = _State.RADIX_START
                self._pos += 1
                return None
            if ch == ".":
                self._state = _State.FRACTION
                self._pos += 1
                return None
            if "0" <= ch <= "9":
                self._state = _State.NUMBER
                self._numerator = int(ch)
                self._pos += 1
                return None
            return self._emit()

        if state is _State.RADIX_START:
            digit = _digit_value(ch, self._radix)
            if digit is None:
                raise UnsupportedToken(self._pos)
            self._state = _State.NUMBER
            self._numerator = digit
            self._pos += 1
            return None

        if state is _State.NUMBER:
            if ch == ".":
                self._state = _State.FRACTION
                self._pos += 1
                return None
            digit = _digit_value(ch, self._radix)
            if digit is None:
                return self._emit()
            self._numerator = self._numerator * self._radix + digit
            self._pos += 1
            return None

        if state is _State.FRACTION_START:
            digit = _digit_value(ch, 10)
            if digit is None:
                raise UnsupportedToken(self._pos)
            self._state = _State.FRACTION
            self._numerator = digit
            self._fraction_digits = 1
            self._pos += 1
            return None

        # _State.FRACTION
        digit = _digit_value(ch, self._radix)
        if digit is None:
            return self._emit()
        self._numerator = self._numerator * self._radix + digit
        self._fraction_digits += 1
        self._pos += 1
        return None

    def _finish(self) -> Token | None:
        if self._state is _State.START:
            return None
        if self._state in (_State.RADIX_START, _State.FRACTION_START):
            raise UnsupportedToken(self._pos)
        return self._emit()

    def _emit(self) -> Token:
        """Build the token of the current state and return to START."""
        state = self._state
        if state is _State.IDENTIFIER:
            name = self._identifier
            token = _KEYWORD_OPERATORS.get(name.lower(), IdToken(name))
        elif state is _State.NUMBER_START:
            token = NumberToken(Number.zero())
        elif state is _State.NUMBER:
            token = NumberToken(Number(self._numerator))
        else:
            token = NumberToken(
                Number(self._numerator, self._radix**self._fraction_digits)
            )
        self._reset()
        return token


def tokenize(text: str) -> list[Token]:
    """Scan the whole of ``text`` into a list of tokens."""
    return list(Scanner(text))
