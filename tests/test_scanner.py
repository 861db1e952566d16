"""Tests for the expression scanner."""

import pytest

from radixcalc_pkg.number import Number
from radixcalc_pkg.scanner import (
    PAREN_LEFT,
    PAREN_RIGHT,
    VERTICAL_LINE,
    Comma,
    FactorialSign,
    IdToken,
    NumberToken,
    Operator,
    OperatorToken,
    Scanner,
    tokenize,
)
from radixcalc_pkg.types import UnsupportedToken


def num(numerator, denominator=1):
    return NumberToken(Number(numerator, denominator))


def op(operator):
    return OperatorToken(operator)


class TestTokens:
    """Token sequences for well-formed input."""

    def test_arithmetic(self):
        assert tokenize("2*3+4") == [
            num(2),
            op(Operator.MULTIPLY),
            num(3),
            op(Operator.PLUS),
            num(4),
        ]

    def test_all_single_character_tokens(self):
        assert tokenize("+-*/^%!(),|") == [
            op(Operator.PLUS),
            op(Operator.MINUS),
            op(Operator.MULTIPLY),
            op(Operator.DIVIDE),
            op(Operator.POWER),
            op(Operator.MODULO),
            FactorialSign(),
            PAREN_LEFT,
            PAREN_RIGHT,
            Comma(),
            VERTICAL_LINE,
        ]

    def test_whitespace_is_skipped(self):
        assert tokenize("\t 1 \n") == [num(1)]
        assert tokenize("   ") == []
        assert tokenize("") == []

    def test_function_call(self):
        assert tokenize("sqrt(2)") == [IdToken("sqrt"), PAREN_LEFT, num(2), PAREN_RIGHT]

    def test_identifiers_keep_case_and_digits(self):
        assert tokenize("My_Var2") == [IdToken("My_Var2")]
        assert tokenize("_x") == [IdToken("_x")]

    def test_number_then_identifier(self):
        assert tokenize("2pi()") == [num(2), IdToken("pi"), PAREN_LEFT, PAREN_RIGHT]
        assert tokenize("1x") == [num(1), IdToken("x")]

    def test_mod_keyword_is_an_operator(self):
        assert tokenize("7 mod 3") == [num(7), op(Operator.MODULO), num(3)]
        assert tokenize("MOD") == [op(Operator.MODULO)]
        assert tokenize("modulus") == [IdToken("modulus")]

    def test_str_of_tokens(self):
        assert [str(t) for t in Scanner("2pi() + 0x1F")] == ["2", "pi", "(", ")", "+", "31"]


class TestNumberLiterals:
    """Literal values are exact rationals."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", Number(42)),
            ("007", Number(7)),
            ("0", Number(0)),
            ("0.1", Number(1, 10)),
            (".5", Number(1, 2)),
            ("10.", Number(10)),
            ("3.25", Number(13, 4)),
            ("0b101", Number(5)),
            ("0o17", Number(15)),
            ("0x1F", Number(31)),
            ("0xff", Number(255)),
            ("0b0.1", Number(1, 2)),
            ("0x0.8", Number(1, 2)),
            ("0x1.8", Number(3, 2)),
            ("0o0.4", Number(1, 2)),
        ],
    )
    def test_literal(self, text, expected):
        assert tokenize(text) == [NumberToken(expected)]

    def test_digit_outside_radix_ends_literal(self):
        assert tokenize("0b12") == [num(1), num(2)]

    def test_letter_after_decimal_number(self):
        assert tokenize("2e") == [num(2), IdToken("e")]

    def test_second_point_starts_new_literal(self):
        assert tokenize("0.5.5") == [num(1, 2), num(1, 2)]


class TestUnsupportedTokens:
    """Characters that cannot be scanned report their position."""

    @pytest.mark.parametrize(
        "text,position",
        [
            ("2 $ 3", 2),
            ("#", 0),
            ("1+2=3", 3),
            ("0b2", 2),
            ("0x", 2),
            ("0o8", 2),
            (".", 1),
            ("1 . 5", 3),
            ("2²", 1),
        ],
    )
    def test_position(self, text, position):
        with pytest.raises(UnsupportedToken) as exc_info:
            tokenize(text)
        assert exc_info.value.position == position
        assert exc_info.value.code == "UNSUPPORTED_TOKEN"
        assert str(position) in exc_info.value.message


class TestScannerProtocol:
    """The scanner is a lazy, forward-only sequence."""

    def test_end_marker_repeats(self):
        scanner = Scanner("1")
        assert scanner.next_token() == num(1)
        assert scanner.next_token() is None
        assert scanner.next_token() is None

    def test_iterator_yields_remaining_tokens(self):
        scanner = Scanner("1 + 2")
        assert scanner.next_token() == num(1)
        assert list(scanner) == [op(Operator.PLUS), num(2)]
        assert list(scanner) == []

    def test_tokens_before_error_are_delivered(self):
        scanner = Scanner("1 + $")
        assert scanner.next_token() == num(1)
        assert scanner.next_token() == op(Operator.PLUS)
        with pytest.raises(UnsupportedToken):
            scanner.next_token()
