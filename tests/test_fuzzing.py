"""Fuzzing tests for the scanner and engine with random inputs."""

import random
import string
import unittest

from radixcalc_pkg.calculator import Calculator
from radixcalc_pkg.number import Number
from radixcalc_pkg.scanner import tokenize
from radixcalc_pkg.types import MathError

# Characters the scanner knows, plus a couple it rejects
ALPHABET = "0123456789+-*/^%!(),|. " + "xabpi" + "$"
NAMES = ["sqrt(", "root(", "pi()", "mod", "ln(", "sin(", "comb(", "ans()"]


class TestScannerFuzzing(unittest.TestCase):
    """Fuzz test the scanner with random inputs."""

    def test_random_printable(self):
        """Scanning either succeeds or raises a MathError."""
        rng = random.Random(42)
        for _ in range(300):
            text = "".join(rng.choices(string.printable, k=rng.randint(1, 40)))
            try:
                tokenize(text)
            except MathError:
                pass


class TestEngineFuzzing(unittest.TestCase):
    """Fuzz test full evaluation: the only failures are MathErrors."""

    def check(self, text):
        calc = Calculator()
        try:
            result = calc.evaluate(text)
        except MathError:
            return
        self.assertIsInstance(result, Number)

    def test_random_characters(self):
        rng = random.Random(7)
        for _ in range(500):
            text = "".join(rng.choices(ALPHABET, k=rng.randint(1, 12)))
            with self.subTest(text=text):
                self.check(text)

    def test_random_fragments(self):
        rng = random.Random(99)
        pieces = list("0123456789+-*/^!(),|") + NAMES
        for _ in range(500):
            text = "".join(rng.choices(pieces, k=rng.randint(1, 8)))
            with self.subTest(text=text):
                self.check(text)

    def test_malformed_expressions(self):
        malformed = [
            "(((",
            ")))",
            "|||",
            "1++",
            "**1",
            "!!",
            ",",
            "mod(",
            "sqrt(,)",
            "",
            "   ",
        ]
        for text in malformed:
            with self.subTest(text=text):
                with self.assertRaises(MathError):
                    Calculator().evaluate(text)


if __name__ == "__main__":
    unittest.main()
