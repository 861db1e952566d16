"""Algebraic properties that must hold for exact and approximated results."""

import random

import pytest
import sympy as sp

from radixcalc_pkg import config
from radixcalc_pkg.calculator import Calculator
from radixcalc_pkg.number import Number, Radix
from radixcalc_pkg.scanner import tokenize

rng = random.Random(1234)

RATIONALS = [Number(rng.randint(-500, 500), rng.randint(1, 60)) for _ in range(25)]
POSITIVE = [Number(rng.randint(1, 500), rng.randint(1, 60)) for _ in range(15)]


def reference(expr, extra_digits=0) -> str:
    return str(sp.N(expr, config.WORKING_PRECISION + 10 + extra_digits))


@pytest.mark.parametrize("x", RATIONALS)
def test_field_identities(x):
    y = RATIONALS[-1]
    assert x.add(y) == y.add(x)
    assert x.mul(y) == y.mul(x)
    assert x.add(0) == x
    assert x.mul(1) == x
    assert x.power(0) == 1
    assert x.sub(x) == 0
    assert x.add(x.mul(-1)) == 0
    if x != 0:
        assert x.div(x) == 1
        assert x.mul(Number.one().div(x)) == 1


@pytest.mark.parametrize("x", RATIONALS[:10])
@pytest.mark.parametrize("y", RATIONALS[10:15])
def test_modulo_sign_follows_divisor(x, y):
    if y == 0:
        return
    m = x.modulo(y)
    assert m == 0 or (m > 0) == (y > 0)
    assert abs(m) < abs(y)
    assert x.sub(m).div(y).is_integer()


@pytest.mark.parametrize("x", POSITIVE)
def test_root_inverts_power(x):
    assert x.power(3).root(3) == x
    assert x.sqrt().power(2).is_close(x)


@pytest.mark.parametrize("x", POSITIVE[:8])
def test_log_laws(x):
    y = Number(7, 3)
    assert x.mul(y).ln().is_close(x.ln().add(y.ln()))
    assert x.div(y).log(5).is_close(x.log(5).sub(y.log(5)))
    assert x.power(3).log10().is_close(x.log10().mul(3))
    assert x.power(Number(1, 2)).log(7).is_close(x.log(7).div(2))
    assert x.log(2).is_close(x.ln().div(Number(2).ln()))


@pytest.mark.parametrize("x", RATIONALS[:10])
def test_pythagorean_identity(x):
    s = x.sin()
    c = x.cos()
    assert s.power(2).add(c.power(2)).is_close(1)


@pytest.mark.parametrize("x", RATIONALS[:10])
def test_sin_is_odd(x):
    assert x.sin().is_close(x.mul(-1).sin().mul(-1))


@pytest.mark.parametrize("n", range(0, 15))
def test_factorial_recurrence(n):
    assert Number(n + 1).factorial() == Number(n).factorial().mul(n + 1)


@pytest.mark.parametrize("x", RATIONALS)
def test_decimal_text_scans_back(x):
    """A finite decimal rendering scans back to a value within its last digit."""
    text = x.abs().to_string(Radix.DECIMAL, 8)
    (token,) = tokenize(text)
    assert token.value.is_close(x.abs(), Number(1, 10**8))


@pytest.mark.parametrize("x", [Number(v) for v in (0, 1, 7, 255, 4096, 123456789)])
def test_radix_text_scans_back(x):
    prefixes = {Radix.BINARY: "0b", Radix.OCTAL: "0o", Radix.HEXADECIMAL: "0x"}
    for radix, prefix in prefixes.items():
        (token,) = tokenize(prefix + x.to_string(radix))
        assert token.value == x


def test_expression_matches_method_calls():
    calc = Calculator()
    assert calc.evaluate("(1/3 + 1/6) * 4 - 2^-1") == Number(3, 2)
    assert calc.evaluate("comb(10, 3) - 10!/(3!*7!)") == 0
    assert calc.evaluate("|sin(1)| - sin(1)") == 0


@pytest.mark.parametrize("x", POSITIVE[:8])
@pytest.mark.parametrize("n", [Number(5, 2), Number(7, 3), Number(201, 100)])
def test_root_inverts_fractional_power(x, n):
    assert x.root(n).power(n).is_close(x)


@pytest.mark.parametrize("x", POSITIVE[:6])
def test_root_inverts_irrational_power(x):
    pi = Number.pi()
    assert x.root(pi).power(pi).is_close(x)


@pytest.mark.parametrize("x", POSITIVE[:8])
@pytest.mark.parametrize("b", [Number.pi(), Number.e(), Number("0.1234567")])
def test_log_law_with_non_rational_exponent(x, b):
    assert x.power(b).log(5).is_close(b.mul(x.log(5)))
    assert x.power(b).ln().is_close(b.mul(x.ln()))


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2^pi()", 2**sp.pi),
        ("e()^pi()", sp.E**sp.pi),
        ("2^sqrt(2)", 2 ** sp.sqrt(2)),
        ("10^log10(3)", sp.Integer(3)),
        ("2^0.1234567", 2 ** sp.Rational("0.1234567")),
    ],
)
def test_irrational_exponent_expressions(text, expected):
    assert Calculator().evaluate(text).is_close(reference(expected))


@pytest.mark.parametrize("x", [10**15, 10**20, 10**30, -(10**40), 3 * 10**60 + 1])
def test_trigonometry_of_large_arguments(x):
    n = Number(x)
    assert n.sin().is_close(reference(sp.sin(x)))
    assert n.cos().is_close(reference(sp.cos(x)))
    assert n.sin().power(2).add(n.cos().power(2)).is_close(1)
