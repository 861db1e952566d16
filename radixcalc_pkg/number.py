"""Exact rational number type.

``Number`` wraps an immutable :class:`fractions.Fraction`. Field operations
(add, sub, mul, div, modulo, integer powers, factorial of integers) are exact.
Transcendental operations (roots, logarithms, trigonometry, gamma) are
computed with rational arithmetic only, converge to ``epsilon`` and are
rounded to ``config.WORKING_PRECISION`` decimal digits, so results are stable
to ``config.GUARANTEE_PRECISION`` digits.

Every iterative loop is bounded by ``config.MAX_ITERATIONS`` and raises
:class:`ComputationLimit` instead of running forever.
"""

from __future__ import annotations

import math
import random
from enum import Enum
from fractions import Fraction
from functools import lru_cache, total_ordering
from typing import Any, Union

import sympy as sp

from . import config
from .logging_config import get_logger
from .types import (
    ComputationLimit,
    DivisionZero,
    FactorialNegative,
    LogUndefinedBase,
    LogUndefinedNumber,
    NegativeRoot,
    OutOfRange,
    ZeroNthRoot,
)

logger = get_logger("number")

_DIGIT_CHARS = "0123456789ABCDEF"

# Largest root degree taken exactly by Newton iteration; larger ones go through exp and ln
_EXACT_ROOT_DEGREE = 64

_RADIX_NAMES = {
    "b": 2,
    "bin": 2,
    "binary": 2,
    "2": 2,
    "o": 8,
    "oct": 8,
    "octal": 8,
    "8": 8,
    "d": 10,
    "dec": 10,
    "decimal": 10,
    "10": 10,
    "h": 16,
    "x": 16,
    "hex": 16,
    "hexadecimal": 16,
    "16": 16,
}


class Radix(Enum):
    """Numeral base used to render numbers."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16

    @classmethod
    def parse(cls, name: str) -> Radix:
        """Resolve a user supplied radix name such as ``"hex"`` or ``"2"``.

        Raises:
            ValueError: if the name is not a known radix
        """
        try:
            return cls(_RADIX_NAMES[name.strip().lower()])
        except KeyError:
            raise ValueError(f"Unknown radix: {name!r}") from None

    @property
    def short_name(self) -> str:
        return {2: "bin", 8: "oct", 10: "dec", 16: "hex"}[self.value]


NumberLike = Union["Number", int, Fraction, float, str]


# -----------------------------
# Rational helpers
# -----------------------------


def _to_fraction(value: Any) -> Fraction:
    """Convert anything number-like to an exact Fraction."""
    if isinstance(value, Number):
        return value._value
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot convert {value!r} to Number")
        # Shortest repr keeps 0.1 as 1/10 instead of its binary expansion
        return Fraction(repr(value))
    if isinstance(value, str):
        return Fraction(value.strip())
    raise TypeError(f"Cannot convert {type(value).__name__} to Number")


def _round(value: Fraction, digits: int | None = None) -> Fraction:
    """Round to a fixed number of decimal digits after the point."""
    scale = 10 ** (config.WORKING_PRECISION if digits is None else digits)
    return Fraction(round(value * scale), scale)


def _epsilon(digits: int) -> Fraction:
    return Fraction(1, 10**digits)


def _internal_digits() -> int:
    return config.WORKING_PRECISION + 5


def _limit_exceeded(operation: str) -> ComputationLimit:
    message = f"{operation} did not converge within {config.MAX_ITERATIONS} iterations"
    logger.warning(message)
    return ComputationLimit(message)


@lru_cache(maxsize=16)
def _pi(digits: int) -> Fraction:
    return _round(Fraction(str(sp.pi.evalf(digits + 5))), digits)


@lru_cache(maxsize=16)
def _e(digits: int) -> Fraction:
    return _round(Fraction(str(sp.E.evalf(digits + 5))), digits)


@lru_cache(maxsize=None)
def _bernoulli(n: int) -> Fraction:
    """Bernoulli number B_n (Akiyama-Tanigawa)."""
    row = [Fraction(0)] * (n + 1)
    for m in range(n + 1):
        row[m] = Fraction(1, m + 1)
        for j in range(m, 0, -1):
            row[j - 1] = j * (row[j - 1] - row[j])
    return row[0]


def _integer_power(base: Fraction, exponent: int) -> Fraction:
    """Exact ``base ** exponent`` by repeated squaring. ``base`` must be non-zero."""
    if exponent < 0:
        return 1 / _integer_power(base, -exponent)
    if abs(base) == 1:
        return base if exponent % 2 else Fraction(1)

    bits = max(math.log2(abs(base.numerator)), math.log2(base.denominator))
    if bits * exponent > config.MAX_RESULT_BITS:
        raise ComputationLimit(
            f"Result of power would exceed {config.MAX_RESULT_BITS} bits"
        )

    numerator, denominator = base.numerator, base.denominator
    result_num, result_den = 1, 1
    while exponent:
        if exponent & 1:
            result_num *= numerator
            result_den *= denominator
        numerator *= numerator
        denominator *= denominator
        exponent >>= 1
    return Fraction(result_num, result_den)


def _integer_root(value: int, degree: int) -> int:
    """Return ``floor(value ** (1 / degree))`` using Newton's method on integers."""
    if value < 2:
        return value

    # A close over-estimate makes the descent quadratic; floats only seed it
    try:
        guess = int(math.exp(math.log(value) / degree) * (1 + 1e-6)) + 2
    except OverflowError:
        guess = 0
    if guess ** degree < value:
        guess = 1 << -(-value.bit_length() // degree)

    for _ in range(config.MAX_ITERATIONS):
        following = ((degree - 1) * guess + value // guess ** (degree - 1)) // degree
        if following >= guess:
            return guess
        guess = following
    raise _limit_exceeded("Root")


def _nth_root(value: Fraction, degree: int, digits: int) -> tuple[Fraction, bool]:
    """Positive real root of a positive rational.

    Returns:
        Tuple of (root, is_exact). Perfect powers are returned exactly,
        everything else is truncated to ``digits`` decimal digits.
    """
    if value == 1 or degree == 1:
        return value, True
    if 4 * digits * degree > config.MAX_RESULT_BITS:
        raise ComputationLimit(f"Root of degree {degree} is too large to compute")

    num_root = _integer_root(value.numerator, degree)
    den_root = _integer_root(value.denominator, degree)
    if num_root**degree == value.numerator and den_root**degree == value.denominator:
        return Fraction(num_root, den_root), True

    scale = 10**digits
    scaled = (value.numerator * scale**degree) // value.denominator
    return Fraction(_integer_root(scaled, degree), scale), False


def _atanh(z: Fraction, digits: int) -> Fraction:
    """Series z + z^3/3 + z^5/5 + ... for |z| < 1."""
    eps = _epsilon(digits)
    z = _round(z, digits)
    z_squared = _round(z * z, digits)
    power = z
    total = z
    for k in range(1, config.MAX_ITERATIONS):
        power = _round(power * z_squared, digits)
        term = _round(power / (2 * k + 1), digits)
        total += term
        if abs(term) < eps:
            return total
    raise _limit_exceeded("Logarithm")


@lru_cache(maxsize=16)
def _ln2(digits: int) -> Fraction:
    return _round(2 * _atanh(Fraction(1, 3), digits + 2), digits)


def _ln(value: Fraction, digits: int) -> Fraction:
    """Natural logarithm of a positive rational.

    The argument is split into ``mantissa * 2**shift`` with the mantissa in
    (1/2, 2), so ln(mantissa) = 2 * atanh((m - 1) / (m + 1)) converges fast.
    """
    if value == 1:
        return Fraction(0)
    numerator, denominator = value.numerator, value.denominator
    shift = numerator.bit_length() - denominator.bit_length()
    if shift > 0:
        denominator <<= shift
    else:
        numerator <<= -shift
    guard = digits + len(str(abs(shift)))
    # z = (m - 1) / (m + 1) in fixed point; huge operands are never reduced by gcd
    scale = 10 ** (guard + 2)
    z = Fraction((numerator - denominator) * scale // (numerator + denominator), scale)
    return _round(2 * _atanh(z, guard) + shift * _ln2(guard), digits)


def _exp(value: Fraction, digits: int) -> Fraction:
    """e ** value, reduced to a Taylor series on [0, ln 2)."""
    if value == 0:
        return Fraction(1)
    if value < 0:
        return _round(1 / _exp(-value, digits + 5), digits)

    halvings = math.floor(value / _ln2(digits + 20))
    if halvings > config.MAX_RESULT_BITS:
        raise ComputationLimit("Exponential result is too large")
    # The series result is scaled by 2**halvings, so it needs that many more digits
    guard = digits + 10 + halvings * 3 // 10
    ln2 = _ln2(guard + len(str(halvings)) + 2)
    reduced = _round(value - halvings * ln2, guard)

    eps = _epsilon(guard)
    term = Fraction(1)
    total = Fraction(1)
    for n in range(1, config.MAX_ITERATIONS):
        term = _round(term * reduced / n, guard)
        total += term
        if abs(term) < eps:
            return _round(total * (1 << halvings), digits)
    raise _limit_exceeded("Exponential")


def _real_power(magnitude: Fraction, exponent: Fraction, digits: int) -> Fraction:
    """``magnitude ** exponent`` for a positive magnitude, as exp(exponent * ln(magnitude)).

    The logarithm carries extra digits for the integer part of the result and
    for the size of the exponent, so the result keeps ``digits`` significant
    digits after the point.
    """
    shift = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    log_bits = abs(shift) + 1
    scale = math.ceil(abs(exponent) * log_bits)
    if scale > config.MAX_RESULT_BITS:
        raise ComputationLimit(
            f"Result of power would exceed {config.MAX_RESULT_BITS} bits"
        )
    guard = digits + scale * 3 // 10 + len(str(scale)) + 2
    return _exp(exponent * _ln(magnitude, guard), digits)


def _sin_series(x: Fraction, digits: int) -> Fraction:
    eps = _epsilon(digits)
    x_squared = _round(x * x, digits)
    term = x
    total = x
    for k in range(1, config.MAX_ITERATIONS):
        term = _round(-term * x_squared / ((2 * k) * (2 * k + 1)), digits)
        total += term
        if abs(term) < eps:
            return total
    raise _limit_exceeded("Sine")


def _atan(x: Fraction, digits: int) -> Fraction:
    if x < 0:
        return -_atan(-x, digits)
    if x == 0:
        return Fraction(0)
    if x == 1:
        return _pi(digits) / 4
    if x > 1:
        return _pi(digits) / 2 - _atan(1 / x, digits)

    # atan(x) = 2 * atan(x / (1 + sqrt(1 + x^2)))
    doublings = 0
    while x > Fraction(1, 10):
        root, _ = _nth_root(1 + x * x, 2, digits)
        x = _round(x / (1 + root), digits)
        doublings += 1

    eps = _epsilon(digits)
    x_squared = _round(x * x, digits)
    power = x
    total = x
    for k in range(1, config.MAX_ITERATIONS):
        power = _round(-power * x_squared, digits)
        term = _round(power / (2 * k + 1), digits)
        total += term
        if abs(term) < eps:
            return total * 2**doublings
    raise _limit_exceeded("Arctangent")


def _ln_gamma(w: Fraction, digits: int) -> Fraction:
    """Stirling series for ln(gamma(w)); accurate for w >= digits."""
    eps = _epsilon(digits)
    total = (w - Fraction(1, 2)) * _ln(w, digits) - w + _ln(2 * _pi(digits), digits) / 2
    w_squared = w * w
    w_power = w
    previous = None
    for k in range(1, config.MAX_ITERATIONS):
        term = _round(_bernoulli(2 * k) / (2 * k * (2 * k - 1) * w_power), digits)
        total += term
        if abs(term) < eps:
            return _round(total, digits)
        if previous is not None and abs(term) > abs(previous):
            break  # asymptotic series started to diverge
        previous = term
        w_power *= w_squared
    raise _limit_exceeded("Gamma")


def _format_integer(value: int, base: int) -> str:
    if value == 0:
        return "0"
    # Peel off 16 digits per division, then expand each chunk
    chunk = base**16
    digits = []
    while value:
        value, part = divmod(value, chunk)
        for _ in range(16):
            part, digit = divmod(part, base)
            digits.append(_DIGIT_CHARS[digit])
    while digits[-1] == "0":
        digits.pop()
    return "".join(reversed(digits))


# -----------------------------
# Number
# -----------------------------


@total_ordering
class Number:
    """Immutable exact rational number.

    Example:
        >>> Number(1, 3).add(Number(1, 6)).to_string(Radix.DECIMAL, 3)
        '0.5'
        >>> Number(255).to_string(Radix.HEXADECIMAL)
        'FF'
    """

    __slots__ = ("_value",)

    def __init__(self, numerator: NumberLike = 0, denominator: NumberLike = 1):
        denominator = _to_fraction(denominator)
        if denominator == 0:
            raise DivisionZero()
        self._value = _to_fraction(numerator) / denominator

    # ---- constructors ----

    @classmethod
    def from_value(cls, value: NumberLike) -> Number:
        """Return ``value`` as a Number (the same object if it already is one)."""
        if isinstance(value, Number):
            return value
        return cls(value)

    @classmethod
    def zero(cls) -> Number:
        return cls(0)

    @classmethod
    def one(cls) -> Number:
        return cls(1)

    @classmethod
    def pi(cls) -> Number:
        return cls(_pi(config.WORKING_PRECISION))

    @classmethod
    def e(cls) -> Number:
        return cls(_e(config.WORKING_PRECISION))

    @classmethod
    def epsilon(cls) -> Number:
        """Convergence threshold of the iterative algorithms."""
        return cls(1, 10**config.WORKING_PRECISION)

    @classmethod
    def guarantee_precision(cls) -> Number:
        """Tolerance within which irrational results are guaranteed."""
        return cls(1, 10**config.GUARANTEE_PRECISION)

    @classmethod
    def random(cls) -> Number:
        """Uniformly distributed value in [0, 1)."""
        return cls(random.getrandbits(64), 1 << 64)

    # ---- accessors ----

    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    def as_fraction(self) -> Fraction:
        return self._value

    def is_integer(self) -> bool:
        return self._value.denominator == 1

    def is_close(self, other: NumberLike, tolerance: NumberLike | None = None) -> bool:
        """True when ``|self - other|`` is within ``tolerance`` (default: guarantee_precision)."""
        bound = (
            Number.guarantee_precision()._value
            if tolerance is None
            else _to_fraction(tolerance)
        )
        return abs(self._value - _to_fraction(other)) <= bound

    # ---- field operations ----

    def add(self, other: NumberLike) -> Number:
        return Number(self._value + _to_fraction(other))

    def sub(self, other: NumberLike) -> Number:
        return Number(self._value - _to_fraction(other))

    def mul(self, other: NumberLike) -> Number:
        return Number(self._value * _to_fraction(other))

    def div(self, other: NumberLike) -> Number:
        divisor = _to_fraction(other)
        if divisor == 0:
            raise DivisionZero()
        return Number(self._value / divisor)

    def remainder(self, other: NumberLike) -> Number:
        """Remainder of truncating division; the sign follows the dividend."""
        divisor = _to_fraction(other)
        if divisor == 0:
            raise DivisionZero()
        quotient = math.trunc(self._value / divisor)
        return Number(self._value - divisor * quotient)

    def modulo(self, other: NumberLike) -> Number:
        """Floor modulo; the sign follows the divisor."""
        return self.remainder(other).add(other).remainder(other)

    def abs(self) -> Number:
        return Number(abs(self._value))

    def power(self, exponent: NumberLike) -> Number:
        """Raise to a rational exponent ``p/q``.

        ``x^0`` is 1 for every x and a negative power of zero is 1 as well.
        A fractional exponent with a small ``q`` takes the ``q``-th root
        first, then raises it to ``p``, so perfect powers stay exact. Larger
        denominators, such as decimal approximations of irrational numbers,
        are computed as exp(p/q * ln|x|). A negative base needs an odd ``q``
        and the sign follows the parity of ``p``.
        """
        exp = _to_fraction(exponent)
        if exp == 0:
            return Number.one()
        base = self._value
        if base == 0:
            return Number.one() if exp < 0 else Number.zero()
        if exp.denominator == 1:
            return Number(_integer_power(base, exp.numerator))

        p, q = exp.numerator, exp.denominator
        if base < 0 and q % 2 == 0:
            raise NegativeRoot()
        if q > _EXACT_ROOT_DEGREE:
            result = _real_power(abs(base), exp, _internal_digits())
            if base < 0 and p % 2:
                result = -result
            return Number(_round(result))

        root, exact = _nth_root(
            abs(base), q, config.WORKING_PRECISION + abs(p).bit_length() // 3 + 6
        )
        if base < 0:
            root = -root
        result = _integer_power(root, p)
        return Number(result if exact else _round(result))

    # ---- roots ----

    def root(self, degree: NumberLike) -> Number:
        """Real ``degree``-th root, computed by Newton's method.

        Raises:
            ZeroNthRoot: if degree is 0
            NegativeRoot: if self is negative and no real root exists
        """
        n = _to_fraction(degree)
        if n == 0:
            raise ZeroNthRoot()
        if n < 0:
            return Number.one().div(self.root(-n))

        value = self._value
        p, q = n.numerator, n.denominator
        if value < 0 and (math.trunc(n) % 2 == 0 or p % 2 == 0):
            raise NegativeRoot()
        if value == 0:
            return Number.zero()
        if p > _EXACT_ROOT_DEGREE:
            return self.power(1 / n)

        root, exact = _nth_root(abs(value), p, config.WORKING_PRECISION + 5)
        if value < 0:
            root = -root
        if q != 1:
            root = _integer_power(root, q)
        return Number(root if exact else _round(root))

    def sqrt(self) -> Number:
        return self.root(2)

    # ---- logarithms ----

    def log(self, base: NumberLike) -> Number:
        """Logarithm of self in the given base.

        Raises:
            LogUndefinedBase: if base <= 0 or base == 1
            LogUndefinedNumber: if self <= 0
        """
        b = _to_fraction(base)
        x = self._value
        if b <= 0:
            raise LogUndefinedBase()
        if x <= 0:
            raise LogUndefinedNumber()
        if x == 1:
            return Number.zero()
        if x == b:
            return Number.one()
        if b == 1:
            raise LogUndefinedBase()

        digits = _internal_digits()
        result = _ln(x, digits) / _ln(b, digits)

        # Integer results (log(1000, 10)) are returned exactly
        candidate = round(result)
        if candidate and abs(candidate) <= 4096:
            bits = max(b.numerator.bit_length(), b.denominator.bit_length())
            if bits * abs(candidate) <= config.MAX_RESULT_BITS and b**candidate == x:
                return Number(candidate)
        return Number(_round(result))

    def ln(self) -> Number:
        x = self._value
        if x <= 0:
            raise LogUndefinedNumber()
        if x == _e(config.WORKING_PRECISION):
            return Number.one()
        return Number(_round(_ln(x, _internal_digits())))

    def log2(self) -> Number:
        return self.log(2)

    def log10(self) -> Number:
        return self.log(10)

    # ---- trigonometry ----

    def sin(self) -> Number:
        x = self._value
        # Multiples of pi()/2 land exactly on 0, 1 or -1
        quarter_turns = x / (Number.pi()._value / 2)
        if quarter_turns.denominator == 1:
            return Number((0, 1, 0, -1)[quarter_turns.numerator % 4])

        # pi needs one extra digit per digit of the integer part of x
        digits = _internal_digits() + math.floor(abs(x)).bit_length() * 3 // 10 + 1
        if 4 * digits > config.MAX_RESULT_BITS:
            raise ComputationLimit("Argument is too large to reduce modulo 2*pi")
        pi = _pi(digits)
        half_pi = pi / 2
        two_pi = 2 * pi
        reduced = x - math.floor(x / two_pi) * two_pi

        # Fold into [-pi/2, pi/2] where the series converges fastest
        if reduced > 3 * half_pi:
            reduced -= two_pi
        elif reduced > half_pi:
            reduced = pi - reduced
        return Number(_round(_sin_series(reduced, _internal_digits())))

    def cos(self) -> Number:
        return Number.pi().div(2).sub(self).sin()

    def tg(self) -> Number:
        return self.sin().div(self.cos())

    def cotg(self) -> Number:
        return self.cos().div(self.sin())

    def arcsin(self) -> Number:
        x = self._value
        if abs(x) > 1:
            raise OutOfRange("arcsin is defined on [-1, 1]")
        if x == 0:
            return Number.zero()
        if abs(x) == 1:
            return Number.pi().div(2 if x > 0 else -2)
        digits = _internal_digits()
        root, _ = _nth_root(1 - x * x, 2, digits)
        return Number(_round(_atan(x / root, digits)))

    def arccos(self) -> Number:
        return Number.pi().div(2).sub(self.arcsin())

    def arctg(self) -> Number:
        return Number(_round(_atan(self._value, _internal_digits())))

    def arccotg(self) -> Number:
        return Number.pi().div(2).sub(self.arctg())

    # ---- factorial, gamma and combinations ----

    def factorial(self) -> Number:
        """n! for integers, gamma(n + 1) otherwise.

        Raises:
            FactorialNegative: if self < 0
        """
        if self._value < 0:
            raise FactorialNegative()
        if not self.is_integer():
            return self.add(1).gamma()

        n = self._value.numerator
        if n > config.MAX_FACTORIAL_ARGUMENT:
            raise ComputationLimit(
                f"Factorial argument exceeds {config.MAX_FACTORIAL_ARGUMENT}"
            )
        result = 1
        for i in range(2, n + 1):
            result *= i
        return Number(result)

    def gamma(self) -> Number:
        """Gamma function; integer arguments are routed through the exact factorial."""
        z = self._value
        if z.denominator == 1:
            if z <= 0:
                raise DivisionZero(f"Gamma function has a pole at {z}")
            return Number(z - 1).factorial()

        digits = _internal_digits()
        shift = max(0, digits - math.floor(z))
        if shift > config.MAX_ITERATIONS:
            raise ComputationLimit("Gamma argument is too far below zero")
        product = Fraction(1)
        for i in range(shift):
            product *= z + i

        result = _exp(_ln_gamma(z + shift, digits), digits) / product
        return Number(_round(result))

    @staticmethod
    def combination(n: NumberLike, k: NumberLike) -> Number:
        """Binomial coefficient ``n! / (k! * (n - k)!)``."""
        n = Number.from_value(n)
        k = Number.from_value(k)
        if n < 0 or k < 0:
            raise FactorialNegative()
        if k > n:
            return Number.zero()
        if k == 0 or k == n:
            return Number.one()
        return n.factorial().div(k.factorial().mul(n.sub(k).factorial()))

    # ---- formatting ----

    def to_string(
        self, radix: Radix | int = Radix.DECIMAL, precision: int | None = None
    ) -> str:
        """Render in the given radix with at most ``precision`` fractional digits.

        The last kept digit is rounded half up, trailing zeros and a trailing
        radix point are dropped, and negative zero renders as ``0``.
        """
        base = Radix(radix).value
        if precision is None:
            precision = config.OUTPUT_PRECISION

        magnitude = abs(self._value)
        integer = magnitude.numerator // magnitude.denominator
        fraction = magnitude - integer

        digits = []
        for _ in range(precision):
            fraction *= base
            digit = fraction.numerator // fraction.denominator
            digits.append(digit)
            fraction -= digit

        if fraction * 2 >= 1:
            position = len(digits) - 1
            while position >= 0:
                digits[position] += 1
                if digits[position] < base:
                    break
                digits[position] = 0
                position -= 1
            else:
                integer += 1

        while digits and digits[-1] == 0:
            digits.pop()

        text = _format_integer(integer, base)
        if digits:
            text += "." + "".join(_DIGIT_CHARS[d] for d in digits)
        if self._value < 0 and (integer or digits):
            text = "-" + text
        return text

    # ---- Python protocol ----

    def __repr__(self) -> str:
        if self.is_integer():
            return f"Number({self.numerator})"
        return f"Number({self.numerator}, {self.denominator})"

    def __str__(self) -> str:
        return self.to_string()

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        try:
            return self._value == _to_fraction(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __lt__(self, other: object) -> bool:
        try:
            return self._value < _to_fraction(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __bool__(self) -> bool:
        return self._value != 0

    def __int__(self) -> int:
        return math.trunc(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __neg__(self) -> Number:
        return Number(-self._value)

    def __pos__(self) -> Number:
        return self

    def __abs__(self) -> Number:
        return self.abs()

    def __add__(self, other: Any) -> Number:
        return self._binary(other, Number.add)

    def __radd__(self, other: Any) -> Number:
        return self._reflected(other, Number.add)

    def __sub__(self, other: Any) -> Number:
        return self._binary(other, Number.sub)

    def __rsub__(self, other: Any) -> Number:
        return self._reflected(other, Number.sub)

    def __mul__(self, other: Any) -> Number:
        return self._binary(other, Number.mul)

    def __rmul__(self, other: Any) -> Number:
        return self._reflected(other, Number.mul)

    def __truediv__(self, other: Any) -> Number:
        return self._binary(other, Number.div)

    def __rtruediv__(self, other: Any) -> Number:
        return self._reflected(other, Number.div)

    def __mod__(self, other: Any) -> Number:
        return self._binary(other, Number.modulo)

    def __rmod__(self, other: Any) -> Number:
        return self._reflected(other, Number.modulo)

    def __pow__(self, other: Any) -> Number:
        return self._binary(other, Number.power)

    def __rpow__(self, other: Any) -> Number:
        return self._reflected(other, Number.power)

    def _binary(self, other: Any, operation):
        try:
            other = Number.from_value(other)
        except (TypeError, ValueError):
            return NotImplemented
        return operation(self, other)

    def _reflected(self, other: Any, operation):
        try:
            other = Number.from_value(other)
        except (TypeError, ValueError):
            return NotImplemented
        return operation(other, self)
