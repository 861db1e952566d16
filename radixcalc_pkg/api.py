"""Public API for RadixCalc - returns structured objects without side effects."""

from __future__ import annotations

from . import config
from .calculator import Calculator
from .logging_config import get_logger
from .number import Radix
from .types import EvalResult, MathError

logger = get_logger("api")


def evaluate(
    expression: str,
    radix: str | Radix | None = None,
    precision: int | None = None,
    calculator: Calculator | None = None,
) -> EvalResult:
    """Evaluate a mathematical expression.

    Args:
        expression: Expression string (e.g., "2(3+4)", "root(2, 64)")
        radix: Output radix name or Radix (default: config.DEFAULT_RADIX)
        precision: Fractional digits in the result (default: config.OUTPUT_PRECISION)
        calculator: Calculator to evaluate with; a fresh one when omitted

    Returns:
        EvalResult with the formatted result, or the error message and code

    Example:
        >>> from radixcalc_pkg.api import evaluate
        >>> evaluate("2*3+4").result
        '10'
        >>> evaluate("0x1F", radix="bin").result
        '11111'
        >>> evaluate("16/0").error_code
        'DIVISION_ZERO'
    """
    try:
        target = radix if isinstance(radix, Radix) else Radix.parse(radix or config.DEFAULT_RADIX)
    except ValueError as e:
        return EvalResult(ok=False, error=str(e), error_code="INVALID_RADIX")

    calc = calculator if calculator is not None else Calculator()
    try:
        value = calc.evaluate(expression)
    except MathError as e:
        logger.debug(f"Evaluation of {expression!r} failed: {e.code}")
        return EvalResult(ok=False, error=e.message, error_code=e.code)
    return EvalResult(
        ok=True,
        result=value.to_string(target, precision),
        radix=target.short_name,
    )


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Args:
        expression: Expression string to validate

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from radixcalc_pkg.api import validate_expression
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("(1+2)(3+4)")
        (False, "Missing operator between ')' and '('")
    """
    try:
        Calculator().validate(expression)
        return True, None
    except MathError as e:
        return False, e.message
