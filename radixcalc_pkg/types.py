"""Error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating a mathematical expression."""

    ok: bool
    result: str | None = None
    radix: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.radix is not None:
            result_dict["radix"] = self.radix
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}", f"result={self.result!r}"]
        if self.radix is not None:
            parts.append(f"radix={self.radix!r}")
        return f"EvalResult({', '.join(parts)})"


class MathError(Exception):
    """Base class of every failure raised while lexing or evaluating."""

    default_message = "Math error"
    default_code = "MATH_ERROR"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(MathError):
    """Raised when the input text cannot be tokenized."""

    default_message = "Parse error"
    default_code = "PARSE_ERROR"


class UnsupportedToken(ParseError):
    """A character that can neither continue nor start a token."""

    default_message = "Unsupported token"
    default_code = "UNSUPPORTED_TOKEN"

    def __init__(self, position: int, message: str | None = None):
        self.position = position
        super().__init__(message or f"Unsupported token at position {position}")


class ValidationError(MathError):
    """Raised when a token sequence is not a well-formed expression."""

    default_message = "Invalid expression"
    default_code = "VALIDATION_ERROR"


class MissingOperand(ValidationError):
    default_message = "Missing operand"
    default_code = "MISSING_OPERAND"


class MissingOperator(ValidationError):
    default_message = "Missing operator"
    default_code = "MISSING_OPERATOR"


class InvalidToken(ValidationError):
    default_message = "Invalid token"
    default_code = "INVALID_TOKEN"


class InvalidArguments(ValidationError):
    default_message = "Invalid number of arguments"
    default_code = "INVALID_ARGUMENTS"


class CalculationError(MathError):
    """Raised when a numeric operation is undefined for its operands."""

    default_message = "Calculation error"
    default_code = "CALCULATION_ERROR"


class DivisionZero(CalculationError):
    default_message = "Division by zero"
    default_code = "DIVISION_ZERO"


class FactorialNegative(CalculationError):
    default_message = "Factorial of negative number"
    default_code = "FACTORIAL_NEGATIVE"


class LogUndefinedBase(CalculationError):
    default_message = "Logarithm base must be positive and not equal to 1"
    default_code = "LOG_UNDEFINED_BASE"


class LogUndefinedNumber(CalculationError):
    default_message = "Logarithm of a non-positive number"
    default_code = "LOG_UNDEFINED_NUMBER"


class ZeroNthRoot(CalculationError):
    default_message = "Root of degree zero"
    default_code = "ZERO_NTH_ROOT"


class NegativeRoot(CalculationError):
    default_message = "Even root of a negative number"
    default_code = "NEGATIVE_ROOT"


class OutOfRange(CalculationError):
    default_message = "Argument out of range"
    default_code = "OUT_OF_RANGE"


class ComputationLimit(CalculationError):
    """An iteration or size bound was reached before the result converged."""

    default_message = "Computation limit exceeded"
    default_code = "COMPUTATION_LIMIT"


class Message(MathError):
    """Host-environment failure carrying a free-form message."""

    default_code = "MESSAGE"

    def __init__(self, message: str):
        super().__init__(message)
