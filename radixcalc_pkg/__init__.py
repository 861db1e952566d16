"""RadixCalc package: exact rational arithmetic, expression scanner, shunting-yard engine and CLI."""

from .calculator import Calculator, Variable, evaluate
from .number import Number, Radix
from .types import MathError

__all__ = [
    "config",
    "number",
    "scanner",
    "engine",
    "calculator",
    "history",
    "stats",
    "cli",
    "types",
    "api",
    "logging_config",
    "Calculator",
    "MathError",
    "Number",
    "Radix",
    "Variable",
    "evaluate",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "validate_expression",
]
