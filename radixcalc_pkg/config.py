"""Centralized configuration for RadixCalc.

This module defines:
- Output formatting defaults (precision, radix)
- Numeric precision of irrational results and convergence thresholds
- Hard limits that keep every computation bounded
- Input validation limits

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with RADIXCALC_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("radixcalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Output formatting
OUTPUT_PRECISION = int(
    os.getenv("RADIXCALC_OUTPUT_PRECISION", "6")
)  # fractional digits printed by to_string
DEFAULT_RADIX = os.getenv("RADIXCALC_DEFAULT_RADIX", "dec")

# Numeric precision
GUARANTEE_PRECISION = int(
    os.getenv("RADIXCALC_GUARANTEE_PRECISION", "20")
)  # decimal digits irrational results are stable to
GUARD_DIGITS = int(os.getenv("RADIXCALC_GUARD_DIGITS", "10"))
WORKING_PRECISION = GUARANTEE_PRECISION + GUARD_DIGITS  # digits kept internally

# Computation limits
MAX_ITERATIONS = int(
    os.getenv("RADIXCALC_MAX_ITERATIONS", "2000")
)  # series terms / Newton steps per operation
MAX_FACTORIAL_ARGUMENT = int(os.getenv("RADIXCALC_MAX_FACTORIAL_ARGUMENT", "20000"))
MAX_RESULT_BITS = int(
    os.getenv("RADIXCALC_MAX_RESULT_BITS", "4000000")
)  # size bound for exact integer powers

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("RADIXCALC_MAX_INPUT_LENGTH", "10000"))  # characters

# REPL
HISTORY_LIMIT = int(os.getenv("RADIXCALC_HISTORY_LIMIT", "1000"))

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def set_guarantee_precision(digits: int) -> None:
    """Change the guaranteed precision and the derived working precision."""
    global GUARANTEE_PRECISION, WORKING_PRECISION
    GUARANTEE_PRECISION = int(digits)
    WORKING_PRECISION = GUARANTEE_PRECISION + GUARD_DIGITS
