"""Command-line interface: one-shot evaluation, batch statistics and the REPL."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config
from .api import evaluate
from .calculator import Calculator
from .config import VERSION
from .history import History
from .logging_config import get_logger, setup_logging
from .number import Radix
from .stats import read_numbers, standard_deviation
from .types import MathError

logger = get_logger("cli")

STATS_PRECISION = 12


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running RadixCalc health check...")
    print("-" * 50)

    # Check SymPy import
    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1
        sp = None

    # Check basic evaluation
    try:
        res = evaluate("2*3+4")
        if res.ok and res.result == "10":
            print("[OK] Basic evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Basic evaluation failed: expected 10, got {res}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    # Check error reporting
    res = evaluate("16/0")
    if not res.ok and res.error_code == "DIVISION_ZERO":
        print("[OK] Error reporting works")
        checks_passed += 1
    else:
        print(f"[FAIL] Error reporting failed: {res}")
        checks_failed += 1

    # Cross-check a transcendental result against SymPy
    if sp is not None:
        try:
            ours = Calculator().evaluate("sin(1)")
            reference = sp.sin(1).evalf(config.GUARANTEE_PRECISION + 5)
            digits = config.GUARANTEE_PRECISION
            if ours.is_close(str(reference)):
                print(f"[OK] sin(1) matches SymPy to {digits} digits")
                checks_passed += 1
            else:
                print(f"[FAIL] sin(1) = {ours} differs from SymPy {reference}")
                checks_failed += 1
        except Exception as e:
            print(f"[FAIL] Precision check failed: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (see EvalResult.to_dict)
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    print(res.get("result"))


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""RadixCalc version {VERSION}

Expressions:
  2*3+4, 2(3+4), 2^3^2, 7 % 4, 7 mod 4, 5!, |-3|
  0b1010, 0o17, 0x1F, 0x0.8        (binary, octal, hexadecimal literals)
  Functions need brackets, constants too: pi(), e(), ans()

Functions:
  sqrt(x)  root(n, x)  pow(x, y)  abs(x)  mod(a, b)  comb(n, k)
  ln(x)  log2(x)  log10(x)
  log(x, base)         logarithm of x; the argument comes first, the base second
  sin  cos  tg  cotg  arcsin  arccos  arctg  arccotg
  random()

Commands:
  let NAME = EXPR      store a constant, use it as NAME()
  unset NAME           remove a constant
  consts               list constants
  radix bin|oct|dec|hex
  precision N          fractional digits shown
  history | clearhistory | togglehistory
  help | quit | exit
"""
    print(help_text)


class _Session:
    """State of one REPL session."""

    def __init__(
        self,
        output_format: str = "human",
        radix: Radix | None = None,
        calculator: Calculator | None = None,
    ):
        self.output_format = output_format
        self.radix = radix or Radix.parse(config.DEFAULT_RADIX)
        self.calculator = calculator or Calculator()
        self.history = History()

    def format(self, value) -> str:
        return value.to_string(self.radix)

    def handle(self, raw: str) -> bool:
        """Process one line. Returns False when the session should end."""
        words = raw.split(None, 1)
        command = words[0].lower()
        rest = words[1].strip() if len(words) > 1 else ""

        if command in ("quit", "exit") and not rest:
            return False
        if command == "help" and not rest:
            print_help_text()
        elif command == "history" and not rest:
            if not len(self.history):
                print("History is empty.")
            for expression, result in self.history:
                print(f"{expression} = {result}")
        elif command == "clearhistory" and not rest:
            self.history.clear()
            print("History cleared.")
        elif command == "togglehistory" and not rest:
            state = "on" if self.history.toggle_recording() else "off"
            print(f"History recording {state}.")
        elif command == "consts" and not rest:
            for name, value in sorted(self.calculator.constants()):
                print(f"{name} = {self.format(value)}")
        elif command == "let" and "=" in rest:
            self._let(rest)
        elif command == "unset" and rest:
            if self.calculator.remove_constant(rest) is None:
                print(f"Error: '{rest}' is not a removable constant")
            else:
                print(f"Removed {rest}")
        elif command == "radix" and rest:
            try:
                self.radix = Radix.parse(rest)
                print(f"Radix set to {self.radix.short_name}")
            except ValueError as e:
                print(f"Error: {e}")
        elif command == "precision" and rest:
            if rest.isdigit():
                config.OUTPUT_PRECISION = int(rest)
                print(f"Precision set to {config.OUTPUT_PRECISION}")
            else:
                print("Error: precision must be a non-negative integer")
        else:
            self._evaluate(raw)
        return True

    def _let(self, rest: str) -> None:
        name, expression = (part.strip() for part in rest.split("=", 1))
        if self.calculator.is_reserved(name) or not config.VAR_NAME_RE.match(name):
            print(f"Error: '{name}' cannot be used as a constant name")
            return
        try:
            value = self.calculator.evaluate(expression)
        except MathError as e:
            print(f"Error: {e.message}")
            return
        self.calculator.add_constant(name, value)
        print(f"{name.lower()} = {self.format(value)}")

    def _evaluate(self, expression: str) -> None:
        res = evaluate(expression, radix=self.radix, calculator=self.calculator)
        if res.ok:
            self.history.add(expression, res.result)
        print_result_pretty(res.to_dict(), self.output_format)


def repl_loop(
    output_format: str = "human",
    radix: Radix | None = None,
    calculator: Calculator | None = None,
) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    session = _Session(output_format, radix, calculator)
    print("RadixCalc - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        try:
            if not session.handle(raw):
                print("Goodbye.")
                break
        except Exception as e:
            logger.exception("Unexpected error in REPL")
            print(f"Error: {e}")


def _run_stats(output_format: str) -> int:
    try:
        value = standard_deviation(read_numbers(sys.stdin))
    except MathError as e:
        print_result_pretty({"ok": False, "error": e.message}, output_format)
        return 1
    result = value.to_string(Radix.DECIMAL, STATS_PRECISION)
    print_result_pretty({"ok": True, "result": result}, output_format)
    return 0


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for RadixCalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="radixcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (fractional digits)"
    )
    parser.add_argument(
        "-r",
        "--radix",
        type=str,
        help="Output radix: bin, oct, dec or hex (default: dec)",
    )
    parser.add_argument(
        "--guarantee-precision",
        type=int,
        help="Decimal digits irrational results are guaranteed to (default: 20)",
    )
    parser.add_argument(
        "-c",
        "--const",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Define a constant before evaluating (repeatable)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Read integers from stdin and print their sample standard deviation",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision is not None and args.precision >= 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.guarantee_precision and args.guarantee_precision > 0:
        config.set_guarantee_precision(args.guarantee_precision)
    radix = None
    if args.radix:
        try:
            radix = Radix.parse(args.radix)
        except ValueError as e:
            print(f"Error: {e}")
            return 2

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.stats:
        return _run_stats(args.format)

    calculator = Calculator()
    # Definitions see each other but leave ans() unset for --eval
    scratch = Calculator()
    for definition in args.const:
        name, sep, expression = definition.partition("=")
        if not sep:
            print(f"Error: expected NAME=VALUE, got {definition!r}")
            return 2
        try:
            value = scratch.evaluate(expression)
        except MathError as e:
            print(f"Error: {name.strip()}: {e.message}")
            return 1
        if not calculator.add_constant(name.strip(), value):
            print(f"Error: '{name.strip()}' cannot be used as a constant name")
            return 2
        scratch.add_constant(name.strip(), value)

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        # Remove ">>>" prompt if present
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        if not expr:
            print("Error: Empty input. Please enter a valid expression.")
            return 1
        res = evaluate(expr, radix=radix, calculator=calculator)
        print_result_pretty(res.to_dict(), output_format=args.format)
        return 0 if res.ok else 1

    try:
        repl_loop(output_format=args.format, radix=radix, calculator=calculator)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m radixcalc_pkg.cli"""
    sys.exit(main_entry())
