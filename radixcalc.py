#!/usr/bin/env python3
"""
RadixCalc - exact rational calculator

Main entry point for the RadixCalc calculator application.
This file serves as a thin wrapper that delegates all functionality
to the radixcalc_pkg package.

Usage:
    python radixcalc.py                     # Interactive REPL
    python radixcalc.py -e "2(3+4)"         # Evaluate expression
    python radixcalc.py -e "0xFF" -r bin    # Evaluate and print in binary
    python radixcalc.py --stats < data.txt  # Standard deviation of integers
    python radixcalc.py --help              # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for RadixCalc.

    Delegates all functionality to the radixcalc_pkg.cli module,
    which handles argument parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from radixcalc_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import radixcalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
