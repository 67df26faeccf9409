#!/usr/bin/env python3
"""
evalform - formula calculator

Thin wrapper that delegates all functionality to the evalform_pkg package.

Usage:
    python evalform.py                      # Interactive REPL
    python evalform.py -e "a = 5^2" -e "a"  # Evaluate formulas
    python evalform.py --help               # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for evalform.

    Delegates to the evalform_pkg.cli module, which handles argument
    parsing, formula evaluation and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from evalform_pkg.cli import main_entry

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
