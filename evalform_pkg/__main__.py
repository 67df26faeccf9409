"""Main entry point for running evalform_pkg as a module.

This allows running evalform with:
    python -m evalform_pkg
    python -m evalform_pkg -e "a = 5^2" -e "a + 1"
    python -m evalform_pkg --file formulas.txt

This is equivalent to running:
    python -m evalform_pkg.cli
    python evalform.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
