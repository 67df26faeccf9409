"""Centralized configuration for evalform.

This module defines:
- Variable table and identifier limits
- Reserved constant names
- Character classes and regex patterns used by the scanner
- Output formatting defaults

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with EVALFORM_)
"""

import importlib.metadata
import math
import os
import re

try:
    VERSION = importlib.metadata.version("evalform")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Variable table limits (can be overridden via environment variables)
MAX_VARIABLES = int(os.getenv("EVALFORM_MAX_VARIABLES", "128"))
MAX_TOKEN_LENGTH = int(
    os.getenv("EVALFORM_MAX_TOKEN_LENGTH", "32")
)  # identifiers must be strictly shorter than this

# Output configuration
OUTPUT_PRECISION = int(
    os.getenv("EVALFORM_OUTPUT_PRECISION", "12")
)  # significant digits in human-readable output

# Value reported alongside any error
DEFAULT_RETURN = 0.0

# Reserved constants, matched after upper-casing the identifier.
# Bare E and PI are ordinary variable names.
CONSTANTS = {
    "%E": math.e,
    "%PI": math.pi,
}

WHITESPACE = " \t\n\r"
TOKEN_BLANKS = " \t\n"  # separators for leading-token extraction

NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
IDENTIFIER_RE = re.compile(r"[A-Za-z%][A-Za-z0-9_]*", re.ASCII)
