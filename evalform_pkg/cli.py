from __future__ import annotations

import argparse
import json
import sys
from typing import Iterable

from .config import MAX_VARIABLES, OUTPUT_PRECISION, VERSION
from .evaluator import Evaluator
from .logging_config import get_logger, setup_logging
from .types import EvalResult
from .variables import VariableTable

logger = get_logger("cli")

HELP_TEXT = """\
Enter a formula to evaluate it, for example:
  a = 5^2            assign 25 to A (names are case-insensitive)
  a0 = a1 = sqrt(2)  assign to several variables at once
  2*%pi*r            constants %e and %pi
Operators: + - * / ^ ( ) =
Functions: sin cos tan exp log log10 abs acos asin atan sqrt int
Commands:
  list, vars         show all variables
  help               show this text
  quit, exit         leave"""

NESTING_ERROR = "error: expression nested too deeply."


def format_number(val: float, precision: int = OUTPUT_PRECISION) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    fmt = "{:." + str(int(precision)) + "g}"
    return fmt.format(float(val))


def print_result_pretty(
    formula: str,
    res: EvalResult,
    output_format: str = "human",
    precision: int = OUTPUT_PRECISION,
) -> None:
    """Print an evaluation result in the requested format.

    Errors are shown as the formula with a caret under the position where
    parsing stopped, followed by the error message.
    """
    if output_format == "json":
        print(json.dumps({"formula": formula, **res.to_dict()}))
        return
    if res.ok:
        print(format_number(res.value, precision))
        return
    print(formula)
    print(" " * res.cursor + "^")
    print(res.message)


def print_variables(
    variables: VariableTable,
    output_format: str = "human",
    precision: int = OUTPUT_PRECISION,
) -> None:
    if output_format == "json":
        print(json.dumps({"variables": dict(variables)}))
        return
    if len(variables) == 0:
        print("No variables defined.")
        return
    width = max(len(name) for name, _ in variables)
    for name, value in variables:
        print(f"{name:<{width}} = {format_number(value, precision)}")


def evaluate_line(
    evaluator: Evaluator,
    formula: str,
    output_format: str = "human",
    precision: int = OUTPUT_PRECISION,
) -> bool:
    """Evaluate and print one formula. Returns True on success."""
    try:
        res = evaluator.evaluate(formula)
    except RecursionError:
        logger.warning("Formula nested beyond the recursion limit: %.40r", formula)
        if output_format == "json":
            print(json.dumps({"formula": formula, "ok": False, "message": NESTING_ERROR}))
        else:
            print(NESTING_ERROR)
        return False
    print_result_pretty(formula, res, output_format, precision)
    return res.ok


def evaluate_lines(
    evaluator: Evaluator,
    formulas: Iterable[str],
    output_format: str = "human",
    precision: int = OUTPUT_PRECISION,
) -> bool:
    """Evaluate formulas in order against one variable table.

    Returns True when every formula evaluated without error.
    """
    all_ok = True
    for formula in formulas:
        if not evaluate_line(evaluator, formula, output_format, precision):
            all_ok = False
    return all_ok


def repl_loop(
    evaluator: Evaluator,
    output_format: str = "human",
    precision: int = OUTPUT_PRECISION,
) -> None:
    """Interactive read-evaluate-print loop."""
    if sys.stdin.isatty():
        try:
            import readline  # noqa: F401
        except ImportError:
            # readline not available on Windows - that's fine
            pass

    print("evalform - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            return
        if not raw:
            continue
        command = raw.lower()
        if command in ("quit", "exit"):
            return
        if command == "help":
            print(HELP_TEXT)
        elif command in ("list", "vars"):
            print_variables(evaluator.variables, output_format, precision)
        else:
            evaluate_line(evaluator, raw, output_format, precision)


def _read_formula_file(path: str) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the evalform CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 if any formula failed, 2 for usage errors)
    """
    parser = argparse.ArgumentParser(
        prog="evalform", description="Evaluate arithmetic formulas with variables."
    )
    parser.add_argument(
        "formula",
        nargs="*",
        help="Formula to evaluate (words are joined with spaces)",
    )
    parser.add_argument(
        "-e",
        "--eval",
        action="append",
        default=[],
        dest="eval_exprs",
        help="Evaluate one formula (may be repeated)",
    )
    parser.add_argument(
        "-f", "--file", type=str, help="Evaluate each non-blank line of a file"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--max-variables",
        type=int,
        help=f"Maximum number of distinct variables (default: {MAX_VARIABLES})",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List all variables after evaluating",
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
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    precision = OUTPUT_PRECISION
    if args.precision and args.precision > 0:
        precision = args.precision
    max_variables = MAX_VARIABLES
    if args.max_variables and args.max_variables > 0:
        max_variables = args.max_variables
    evaluator = Evaluator(VariableTable(max_variables))

    formulas = list(args.eval_exprs)
    if args.file:
        try:
            formulas.extend(_read_formula_file(args.file))
        except OSError as e:
            logger.error("Cannot read %s: %s", args.file, e)
            print(f"Error: cannot read {args.file}: {e.strerror or e}")
            return 2
    if args.formula:
        formulas.append(" ".join(args.formula))

    if not formulas:
        repl_loop(evaluator, args.format, precision)
        return 0

    all_ok = evaluate_lines(evaluator, formulas, args.format, precision)
    if args.list:
        print_variables(evaluator.variables, args.format, precision)
    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main_entry())
