"""evalform package: scanner, variable table, function dispatch and the precedence-climbing evaluator."""

__all__ = [
    "config",
    "errors",
    "types",
    "scanner",
    "variables",
    "functions",
    "evaluator",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "get_or_create_variable",
    "assign_variable",
    "list_variable",
    "list_variables",
    "error_message",
    "evaluate_leading_token",
    "evaluate_leading_int",
    "split_leading_token",
]
