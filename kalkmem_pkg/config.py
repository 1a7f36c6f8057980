"""Centralized configuration for the memory calculator.

This module defines:
- Program version
- Prompt and output precision for the REPL
- Locale used for locale-aware number parsing
- Default logging level

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KALKMEM_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-memori")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout without installation
    VERSION = "1.0.0"

DEFAULT_OUTPUT_PRECISION = 10


def _positive_int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value >= 1 else default


# Significant digits used when printing registers
OUTPUT_PRECISION = _positive_int_env("KALKMEM_OUTPUT_PRECISION", DEFAULT_OUTPUT_PRECISION)

PROMPT = os.getenv("KALKMEM_PROMPT", "> ")

# Passed to locale.setlocale(LC_NUMERIC, ...); "" means the user's environment
NUMBER_LOCALE = os.getenv("KALKMEM_NUMBER_LOCALE", "")

LOG_LEVEL = os.getenv("KALKMEM_LOG_LEVEL", "WARNING")
