from __future__ import annotations

import argparse
import locale

from . import config
from .logging_config import get_logger, setup_logging
from .session import HELP_TEXT, Session

logger = get_logger("cli")


def print_help_text() -> None:
    """Print help text for REPL commands."""
    print(f"Memory calculator version {config.VERSION}")
    print(HELP_TEXT)


def _apply_number_locale(name: str) -> None:
    """Activate the LC_NUMERIC locale used for locale-aware number parsing."""
    try:
        locale.setlocale(locale.LC_NUMERIC, name)
    except locale.Error as e:
        logger.warning("Locale %r unavailable (%s); falling back to C locale", name, e)
        locale.setlocale(locale.LC_NUMERIC, "C")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running memory calculator health check...")
    print("-" * 50)

    # Check NumPy import
    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        print("  To install: pip install numpy")
        checks_failed += 1

    from .engine import add, multiply
    from .parser import parse_number
    from .types import CalcState, FailureKind

    # Check basic arithmetic
    try:
        result = add(CalcState(current=2.0), 2.0)
        if result.ok and result.state.current == 4.0:
            print("[OK] Basic arithmetic works")
            checks_passed += 1
        else:
            print(f"[FAIL] Basic arithmetic failed: expected 4, got {result!r}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Arithmetic check failed: {e}")
        checks_failed += 1

    # Check overflow detection
    try:
        result = multiply(CalcState(current=1e308), 10.0)
        if not result.ok and result.code is FailureKind.OVERFLOW:
            print("[OK] Overflow detection works")
            checks_passed += 1
        else:
            print(f"[FAIL] Overflow not detected: {result!r}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Overflow check failed: {e}")
        checks_failed += 1

    # Check decimal separators
    comma, dot = parse_number("12,5"), parse_number("12.5")
    if comma == dot == 12.5:
        print("[OK] Comma and dot decimal separators parse identically")
        checks_passed += 1
    else:
        print(f"[FAIL] Decimal separator mismatch: '12,5' -> {comma}, '12.5' -> {dot}")
        checks_failed += 1

    print("-" * 50)
    print(f"Health check complete: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def repl_loop(output_format: str = "human") -> None:
    """Interactive REPL loop with line editing where available."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    session = Session(output_format=output_format, show_help=print_help_text)
    session.run()


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the calculator CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="kalkmem",
        description="Interactive calculator with a current value and one memory register.",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (one object per state line) or human",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument("--prompt", type=str, help="Override the input prompt")
    parser.add_argument(
        "--locale",
        type=str,
        dest="number_locale",
        help="Locale for number parsing (default: from environment)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
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
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.prompt is not None:
        config.PROMPT = args.prompt
    if args.number_locale is not None:
        config.NUMBER_LOCALE = args.number_locale
    _apply_number_locale(config.NUMBER_LOCALE)

    if args.version:
        print(config.VERSION)
        return 0
    if args.health_check:
        return _health_check()

    repl_loop(output_format=args.format)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m kalkmem_pkg.cli"""
    import sys

    sys.exit(main_entry())
