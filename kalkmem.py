#!/usr/bin/env python3
"""
Memory calculator - interactive calculator with one memory register

This file serves as a thin wrapper that delegates all functionality
to the kalkmem_pkg package.

Usage:
    python kalkmem.py                    # Interactive REPL
    python kalkmem.py --format json      # Machine-readable state lines
    python kalkmem.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for the calculator.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from kalkmem_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import kalkmem_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1
    return main_entry(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
