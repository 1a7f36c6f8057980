"""Main entry point for running kalkmem_pkg as a module.

This allows running the calculator with:
    python -m kalkmem_pkg
    python -m kalkmem_pkg --health-check
    python -m kalkmem_pkg --format json

This is equivalent to running:
    python -m kalkmem_pkg.cli
    python kalkmem.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
