#!/usr/bin/env python3
"""
Interactive Pizzeria CLI.

Place orders and view the reports as data accumulates. Every placement
commits (or rolls back) on its own.

Usage:
    python3 scripts/interactive.py
    DATABASE_URL=postgresql://... python3 scripts/interactive.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from scripts.cli.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
