#!/usr/bin/env python3
"""
Seed the database with the default catalog, courier roster and customers.

Creates tables if needed and loads a seed file through BootstrapService.

Usage:
    python3 scripts/seed_data.py
    python3 scripts/seed_data.py --reset
    python3 scripts/seed_data.py --seed path/to/seed.yaml
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the pizzeria store.")
    parser.add_argument("--seed", type=Path, default=None, help="Seed YAML (default: packaged seed)")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML")
    parser.add_argument("--reset", action="store_true", help="Delete existing rows first (dev only)")
    args = parser.parse_args(argv)

    from pizzeria_config import load_seed_data, load_settings
    from pizzeria_kernel.db.engine import (
        create_engine_from_url,
        create_tables,
        make_session_factory,
        session_scope,
    )
    from pizzeria_kernel.logging_config import configure_logging
    from pizzeria_kernel.services.bootstrap_service import BootstrapService

    settings = load_settings(args.config)
    configure_logging(level=settings.log_level)

    engine = create_engine_from_url(settings.database_url, echo=settings.echo_sql)
    try:
        create_tables(engine)
        seed = load_seed_data(args.seed)
        with session_scope(make_session_factory(engine)) as session:
            summary = BootstrapService(session).load(seed, reset=args.reset)
    finally:
        engine.dispose()

    print(f"Store: {settings.database_url}")
    print(f"  Ingredients: {len(summary.ingredients)}")
    print(f"  Menu items:  {len(summary.menu_items)}")
    print(f"  Couriers:    {len(summary.couriers)}")
    print(f"  Customers:   {len(summary.customers)}")
    print(f"  Inserted {summary.inserted}, already present {summary.skipped}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
