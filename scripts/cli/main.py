"""CLI main loop: setup, menu dispatch."""

import logging
import sys

from scripts.cli import config as cli_config
from scripts.cli.menu import print_menu
from scripts.cli.ordering import handle_place_order
from scripts.cli.reports import (
    show_best_category,
    show_category_prices,
    show_recent_orders,
    show_store,
    show_top_ingredients,
)
from scripts.cli.util import prompt


class _FlushingFileHandler(logging.FileHandler):
    """FileHandler that flushes after every emit so interactive.log updates immediately."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def _store_is_empty(session_factory) -> bool:
    from pizzeria_kernel.db.engine import session_scope
    from pizzeria_kernel.selectors.catalog_selector import CatalogSelector

    with session_scope(session_factory) as session:
        return not CatalogSelector(session).list_menu_items()


def _seed_default(session_factory) -> None:
    from pizzeria_config import load_seed_data
    from pizzeria_kernel.db.engine import session_scope
    from pizzeria_kernel.services.bootstrap_service import BootstrapService

    with session_scope(session_factory) as session:
        summary = BootstrapService(session).load(load_seed_data())
    print(f"  Seeded {summary.inserted} rows.")


def main() -> int:
    from pizzeria_kernel.db.engine import (
        create_engine_from_url,
        create_tables,
        make_session_factory,
    )
    from pizzeria_kernel.domain.clock import SystemClock
    from pizzeria_kernel.logging_config import configure_logging
    from pizzeria_kernel.services.order_placement import OrderPlacementService

    try:
        settings = cli_config.cli_settings()
    except (KeyError, ValueError, OSError) as exc:
        print(f"  ERROR: bad configuration: {exc}", file=sys.stderr)
        return 1

    cli_config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_path = cli_config.LOG_DIR / "interactive.log"
    configure_logging(
        level=settings.log_level,
        handler=_FlushingFileHandler(str(log_path), mode="a"),
    )
    logging.getLogger("pizzeria_kernel").info(
        "interactive_cli_starting",
        extra={"log_path": str(log_path)},
    )
    print(f"  Logging to: {log_path}", file=sys.stderr)

    try:
        engine = create_engine_from_url(settings.database_url, echo=settings.echo_sql)
        create_tables(engine)
    except Exception as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    session_factory = make_session_factory(engine)
    clock = SystemClock()
    placement = OrderPlacementService(
        session_factory,
        clock=clock,
        max_attempts=settings.max_attempts,
        retry_backoff_seconds=settings.retry_backoff_seconds,
    )

    if _store_is_empty(session_factory):
        answer = prompt("\n  Store is empty. Load the default seed? [Y/n]: ")
        if answer is None:
            return 0
        if answer.upper() != "N":
            _seed_default(session_factory)

    while True:
        print_menu(settings.database_url)
        choice = prompt("  Pick: ")
        if choice is None:
            break
        choice = choice.upper()

        if choice == "Q":
            print("\n  Goodbye.\n")
            break
        elif choice == "1":
            handle_place_order(session_factory, placement)
        elif choice == "2":
            show_top_ingredients(session_factory, clock, settings)
        elif choice == "3":
            show_category_prices(session_factory)
        elif choice == "4":
            show_best_category(session_factory)
        elif choice == "5":
            show_recent_orders(session_factory)
        elif choice == "S":
            show_store(session_factory)
        else:
            print(f"\n  Unknown command '{choice}'. Try 1-5, S, or Q.")

    engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
