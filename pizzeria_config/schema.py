"""
Settings schema (``pizzeria_config.schema``).

Frozen dataclass describing the runtime configuration of the pizzeria kernel
and its scripts.  Values are produced by ``pizzeria_config.settings``; nothing
else builds a PizzeriaSettings with non-default values outside tests.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DATABASE_URL = "sqlite:///pizzeria.db"


@dataclass(frozen=True)
class PizzeriaSettings:
    """
    Runtime settings.

    Attributes:
        database_url: SQLAlchemy URL of the store.
        echo_sql: Log every SQL statement.
        max_attempts: Placement attempts on retryable store conflicts.
        retry_backoff_seconds: Base of the linear backoff between attempts.
        report_window_days: Trailing window of the ingredient report; None
            means one calendar month.
        top_ingredients_limit: Rows shown by the ingredient report.
        log_level: Level name for configure_logging().
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False
    max_attempts: int = 3
    retry_backoff_seconds: float = 0.05
    report_window_days: int | None = None
    top_ingredients_limit: int = 5
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.retry_backoff_seconds < 0:
            raise ValueError(
                f"retry_backoff_seconds must be >= 0, got {self.retry_backoff_seconds}"
            )
        if self.report_window_days is not None and self.report_window_days <= 0:
            raise ValueError(
                f"report_window_days must be positive, got {self.report_window_days}"
            )
        if self.top_ingredients_limit <= 0:
            raise ValueError(
                f"top_ingredients_limit must be positive, got {self.top_ingredients_limit}"
            )
