"""CLI utilities: amount formatting and prompts."""

from decimal import Decimal


def fmt_amount(v) -> str:
    """Format amount for display (e.g. $20,000)."""
    d = Decimal(str(v))
    return f"${d:,.0f}"


def prompt(label: str) -> str | None:
    """Read one line; None on EOF / Ctrl-C."""
    try:
        return input(label).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def pick_index(raw: str | None, count: int) -> int | None:
    """1-based menu choice to 0-based index, or None when out of range."""
    if raw is None or not raw.isdigit():
        return None
    idx = int(raw) - 1
    return idx if 0 <= idx < count else None
