"""CLI configuration: settings, paths."""

from pathlib import Path

from pizzeria_config import PizzeriaSettings, load_settings

# Project root (parent of scripts/)
ROOT = Path(__file__).resolve().parent.parent.parent

LOG_DIR = ROOT / "logs"


def cli_settings() -> PizzeriaSettings:
    """Settings for the CLI: $PIZZERIA_CONFIG / environment, else defaults."""
    return load_settings()
