"""
pizzeria_config -- runtime settings and seed data for the pizzeria kernel.

Architecture position:
    Configuration layer.  Sits above ``pizzeria_kernel``: it produces plain
    values (PizzeriaSettings) and kernel seed shapes (SeedData).  The kernel
    MUST NEVER import from ``pizzeria_config``.

Public entrypoints:
    load_settings(path=None)   -> PizzeriaSettings
    load_seed_data(path=None)  -> SeedData
"""

from pizzeria_config.loader import DEFAULT_SEED_PATH, load_seed_data, parse_seed
from pizzeria_config.schema import DEFAULT_DATABASE_URL, PizzeriaSettings
from pizzeria_config.settings import load_settings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_SEED_PATH",
    "PizzeriaSettings",
    "load_seed_data",
    "load_settings",
    "parse_seed",
]
