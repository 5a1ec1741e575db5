"""
Seed loader (``pizzeria_config.loader``).

Responsibility
--------------
Loads YAML files and parses seed documents into the typed seed dataclasses
of ``pizzeria_kernel.domain.seed``.

Architecture position
---------------------
**Config layer.**  Sits above ``pizzeria_kernel``: it imports kernel seed
shapes and the kernel never imports from here.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; required fields have no silent defaults.
* Every parsed object is a frozen dataclass.
* ``compute_checksum`` is deterministic for equal documents.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Wrong value types (negative stock, non-numeric price) -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from pizzeria_kernel.domain.seed import (
    CourierSeed,
    CustomerSeed,
    IngredientSeed,
    MenuItemSeed,
    RecipeLineSeed,
    SeedData,
)

_logger = logging.getLogger("pizzeria_kernel.config")

DEFAULT_SEED_PATH = Path(__file__).parent / "seed" / "default_seed.yaml"

_COURIER_STATUSES = frozenset({"available", "busy"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON form of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _parse_count(value: Any, field: str, *, positive: bool) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if positive and value <= 0:
        raise ValueError(f"{field} must be positive, got {value}")
    if value < 0:
        raise ValueError(f"{field} must not be negative, got {value}")
    return value


def parse_price(value: Any, field: str = "price") -> Decimal:
    """Parse a price from a YAML string or number; floats go through str()."""
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field} must be a number, got {value!r}") from None
    if not price.is_finite() or price < 0:
        raise ValueError(f"{field} must be a non-negative number, got {value!r}")
    return price


def parse_ingredient(data: dict[str, Any]) -> IngredientSeed:
    name = data["name"]
    return IngredientSeed(
        name=name,
        category=data["category"],
        stock=_parse_count(data.get("stock", 0), f"{name}.stock", positive=False),
    )


def parse_menu_item(data: dict[str, Any]) -> MenuItemSeed:
    name = data["name"]
    recipe = tuple(
        RecipeLineSeed(
            ingredient=line["ingredient"],
            quantity=_parse_count(
                line["quantity"], f"{name}.recipe.{line['ingredient']}", positive=True
            ),
        )
        for line in data.get("recipe") or []
    )
    return MenuItemSeed(
        name=name,
        category=data["category"],
        price=parse_price(data["price"], f"{name}.price"),
        recipe=recipe,
    )


def parse_courier(data: dict[str, Any]) -> CourierSeed:
    status = data.get("status", "available")
    if status not in _COURIER_STATUSES:
        raise ValueError(f"Courier {data['name']!r} has unknown status {status!r}")
    return CourierSeed(name=data["name"], zone=data["zone"], status=status)


def parse_customer(data: dict[str, Any]) -> CustomerSeed:
    phone = data.get("phone")
    return CustomerSeed(
        name=data["name"],
        phone=str(phone) if phone is not None else None,
        address=data.get("address"),
    )


def parse_seed(data: dict[str, Any], source: str | None = None) -> SeedData:
    """
    Parse a seed document.

    Postconditions:
        - Returns a ``SeedData`` whose recipe lines reference ingredients by
          name; resolution to ids happens when the seed is loaded.
    Raises:
        KeyError: if required keys are missing.
        ValueError: if values have the wrong type or range.
    """
    return SeedData(
        ingredients=tuple(parse_ingredient(d) for d in data.get("ingredients") or []),
        menu_items=tuple(parse_menu_item(d) for d in data.get("menu_items") or []),
        couriers=tuple(parse_courier(d) for d in data.get("couriers") or []),
        customers=tuple(parse_customer(d) for d in data.get("customers") or []),
        source=source,
    )


def load_seed_data(path: Path | str | None = None) -> SeedData:
    """Load and parse a seed file; the packaged default seed when ``path`` is None."""
    seed_path = Path(path) if path is not None else DEFAULT_SEED_PATH
    data = load_yaml_file(seed_path)
    seed = parse_seed(data, source=str(seed_path))
    _logger.info(
        "seed_parsed",
        extra={
            "source": str(seed_path),
            "checksum": compute_checksum(data),
            "ingredients": len(seed.ingredients),
            "menu_items": len(seed.menu_items),
            "couriers": len(seed.couriers),
            "customers": len(seed.customers),
        },
    )
    return seed
