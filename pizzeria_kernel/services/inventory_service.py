"""
InventoryService -- stock check and conditional stock decrement.

Responsibility:
    Checks aggregated ingredient demand against stock-on-hand and applies the
    decrement inside the caller's placement transaction.

Invariants enforced:
    - Stock never goes negative: every decrement is a conditional UPDATE
      (``stock = stock - needed WHERE stock >= needed``).  The earlier read is
      informational; the conditional write is the authoritative gate.
    - Decrements are applied in ingredient-id order so two placements touching
      the same ingredients lock rows in the same order.

Failure modes:
    - MissingIngredientError: a demanded ingredient id has no row.
    - InsufficientStockError: stock is below demand, either at the check or
      when the conditional write matches no row.
"""

from typing import Mapping
from uuid import UUID

from sqlalchemy import select, update

from pizzeria_kernel.exceptions import InsufficientStockError, MissingIngredientError
from pizzeria_kernel.logging_config import get_logger
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.selectors.catalog_selector import CatalogSelector
from pizzeria_kernel.services.base import BaseService

logger = get_logger("services.inventory")

LOW_STOCK_THRESHOLD = 5


class InventoryService(BaseService):
    """Stock-on-hand checks and decrements for one placement."""

    def check_availability(self, demand: Mapping[UUID, int]) -> dict[UUID, Ingredient]:
        """
        Verify every demanded ingredient exists and has enough stock.

        Returns:
            The fetched ingredient rows keyed by id.

        Raises:
            MissingIngredientError: If any demanded ingredient is absent.
            InsufficientStockError: For the first (by id) ingredient short on stock.
        """
        if not demand:
            return {}

        found = CatalogSelector(self.session).ingredients_by_id(demand)

        missing = [str(ing_id) for ing_id in demand if ing_id not in found]
        if missing:
            raise MissingIngredientError(missing)

        for ing_id in sorted(demand, key=str):
            ingredient = found[ing_id]
            if ingredient.stock < demand[ing_id]:
                raise InsufficientStockError(
                    ingredient_id=ing_id,
                    ingredient_name=ingredient.name,
                    needed=demand[ing_id],
                    available=ingredient.stock,
                )
        return found

    def decrement(
        self,
        demand: Mapping[UUID, int],
        checked: Mapping[UUID, Ingredient] | None = None,
    ) -> None:
        """
        Apply ``stock -= needed`` for every ingredient in ``demand``.

        Each write only matches while stock still covers the demand; a write
        that matches nothing aborts the placement with the stock level seen
        at that moment.
        """
        checked = checked or {}
        for ing_id in sorted(demand, key=str):
            needed = demand[ing_id]
            stmt = (
                update(Ingredient)
                .where(Ingredient.id == ing_id, Ingredient.stock >= needed)
                .values(stock=Ingredient.stock - needed)
                .execution_options(synchronize_session=False)
            )
            result = self.session.execute(stmt)
            if result.rowcount != 1:
                self._raise_for_failed_decrement(ing_id, needed)

            if ing_id in checked:
                remaining = checked[ing_id].stock - needed
                if remaining < LOW_STOCK_THRESHOLD:
                    logger.warning(
                        "low_stock",
                        extra={
                            "ingredient_id": str(ing_id),
                            "ingredient_name": checked[ing_id].name,
                            "remaining": remaining,
                        },
                    )

        logger.debug("stock_decremented", extra={"ingredients": len(demand)})

    def _raise_for_failed_decrement(self, ing_id: UUID, needed: int) -> None:
        row = self.session.execute(
            select(Ingredient.name, Ingredient.stock).where(Ingredient.id == ing_id)
        ).one_or_none()
        if row is None:
            raise MissingIngredientError([str(ing_id)])
        raise InsufficientStockError(
            ingredient_id=ing_id,
            ingredient_name=row.name,
            needed=needed,
            available=row.stock,
        )
