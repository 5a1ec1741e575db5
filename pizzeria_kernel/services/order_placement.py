"""
OrderPlacementService -- the order placement engine.

Responsibility:
    Decides whether an order is fulfillable and, iff it is, applies the stock
    decrement, the courier reservation and the order append as ONE atomic
    unit.  Every outcome is returned as a PlacementResult; callers never see
    a raw store exception.

Architecture position:
    Kernel > Services -- the only service that owns transaction boundaries.
    Composes CatalogSelector (reads), the pure demand functions (domain) and
    the InventoryService / CourierService / OrderLedgerService step services,
    which flush but never commit.

Placement states (logged, never stored):
    Validating -> Aggregating -> StockChecking -> Committing
    -> Committed | Aborted

Invariants enforced:
    - Atomicity: each attempt runs inside session_scope(); any step failure
      rolls back every write of that attempt.
    - Stock never negative and courier exclusivity are enforced by the
      conditional writes of the step services, not by reads.
    - Domain failures are never retried.  Store conflicts (serialization
      failure, deadlock, SQLite lock timeout) re-run the whole unit up to
      ``max_attempts`` times with linear backoff.

Failure modes:
    - PizzeriaKernelError from any step -> PlacementResult(success=False,
      reason=FailureReason(exc.code)).
    - Retryable store conflict after the last attempt, or any non-retryable
      SQLAlchemyError -> reason CONFLICT.
    - Any other exception is a programming error: logged and re-raised.
"""

import time
from decimal import Decimal
from typing import Any, Iterable
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pizzeria_kernel.db.engine import is_retryable_conflict, session_scope
from pizzeria_kernel.domain.clock import Clock, SystemClock
from pizzeria_kernel.domain.demand import (
    build_demand_plan,
    collapse_quantities,
    normalize_requests,
    parse_identity,
)
from pizzeria_kernel.domain.dtos import CourierSnapshot, FailureReason, PlacementResult
from pizzeria_kernel.exceptions import (
    CustomerNotFoundError,
    MenuItemNotFoundError,
    PizzeriaKernelError,
    PlacementConflictError,
)
from pizzeria_kernel.logging_config import LogContext, get_logger
from pizzeria_kernel.selectors.catalog_selector import CatalogSelector
from pizzeria_kernel.services.courier_service import CourierService
from pizzeria_kernel.services.inventory_service import InventoryService
from pizzeria_kernel.services.order_ledger_service import OrderLedgerService

logger = get_logger("services.order_placement")


def _failure_details(exc: PizzeriaKernelError) -> dict[str, Any]:
    return {key: val for key, val in vars(exc).items() if not key.startswith("_")}


class OrderPlacementService:
    """
    Places orders atomically.

    Args:
        session_factory: Factory for the session of each attempt.
        clock: Time source for ``Order.created_at``.
        max_attempts: Attempts per placement on retryable store conflicts.
        retry_backoff_seconds: Base of the linear backoff between attempts.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 0.05,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._max_attempts = max_attempts
        self._retry_backoff_seconds = retry_backoff_seconds

    def place_order(self, customer_id: UUID | str, items: Iterable[Any]) -> PlacementResult:
        """
        Place one order for ``customer_id``.

        Args:
            customer_id: Customer identity (UUID or its string form).
            items: Non-empty sequence of OrderLineRequest, mappings or
                ``(menu_item_id, quantity)`` pairs.

        Returns:
            PlacementResult -- committed with order id, courier and total, or
            rejected with a FailureReason and structured details.
        """
        correlation_id = str(uuid4())
        with LogContext.bind(correlation_id=correlation_id, customer_id=str(customer_id)):
            t0 = time.monotonic()
            logger.info("placement_started")

            try:
                requests = normalize_requests(items)
                customer_uuid = parse_identity(customer_id)
                if customer_uuid is None:
                    raise CustomerNotFoundError(str(customer_id))
            except PizzeriaKernelError as exc:
                return self._rejected(exc, attempts=0, t0=t0)

            quantities = collapse_quantities(requests)
            logger.debug(
                "placement_validated",
                extra={"line_count": len(requests), "distinct_items": len(quantities)},
            )

            attempt = 0
            while True:
                attempt += 1
                with LogContext.bind(attempt=str(attempt)):
                    try:
                        with session_scope(self._session_factory) as session:
                            order_id, courier, total = self._place_in_transaction(
                                session, customer_uuid, quantities
                            )
                    except PizzeriaKernelError as exc:
                        return self._rejected(exc, attempts=attempt, t0=t0)
                    except SQLAlchemyError as exc:
                        if is_retryable_conflict(exc) and attempt < self._max_attempts:
                            backoff = self._retry_backoff_seconds * attempt
                            logger.warning(
                                "placement_conflict_retry",
                                extra={"backoff_seconds": backoff, "error": type(exc).__name__},
                            )
                            time.sleep(backoff)
                            continue
                        if not is_retryable_conflict(exc):
                            logger.error("placement_store_failure", exc_info=True)
                        detail = str(getattr(exc, "orig", None) or exc)
                        return self._rejected(
                            PlacementConflictError(attempt, detail), attempts=attempt, t0=t0
                        )
                    except Exception:
                        logger.error(
                            "placement_failed",
                            extra={"duration_ms": round((time.monotonic() - t0) * 1000, 2)},
                            exc_info=True,
                        )
                        raise

                with LogContext.bind(order_id=str(order_id)):
                    logger.info(
                        "placement_committed",
                        extra={
                            "courier_id": str(courier.id),
                            "total": total,
                            "attempts": attempt,
                            "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                        },
                    )
                return PlacementResult.committed(
                    order_id=order_id,
                    courier=courier,
                    total=total,
                    attempts=attempt,
                )

    def _place_in_transaction(
        self,
        session: Session,
        customer_id: UUID,
        quantities: dict[UUID, int],
    ) -> tuple[UUID, CourierSnapshot, Decimal]:
        catalog = CatalogSelector(session)

        customer = catalog.find_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(str(customer_id))

        menu_items = catalog.menu_items_by_id(quantities)
        missing = [str(item_id) for item_id in quantities if item_id not in menu_items]
        if missing:
            raise MenuItemNotFoundError(missing)

        plan = build_demand_plan(menu_items, quantities)
        logger.debug(
            "demand_aggregated",
            extra={"ingredients": len(plan.demand), "total": plan.total},
        )

        inventory = InventoryService(session)
        checked = inventory.check_availability(plan.demand)
        inventory.decrement(plan.demand, checked)

        courier = CourierService(session).reserve_available()

        order = OrderLedgerService(session).append(
            customer=customer,
            plan=plan,
            courier=courier,
            created_at=self._clock.now(),
        )
        return order.id, courier, plan.total

    def _rejected(
        self,
        exc: PizzeriaKernelError,
        attempts: int,
        t0: float,
    ) -> PlacementResult:
        reason = FailureReason(exc.code)
        details = _failure_details(exc)
        logger.info(
            "placement_aborted",
            extra={
                "reason": reason.value,
                "details": details,
                "attempts": attempts,
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            },
        )
        return PlacementResult.rejected(
            reason=reason,
            message=str(exc),
            details=details,
            attempts=attempts,
        )
