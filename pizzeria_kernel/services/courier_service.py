"""
CourierService -- exclusive courier reservation.

Responsibility:
    Claims one available courier for a placement by flipping it from
    ``available`` to ``busy`` inside the caller's transaction.

Invariants enforced:
    - The flip is a compare-and-swap: a single conditional UPDATE matching
      ``id = :candidate AND status = 'available'``.  Two placements can pick
      the same candidate, but only one UPDATE matches; the other picks again.
    - Candidates are chosen by lowest (name, id), so selection is
      deterministic.

Failure modes:
    - NoCourierAvailableError: no courier is available.
    - PlacementConflictError: every pick within MAX_CLAIM_ATTEMPTS was taken
      by a concurrent placement first.
"""

from sqlalchemy import select, update

from pizzeria_kernel.domain.dtos import CourierSnapshot
from pizzeria_kernel.exceptions import NoCourierAvailableError, PlacementConflictError
from pizzeria_kernel.logging_config import get_logger
from pizzeria_kernel.models.courier import Courier, CourierStatus
from pizzeria_kernel.services.base import BaseService

logger = get_logger("services.courier")


class CourierService(BaseService):
    """Courier reservation for one placement."""

    MAX_CLAIM_ATTEMPTS = 5

    def reserve_available(self) -> CourierSnapshot:
        """
        Reserve one available courier and return its snapshot.

        Raises:
            NoCourierAvailableError: If no courier is available.
            PlacementConflictError: If every candidate was claimed concurrently.
        """
        for claim_attempt in range(1, self.MAX_CLAIM_ATTEMPTS + 1):
            candidate_id = self.session.execute(
                select(Courier.id)
                .where(Courier.status == CourierStatus.AVAILABLE.value)
                .order_by(Courier.name, Courier.id)
                .limit(1)
            ).scalar_one_or_none()
            if candidate_id is None:
                raise NoCourierAvailableError()

            result = self.session.execute(
                update(Courier)
                .where(
                    Courier.id == candidate_id,
                    Courier.status == CourierStatus.AVAILABLE.value,
                )
                .values(status=CourierStatus.BUSY.value)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                row = self.session.execute(
                    select(Courier.id, Courier.name, Courier.zone).where(
                        Courier.id == candidate_id
                    )
                ).one()
                logger.info(
                    "courier_reserved",
                    extra={"courier_id": str(row.id), "zone": row.zone},
                )
                return CourierSnapshot(id=row.id, name=row.name, zone=row.zone)

            logger.info(
                "courier_claim_lost",
                extra={"courier_id": str(candidate_id), "claim_attempt": claim_attempt},
            )

        raise PlacementConflictError(
            self.MAX_CLAIM_ATTEMPTS, "courier reservation lost to concurrent placements"
        )
