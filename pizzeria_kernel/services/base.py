"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for the
    step services of order placement.  Each receives a SQLAlchemy ``Session``
    and uses ``session.flush()`` -- never ``session.commit()``.

Invariants enforced:
    Transaction boundaries: step services write within the caller's
    transaction and never commit or roll back themselves.  The placement
    service owns commit/rollback, which is what makes the stock decrement,
    courier reservation and order append one atomic unit.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for kernel step services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide query-only (read) methods -- those belong
          in ``pizzeria_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session
