"""
Explicit unit of work for writes that must land together.

    with unit_of_work(db) as uow:
        write_a(uow, ...)
        write_b(uow, ...)

Both writes are committed when the block exits normally; any exception
inside the block (or from the commit itself) aborts the transaction and is
re-raised, so neither write is visible afterwards.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session: Session):
        self.session = session

    def begin(self) -> None:
        # reads done earlier in the request already opened a transaction
        if not self.session.in_transaction():
            self.session.begin()

    def commit(self) -> None:
        self.session.commit()

    def abort(self) -> None:
        self.session.rollback()


@contextmanager
def unit_of_work(session: Session) -> Iterator[UnitOfWork]:
    uow = UnitOfWork(session)
    uow.begin()
    try:
        yield uow
        uow.commit()
    except Exception:
        logger.warning("Unit of work aborted, rolling back")
        uow.abort()
        raise
