from collections.abc import Iterator
from contextlib import contextmanager
import logging
import uuid

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import QUEUE_STATE_ID, QueueState, Ticket, TicketStatusEnum
from ..models.base import utcnow
from .exceptions import StoreFailure, TicketNotFound

logger = logging.getLogger(__name__)


class TicketStore:
    """Ticket persistence on top of one SQLAlchemy session.

    Methods flush but never commit; ``commit`` ends the unit of work so the
    lifecycle service decides the transaction boundaries.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Ticket store %s failed", operation)
            raise StoreFailure(f"Ticket store {operation} failed") from exc

    def lock_numbering(self) -> None:
        # The row update holds a write lock until commit, which serialises
        # MAX(number) reads between concurrent issuances. The insert only
        # matters on a database that was not seeded by the migration.
        now = utcnow()
        with self._guard("lock_numbering"):
            self._db.execute(
                self._insert_ignore(QueueState)
                .values(id=QUEUE_STATE_ID, issued_total=0, updated_at=now)
                .on_conflict_do_nothing(index_elements=[QueueState.id])
            )
            self._db.execute(
                update(QueueState)
                .where(QueueState.id == QUEUE_STATE_ID)
                .values(issued_total=QueueState.issued_total + 1, updated_at=now)
            )

    def _insert_ignore(self, model):
        if self._db.get_bind().dialect.name == "postgresql":
            return pg_insert(model)
        return sqlite_insert(model)

    def next_number(self) -> int:
        with self._guard("next_number"):
            return self._db.execute(
                select(func.coalesce(func.max(Ticket.number), 0) + 1)
            ).scalar_one()

    def insert(self, number: int, group_size: int) -> Ticket:
        ticket = Ticket(
            number=number,
            group_size=group_size,
            status=TicketStatusEnum.WAITING,
        )
        with self._guard("insert"):
            self._db.add(ticket)
            self._db.flush()
        return ticket

    def get(self, ticket_id: uuid.UUID | str) -> Ticket:
        key = _as_uuid(ticket_id)
        if key is None:
            raise TicketNotFound(ticket_id)
        with self._guard("get"):
            ticket = self._db.get(Ticket, key)
        if ticket is None:
            raise TicketNotFound(ticket_id)
        return ticket

    def update_status(self, ticket_id: uuid.UUID | str, status: TicketStatusEnum) -> None:
        ticket = self.get(ticket_id)
        with self._guard("update_status"):
            ticket.status = status
            self._db.flush()

    def list_active(self) -> list[Ticket]:
        with self._guard("list_active"):
            return list(
                self._db.scalars(
                    select(Ticket)
                    .where(Ticket.status != TicketStatusEnum.COMPLETED)
                    .order_by(Ticket.number.asc(), Ticket.created_at.asc())
                )
            )

    def count_waiting_before(self, number: int) -> int:
        with self._guard("count_waiting_before"):
            return self._db.execute(
                select(func.count())
                .select_from(Ticket)
                .where(
                    Ticket.status == TicketStatusEnum.WAITING,
                    Ticket.number < number,
                )
            ).scalar_one()

    def counts_by_status(self) -> dict[TicketStatusEnum, int]:
        counts = {status: 0 for status in TicketStatusEnum}
        with self._guard("counts_by_status"):
            rows = self._db.execute(
                select(Ticket.status, func.count()).group_by(Ticket.status)
            ).all()
        for status, count in rows:
            counts[TicketStatusEnum(status)] = count
        return counts

    def issued_total(self) -> int:
        with self._guard("issued_total"):
            state = self._db.get(QueueState, QUEUE_STATE_ID)
        return state.issued_total if state else 0

    def clear(self) -> None:
        with self._guard("clear"):
            self._db.execute(delete(Ticket))
            self._db.execute(
                update(QueueState)
                .where(QueueState.id == QUEUE_STATE_ID)
                .values(issued_total=0, updated_at=utcnow())
            )
            self._db.flush()

    def commit(self) -> None:
        with self._guard("commit"):
            self._db.commit()


def _as_uuid(value: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        return None
