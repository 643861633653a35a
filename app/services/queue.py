from dataclasses import dataclass
import logging
import uuid

from ..models import MAX_TICKET_NUMBER, Ticket, TicketStatusEnum
from .exceptions import InvalidInput
from .qr_code import encode_svg
from .store import TicketStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_GROUP_SIZE = 99


@dataclass(frozen=True)
class IssuedTicket:
    ticket: Ticket
    guest_url: str
    qr_svg: str


@dataclass(frozen=True)
class TicketView:
    ticket: Ticket
    waiting_count: int


def parse_status(value: str | TicketStatusEnum) -> TicketStatusEnum:
    if isinstance(value, TicketStatusEnum):
        return value
    try:
        return TicketStatusEnum(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidInput(f"Unknown status: {value!r}") from exc


def parse_group_size(value: int | str, max_group_size: int = DEFAULT_MAX_GROUP_SIZE) -> int:
    if isinstance(value, bool):
        raise InvalidInput("Group size must be a whole number.")
    if isinstance(value, int):
        size = value
    else:
        try:
            size = int(str(value).strip())
        except ValueError as exc:
            raise InvalidInput("Group size must be a whole number.") from exc
    if size < 1:
        raise InvalidInput("Group size must be at least 1.")
    if size > max_group_size:
        raise InvalidInput(f"Group size must be {max_group_size} or less.")
    return size


def wrap_number(number: int) -> int:
    # Wrapping does not look for a free number; an active ticket may share it.
    return 1 if number > MAX_TICKET_NUMBER else number


class QueueService:
    """Ticket lifecycle: issuing, calling and the guest's place in the queue."""

    def __init__(
        self,
        store: TicketStore,
        base_url: str,
        max_group_size: int = DEFAULT_MAX_GROUP_SIZE,
    ) -> None:
        self._store = store
        self._base_url = base_url.rstrip("/")
        self._max_group_size = max_group_size

    def guest_url(self, ticket: Ticket) -> str:
        return f"{self._base_url}/guest/{ticket.id}"

    def issue(self, group_size: int | str) -> IssuedTicket:
        size = parse_group_size(group_size, self._max_group_size)
        self._store.lock_numbering()
        number = wrap_number(self._store.next_number())
        ticket = self._store.insert(number, size)
        url = self.guest_url(ticket)
        qr_svg = encode_svg(url)
        self._store.commit()
        logger.info("Issued ticket number=%s group_size=%s", number, size)
        return IssuedTicket(ticket=ticket, guest_url=url, qr_svg=qr_svg)

    def set_status(
        self, ticket_id: uuid.UUID | str, status: str | TicketStatusEnum
    ) -> Ticket:
        new_status = parse_status(status)
        self._store.update_status(ticket_id, new_status)
        self._store.commit()
        ticket = self._store.get(ticket_id)
        logger.info("Ticket number=%s set to %s", ticket.number, new_status.value)
        return ticket

    def view_for(self, ticket_id: uuid.UUID | str) -> TicketView:
        ticket = self._store.get(ticket_id)
        return TicketView(
            ticket=ticket,
            waiting_count=self._store.count_waiting_before(ticket.number),
        )

    def active_list(self) -> list[Ticket]:
        return self._store.list_active()

    def summary(self) -> dict[str, int]:
        counts = self._store.counts_by_status()
        summary = {status.value: count for status, count in counts.items()}
        summary["issued_total"] = self._store.issued_total()
        return summary

    def reset(self) -> None:
        self._store.clear()
        self._store.commit()
        logger.warning("Queue reset: all tickets removed")
