from .base import Base
from .queue_state import QUEUE_STATE_ID, QueueState
from .ticket import MAX_TICKET_NUMBER, Ticket, TicketStatusEnum

__all__ = [
    "Base",
    "MAX_TICKET_NUMBER",
    "QUEUE_STATE_ID",
    "QueueState",
    "Ticket",
    "TicketStatusEnum",
]
