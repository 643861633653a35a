import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Index, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow

MAX_TICKET_NUMBER = 999


class TicketStatusEnum(str, Enum):
    WAITING = "waiting"
    CALLED = "called"
    COMPLETED = "completed"


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        Index("ix_tickets_number", "number"),
        Index("ix_tickets_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    group_size: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[TicketStatusEnum] = mapped_column(
        SAEnum(
            TicketStatusEnum,
            native_enum=False,
            create_constraint=False,
            length=20,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=TicketStatusEnum.WAITING,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"Ticket(number={self.number}, status={self.status.value})"
