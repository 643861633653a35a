from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ..models import TicketStatusEnum


class TicketRead(BaseModel):
    id: UUID
    number: int
    group_size: int
    status: TicketStatusEnum
    created_at: datetime

    model_config = {"from_attributes": True}


class GuestStatusRead(BaseModel):
    id: UUID
    number: int
    group_size: int
    status: TicketStatusEnum
    waiting_count: int
