from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .db import get_db
from .services.queue import QueueService
from .services.store import TicketStore


def get_queue_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QueueService:
    return QueueService(
        TicketStore(db),
        base_url=settings.base_url,
        max_group_size=settings.max_group_size,
    )


QueueServiceDep = Annotated[QueueService, Depends(get_queue_service)]
