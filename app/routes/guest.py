from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..config import TEMPLATES_DIR, Settings, get_settings
from ..dependencies import QueueServiceDep
from ..schemas import GuestStatusRead
from ..services.exceptions import TicketNotFound

router = APIRouter(prefix="/guest")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@router.get("/{ticket_id}", response_class=HTMLResponse)
def guest_page(
    ticket_id: str,
    request: Request,
    service: QueueServiceDep,
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    return _render_guest(
        request, service, ticket_id, "guest/page.html", settings.guest_poll_seconds
    )


@router.get("/{ticket_id}/content", response_class=HTMLResponse)
def guest_content(ticket_id: str, request: Request, service: QueueServiceDep) -> HTMLResponse:
    return _render_guest(request, service, ticket_id, "guest/_content.html")


@router.get("/{ticket_id}/status", response_model=GuestStatusRead)
def guest_status(ticket_id: str, service: QueueServiceDep) -> GuestStatusRead:
    try:
        view = service.view_for(ticket_id)
    except TicketNotFound:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return GuestStatusRead(
        id=view.ticket.id,
        number=view.ticket.number,
        group_size=view.ticket.group_size,
        status=view.ticket.status,
        waiting_count=view.waiting_count,
    )


def _render_guest(
    request: Request,
    service,
    ticket_id: str,
    template_name: str,
    poll_seconds: int | None = None,
) -> HTMLResponse:
    try:
        view = service.view_for(ticket_id)
    except TicketNotFound:
        return templates.TemplateResponse(
            request,
            "tickets/not_found.html",
            {"request": request, "ticket_id": ticket_id},
            status_code=404,
        )
    return templates.TemplateResponse(
        request,
        template_name,
        {
            "request": request,
            "ticket": view.ticket,
            "waiting_count": view.waiting_count,
            "poll_seconds": poll_seconds,
        },
    )
