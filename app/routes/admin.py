from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import TEMPLATES_DIR
from ..dependencies import QueueServiceDep
from ..models import TicketStatusEnum
from ..schemas import TicketRead
from ..security import require_admin
from ..services.exceptions import InvalidInput, TicketNotFound

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@router.get("", response_class=HTMLResponse)
def admin_index(request: Request, service: QueueServiceDep) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin/index.html",
        {"request": request, "summary": service.summary()},
    )


@router.post("/reset")
def admin_reset(service: QueueServiceDep) -> RedirectResponse:
    service.reset()
    return RedirectResponse(url="/admin", status_code=303)


@router.get("/front", response_class=HTMLResponse)
def front_page(request: Request) -> HTMLResponse:
    return _render_front(request)


@router.post("/front/tickets", response_class=HTMLResponse)
def front_issue_ticket(
    request: Request,
    service: QueueServiceDep,
    group_size: Annotated[str, Form()] = "",
) -> HTMLResponse:
    group_size = group_size.strip()
    try:
        issued = service.issue(group_size)
    except InvalidInput as exc:
        return _render_front(
            request, errors=[str(exc)], form={"group_size": group_size}, status_code=400
        )

    return _render_front(
        request,
        last_ticket=issued.ticket,
        guest_url=issued.guest_url,
        qr_code=issued.qr_svg,
    )


@router.get("/call", response_class=HTMLResponse)
def call_page(request: Request, service: QueueServiceDep) -> HTMLResponse:
    return _render_call(request, service.active_list())


@router.post("/call/update", response_class=HTMLResponse)
def call_update_status(
    request: Request,
    service: QueueServiceDep,
    ticket_id: Annotated[str, Form(alias="id")] = "",
    status: Annotated[str, Form()] = "",
) -> HTMLResponse:
    ticket_id = ticket_id.strip()
    try:
        service.set_status(ticket_id, status.strip())
    except TicketNotFound:
        return templates.TemplateResponse(
            request,
            "tickets/not_found.html",
            {"request": request, "ticket_id": ticket_id},
            status_code=404,
        )
    except InvalidInput as exc:
        return _render_call(
            request, service.active_list(), errors=[str(exc)], status_code=400
        )
    return RedirectResponse(url="/admin/call", status_code=303)


@router.get("/tickets", response_model=list[TicketRead])
def active_tickets(service: QueueServiceDep) -> list[TicketRead]:
    return [TicketRead.model_validate(ticket) for ticket in service.active_list()]


def _render_front(
    request: Request,
    *,
    last_ticket=None,
    guest_url: str | None = None,
    qr_code: str | None = None,
    errors: list[str] | None = None,
    form: dict | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin/front.html",
        {
            "request": request,
            "last_ticket": last_ticket,
            "guest_url": guest_url,
            "qr_code": qr_code,
            "errors": errors or [],
            "form": form or {"group_size": ""},
        },
        status_code=status_code,
    )


def _render_call(
    request: Request,
    tickets: list,
    *,
    errors: list[str] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "admin/call.html",
        {
            "request": request,
            "tickets": tickets,
            "statuses": [status.value for status in TicketStatusEnum],
            "errors": errors or [],
        },
        status_code=status_code,
    )
