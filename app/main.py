from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError

from .config import STATIC_DIR, TEMPLATES_DIR, get_settings
from .logging import configure_logging
from .routes import api_router
from .services.exceptions import QueueError

logger = logging.getLogger(__name__)
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings())
    logger.info("Queue service started")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="queue_web", lifespan=lifespan)
    app.include_router(api_router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.add_exception_handler(QueueError, queue_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root_redirect() -> RedirectResponse:
        return RedirectResponse(url="/admin", status_code=303)

    return app


async def queue_error_handler(request: Request, exc: QueueError) -> HTMLResponse:
    if exc.status_code >= 500:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
    return _render_error(request, str(exc) if exc.status_code < 500 else None, exc.status_code)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> HTMLResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _render_error(request, None, 500)


def _render_error(request: Request, message: str | None, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "errors/error.html",
        {
            "request": request,
            "message": message or "Something went wrong. Please try again.",
            "status_code": status_code,
        },
        status_code=status_code,
    )


app = create_app()
