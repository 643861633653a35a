"""Admin access guard: Basic credentials plus an Origin/Referer check."""

import base64
import logging
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

AUTH_REALM = 'Basic realm="Admin Area"'
UNAUTHORIZED_DETAIL = "Unauthorized: Access Denied"
FORBIDDEN_DETAIL = "Forbidden: CSRF Check Failed (Invalid Origin)"
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def build_expected_authorization(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def credentials_match(presented: str | None, expected: str) -> bool:
    """Compare the Authorization header against the expected value.

    A missing header is compared like any other wrong value so both paths
    run through ``compare_digest``.
    """
    presented_bytes = (presented or "").encode("utf-8")
    return secrets.compare_digest(presented_bytes, expected.encode("utf-8"))


def _matches_base_url(value: str, base_url: str) -> bool:
    if not value.startswith(base_url):
        return False
    # "https://venue.example.evil.test" must not pass for "https://venue.example".
    rest = value[len(base_url):]
    return rest == "" or rest[0] in "/?#"


def origin_allowed(
    method: str, origin: str | None, referer: str | None, base_url: str
) -> bool:
    if method.upper() not in MUTATING_METHODS:
        return True
    source = origin or referer
    if not source:
        return False
    return _matches_base_url(source, base_url.rstrip("/"))


class AccessGuard:
    def __init__(self, expected_authorization: str, base_url: str) -> None:
        self._expected_authorization = expected_authorization
        self._base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessGuard":
        return cls(
            build_expected_authorization(settings.admin_username, settings.admin_password),
            settings.base_url,
        )

    def check(self, request: Request) -> None:
        headers = request.headers
        if not credentials_match(headers.get("authorization"), self._expected_authorization):
            logger.warning(
                "Rejected admin request %s %s: bad credentials",
                request.method,
                request.url.path,
            )
            raise HTTPException(
                status_code=401,
                detail=UNAUTHORIZED_DETAIL,
                headers={"WWW-Authenticate": AUTH_REALM},
            )

        if not origin_allowed(
            request.method, headers.get("origin"), headers.get("referer"), self._base_url
        ):
            logger.warning(
                "Rejected admin request %s %s: origin %r",
                request.method,
                request.url.path,
                headers.get("origin") or headers.get("referer"),
            )
            raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL)


def get_access_guard(settings: Annotated[Settings, Depends(get_settings)]) -> AccessGuard:
    return AccessGuard.from_settings(settings)


def require_admin(
    request: Request, guard: Annotated[AccessGuard, Depends(get_access_guard)]
) -> None:
    guard.check(request)
