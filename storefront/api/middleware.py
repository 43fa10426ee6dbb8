# storefront/api/middleware.py
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.utils.settings import API_VERSION, SESSION_COOKIE_NAME, SESSION_TTL_SECONDS

HEADER = "X-API-Version"


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """Every /api request must send the exact API version header."""

    def __init__(self, app, version: str = API_VERSION, prefix: str = "/api"):
        super().__init__(app)
        self.version = version
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.prefix):
            return await call_next(request)

        v = request.headers.get(HEADER)
        if not v:
            return JSONResponse(status_code=400, content={"detail": f"Missing {HEADER} header"})
        if v != self.version:
            return JSONResponse(
                status_code=426,
                content={"detail": f"Unsupported API version {v}. Expected {self.version}"},
            )

        return await call_next(request)


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """
    Opaque visitor id from the session cookie, issued on first use.
    Set on every response, errors included, so its max-age rolls forward.
    """

    def __init__(self, app, cookie_name: str = SESSION_COOKIE_NAME, max_age: int = SESSION_TTL_SECONDS):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.max_age = max_age

    async def dispatch(self, request: Request, call_next):
        sid = request.cookies.get(self.cookie_name) or uuid.uuid4().hex
        request.state.session_id = sid

        response = await call_next(request)
        response.set_cookie(
            key=self.cookie_name,
            value=sid,
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
        )
        return response
