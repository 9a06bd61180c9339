import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.access import is_authorized, is_excluded
from ..core.security import SessionSigner

logger = logging.getLogger(__name__)


def read_session_token(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """Attaches session claims to ``request.state.session`` and guards private routes."""

    def __init__(self, app, signer: SessionSigner, cookie_name: str, login_path: str) -> None:
        super().__init__(app)
        self.signer = signer
        self.cookie_name = cookie_name
        self.login_path = login_path

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        claims = self.signer.verify(read_session_token(request, self.cookie_name))
        request.state.session = claims

        if is_excluded(path) or is_authorized(path, claims):
            return await call_next(request)

        logger.info("Unauthenticated request to %s", path)
        if path.startswith("/api/"):
            return JSONResponse({"detail": "Not authenticated"}, status_code=401)
        query = urlencode({"callbackUrl": path})
        return RedirectResponse(url=f"{self.login_path}?{query}", status_code=307)
