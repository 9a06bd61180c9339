import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.auth_routes import router as auth_router
from .api.media_routes import router as media_router
from .api.page_routes import router as page_router
from .api.video_routes import router as video_router
from .core.config import settings
from .core.exceptions import AppError
from .core.security import SessionSigner
from .middleware.session_auth import SessionAuthMiddleware

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.app_name)
    app.state.session_signer = SessionSigner(settings.secret_key, settings.session_max_age_seconds)

    app.add_middleware(
        SessionAuthMiddleware,
        signer=app.state.session_signer,
        cookie_name=settings.session_cookie_name,
        login_path=settings.login_path,
    )
    # Outermost, so CORS preflights never reach the session check.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, handle_app_error)

    app.include_router(auth_router)
    app.include_router(media_router)
    app.include_router(video_router)
    app.include_router(page_router)

    @app.get("/health")
    async def healthcheck():
        return {"status": "ok"}

    return app


app = create_app()
