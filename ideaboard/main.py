import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ideaboard.auth.tokens import TokenIssuer
from ideaboard.config import Settings, get_settings
from ideaboard.errors import IdeaBoardError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: schema sync and default admin
    from ideaboard.database import SessionLocal, init_db
    from ideaboard.services.seed import ensure_admin

    settings: Settings = app.state.settings
    if settings.DB_SYNC:
        init_db()
    if settings.SEED_ADMIN:
        with SessionLocal() as db:
            ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    # Fails with ConfigurationError before anything can be served
    token_issuer = TokenIssuer(settings.JWT_SECRET)

    app = FastAPI(
        title=settings.APP_TITLE,
        description="Post ideas, vote once per idea, moderate as admin.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_issuer = token_issuer

    from ideaboard.api import api_router

    app.include_router(api_router)

    @app.exception_handler(IdeaBoardError)
    async def idea_board_error_handler(request: Request, exc: IdeaBoardError):
        return JSONResponse(
            {"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"detail": _validation_details(exc)}, status_code=400)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("%s ready", settings.APP_TITLE)
    return app


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


app = create_app()
