import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from myflix.core.config import Settings, get_settings
from myflix.core.errors import register_error_handlers
from myflix.core.log import configure_logging, log_requests
from myflix.database import init_db, make_engine
from myflix.routers.auth import router as auth_router
from myflix.routers.images import router as images_router
from myflix.routers.movies import router as movies_router
from myflix.routers.users import router as users_router
from myflix.services.storage_service import ImageStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    configure_logging(settings.LOG_LEVEL)

    engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    init_db(engine)
    app.state.engine = engine
    app.state.storage = ImageStorage.from_settings(settings)
    logger.info("myFlix API started")
    try:
        yield
    finally:
        engine.dispose()
        logger.info("myFlix API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(
        title="myFlix API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app.state.settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def homepage():
        return "Welcome to myFlix!"

    app.include_router(auth_router)
    app.include_router(movies_router)
    app.include_router(users_router)
    app.include_router(images_router)
    return app
