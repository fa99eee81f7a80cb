# backend/app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from app.api.auth_routes import router as auth_router
from app.api.realtime_routes import router as realtime_router
from app.api.routes import router as api_router
from app.core import database
from app.core.config import Settings, get_settings
from app.core.errors import DashboardError
from app.core.seed import seed_if_empty
from app.models import activity, notification, revenue, user  # noqa: F401  (register tables)
from app.services.broadcaster import Broadcaster
from app.services.simulator import ActivitySimulator

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    database.Base.metadata.create_all(bind=app.state.engine)

    if settings.seed_on_startup:
        db = app.state.session_factory()
        try:
            if seed_if_empty(db):
                logger.info("Empty database seeded with demo data")
        finally:
            db.close()

    simulator = None
    if settings.simulator_enabled:
        simulator = ActivitySimulator(
            app.state.session_factory,
            app.state.broadcaster,
            interval_seconds=settings.simulator_interval_seconds,
            notification_chance=settings.simulator_notification_chance,
        )
        simulator.start()

    logger.info("Dashboard API ready (%s)", settings.app_env)
    yield

    if simulator is not None:
        await simulator.stop()


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "INTERNAL_ERROR", "message": "Internal server error", "details": {}},
    )


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Dashboard API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine or database.engine
    app.state.session_factory = database.build_session_factory(app.state.engine)
    app.state.broadcaster = Broadcaster(send_timeout=settings.broadcast_send_timeout_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(api_router, prefix="/api")
    app.include_router(realtime_router, prefix="/api")

    return app


app = create_app()
