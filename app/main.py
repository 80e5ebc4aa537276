# app/main.py
from fastapi import FastAPI

from app.api.routes import dashboard, health, internal, recaps
from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.db.session import init_db_for_startup


def create_app() -> FastAPI:
    """
    Application factory for the Attendance Recap service.
    """
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Backend for the attendance admin dashboard: monthly recaps per\n"
            "attendance form (meetings, participants, census-based rates),\n"
            "group breakdowns, follow-up lists and headline counters."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(dashboard.router)
    app.include_router(recaps.router)
    app.include_router(internal.router)

    @app.on_event("startup")
    async def on_startup() -> None:  # pragma: no cover
        await init_db_for_startup()

    return app


app = create_app()
