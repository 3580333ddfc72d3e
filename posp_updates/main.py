# posp_updates/main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from posp_updates.core.config import Settings, settings as default_settings
from posp_updates.db.session import create_db_engine, init_db
from posp_updates.routers import updates_router
from posp_updates.services.auth import CredentialVerifier, build_verifier
from posp_updates.services.updates import SqlUpdateStore, UpdateStore

logger = logging.getLogger(__name__)


def open_update_store(settings: Settings) -> SqlUpdateStore:
    """Connect the record store described by settings"""
    engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
    if settings.AUTO_CREATE_TABLES:
        init_db(engine)
    logger.info(f"Record store opened: {engine.url.render_as_string(hide_password=True)}")
    return SqlUpdateStore(engine)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[UpdateStore] = None,
    verifier: Optional[CredentialVerifier] = None
) -> FastAPI:
    """
    Build the application.

    The store and verifier are opened when the app starts and the store is
    closed at shutdown. Passing them in skips opening, tests use this.
    """
    settings = settings or default_settings

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.update_store = store or open_update_store(settings)
        app.state.credential_verifier = verifier or build_verifier(settings)
        logger.info(f"{settings.APP_TITLE} started")
        try:
            yield
        finally:
            app.state.update_store.close()
            logger.info("Record store closed")

    app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    app.include_router(updates_router.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
