import asyncio
import logging

import uvicorn
from fastapi import FastAPI
from starlette.responses import HTMLResponse

from apps.api.parking.seed import seed_demo_data
from apps.settings import AppConfig, settings as default_settings
from core.fastapi.app import create_app as create_base_app

logger = logging.getLogger(__name__)


async def on_startup(app: FastAPI):
    logger.info("Application Starting Up ...")
    app.state.parking_lock = asyncio.Lock()
    if app.state.settings.SEED_DEMO_DATA:
        async with app.state.db.session_factory() as session:
            await seed_demo_data(session)


async def on_shutdown(app: FastAPI):
    logger.info("Application shutting down")


def create_app(settings: AppConfig | None = None) -> FastAPI:
    application = create_base_app(
        apps_dir="apps",
        settings=settings or default_settings,
        on_startup=on_startup,
        on_shutdown=on_shutdown,
    )

    prefix = application.state.settings.API_PREFIX

    @application.get(f"{prefix}/ping", summary="Ping the API", tags=["Health Check"])
    def root():
        return HTMLResponse(content="<html><h1>Parking API is up.</h1></html>")

    return application


app = create_app()

if __name__ == "__main__":
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=default_settings.DEBUG)
