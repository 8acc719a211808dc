import importlib
import importlib.util
import logging
import pkgutil
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from apps.settings import AppConfig, settings as default_settings
from core.db.core import Database
from core.exceptions import AbstractException

logger = logging.getLogger(__name__)

LifecycleHook = Callable[[FastAPI], Awaitable[None]]


def _discover(apps_dir: str, module_name: str):
    """Yield ``<apps_dir>.api.<app>.<module_name>`` for every app that has one."""
    api_package = importlib.import_module(f"{apps_dir}.api")
    for module_info in pkgutil.iter_modules(api_package.__path__):
        if not module_info.ispkg:
            continue
        dotted = f"{apps_dir}.api.{module_info.name}.{module_name}"
        if importlib.util.find_spec(dotted) is None:
            continue
        yield importlib.import_module(dotted)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(AbstractException)
    async def handle_app_exception(request: Request, exc: AbstractException):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception):
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "error_code": "INTERNAL_ERROR"},
        )


def create_app(
    apps_dir: str = "apps",
    settings: Optional[AppConfig] = None,
    on_startup: Optional[LifecycleHook] = None,
    on_shutdown: Optional[LifecycleHook] = None,
) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL)

    # table metadata has to be complete before create_all
    models = list(_discover(apps_dir, "models"))
    logger.debug("Loaded %d model modules", len(models))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        await database.create_all()
        app.state.db = database
        if on_startup:
            await on_startup(app)
        yield
        if on_shutdown:
            await on_shutdown(app)
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for module in _discover(apps_dir, "router"):
        router = getattr(module, "router", None)
        if router is None:
            continue
        app.include_router(router, prefix=settings.API_PREFIX)
        logger.debug("Mounted router %s", module.__name__)

    return app
