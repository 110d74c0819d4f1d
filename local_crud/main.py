import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from local_crud import __version__
from local_crud.api.routes import health, items, search
from local_crud.config import Settings, get_settings
from local_crud.database import SessionLocal, engine
from local_crud.services.schema import ensure_runtime_schema, ensure_vocabulary

logger = logging.getLogger(__name__)

ENDPOINT_ROUTERS = (health.router, items.router, search.router)


def endpoint_paths(settings: Settings) -> set[str]:
    return {f"{settings.url_prefix}{route.path}" for router in ENDPOINT_ROUTERS for route in router.routes}


def register_endpoints(app: FastAPI, settings: Settings) -> None:
    existing = {id(route) for route in app.router.routes}
    for router in ENDPOINT_ROUTERS:
        app.include_router(router, prefix=settings.url_prefix)
    app.state.endpoint_routes = [route for route in app.router.routes if id(route) not in existing]
    app.openapi_schema = None
    logger.info("Registered %d endpoints under '%s'", len(endpoint_paths(settings)), settings.url_prefix or "/")


def unregister_endpoints(app: FastAPI, settings: Settings) -> None:
    registered = {id(route) for route in getattr(app.state, "endpoint_routes", [])}
    app.router.routes[:] = [route for route in app.router.routes if id(route) not in registered]
    app.state.endpoint_routes = []
    app.openapi_schema = None
    logger.info("Unregistered endpoints under '%s'", settings.url_prefix or "/")


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    ensure_runtime_schema(engine)
    with SessionLocal() as db:
        ensure_vocabulary(db)
    logger.info("Local CRUD API: started (v%s)", settings.plugin_version)
    yield
    logger.info("Local CRUD API: shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Local Library CRUD API",
        version=__version__,
        description="Create, read, update, delete and search records of the local library over HTTP.",
        lifespan=lifespan,
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    register_endpoints(app, settings)
    return app


app = create_app()
