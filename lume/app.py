import contextlib
import importlib
import logging
import typing

from fastapi import FastAPI
from starlette.middleware.exceptions import ExceptionMiddleware

from lume import routers
from lume.config import settings
from lume.database import create_engine, create_session_factory
from lume.middlewares import handlers
from lume.utils.sentry import sentry_init

logging.basicConfig(level=settings.logging_level)

ROUTERS = [
    importlib.import_module(f'lume.routers.{module}')
    for module in routers.__all__
]
APP_PREFIX = '/api/v1'


def create_app(database_url: typing.Optional[str] = None) -> FastAPI:
    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        # One engine per process, shared by all requests
        engine = create_engine(database_url)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        try:
            yield
        finally:
            await engine.dispose()

    sentry_init()
    app = FastAPI(lifespan=lifespan)
    app.add_middleware(ExceptionMiddleware, handlers=handlers)
    for module in ROUTERS:
        router = getattr(module, 'router', None)
        if not router:
            continue
        app.include_router(router, prefix=APP_PREFIX)
    return app


app = create_app()
