"""FastAPI application factory."""
from typing import Optional

from fastapi import FastAPI

from doccrawl import __version__
from doccrawl.api.routers import (
    create_crawls_router,
    create_documentation_router,
    create_systems_router,
)
from doccrawl.container import Container


def create_app(container: Optional[Container] = None) -> FastAPI:
    container = container or Container()

    app = FastAPI(title="doccrawl", version=__version__)
    app.state.container = container

    app.include_router(create_systems_router(container.config(), container.settings))
    app.include_router(create_crawls_router(container.crawler))
    app.include_router(create_documentation_router(container.storage()))
    return app
