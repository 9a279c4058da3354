from dataclasses import asdict
from typing import Callable

from fastapi import APIRouter

from doccrawl import __version__
from doccrawl.domain.settings import Settings


def create_systems_router(container_env: dict, settings_provider: Callable[[], Settings]):
    """Health and effective configuration: raw environment plus the validated settings in use."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    @router.get("/config")
    def get_config():
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            },
            "settings": asdict(settings_provider()),
        }

    return router
