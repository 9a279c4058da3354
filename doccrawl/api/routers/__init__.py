"""API router factory functions."""
from .crawls import create_crawls_router
from .documentation import create_documentation_router
from .systems import create_systems_router

__all__ = [
    "create_crawls_router",
    "create_documentation_router",
    "create_systems_router",
]
