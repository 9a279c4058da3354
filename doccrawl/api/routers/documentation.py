from typing import Optional

from fastapi import APIRouter, HTTPException

from doccrawl.domain.categorization import CATEGORIES
from doccrawl.services.storage import DocumentStorage


def create_documentation_router(storage: DocumentStorage):
    router = APIRouter(prefix="/documentation", tags=["Documentation"])

    @router.get("")
    def list_documentation(category: str = "all", include_stats: Optional[bool] = None):
        if category != "all" and category not in CATEGORIES:
            raise HTTPException(status_code=400, detail=f"category must be one of: all, {', '.join(CATEGORIES)}")

        listing = storage.list_documentation(None if category == "all" else category)
        if category != "all":
            listing = {category: listing[category]}
        if not include_stats:
            return listing

        result = {}
        for cat, names in listing.items():
            entries = []
            for name in names:
                stats = storage.documentation_stats(cat, name)
                entries.append({
                    "name": name,
                    "file_count": stats.file_count,
                    "total_size": stats.total_size,
                    "last_modified": stats.last_modified.isoformat() if stats.last_modified else None,
                })
            result[cat] = entries
        return result

    return router
