import logging
from typing import Callable, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from doccrawl.domain.crawl_options import CrawlOptions
from doccrawl.exceptions import RendererInitError
from doccrawl.services.crawler import DocumentationCrawler
from doccrawl.utils.url_utils import is_valid_url

logger = logging.getLogger(__name__)


class CrawlRequest(BaseModel):
    url: str
    max_depth: Optional[int] = Field(default=None, ge=0)
    force_refresh: bool = False
    rate_limit: Optional[int] = Field(default=None, ge=1)
    include_patterns: list[str] = Field(default_factory=list)
    exclude_patterns: list[str] = Field(default_factory=list)


def create_crawls_router(crawler_provider: Callable[[], DocumentationCrawler]):
    """Crawls run synchronously; FastAPI executes the endpoint in its threadpool."""
    router = APIRouter(prefix="/crawls", tags=["Crawls"])

    @router.post("")
    def start_crawl(req: CrawlRequest):
        if not is_valid_url(req.url):
            raise HTTPException(status_code=400, detail="url must be an absolute http(s) URL")

        options = CrawlOptions(
            url=req.url,
            max_depth=req.max_depth,
            force_refresh=req.force_refresh,
            rate_limit=req.rate_limit,
            include_patterns=req.include_patterns,
            exclude_patterns=req.exclude_patterns,
        )
        try:
            result = crawler_provider().crawl(options)
        except RendererInitError as e:
            logger.error("Crawl of %s could not start: %s", req.url, e)
            raise HTTPException(status_code=503, detail=str(e))
        return result.to_dict()

    return router
