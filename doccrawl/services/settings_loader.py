import logging
import os
from typing import Optional

import yaml

from doccrawl import config as env
from doccrawl.domain.settings import CrawlerSettings, Settings
from doccrawl.exceptions import ConfigError
from doccrawl.services.renderer import FETCH_MODES

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Build validated ``Settings`` from environment defaults and an optional YAML file.

    YAML layout::

        docs_base_path: ~/docs
        crawler:
          default_max_depth: 3
          default_rate_limit: 2
          page_timeout_ms: 30000
          user_agent: "..."
          fetch_mode: headless_chromium

    Keys missing from the file keep their environment/default values.
    """

    def defaults(self) -> dict:
        return {
            "docs_base_path": env.DOCS_BASE_PATH,
            "crawler": {
                "default_max_depth": env.DEFAULT_MAX_DEPTH,
                "default_rate_limit": env.DEFAULT_RATE_LIMIT,
                "page_timeout_ms": env.PAGE_TIMEOUT_MS,
                "user_agent": env.USER_AGENT,
                "fetch_mode": env.FETCH_MODE,
            },
        }

    def load_yaml_dict(self, path: str) -> Optional[dict]:
        """Return the parsed YAML mapping at ``path``; None if the file is missing."""
        if not os.path.isfile(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError("settings file", f"is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("settings file", "must contain a mapping")
        return data

    def load(self, path: Optional[str] = None) -> Settings:
        merged = self.defaults()
        if path:
            data = self.load_yaml_dict(os.path.expanduser(path))
            if data is None:
                raise ConfigError("settings file", f"not found: {path}")
            if data.get("docs_base_path"):
                merged["docs_base_path"] = data["docs_base_path"]
            crawler = data.get("crawler") or {}
            if not isinstance(crawler, dict):
                raise ConfigError("crawler", "section must be a mapping")
            merged["crawler"].update(crawler)
            logger.info("Loaded settings from %s", path)
        return self.parse(merged)

    def parse(self, data: dict) -> Settings:
        base_path = data.get("docs_base_path")
        if not base_path or not isinstance(base_path, str):
            raise ConfigError("docs_base_path", "must be a non-empty string")

        crawler = data.get("crawler") or {}
        max_depth = crawler.get("default_max_depth")
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1:
            raise ConfigError("crawler.default_max_depth", "must be a positive integer (recommended: 3)")
        if max_depth > 10:
            logger.warning("crawler.default_max_depth > 10 may result in very long crawl times")

        rate_limit = crawler.get("default_rate_limit")
        if not isinstance(rate_limit, int) or isinstance(rate_limit, bool) or rate_limit < 1:
            raise ConfigError("crawler.default_rate_limit", "must be a positive integer (recommended: 2)")
        if rate_limit > 10:
            logger.warning("crawler.default_rate_limit > 10 may overwhelm some servers")

        timeout = crawler.get("page_timeout_ms")
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout < 1000:
            raise ConfigError("crawler.page_timeout_ms", "must be at least 1000ms")

        user_agent = crawler.get("user_agent")
        if not user_agent or not isinstance(user_agent, str):
            raise ConfigError("crawler.user_agent", "must be a non-empty string")

        fetch_mode = str(crawler.get("fetch_mode") or "").strip().lower()
        if fetch_mode not in FETCH_MODES:
            raise ConfigError("crawler.fetch_mode", f"must be one of {', '.join(FETCH_MODES)}")

        return Settings(
            docs_base_path=os.path.expanduser(base_path),
            crawler=CrawlerSettings(
                default_max_depth=max_depth,
                default_rate_limit=rate_limit,
                page_timeout_ms=timeout,
                user_agent=user_agent,
                fetch_mode=fetch_mode,
            ),
        )
