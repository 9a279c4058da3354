"""Custom exceptions for doccrawl services."""


class ConfigError(Exception):
    """Raised when settings are missing or invalid."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Configuration error: {field} {reason}")


class RendererInitError(Exception):
    """Raised when a renderer session cannot be started.

    This is the only failure that escapes a crawl.
    """

    def __init__(self, mode: str, original: Exception):
        self.mode = mode
        self.original = original
        super().__init__(f"Could not start {mode} renderer: {original}")


class RenderError(Exception):
    """Raised when a single page cannot be rendered (navigation error, timeout, bad status)."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Render failed for {url}: {original}")


class EmptyContentError(Exception):
    """Raised when a rendered page yields no content after extraction."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("No content extracted")
