"""doccrawl: crawl documentation sites into categorized markdown files."""

__version__ = "0.4.0"
