from typing import Iterator


class VisitedTracker:
    """
    Tracks which normalized URLs have been handed to processing during a crawl.

    Unlike a cache this never evicts: a URL that was marked stays marked for
    the whole session, which is what guarantees at-most-once processing.
    """

    def __init__(self):
        self._visited: set[str] = set()

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        return url in self._visited

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[str]:
        return iter(self._visited)
