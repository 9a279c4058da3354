import logging
import threading
import time
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimiter:
    """Token-bucket admission gate with a single execution slot.

    At most ``max_per_interval`` calls may *start* within one window of
    ``interval`` seconds. The window opens with the first call after the
    previous one expired; once its tokens are spent, the next call sleeps
    until the window rolls over and the bucket refills. Only one call runs at
    a time.

    Clock and sleep are injectable so tests can drive time explicitly.
    """

    def __init__(
        self,
        max_per_interval: int,
        interval: float = 1.0,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        if max_per_interval is None or int(max_per_interval) < 1:
            raise ValueError("max_per_interval must be >= 1")
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.max_per_interval = int(max_per_interval)
        self.interval = float(interval)
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._slot = threading.Lock()
        self._window_start: Optional[float] = None
        self._tokens = 0

    def _acquire(self) -> None:
        now = self._clock()
        if self._window_start is None or now - self._window_start >= self.interval:
            self._window_start = now
            self._tokens = self.max_per_interval
        if self._tokens <= 0:
            wait = self._window_start + self.interval - now
            if wait > 0:
                logger.debug("Rate limit reached; waiting %.3fs", wait)
                self._sleep(wait)
            self._window_start = self._clock()
            self._tokens = self.max_per_interval
        self._tokens -= 1

    def run(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Wait for a token, then run ``fn`` while holding the execution slot."""
        with self._slot:
            self._acquire()
            return fn(*args, **kwargs)
