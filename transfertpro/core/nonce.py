import time
from collections.abc import Callable


class NonceGenerator:
    """
    Produces strictly increasing request nonces.

    Nanosecond timestamps are the source. When the clock does not advance
    between two calls (coarse clock, fast caller), the previous value is
    bumped by one so a nonce is never handed out twice.

    Example:
        ```python
        nonces = NonceGenerator()
        first, second = nonces.next(), nonces.next()
        assert second > first
        ```
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self._clock = clock
        self._last = 0

    def next(self) -> int:
        """Return a nonce greater than every previously returned one."""
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(last={self._last})"
