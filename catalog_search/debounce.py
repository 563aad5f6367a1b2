from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid calls into one, fired after a quiet period.

    Every :meth:`trigger` cancels the pending call and schedules a new one on
    the running event loop, so only the arguments of the last trigger are
    ever delivered to ``callback``.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay: float = 0.3,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.callback = callback
        self.delay = delay
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: Tuple[Any, ...]) -> None:
        self._handle = None
        logger.debug("Debounced call fired after %.3fs", self.delay)
        self.callback(*args)


__all__ = ["Debouncer"]
