"""Deferred post-render work."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

Highlighter = Callable[[], object]
HighlighterResolver = Callable[[], Optional[Highlighter]]


class TimerLoop(Protocol):
    def call_later(self, delay: float, callback: Callable[..., object], *args: object) -> object: ...


class PostRenderScheduler:
    """Run the highlighter once, shortly after each commit.

    Each call to `after_commit` schedules one independent timer callback.
    Timers are never cancelled: when edits come in quickly, older callbacks
    still fire, and since highlighting is idempotent and always reads the
    currently committed surface, the callback from the newest commit leaves
    the view correct.

    The highlighter is looked up when the timer fires, not when it is
    scheduled. If `resolve` returns None the callback does nothing.

    Args:
        resolve: Returns the zero-argument highlighter, or None when none is
            available.
        delay: Seconds to wait after the commit.
        loop: Event loop providing ``call_later``. Defaults to the running
            asyncio loop at scheduling time.
    """

    def __init__(
        self,
        resolve: HighlighterResolver,
        delay: float = 0.001,
        loop: TimerLoop | None = None,
    ):
        self.resolve = resolve
        self.delay = delay
        self._loop = loop
        self.in_flight = 0
        self.scheduled = 0
        self.fired = 0

    @property
    def loop(self) -> TimerLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def after_commit(self) -> bool:
        """Schedule one deferred highlighter run.

        Must be called after the view has been updated. Without a loop the
        run is skipped with a warning; the committed view stays unhighlighted.

        Returns:
            bool: Whether a run was scheduled.
        """
        loop = self.loop
        if loop is None:
            logger.warning("No event loop available; skipping highlight pass")
            return False

        loop.call_later(self.delay, self._fire)
        self.in_flight += 1
        self.scheduled += 1
        logger.debug("Scheduled highlight pass (%d in flight)", self.in_flight)
        return True

    def _fire(self) -> None:
        self.in_flight -= 1
        self.fired += 1

        highlighter = self.resolve()
        if highlighter is None:
            return

        try:
            highlighter()
        except Exception:
            logger.warning("Highlight pass failed", exc_info=True)

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait until every scheduled callback has fired.

        Args:
            timeout: Give up after this many seconds; wait forever when None.

        Returns:
            bool: False if the timeout ran out with callbacks still pending.
        """
        running = asyncio.get_running_loop()
        deadline = None if timeout is None else running.time() + timeout
        while self.in_flight:
            if deadline is not None and running.time() >= deadline:
                logger.warning(
                    "Gave up waiting for %d highlight pass(es) after %ss", self.in_flight, timeout
                )
                return False
            await asyncio.sleep(self.delay)
        return True
