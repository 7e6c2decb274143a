"""Progress reporting for long-running pipeline operations.

Operations accept an optional ``on_progress`` callback. Internally they
report through a :class:`ProgressReporter`, which keeps percentages
non-decreasing and can hand a sub-range of its scale to a nested
operation (a fact-check running inside a generation run, for example).
:class:`ProgressStream` turns the callback into an async iterator.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressEvent(BaseModel):
    """One progress notification."""

    stage: str
    message: str
    percentage: float = Field(ge=0, le=100)


ProgressCallback = Callable[[ProgressEvent], None]


class _Cursor:
    def __init__(self) -> None:
        self.last = 0.0


class ProgressReporter:
    """Maps an operation's 0-100 scale onto a band of the caller's scale."""

    def __init__(
        self,
        callback: ProgressCallback | None = None,
        start: float = 0.0,
        end: float = 100.0,
        _cursor: _Cursor | None = None,
    ):
        self._callback = callback
        self._start = start
        self._end = end
        self._cursor = _cursor or _Cursor()

    def report(self, stage: str, message: str, percentage: float) -> None:
        if self._callback is None:
            return
        local = min(100.0, max(0.0, percentage))
        scaled = self._start + (self._end - self._start) * local / 100.0
        scaled = max(self._cursor.last, min(100.0, scaled))
        self._cursor.last = scaled
        try:
            self._callback(ProgressEvent(stage=stage, message=message, percentage=scaled))
        except Exception as e:
            logger.warning(f"Progress callback failed at stage '{stage}': {e}")

    def child(self, start: float, end: float) -> "ProgressReporter":
        """Reporter for a nested operation occupying [start, end] of this scale."""
        span = self._end - self._start
        return ProgressReporter(
            self._callback,
            start=self._start + span * start / 100.0,
            end=self._start + span * end / 100.0,
            _cursor=self._cursor,
        )


class ProgressStream(Generic[T]):
    """Async iterator over the progress events of one run.

    ``run`` receives the callback to pass as ``on_progress``. After the
    iteration finishes, the run's return value is available as ``result``;
    if the run raised, the exception propagates out of the ``async for``.

        stream = ProgressStream(lambda cb: generator.generate_article(topic, on_progress=cb))
        async for event in stream:
            print(event.percentage, event.message)
        article = stream.result
    """

    def __init__(self, run: Callable[[ProgressCallback], Awaitable[T]]):
        self._run = run
        self.result: T | None = None

    def __aiter__(self) -> AsyncIterator[ProgressEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[ProgressEvent]:
        queue: asyncio.Queue[ProgressEvent | None] = asyncio.Queue()
        task = asyncio.ensure_future(self._run(queue.put_nowait))
        task.add_done_callback(lambda _: queue.put_nowait(None))
        try:
            while (event := await queue.get()) is not None:
                yield event
            self.result = await task
        finally:
            if not task.done():
                task.cancel()
