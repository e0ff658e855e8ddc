"""Blocking API over an :class:`AsyncObjectMapper`."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any, Self, TypeVar, override

from .protocol import ContextT, InputT, Mapper, MapperFunction, OutputT


if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterable
    from concurrent.futures import Future
    from types import TracebackType

    from .async_object_mapper import AsyncObjectMapper


logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class _AsyncLoopBridge:
    """Run coroutines to completion on a dedicated event loop thread."""

    def __init__(self) -> None:
        super().__init__()
        self._loop_ready = threading.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread = threading.Thread(target=self._run, name="exhaustive-mapper-blocking", daemon=True)
        self._thread.start()
        _ = self._loop_ready.wait()
        logger.debug("started blocking mapper loop thread %s", self._thread.name)

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._loop_ready.set()
        try:
            loop.run_forever()
        finally:
            loop.close()

    @property
    def is_running(self) -> bool:
        return self._loop is not None and self._thread.is_alive()

    def run(self, coroutine: Coroutine[Any, Any, _T]) -> _T:
        if self._loop is None or not self._thread.is_alive():
            coroutine.close()
            msg = "blocking mapper loop is not running"
            raise RuntimeError(msg)
        future: Future[_T] = asyncio.run_coroutine_threadsafe(coroutine, self._loop)
        return future.result()

    def close(self) -> None:
        if self._loop is None or not self._thread.is_alive():
            return
        _ = self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)
        logger.debug("stopped blocking mapper loop thread %s", self._thread.name)


class BlockingObjectMapper(Mapper[InputT, OutputT, ContextT]):
    """Synchronous ``map`` / ``array`` for an :class:`AsyncObjectMapper`.

    The wrapped mapper runs on a private event loop thread, so this works
    from plain synchronous code as well as from inside a running loop.
    Call :meth:`close` (or use a ``with`` block) to stop the thread.
    """

    def __init__(self, mapper: AsyncObjectMapper[InputT, OutputT, ContextT]) -> None:
        super().__init__(mapper.schema)
        self._mapper = mapper
        self._bridge = _AsyncLoopBridge()

    @property
    def mapper(self) -> AsyncObjectMapper[InputT, OutputT, ContextT]:
        return self._mapper

    @override
    def map(self, source: InputT | None, context: ContextT | None = None) -> OutputT | None:
        """Map one input, blocking until every transform has resolved."""
        return self._bridge.run(self._mapper.map(source, context))

    @override
    def array(self, source: Iterable[InputT] | None, context: ContextT | None = None) -> list[OutputT] | None:
        """Map an iterable of inputs, blocking until all are done."""
        return self._bridge.run(self._mapper.array(source, context))

    @override
    def to_function(self) -> MapperFunction:
        def mapper_function(source: InputT | None, context: ContextT | None = None, /) -> OutputT | None:
            return self.map(source, context)

        mapper_function.schema = self._schema  # type: ignore[attr-defined]
        return mapper_function  # type: ignore[return-value]

    def close(self) -> None:
        """Stop the loop thread used by this mapper."""
        self._bridge.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
