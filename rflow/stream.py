from __future__ import annotations

import asyncio
import inspect
import logging

from asyncio import Lock, Queue, Task
from typing import (
    Any,
    AsyncIterator,
    Callable,
    Generic,
    Optional,
    TypeVar,
    Union
)

from pydantic import BaseModel, ConfigDict

from ._errors import ConfigurationError, InvalidStateError
from ._model import action_name
from ._options import ProcessorOptions
from ._reducer import Reducer, ReducerLike, as_reducer
from ._reject import REJECT


__all__ = (
    "Reduction",
    "StreamMiddleware",
    "StreamMiddlewareLike",
    "StreamStateProcessor",
    "StreamTransformer",
    "Subscriber",
    "Unsubscribe",

    "as_stream_middleware",
    "of_type",
    "tap",
)


A = TypeVar("A")
S = TypeVar("S")
T = TypeVar("T")


logger = logging.getLogger(__name__)


class Reduction(BaseModel, Generic[S, A]):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: S
    action: A


StreamTransformer = Callable[[AsyncIterator[T]], AsyncIterator[T]]
Subscriber = Callable[[A, S], None]
Unsubscribe = Callable[[], None]


class StreamMiddleware(Generic[T]):
    def transform(self, items: AsyncIterator[T]) -> AsyncIterator[T]:
        raise NotImplementedError


StreamMiddlewareLike = Union[StreamMiddleware[T], StreamTransformer]


class _FunctionStreamMiddleware(StreamMiddleware[T]):
    def __init__(self, function: StreamTransformer) -> None:
        self.function = function

    def transform(self, items: AsyncIterator[T]) -> AsyncIterator[T]:
        return self.function(items)


def as_stream_middleware(
    middleware: StreamMiddlewareLike
) -> StreamMiddleware[T]:
    if isinstance(middleware, StreamMiddleware):
        return middleware

    if callable(middleware):
        return _FunctionStreamMiddleware(middleware)

    raise ConfigurationError(f"{middleware!r} is not a stream middleware")


def of_type(*types: type) -> StreamTransformer:
    async def transform(items: AsyncIterator[Any]) -> AsyncIterator[Any]:
        async for item in items:
            if isinstance(item, types):
                yield item

    return transform


def tap(function: Callable[[T], Any]) -> StreamTransformer:
    async def transform(items: AsyncIterator[T]) -> AsyncIterator[T]:
        async for item in items:
            result = function(item)

            if inspect.isawaitable(result):
                await result

            yield item

    return transform


class StreamStateProcessor(Generic[S, A]):
    """Continuous-sequence variant of the state processor.

    Pre-middleware transform the stream of dispatched actions, post-middleware
    transform the stream of reductions the reducer produces. Every reduction
    leaving the post chain is committed; one that is dropped is vetoed. The
    reducer reads the committed state when the post chain pulls the next
    reduction, so post transformers that read ahead see stale state.
    """

    _reducer: Reducer[S, A]
    _state: S

    _pre_middleware: list[StreamMiddleware[A]]
    _post_middleware: list[StreamMiddleware[Reduction[S, A]]]

    _subscribers: set[Subscriber]

    _lock: Lock

    _queue: Optional[Queue[A]]
    _task: Optional[Task]

    def __init__(
        self,
        reducer: ReducerLike,
        initial_state: S,
        options: Optional[ProcessorOptions] = None
    ) -> None:
        self._reducer = as_reducer(reducer)
        self._state = initial_state
        self._options = options or ProcessorOptions()

        self._pre_middleware = []
        self._post_middleware = []

        self._subscribers = set()

        self._lock = Lock()

        self._queue = None
        self._task = None

    @property
    def state(self) -> S:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_pre_middleware(self, middleware: StreamMiddlewareLike) -> None:
        self._pre_middleware.append(as_stream_middleware(middleware))

    def add_post_middleware(self, middleware: StreamMiddlewareLike) -> None:
        self._post_middleware.append(as_stream_middleware(middleware))

    def add_middleware(
        self,
        pre: StreamMiddlewareLike,
        post: StreamMiddlewareLike
    ) -> None:
        self.add_pre_middleware(pre)
        self.add_post_middleware(post)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        self._subscribers.add(subscriber)

        def unsubscribe() -> None:
            self._subscribers.remove(subscriber)

        return unsubscribe

    def rejected(self, state: S, action: A) -> None:
        logger.info("Rejected %r with %r", action, state)

    async def bind(self) -> None:
        if self.is_running:
            raise InvalidStateError

        async with self._lock:
            self._queue = Queue()
            self._task = asyncio.create_task(self._process(self._queue))

    async def unbind(self) -> None:
        if self._task is None:
            raise InvalidStateError

        async with self._lock:
            task = self._task

            self._queue = None
            self._task = None

            task.cancel()

        await asyncio.wait((task,))

    async def dispatch(self, action: A) -> None:
        if not self.is_running:
            raise InvalidStateError

        assert self._queue is not None

        await self._queue.put(action)

    def _notify(self, action: A, state: S) -> None:
        for subscriber in list(self._subscribers):
            subscriber(action, state)

    async def _source(self, queue: Queue[A]) -> AsyncIterator[A]:
        while True:
            yield await queue.get()

    async def _reduce(
        self,
        actions: AsyncIterator[A]
    ) -> AsyncIterator[Reduction[S, A]]:
        async for action in actions:
            try:
                result = self._reducer.reduce(self._state, action)
            except Exception:
                logger.exception(
                    "Reducer failed on %s, discarding action",
                    action_name(action)
                )

                continue

            if result is REJECT:
                self.rejected(self._state, action)

                continue

            yield Reduction(state=result, action=action)

    async def _process(self, queue: Queue[A]) -> None:
        actions: AsyncIterator[A] = self._source(queue)

        for pre in self._pre_middleware:
            actions = pre.transform(actions)

        reductions = self._reduce(actions)

        for post in self._post_middleware:
            reductions = post.transform(reductions)

        try:
            async for reduction in reductions:
                async with self._lock:
                    self._state = reduction.state

                if self._options.log_commits:
                    logger.debug("%s committed", action_name(reduction.action))

                self._notify(reduction.action, reduction.state)
        except Exception:
            logger.exception("Stream pipeline failed, processing stopped")
