from __future__ import annotations

import logging

from enum import Enum
from typing import Callable, Generic, Iterable, Optional, TypeVar

from ._errors import ConfigurationError, ReentrantDispatchError
from ._middleware import Middleware, MiddlewareLike, as_middleware
from ._model import action_name
from ._options import ProcessorOptions
from ._reducer import Reducer, ReducerLike, as_reducer
from ._reject import REJECT, Rejectable


A = TypeVar("A")
S = TypeVar("S")


__all__ = (
    "LoggingStateProcessor",
    "ProcessOutcome",
    "RejectedHandler",
    "StateChangeHandler",
    "StateProcessor",
    "create_processor",
)


logger = logging.getLogger(__name__)


StateChangeHandler = Callable[[S], None]
RejectedHandler = Callable[[S, A], None]


class ProcessOutcome(Enum):
    COMMITTED = "committed"
    REJECTED = "rejected"
    ABORTED = "aborted"


def _ignore_state_change(state: object) -> None:
    pass


class StateProcessor(Generic[S, A]):
    """Runs actions through pre-middleware, the reducer and post-middleware.

    A pipeline run either commits its final state and notifies the state
    change handler, is rejected (any stage returned ``REJECT``) and reported
    through :meth:`rejected`, or is aborted because the reducer raised. A
    raising middleware is logged and skipped; the next entry receives the
    state the failed entry was given.

    Processing is synchronous and unlocked. Callers must not dispatch from
    more than one thread at a time, and middleware or reducers must not
    dispatch back into the processor that is running them.
    """

    _reducer: Optional[Reducer[S, A]]
    _pre_middleware: list[Middleware[S, A]]
    _post_middleware: list[Middleware[S, A]]
    _state_change_handler: StateChangeHandler

    _state: S
    _options: ProcessorOptions
    _processing: bool

    def __init__(
        self,
        initial_state: S,
        reducer: Optional[ReducerLike] = None,
        options: Optional[ProcessorOptions] = None
    ) -> None:
        self._reducer = None if reducer is None else as_reducer(reducer)
        self._pre_middleware = []
        self._post_middleware = []
        self._state_change_handler = _ignore_state_change

        self._state = initial_state
        self._options = options or ProcessorOptions()
        self._processing = False

    @property
    def state(self) -> S:
        return self._state

    @property
    def options(self) -> ProcessorOptions:
        return self._options

    def set_reducer(self, reducer: ReducerLike) -> None:
        self._reducer = as_reducer(reducer)

    def set_state_change_handler(self, handler: StateChangeHandler) -> None:
        self._state_change_handler = handler

    def add_pre_middleware(self, middleware: MiddlewareLike) -> None:
        self._pre_middleware.append(as_middleware(middleware))

    def add_post_middleware(self, middleware: MiddlewareLike) -> None:
        self._post_middleware.append(as_middleware(middleware))

    def add_middleware(
        self,
        pre: MiddlewareLike,
        post: MiddlewareLike
    ) -> None:
        self.add_pre_middleware(pre)
        self.add_post_middleware(post)

    def rejected(self, state: S, action: A) -> None:
        raise NotImplementedError

    def reduce(self, state: S, action: A) -> Rejectable[S]:
        if self._reducer is None:
            raise ConfigurationError("No reducer has been set")

        return self._reducer.reduce(state, action)

    def dispatch(self, action: A) -> ProcessOutcome:
        return self.process(self._state, action)

    def process(self, state: S, action: A) -> ProcessOutcome:
        if self._reducer is None:
            raise ConfigurationError(
                f"Cannot process {action_name(action)}: no reducer has been set"
            )

        if self._processing and self._options.detect_reentrancy:
            raise ReentrantDispatchError(
                f"{action_name(action)} was dispatched while another action "
                "was being processed"
            )

        processing, self._processing = self._processing, True

        try:
            outcome, working = self._run(state, action)
        finally:
            self._processing = processing

        if outcome is ProcessOutcome.REJECTED:
            logger.debug("%s rejected", action_name(action))
            self.rejected(working, action)
        elif outcome is ProcessOutcome.COMMITTED:
            self._commit(working, action)

        return outcome

    def _run(self, state: S, action: A) -> tuple[ProcessOutcome, S]:
        working, rejected = self._run_middleware(
            "pre",
            self._pre_middleware,
            state,
            action
        )

        if rejected:
            return ProcessOutcome.REJECTED, working

        try:
            result = self.reduce(working, action)
        except Exception:
            logger.exception(
                "Reducer failed on %s, discarding action",
                action_name(action)
            )

            return ProcessOutcome.ABORTED, working

        if result is REJECT:
            return ProcessOutcome.REJECTED, working

        working, rejected = self._run_middleware(
            "post",
            self._post_middleware,
            result,
            action
        )

        if rejected:
            return ProcessOutcome.REJECTED, working

        return ProcessOutcome.COMMITTED, working

    def _run_middleware(
        self,
        stage: str,
        middleware: Iterable[Middleware[S, A]],
        state: S,
        action: A
    ) -> tuple[S, bool]:
        working = state

        for entry in middleware:
            try:
                result = entry.reduce(working, action)
            except Exception:
                logger.exception(
                    "%s-middleware %r failed on %s, skipping it",
                    stage,
                    entry,
                    action_name(action)
                )

                continue

            if result is REJECT:
                return working, True

            working = result

        return working, False

    def _commit(self, state: S, action: A) -> None:
        self._state = state

        if self._options.log_commits:
            logger.debug("%s committed", action_name(action))

        self._state_change_handler(state)


class LoggingStateProcessor(StateProcessor[S, A]):
    def rejected(self, state: S, action: A) -> None:
        logger.info("Rejected %r with %r", action, state)


class _HandlerStateProcessor(StateProcessor[S, A]):
    def __init__(
        self,
        initial_state: S,
        reducer: ReducerLike,
        rejected_handler: RejectedHandler,
        options: Optional[ProcessorOptions] = None
    ) -> None:
        super().__init__(initial_state, reducer, options)

        self._rejected_handler = rejected_handler

    def rejected(self, state: S, action: A) -> None:
        self._rejected_handler(state, action)


def create_processor(
    initial_state: S,
    reducer: ReducerLike,
    *,
    pre_middleware: Iterable[MiddlewareLike] = (),
    post_middleware: Iterable[MiddlewareLike] = (),
    on_state_change: Optional[StateChangeHandler] = None,
    on_rejected: Optional[RejectedHandler] = None,
    options: Optional[ProcessorOptions] = None
) -> StateProcessor[S, A]:
    processor: StateProcessor[S, A]

    if on_rejected is None:
        processor = LoggingStateProcessor(initial_state, reducer, options)
    else:
        processor = _HandlerStateProcessor(
            initial_state,
            reducer,
            on_rejected,
            options
        )

    for middleware in pre_middleware:
        processor.add_pre_middleware(middleware)

    for middleware in post_middleware:
        processor.add_post_middleware(middleware)

    if on_state_change is not None:
        processor.set_state_change_handler(on_state_change)

    return processor
