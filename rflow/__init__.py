from ._errors import (
    ConfigurationError,
    InvalidStateError,
    ProcessorError,
    ReentrantDispatchError
)
from ._middleware import (
    Middleware,
    MiddlewareFunction,
    MiddlewareLike,
    as_middleware
)
from ._model import Action, State, action_name
from ._options import ProcessorOptions
from ._processor import (
    LoggingStateProcessor,
    ProcessOutcome,
    RejectedHandler,
    StateChangeHandler,
    StateProcessor,
    create_processor
)
from ._reducer import Reducer, ReducerFunction, ReducerLike, as_reducer
from ._reject import REJECT, Rejectable, RejectType, is_reject


__all__ = (
    "Action",
    "ConfigurationError",
    "InvalidStateError",
    "LoggingStateProcessor",
    "Middleware",
    "MiddlewareFunction",
    "MiddlewareLike",
    "ProcessOutcome",
    "ProcessorError",
    "ProcessorOptions",
    "REJECT",
    "Reducer",
    "ReducerFunction",
    "ReducerLike",
    "ReentrantDispatchError",
    "RejectType",
    "Rejectable",
    "RejectedHandler",
    "State",
    "StateChangeHandler",
    "StateProcessor",

    "action_name",
    "as_middleware",
    "as_reducer",
    "create_processor",
    "is_reject",
)
