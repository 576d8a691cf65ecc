from typing import Callable, Generic, TypeVar, Union

from ._errors import ConfigurationError
from ._reject import Rejectable


A = TypeVar("A")
S = TypeVar("S")


__all__ = (
    "Middleware",
    "MiddlewareFunction",
    "MiddlewareLike",
    "as_middleware",
)


MiddlewareFunction = Callable[[S, A], Rejectable[S]]


class Middleware(Generic[S, A]):
    """Interceptor placed before or after the reducer.

    Has the reducer's shape: return the (possibly transformed) state to pass
    on, or ``REJECT`` to stop the pipeline. Unlike a reducer, middleware may
    have side effects such as logging or routing.
    """

    def reduce(self, state: S, action: A) -> Rejectable[S]:
        raise NotImplementedError


MiddlewareLike = Union[Middleware[S, A], MiddlewareFunction]


class _FunctionMiddleware(Middleware[S, A]):
    def __init__(self, function: MiddlewareFunction) -> None:
        self.function = function

    def reduce(self, state: S, action: A) -> Rejectable[S]:
        return self.function(state, action)

    def __repr__(self) -> str:
        name = getattr(self.function, "__qualname__", repr(self.function))

        return f"{type(self).__name__}({name})"


def as_middleware(middleware: MiddlewareLike) -> Middleware[S, A]:
    if isinstance(middleware, Middleware):
        return middleware

    if callable(getattr(middleware, "reduce", None)):
        return _FunctionMiddleware(middleware.reduce)  # type: ignore[union-attr]

    if callable(middleware):
        return _FunctionMiddleware(middleware)

    raise ConfigurationError(f"{middleware!r} is not a middleware")
