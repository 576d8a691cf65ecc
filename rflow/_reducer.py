from typing import Callable, Generic, TypeVar, Union

from ._errors import ConfigurationError
from ._reject import Rejectable


A = TypeVar("A")
S = TypeVar("S")


__all__ = (
    "Reducer",
    "ReducerFunction",
    "ReducerLike",
    "as_reducer",
)


ReducerFunction = Callable[[S, A], Rejectable[S]]


class Reducer(Generic[S, A]):
    def reduce(self, state: S, action: A) -> Rejectable[S]:
        raise NotImplementedError


ReducerLike = Union[Reducer[S, A], ReducerFunction]


class _FunctionReducer(Reducer[S, A]):
    def __init__(self, function: ReducerFunction) -> None:
        self.function = function

    def reduce(self, state: S, action: A) -> Rejectable[S]:
        return self.function(state, action)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.function!r})"


def as_reducer(reducer: ReducerLike) -> Reducer[S, A]:
    if isinstance(reducer, Reducer):
        return reducer

    if callable(getattr(reducer, "reduce", None)):
        return _FunctionReducer(reducer.reduce)  # type: ignore[union-attr]

    if callable(reducer):
        return _FunctionReducer(reducer)

    raise ConfigurationError(f"{reducer!r} is not a reducer")
