from enum import Enum
from typing import Literal, TypeVar, Union


__all__ = (
    "REJECT",
    "Rejectable",
    "RejectType",
    "is_reject",
)


S = TypeVar("S")


class RejectType(Enum):
    REJECT = "REJECT"

    def __repr__(self) -> str:
        return "REJECT"


REJECT = RejectType.REJECT

Rejectable = Union[S, Literal[RejectType.REJECT]]


def is_reject(value: object) -> bool:
    return value is REJECT
