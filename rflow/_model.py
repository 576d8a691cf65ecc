from typing import ClassVar

from pydantic import BaseModel, ConfigDict


__all__ = (
    "Action",
    "State",
    "action_name",
)


class State(BaseModel):
    model_config = ConfigDict(frozen=True)


class Action(BaseModel):
    """Base for named, read-only commands.

    Subclasses set ``name`` as a plain class attribute; it defaults to the
    class name.
    """

    model_config = ConfigDict(frozen=True)

    name: ClassVar[str] = ""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        if not cls.__dict__.get("name"):
            cls.name = cls.__name__


def action_name(action: object) -> str:
    name = getattr(action, "name", None)

    if isinstance(name, str) and name:
        return name

    return type(action).__name__
