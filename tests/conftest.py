from typing import Optional

import pytest

from rflow import REJECT, Action, State, StateProcessor


class Post(State):
    id: int


class HomeState(State):
    loading: bool = False
    posts: Optional[list[Post]] = None


class LoadPosts(Action):
    name = "Load Posts"

    posts: Optional[list[Post]] = None


class OpenPost(Action):
    name = "Open Post"

    post_id: int


def home_reducer(state: HomeState, action: Action) -> HomeState:
    if isinstance(action, LoadPosts):
        if action.posts is None:
            return state.model_copy(update={"loading": True})

        return state.model_copy(update={"loading": False, "posts": action.posts})

    return state


def route_posts(state: HomeState, action: Action):
    if isinstance(action, OpenPost):
        return REJECT

    return state


class RecordingProcessor(StateProcessor):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)

        self.rejections = []
        self.commits = []

        self.set_state_change_handler(self.commits.append)

    def rejected(self, state, action) -> None:
        self.rejections.append((state, action))


@pytest.fixture
def processor() -> RecordingProcessor:
    return RecordingProcessor(HomeState(), home_reducer)
