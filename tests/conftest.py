from __future__ import annotations

from collections.abc import Generator
from dataclasses import replace

import pytest

from stacker_config import CONFIG
from stacker_game import StackerGame
from stacker_persistence import MemoryBestScoreStore
from stacker_rng import StackRandom


class RecordingFeedback:
    def __init__(self) -> None:
        self.events: list[str] = []

    def on_drop(self) -> None:
        self.events.append("drop")

    def on_perfect(self) -> None:
        self.events.append("perfect")

    def on_game_over(self) -> None:
        self.events.append("game_over")


@pytest.fixture(autouse=True)
def _restore_config() -> Generator[None, None, None]:
    """CONFIG is module-global and edited live; put it back after every test."""
    saved = dict(CONFIG)
    CONFIG["THEME"] = "blocks"
    yield
    CONFIG.clear()
    CONFIG.update(saved)


@pytest.fixture()
def rng() -> StackRandom:
    return StackRandom(1234)


@pytest.fixture()
def store() -> MemoryBestScoreStore:
    return MemoryBestScoreStore()


@pytest.fixture()
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture()
def game(store: MemoryBestScoreStore, feedback: RecordingFeedback, rng: StackRandom) -> StackerGame:
    return StackerGame(store=store, feedback=feedback, rng=rng)


def drop_at(game: StackerGame, x: float):
    """Freeze the active block at `x` and place it."""
    assert game.active is not None
    game.oscillator.x = x
    game.active = replace(game.active, x=x)
    return game.place()
