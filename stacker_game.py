"""
Run engine: state machine, placement sequence and timed flags.

The game object is the only thing that mutates run state. Hosts drive it
through two kinds of call:

  • tick(dt_ms)   once per frame; advances oscillation, falling fragments
                  and the flag timeouts
  • inputs        start_game / place / pause / resume / restart / to_menu

Each call finishes all of its effects before returning, so a placement is
never interleaved with an oscillation tick.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from statemachine import State, StateMachine

from stacker_block import Block, FallingFragment, theme
from stacker_clock import Driver, Timeout
from stacker_config import CONFIG, difficulty
from stacker_geometry import Outcome, Resolution, break_off, resolve_overlap
from stacker_layout import camera_offset
from stacker_motion import FallingPieces, Oscillator, speed_for
from stacker_persistence import MemoryBestScoreStore
from stacker_rng import StackRandom
from stacker_score import ScoreTracker

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class RunPhase(StateMachine):
    """Guards which transitions are legal; the game applies the effects."""

    menu = State("Start", value=GameState.START.value, initial=True)
    playing = State("Playing", value=GameState.PLAYING.value)
    paused = State("Paused", value=GameState.PAUSED.value)
    game_over = State("GameOver", value=GameState.GAME_OVER.value)

    begin = menu.to(playing)
    pause = playing.to(paused)
    resume = paused.to(playing)
    finish = playing.to(game_over)
    restart = game_over.to(playing)
    to_menu = game_over.to(menu)


class SilentFeedback:
    """Audio/haptics collaborator that does nothing."""
    def on_drop(self): pass
    def on_perfect(self): pass
    def on_game_over(self): pass


@dataclass(frozen=True)
class Snapshot:
    state: GameState
    stack: Tuple[Block, ...]
    active: Optional[Block]
    fragments: Tuple[FallingFragment, ...]
    score: int
    best: int
    combo: int
    last_award: int
    camera: float
    speed: float
    show_perfect: bool
    show_confetti: bool
    new_record: bool
    difficulty: str
    theme: str

    @property
    def count(self) -> int:
        return len(self.stack)


class StackerGame:
    def __init__(self, store=None, feedback=None, rng: Optional[StackRandom] = None):
        self.store = store if store is not None else MemoryBestScoreStore()
        self.feedback = feedback if feedback is not None else SilentFeedback()
        self.rng = rng if rng is not None else StackRandom(CONFIG["SEED"])
        self.phase = RunPhase()

        self.stats = ScoreTracker(best=self.store.load_best_score())
        self.difficulty = CONFIG["DIFFICULTY"]
        self.profile = difficulty(self.difficulty)
        self.theme = theme(CONFIG["THEME"])

        self.stack: List[Block] = []
        self.active: Optional[Block] = None
        self.falling = FallingPieces()
        self.oscillator = Oscillator(self.profile.speed)
        self.camera = 0.0

        self.show_perfect = False
        self.show_confetti = False
        self.perfect_timer = Timeout()
        self.confetti_timer = Timeout()

        self.osc_driver = Driver(self._oscillate)
        self.fall_driver = Driver(self._fall, CONFIG["FALL_TICK_MS"])
        self.listeners: List[Callable[[Snapshot], None]] = []

    # ---------- State ----------
    @property
    def state(self) -> GameState:
        return GameState(self.phase.current_state.value)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            state=self.state,
            stack=tuple(self.stack),
            active=self.active,
            fragments=tuple(replace(p) for p in self.falling.pieces),
            score=self.stats.score,
            best=self.stats.best,
            combo=self.stats.combo,
            last_award=self.stats.last_award,
            camera=self.camera,
            speed=self.oscillator.speed,
            show_perfect=self.show_perfect,
            show_confetti=self.show_confetti,
            new_record=self.state is GameState.GAME_OVER and self.stats.is_record,
            difficulty=self.difficulty,
            theme=self.theme.name,
        )

    def subscribe(self, listener: Callable[[Snapshot], None]):
        self.listeners.append(listener)

    def _notify(self):
        if not self.listeners:
            return
        snap = self.snapshot()
        for listener in self.listeners:
            listener(snap)

    # ---------- Inputs ----------
    def start_game(self):
        """Start a run from the menu, or restart one from game over."""
        state = self.state
        if state is GameState.START:
            self._init_run()
            self.phase.begin()
        elif state is GameState.GAME_OVER:
            self._init_run()
            self.phase.restart()
        else:
            return
        logger.info("Run started (difficulty=%s, theme=%s)", self.difficulty, self.theme.name)
        self._notify()

    def restart(self):
        if self.state is GameState.GAME_OVER:
            self.start_game()

    def to_menu(self):
        if self.state is not GameState.GAME_OVER:
            return
        self.phase.to_menu()
        self._notify()

    def pause(self):
        if self.state is not GameState.PLAYING:
            return
        self.phase.pause()
        self._stop_drivers()
        self._notify()

    def resume(self):
        if self.state is not GameState.PAUSED:
            return
        self.phase.resume()
        self.osc_driver.start()
        self.fall_driver.start()
        self._notify()

    def toggle_pause(self):
        if self.state is GameState.PLAYING:
            self.pause()
        elif self.state is GameState.PAUSED:
            self.resume()

    def set_difficulty(self, name: str) -> bool:
        """Pick the profile for the next run; ignored while a run is live."""
        profile = difficulty(name)
        if self.state in (GameState.PLAYING, GameState.PAUSED):
            return False
        self.difficulty = name
        self.profile = profile
        CONFIG["DIFFICULTY"] = name
        self._notify()
        return True

    def reset_best_score(self):
        self.store.clear_best_score()
        self.stats.best = 0
        logger.info("Best score cleared")
        self._notify()

    def place(self) -> Optional[Resolution]:
        if self.state is not GameState.PLAYING or self.active is None:
            return None

        active, top = self.active, self.stack[-1]
        res = resolve_overlap(active, top)
        self.falling.spawn(break_off(active, top, res, self.rng))

        if res.outcome is Outcome.MISS:
            logger.debug("Miss at x=%.1f (overlap %.1f)", active.x, res.overlap_width)
            self.active = None
            self.stats.break_streak()
            self._end_run()
            return res

        placed = res.placed
        if res.outcome is Outcome.PERFECT:
            self.stats.award(True)
            self.feedback.on_perfect()
            self.show_perfect = True
            self.perfect_timer.arm(CONFIG["PERFECT_FLASH_MS"], self._clear_perfect)
        else:
            self.stats.award(False)
            self.feedback.on_drop()
        logger.debug("%s: width %.1f -> %.1f, score %d, combo %d",
                     res.outcome.value, active.width, placed.width, self.stats.score, self.stats.combo)

        self.stack.append(placed)
        self.camera = camera_offset(self.stack)

        if placed.width < CONFIG["MIN_PLAYABLE_WIDTH"]:
            self.active = None
            self._end_run()
            return res

        speed = speed_for(self.profile, len(self.stack) - 1)
        self.active = self._spawn(placed.width, speed)
        self._notify()
        return res

    def tick(self, dt_ms: float):
        """Advance drivers and timeouts by `dt_ms` of wall time."""
        self.perfect_timer.advance(dt_ms)
        self.confetti_timer.advance(dt_ms)
        moved = self.osc_driver.advance(dt_ms)
        fell = self.fall_driver.advance(dt_ms)
        if moved or fell:
            self._notify()

    # ---------- Internals ----------
    def _init_run(self):
        self.profile = difficulty(self.difficulty)
        self.theme = theme(CONFIG["THEME"])
        width = CONFIG["INITIAL_BLOCK_WIDTH"]
        kind = self.theme.kind_for(0, self.rng)
        h = kind.block_height()
        base = Block((CONFIG["FIELD_WIDTH"] - width) / 2, CONFIG["FIELD_HEIGHT"] - h, width, h, kind)

        self.stack = [base]
        self.falling.clear()
        self.stats.reset()
        self.camera = 0.0
        self.oscillator.reset(self.profile.speed)
        self.active = self._spawn(width, self.profile.speed)
        self.osc_driver.start()
        self.fall_driver.start()

    def _spawn(self, width: float, speed: float) -> Block:
        kind = self.theme.kind_for(len(self.stack), self.rng)
        h = kind.block_height()
        x = self.oscillator.rearm(width, speed)
        return Block(x, self.stack[-1].y - h, width, h, kind)

    def _end_run(self):
        self._stop_drivers()
        if self.stats.settle():
            logger.info("New best score: %d", self.stats.best)
            self.store.save_best_score(self.stats.best)
            self.show_confetti = True
            self.confetti_timer.arm(CONFIG["CONFETTI_MS"], self._clear_confetti)
        self.phase.finish()
        self.feedback.on_game_over()
        logger.info("Game over: score %d, %d blocks", self.stats.score, len(self.stack))
        self._notify()

    def _stop_drivers(self):
        self.osc_driver.stop()
        self.fall_driver.stop()

    def _oscillate(self):
        if self.active is None:
            return
        x = self.oscillator.step(self.active.width)
        self.active = replace(self.active, x=x)

    def _fall(self):
        self.falling.step()

    def _clear_perfect(self):
        self.show_perfect = False
        self._notify()

    def _clear_confetti(self):
        self.show_confetti = False
        self._notify()
