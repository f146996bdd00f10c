from __future__ import annotations

import pytest

from conftest import RecordingFeedback, drop_at
from stacker_config import CONFIG
from stacker_game import GameState, Snapshot, StackerGame
from stacker_geometry import Outcome
from stacker_persistence import MemoryBestScoreStore
from stacker_rng import StackRandom


def test_start_builds_base_and_active_block(game: StackerGame) -> None:
    assert game.state is GameState.START
    game.start_game()
    assert game.state is GameState.PLAYING
    assert len(game.stack) == 1
    base = game.stack[0]
    assert (base.x, base.width) == (100, 100)
    assert base.y == CONFIG["FIELD_HEIGHT"] - CONFIG["BLOCK_HEIGHT"]
    assert game.active.x == 0
    assert game.active.y == base.y - CONFIG["BLOCK_HEIGHT"]
    assert game.oscillator.direction == 1
    assert game.oscillator.speed == 3.0


def test_place_is_ignored_outside_playing(game: StackerGame) -> None:
    assert game.place() is None
    game.start_game()
    game.pause()
    assert game.place() is None
    assert len(game.stack) == 1


def test_perfect_scenario_on_easy(game: StackerGame, feedback: RecordingFeedback) -> None:
    assert game.set_difficulty("easy")
    game.start_game()
    res = drop_at(game, 100)
    assert res.outcome is Outcome.PERFECT
    assert game.stats.score == 20
    assert game.stats.combo == 1
    assert game.stack[-1].width == 100
    assert game.falling.pieces == []
    assert game.oscillator.speed == pytest.approx(2.15)
    assert feedback.events == ["perfect"]
    assert game.show_perfect


def test_partial_scenario(game: StackerGame, feedback: RecordingFeedback) -> None:
    game.start_game()
    res = drop_at(game, 150)
    assert res.outcome is Outcome.PARTIAL
    assert res.overlap_width == 50
    assert [(p.x, p.width) for p in game.falling.pieces] == [(200, 50)]
    assert (game.stack[-1].x, game.stack[-1].width) == (150, 50)
    assert game.stats.score == 10
    assert game.stats.combo == 0
    assert game.active.width == 50
    assert feedback.events == ["drop"]


def test_miss_scenario_ends_run(game: StackerGame, feedback: RecordingFeedback) -> None:
    game.start_game()
    res = drop_at(game, 250)
    assert res.outcome is Outcome.MISS
    assert res.overlap_width == -50
    assert game.state is GameState.GAME_OVER
    assert game.active is None
    assert len(game.stack) == 1
    assert [(p.x, p.width) for p in game.falling.pieces] == [(250, 100)]
    assert feedback.events == ["game_over"]


def test_width_collapse_records_losing_block(game: StackerGame) -> None:
    game.start_game()
    widths = []
    for x in (155, 180, 192):
        drop_at(game, x)
        widths.append(game.stack[-1].width)
    assert widths == [45, 20, 8]
    assert game.state is GameState.GAME_OVER
    assert len(game.stack) == 4
    assert game.stats.score == 30
    assert game.active is None


def test_width_never_grows_and_perfect_keeps_it(game: StackerGame) -> None:
    game.start_game()
    seen = [game.stack[-1].width]
    for x in (120, 120, 140, 140):
        drop_at(game, x)
        seen.append(game.stack[-1].width)
    assert seen == [100, 80, 80, 60, 60]
    assert all(a >= b for a, b in zip(seen, seen[1:]))


def test_streak_bonus_and_reset(game: StackerGame) -> None:
    game.start_game()
    for _ in range(3):
        drop_at(game, 100)
    assert game.stats.score == 20 + 30 + 40
    assert game.stats.combo == 3
    drop_at(game, 110)
    assert game.stats.combo == 0
    assert game.stats.score == 100


def test_next_block_spawns_on_last_wall(game: StackerGame) -> None:
    game.start_game()
    game.oscillator.direction = -1
    drop_at(game, 150)
    assert game.active.x == CONFIG["FIELD_WIDTH"] - 50


def test_tick_oscillates_only_while_playing(game: StackerGame) -> None:
    game.tick(16)
    game.start_game()
    game.tick(16)
    assert game.active.x == 3.0
    game.pause()
    game.tick(16)
    assert game.active.x == 3.0
    game.resume()
    game.tick(16)
    assert game.active.x == 6.0


def test_fragments_fall_on_their_own_interval(game: StackerGame) -> None:
    game.start_game()
    drop_at(game, 150)
    y0 = game.falling.pieces[0].y
    game.tick(10)
    assert game.falling.pieces[0].y == y0
    game.tick(10)
    assert game.falling.pieces[0].y == y0 + CONFIG["FALL_RATE"]


def test_drivers_stop_on_game_over(game: StackerGame) -> None:
    game.start_game()
    drop_at(game, 250)
    y0 = game.falling.pieces[0].y
    game.tick(100)
    assert game.falling.pieces[0].y == y0
    assert not game.osc_driver.running
    assert not game.fall_driver.running


def test_perfect_flag_clears_after_delay_even_after_restart(game: StackerGame) -> None:
    game.start_game()
    drop_at(game, 100)
    game.tick(CONFIG["PERFECT_FLASH_MS"] - 1)
    assert game.show_perfect
    drop_at(game, 300)
    game.restart()
    game.tick(1)
    assert not game.show_perfect


def test_second_perfect_rearms_flash(game: StackerGame) -> None:
    game.start_game()
    drop_at(game, 100)
    game.tick(400)
    drop_at(game, 100)
    game.tick(400)
    assert game.show_perfect
    game.tick(200)
    assert not game.show_perfect


def test_best_score_saved_only_on_strict_improvement(feedback: RecordingFeedback) -> None:
    store = MemoryBestScoreStore(best=90)
    game = StackerGame(store=store, feedback=feedback, rng=StackRandom(1))
    assert game.stats.best == 90

    game.start_game()
    for _ in range(3):
        drop_at(game, 100)
    drop_at(game, 300)
    assert game.stats.score == 90
    assert store.best == 90
    assert not game.show_confetti
    assert game.snapshot().new_record  # tie shows the badge

    game.restart()
    for _ in range(3):
        drop_at(game, 100)
    drop_at(game, 150)
    drop_at(game, 300)
    assert store.best == 100
    assert game.stats.best == 100
    assert game.show_confetti
    game.tick(CONFIG["CONFETTI_MS"])
    assert not game.show_confetti


def test_collapse_counts_final_placement_toward_best(store: MemoryBestScoreStore, game: StackerGame) -> None:
    game.start_game()
    for x in (155, 180, 192):
        drop_at(game, x)
    assert store.best == 30


def test_state_transitions(game: StackerGame) -> None:
    game.resume()
    game.to_menu()
    game.restart()
    assert game.state is GameState.START

    game.start_game()
    game.toggle_pause()
    assert game.state is GameState.PAUSED
    game.start_game()
    assert game.state is GameState.PAUSED
    game.toggle_pause()
    assert game.state is GameState.PLAYING

    drop_at(game, 300)
    assert game.state is GameState.GAME_OVER
    game.pause()
    assert game.state is GameState.GAME_OVER
    game.restart()
    assert game.state is GameState.PLAYING
    assert (len(game.stack), game.stats.score, game.camera) == (1, 0, 0)
    assert game.falling.pieces == []

    drop_at(game, 300)
    game.to_menu()
    assert game.state is GameState.START
    game.start_game()
    assert game.state is GameState.PLAYING


def test_difficulty_locked_during_run(game: StackerGame) -> None:
    with pytest.raises(KeyError):
        game.set_difficulty("nightmare")
    game.start_game()
    assert game.set_difficulty("hard") is False
    assert game.profile.speed == 3.0
    drop_at(game, 300)
    assert game.set_difficulty("hard") is True
    game.restart()
    assert game.oscillator.speed == 4.0


def test_reset_best_score_clears_store() -> None:
    store = MemoryBestScoreStore(best=70)
    game = StackerGame(store=store)
    game.reset_best_score()
    assert store.best == 0
    assert game.stats.best == 0


def test_camera_scrolls_once_stack_exceeds_window(game: StackerGame) -> None:
    game.start_game()
    rows = CONFIG["VISIBLE_ROWS"]
    for _ in range(rows - 1):
        drop_at(game, 100)
    assert game.camera == 0
    drop_at(game, 100)
    assert game.camera == CONFIG["BLOCK_HEIGHT"]


def test_speed_is_non_decreasing_and_capped(game: StackerGame) -> None:
    game.set_difficulty("hard")
    game.start_game()
    speeds = [game.oscillator.speed]
    for _ in range(40):
        drop_at(game, 100)
        speeds.append(game.oscillator.speed)
    assert speeds[0] == 4.0
    assert all(a <= b for a, b in zip(speeds, speeds[1:]))
    assert speeds[-1] == 14.0


def test_topping_heights_stack_cumulatively(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(CONFIG, "THEME", "toppings")
    game = StackerGame(rng=StackRandom(5))
    game.start_game()
    assert game.stack[0].kind.name == "bun"
    for _ in range(30):
        drop_at(game, 100)
    total = 0
    for b in game.stack:
        total += b.height
        assert b.y == CONFIG["FIELD_HEIGHT"] - total
    window = CONFIG["VISIBLE_ROWS"] * CONFIG["BLOCK_HEIGHT"]
    assert game.camera == max(0, total - window)


def test_listeners_receive_snapshots(game: StackerGame) -> None:
    snaps: list[Snapshot] = []
    game.subscribe(snaps.append)
    game.start_game()
    assert snaps[-1].state is GameState.PLAYING
    assert snaps[-1].count == 1
    drop_at(game, 150)
    last = snaps[-1]
    assert last.score == 10
    assert len(last.fragments) == 1
    last.fragments[0].y += 1000
    assert game.falling.pieces[0].y != last.fragments[0].y
