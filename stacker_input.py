"""Keyboard -> game command mapping"""
import pygame

from stacker_config import DIFFICULTIES
from stacker_game import GameState, StackerGame

DROP_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)
DIFFICULTY_KEYS = {pygame.K_1: "easy", pygame.K_2: "medium", pygame.K_3: "hard"}


def cycle_difficulty(current: str, step: int) -> str:
    names = list(DIFFICULTIES)
    return names[(names.index(current) + step) % len(names)]


def handle_key(game: StackerGame, key: int) -> bool:
    """Apply one KEYDOWN to the game; returns True if it meant something."""
    state = game.state
    if state is GameState.START:
        if key in DROP_KEYS:
            game.start_game(); return True
        if key in DIFFICULTY_KEYS:
            return game.set_difficulty(DIFFICULTY_KEYS[key])
        if key in (pygame.K_LEFT, pygame.K_RIGHT):
            step = -1 if key == pygame.K_LEFT else 1
            return game.set_difficulty(cycle_difficulty(game.difficulty, step))
        return False
    if state is GameState.PLAYING:
        if key in DROP_KEYS:
            game.place(); return True
        if key == pygame.K_p:
            game.pause(); return True
        return False
    if state is GameState.PAUSED:
        if key in (pygame.K_p, *DROP_KEYS):
            game.resume(); return True
        return False
    # GAME_OVER
    if key == pygame.K_r:
        game.restart(); return True
    if key in (pygame.K_m, pygame.K_ESCAPE, *DROP_KEYS):
        game.to_menu(); return True
    return False
