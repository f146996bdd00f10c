import pygame

from stacker_block import THEMES
from stacker_config import CONFIG, DIFFICULTIES
from stacker_game import StackerGame


class Overlay:
    """Settings sheet: difficulty, theme, sound, reset best score."""
    def __init__(self, game: StackerGame):
        self.game = game
        self.active = False
        self.items = [
            ("DIFFICULTY", "Difficulty", tuple(DIFFICULTIES)),
            ("THEME", "Theme", tuple(THEMES)),
            ("SOUND", "Sound effects", (False, True)),
            ("RESET", "Reset best score", None),
        ]
        self.index = 0

    def toggle(self): self.active = not self.active

    def handle(self, e):
        if e.key in (pygame.K_ESCAPE, pygame.K_F1, pygame.K_s): self.toggle(); return
        if e.key == pygame.K_UP: self.index = (self.index - 1) % len(self.items); return
        if e.key == pygame.K_DOWN: self.index = (self.index + 1) % len(self.items); return
        key, label, choices = self.items[self.index]
        if choices is None:
            if e.key in (pygame.K_RETURN, pygame.K_KP_ENTER): self.game.reset_best_score()
            return
        if e.key not in (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_RETURN, pygame.K_KP_ENTER):
            return
        step = -1 if e.key == pygame.K_LEFT else 1
        value = choices[(choices.index(CONFIG[key]) + step) % len(choices)]
        if key == "DIFFICULTY":
            self.game.set_difficulty(value)
        else:
            CONFIG[key] = value

    def draw(self, screen, font, w, h):
        if not self.active: return
        s = pygame.Surface((w - 80, h - 80), pygame.SRCALPHA); s.fill((20, 25, 40, 230))
        screen.blit(s, (40, 40))
        screen.blit(font.render("SETTINGS (F1/Esc to close)", True, (230, 240, 255)), (60, 56))
        y = 100
        for i, (key, label, choices) in enumerate(self.items):
            col = (255, 255, 255) if i == self.index else (200, 210, 235)
            if choices is None:
                txt = f"{label}  (best: {self.game.stats.best})"
            elif isinstance(CONFIG[key], bool):
                txt = f"{label}: {'on' if CONFIG[key] else 'off'}"
            else:
                txt = f"{label}: {CONFIG[key]}"
            screen.blit(font.render(txt, True, col), (60, y)); y += 30
