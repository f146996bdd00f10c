"""
Rendering helpers for the stacker.

- Pre-render the static background (field + panel frame) per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Draw everything else from a game Snapshot; nothing here feeds back into the game.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Optional, Tuple

from stacker_block import Block, FallingFragment
from stacker_game import GameState, Snapshot
from stacker_layout import Dims

TEXT = (200, 210, 240)
DIM_TEXT = (165, 175, 215)


def shade(color: Tuple[int, int, int], amount: int) -> Tuple[int, int, int]:
    return tuple(max(0, min(255, c + amount)) for c in color)


def field_hint(snap: Snapshot) -> Optional[str]:
    """Drop prompt shown until the first block lands on the base."""
    if snap.state is GameState.PLAYING and snap.count == 1:
        return "Space to drop!"
    return None


@dataclass
class HudCache:
    score: int = -1
    best: int = -1
    count: int = -1
    difficulty: str = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    best_s: Optional[pygame.Surface] = None
    count_s: Optional[pygame.Surface] = None
    difficulty_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None


class RenderAssets:
    """Holds pre-rendered assets and draws snapshots."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self.hud = HudCache()
        self.field = pygame.Surface((dims.field_w, dims.field_h))

    # ---------- Static background (field + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10, 13, 34))
        pygame.draw.rect(self.bg, (50, 60, 100), (d.field_x - 1, d.field_y - 1, d.field_w + 2, d.field_h + 2), 1)
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.field_h)
        pygame.draw.rect(self.bg, (21, 25, 53), panel_rect)
        pygame.draw.rect(self.bg, (50, 60, 100), panel_rect, 1)

    # ---------- Field ----------
    def _block_rect(self, b, camera: float) -> pygame.Rect:
        d = self.dims
        return pygame.Rect(d.px(b.x), d.px(b.y + camera), max(1, d.px(b.width)), max(1, d.px(b.height)))

    def draw_block(self, b: Block, camera: float):
        r = self._block_rect(b, camera)
        pygame.draw.rect(self.field, b.kind.color, r)
        top = r.copy(); top.height = max(1, r.height // 3)
        pygame.draw.rect(self.field, shade(b.kind.color, 20), top)
        pygame.draw.rect(self.field, shade(b.kind.color, -15), r, 1)

    def draw_fragment(self, f: FallingFragment, camera: float):
        r = self._block_rect(f, camera)
        s = pygame.Surface(r.size, pygame.SRCALPHA)
        s.fill(f.kind.color)
        rotated = pygame.transform.rotate(s, -f.rotation)
        self.field.blit(rotated, rotated.get_rect(center=r.center))

    def draw_field(self, screen: pygame.Surface, snap: Snapshot):
        self.field.fill((28, 22, 30))
        for b in snap.stack:
            self.draw_block(b, snap.camera)
        if snap.active is not None and snap.state in (GameState.PLAYING, GameState.PAUSED):
            self.draw_block(snap.active, snap.camera)
        for f in snap.fragments:
            self.draw_fragment(f, snap.camera)
        if snap.show_perfect:
            msg = self.big_font.render(f"PERFECT! +{snap.last_award}", True, (255, 200, 60))
            self.field.blit(msg, msg.get_rect(center=(self.dims.field_w // 2, self.dims.field_h // 4)))
        hint = field_hint(snap)
        if hint:
            msg = self.font.render(hint, True, DIM_TEXT)
            self.field.blit(msg, msg.get_rect(center=(self.dims.field_w // 2, self.dims.field_h // 2)))
        screen.blit(self.field, (self.dims.field_x, self.dims.field_y))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, snap: Snapshot):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Stacker", True, (197, 202, 233))
        if snap.score != self.hud.score:
            self.hud.score = snap.score
            self.hud.score_s = f.render(f"Score: {snap.score}", True, TEXT)
        if snap.best != self.hud.best:
            self.hud.best = snap.best
            self.hud.best_s = f.render(f"Best: {snap.best}", True, TEXT)
        if snap.count != self.hud.count:
            self.hud.count = snap.count
            self.hud.count_s = f.render(f"Stacked: {snap.count}", True, TEXT)
        if snap.difficulty != self.hud.difficulty:
            self.hud.difficulty = snap.difficulty
            self.hud.difficulty_s = f.render(f"Difficulty: {snap.difficulty}", True, TEXT)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        y = d.panel_y + 44
        for surf in (self.hud.score_s, self.hud.best_s, self.hud.count_s, self.hud.difficulty_s):
            screen.blit(surf, (d.panel_x + 12, y)); y += 24
        if snap.state is GameState.PLAYING and snap.combo > 0:
            screen.blit(f.render(f"Combo x{snap.combo + 1}", True, (255, 160, 80)), (d.panel_x + 12, y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("Space/Enter Drop", True, DIM_TEXT),
                f.render("P Pause", True, DIM_TEXT),
                f.render("R Restart • M Menu", True, DIM_TEXT),
                f.render("1/2/3 Difficulty", True, DIM_TEXT),
                f.render("F1 Settings", True, DIM_TEXT),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    # ---------- Screens ----------
    def _center_lines(self, screen: pygame.Surface, lines):
        d = self.dims
        shade_s = pygame.Surface((d.field_w, d.field_h), pygame.SRCALPHA)
        shade_s.fill((0, 0, 0, 150))
        screen.blit(shade_s, (d.field_x, d.field_y))
        y = d.field_y + d.field_h // 2 - 20 * len(lines)
        for text, big, col in lines:
            surf = (self.big_font if big else self.font).render(text, True, col)
            screen.blit(surf, surf.get_rect(center=(d.field_x + d.field_w // 2, y)))
            y += 44 if big else 26

    def draw(self, screen: pygame.Surface, snap: Snapshot):
        screen.blit(self.bg, (0, 0))
        self.draw_field(screen, snap)
        self.draw_panel_hud(screen, snap)
        if snap.state is GameState.START:
            self._center_lines(screen, [
                ("STACKER", True, (255, 224, 102)),
                (f"< {snap.difficulty} >", False, TEXT),
                ("Space to start", False, DIM_TEXT),
                (f"Best: {snap.best}", False, DIM_TEXT),
            ])
        elif snap.state is GameState.PAUSED:
            self._center_lines(screen, [("PAUSED", True, TEXT), ("P to resume", False, DIM_TEXT)])
        elif snap.state is GameState.GAME_OVER:
            lines = [
                ("GAME OVER", True, (255, 220, 220)),
                (f"Score {snap.score} • {snap.count} stacked", False, TEXT),
            ]
            if snap.new_record:
                lines.append(("New record!", False, (255, 200, 60) if snap.show_confetti else TEXT))
            lines.append(("R restart • M menu", False, DIM_TEXT))
            self._center_lines(screen, lines)
