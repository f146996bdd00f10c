import logging
import sys

import pygame

from stacker_audio import SoundBoard
from stacker_config import CONFIG
from stacker_game import StackerGame
from stacker_input import handle_key
from stacker_layout import compute_dims
from stacker_overlay import Overlay
from stacker_persistence import JsonBestScoreStore
from stacker_render import RenderAssets
from stacker_rng import StackRandom

logger = logging.getLogger(__name__)


def open_window(dims, caption="Stacker", flags=pygame.DOUBLEBUF):
    """Window sized to `dims`; vsync is requested but not required."""
    size = (dims.total_w, dims.total_h)
    try:
        screen = pygame.display.set_mode(size, flags, vsync=1)
    except (TypeError, pygame.error) as e:
        logger.debug("vsync unavailable (%s)", e)
        screen = pygame.display.set_mode(size, flags)
    pygame.display.set_caption(caption)
    return screen


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    dims = compute_dims()
    screen = open_window(dims)
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    game = StackerGame(
        store=JsonBestScoreStore(),
        feedback=SoundBoard(),
        rng=StackRandom(CONFIG["SEED"]),
    )
    overlay = Overlay(game)
    logger.info("Loaded best score %d", game.stats.best)

    while True:
        dt = clock.tick_busy_loop(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_F1, pygame.K_s) and not overlay.active:
                    game.pause()
                    overlay.toggle(); continue
                if overlay.active:
                    overlay.handle(e); continue
                handle_key(game, e.key)

        game.tick(dt)

        snap = game.snapshot()
        render.draw(screen, snap)
        if overlay.active:
            overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
