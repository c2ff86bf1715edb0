# tools/run_game.py
# Play a .lvl (or a freshly generated level) one turn per key press.
#   arrows / WASD  step
#   space          wait a turn
#   C              log whether the current level is still completable

from __future__ import annotations

import argparse
import logging
import time

import pygame

from keygrid.grid import LEVEL_SIZE, Direction
from keygrid.engine.update import GameStats, update_level
from keygrid.levelio import load_level
from keygrid.logger_config import configure_logging
from keygrid.mapgen.generator import generate_level
from keygrid.render.tileset import Tileset, draw_level
from keygrid.rng import Xoroshiro128Plus
from keygrid.validate import is_completable

logger = logging.getLogger("keygrid.tools.run_game")

KEYMAP = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("level", nargs="?", help=".lvl file; generates one when omitted")
    ap.add_argument("--seed", type=int, nargs=2, default=[1, 1])
    ap.add_argument("--tile", type=int, default=32)
    args = ap.parse_args()
    configure_logging()

    level = load_level(args.level) if args.level else generate_level(tuple(args.seed))
    ns = time.perf_counter_ns()
    rng = Xoroshiro128Plus.from_seed(~ns, ~(ns >> 17))
    stats = GameStats()

    pygame.init()
    screen = pygame.display.set_mode((LEVEL_SIZE * args.tile, LEVEL_SIZE * args.tile))
    pygame.display.set_caption("keygrid")
    tileset = Tileset(args.tile)
    clock = pygame.time.Clock()

    game_over = False
    quit_requested = False
    while not (game_over or quit_requested):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key in KEYMAP:
                    game_over = update_level(level, KEYMAP[event.key], rng, stats)
                elif event.key == pygame.K_SPACE:
                    game_over = update_level(level, None, rng, stats)
                elif event.key == pygame.K_c:
                    logger.info("completable: %s", is_completable(level))
        screen.fill((0, 0, 0))
        draw_level(screen, level, tileset)
        pygame.display.flip()
        clock.tick(60)

    print("Game Over!")
    print(stats.summary())
    pygame.quit()


if __name__ == "__main__":
    main()
