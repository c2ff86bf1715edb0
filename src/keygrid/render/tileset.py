# src/keygrid/render/tileset.py
from __future__ import annotations

import os
from functools import lru_cache

import pygame

from ..grid import Level
from ..tiles import entity_bits
from .image import ENTITY_COLORS, SHEET_PATH, SPRITE_SIZE, fallback_box


class Tileset:
    """
    Cached entity sprites for pygame:
      - cuts entity N out of the sheet at x = N * SPRITE_SIZE
      - falls back to a colored square when there is no sheet
      - view() returns a surface of exactly (size, size)
    """
    def __init__(self, tile_size: int = SPRITE_SIZE, sheet_path: str = SHEET_PATH):
        self.tile_size = tile_size
        self.sheet = None
        if os.path.exists(sheet_path):
            self.sheet = pygame.image.load(sheet_path).convert_alpha()

    @lru_cache(maxsize=32)
    def get(self, entity: int) -> pygame.Surface:
        if self.sheet is not None and self.sheet.get_width() >= (entity + 1) * SPRITE_SIZE:
            rect = pygame.Rect(entity * SPRITE_SIZE, 0, SPRITE_SIZE, SPRITE_SIZE)
            return self.sheet.subsurface(rect).copy()
        img = pygame.Surface((SPRITE_SIZE, SPRITE_SIZE), pygame.SRCALPHA)
        left, top, right, bottom = fallback_box(entity, SPRITE_SIZE)
        img.fill(ENTITY_COLORS[entity], pygame.Rect(left, top, right - left + 1, bottom - top + 1))
        return img

    @lru_cache(maxsize=64)
    def view(self, entity: int, size: int) -> pygame.Surface:
        base = self.get(entity)
        if base.get_size() == (size, size):
            return base
        return pygame.transform.scale(base, (size, size))


def draw_level(screen: pygame.Surface, level: Level, tileset: Tileset, origin=(0, 0)) -> None:
    ox, oy = origin
    size = tileset.tile_size
    for x, y, tile in level.cells():
        for entity in entity_bits(tile):
            screen.blit(tileset.view(entity, size), (ox + x * size, oy + y * size))
