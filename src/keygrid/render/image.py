# src/keygrid/render/image.py
# Render a Level to a Pillow image. Every set entity bit is drawn, in
# ascending bit order, so higher entities land on top.
# With a sprite sheet, entity N is the SPRITE_SIZE square at x = N * SPRITE_SIZE.

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

from PIL import Image, ImageDraw

from ..grid import LEVEL_SIZE, Level
from ..tiles import (
    ENEMY, ENTITY_TYPE_COUNT, EXIT, FLOOR, GOLD, KEY, LOCK, PLAYER, SPIKES, WALL,
    entity_bits,
)

SPRITE_SIZE = 32
SHEET_PATH = os.path.join("assets", "sheet.bmp")

RGBA = Tuple[int, int, int, int]

ENTITY_COLORS: Dict[int, RGBA] = {
    FLOOR:  ( 60,  50,  40, 255),
    WALL:   (120, 120, 130, 255),
    SPIKES: (200,  40,  40, 255),
    EXIT:   ( 40, 160, 220, 255),
    LOCK:   ( 90,  60,  20, 255),
    GOLD:   (255, 210,   0, 255),
    KEY:    (240, 240, 120, 255),
    ENEMY:  (150,  30, 170, 255),
    PLAYER: ( 50, 220,  80, 255),
}

# Terrain fills its tile; everything else is drawn as a smaller square.
FULL_TILE = (FLOOR, WALL)


def fallback_box(entity: int, size: int) -> Tuple[int, int, int, int]:
    """Pixel box (left, top, right, bottom) used for an entity with no sprite."""
    if entity in FULL_TILE:
        return (0, 0, size - 1, size - 1)
    inset = size // 4 if entity in (LOCK, EXIT) else size // 3
    return (inset, inset, size - 1 - inset, size - 1 - inset)


def load_sheet(path: str = SHEET_PATH) -> Optional[Image.Image]:
    if not os.path.exists(path):
        return None
    return Image.open(path).convert("RGBA")


def entity_image(entity: int, tile_size: int, sheet: Optional[Image.Image] = None) -> Image.Image:
    if sheet is not None and sheet.width >= (entity + 1) * SPRITE_SIZE:
        box = (entity * SPRITE_SIZE, 0, (entity + 1) * SPRITE_SIZE, SPRITE_SIZE)
        img = sheet.crop(box)
        if img.size != (tile_size, tile_size):
            img = img.resize((tile_size, tile_size), Image.NEAREST)
        return img
    img = Image.new("RGBA", (tile_size, tile_size), (0, 0, 0, 0))
    ImageDraw.Draw(img).rectangle(fallback_box(entity, tile_size), fill=ENTITY_COLORS[entity])
    return img


def render_level(level: Level, tile_size: int = SPRITE_SIZE, sheet: Optional[Image.Image] = None) -> Image.Image:
    canvas = Image.new("RGBA", (LEVEL_SIZE * tile_size, LEVEL_SIZE * tile_size), (0, 0, 0, 255))
    sprites = {e: entity_image(e, tile_size, sheet) for e in range(1, ENTITY_TYPE_COUNT + 1)}
    for x, y, tile in level.cells():
        for entity in entity_bits(tile):
            img = sprites[entity]
            x0, y0 = x * tile_size, y * tile_size
            canvas.paste(img, (x0, y0, x0 + tile_size, y0 + tile_size), img)
    return canvas


def save_png(level: Level, out_png: str, tile_size: int = SPRITE_SIZE, sheet_path: str = SHEET_PATH) -> None:
    img = render_level(level, tile_size, load_sheet(sheet_path))
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    img.save(out_png)
