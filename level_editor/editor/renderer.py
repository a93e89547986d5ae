from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pygame

from level_editor.core.types import Map
from .config import RenderParams
from .tiles import TILE_COLORS, UNKNOWN_TILE_COLOR


# One image per tile type, named '<Name>.png' (e.g. Grass.png)
TILE_ASSET_DIR = Path("assets/tiles")

PALETTE_MARGIN = 4


class PygameRenderer:
    """
    Handles drawing:
    - Map view (camera + zoom)
    - Sidebar palette (fixed size, independent from zoom)

    Only reads the map; painting goes through the core operations.
    """

    def __init__(self, params: RenderParams, palette_items: List[str]) -> None:
        self.params = params
        self.map: Optional[Map] = None

        self.camera_x: float = 0.0
        self.camera_y: float = 0.0

        self.palette_items: List[str] = palette_items
        self.selected_tile: Optional[str] = palette_items[0] if palette_items else None

        self.font: Optional[pygame.font.Font] = None

        self.palette_tile_size: int = 32
        self.palette_offset_y: int = 0  # set by the app layout

        self.tile_images: Dict[str, pygame.Surface] = {}
        self._tile_images_loaded: bool = False

    # ------------------------------------------------------------------ API

    def set_map(self, map_: Optional[Map]) -> None:
        self.map = map_
        self.camera_x = 0.0
        self.camera_y = 0.0
        self._clamp_camera()

    def set_selected_tile(self, type_name: str) -> None:
        self.selected_tile = type_name

    def ensure_font(self) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 16)

    def ensure_tile_images(self) -> None:
        if self._tile_images_loaded:
            return
        self._tile_images_loaded = True

        if not TILE_ASSET_DIR.exists():
            return

        for name in self.palette_items:
            path = TILE_ASSET_DIR / f"{name}.png"
            if not path.exists():
                continue
            try:
                img = pygame.image.load(path.as_posix()).convert_alpha()
            except pygame.error:
                continue
            self.tile_images[name] = img

    def _get_scaled_tile_image(self, name: str, size: int) -> Optional[pygame.Surface]:
        img = self.tile_images.get(name)
        if img is None:
            return None
        if img.get_width() == size and img.get_height() == size:
            return img
        return pygame.transform.smoothscale(img, (size, size))

    # ------------------------------------------------------------- Camera

    def move_camera(self, dx: float, dy: float) -> None:
        self.camera_x += dx
        self.camera_y += dy
        self._clamp_camera()

    def reset_camera(self) -> None:
        self.camera_x = 0.0
        self.camera_y = 0.0

    def change_zoom(self, delta: int) -> None:
        if self.map is None:
            return

        screen = pygame.display.get_surface()
        if screen is None:
            return

        old_ts = self.params.tile_size
        new_ts = max(8, min(96, old_ts + delta))
        if new_ts == old_ts:
            return

        width, height = screen.get_size()
        view_width = width - self.params.sidebar_width_px

        # keep the tile under the view centre in place
        center_tile_x = (self.camera_x + view_width / 2) / old_ts
        center_tile_y = (self.camera_y + height / 2) / old_ts

        self.params.tile_size = new_ts
        self.camera_x = center_tile_x * new_ts - view_width / 2
        self.camera_y = center_tile_y * new_ts - height / 2

        self._clamp_camera()

    # -------------------------------------------------------- Coords helpers

    def _map_view_width(self) -> Optional[int]:
        screen = pygame.display.get_surface()
        if screen is None:
            return None
        return screen.get_width() - self.params.sidebar_width_px

    def is_in_map(self, x: int, y: int) -> bool:
        view_width = self._map_view_width()
        return view_width is not None and x < view_width

    def is_in_palette(self, x: int, y: int) -> bool:
        view_width = self._map_view_width()
        if view_width is None:
            return False
        return x >= view_width and y >= self.palette_offset_y

    def get_map_coords_from_mouse(self, x: int, y: int) -> Tuple[int, int]:
        tile_size = self.params.tile_size
        return (
            int((self.camera_x + x) // tile_size),
            int((self.camera_y + y) // tile_size),
        )

    def get_palette_index_from_mouse(self, x: int, y: int) -> int:
        rel_y = y - (self.palette_offset_y + PALETTE_MARGIN)
        if rel_y < 0:
            return -1
        return int(rel_y // (self.palette_tile_size + PALETTE_MARGIN))

    def palette_height(self) -> int:
        item_h = self.palette_tile_size + PALETTE_MARGIN
        return PALETTE_MARGIN + len(self.palette_items) * item_h + PALETTE_MARGIN

    # ---------------------------------------------------------------- Draw

    def draw(self) -> None:
        screen = pygame.display.get_surface()
        if screen is None:
            return

        self.ensure_font()
        self.ensure_tile_images()

        width, height = screen.get_size()
        sidebar_width = self.params.sidebar_width_px

        map_view_rect = pygame.Rect(0, 0, width - sidebar_width, height)
        palette_rect = pygame.Rect(width - sidebar_width, 0, sidebar_width, height)

        screen.fill(self.params.background_color)

        if self.map is not None:
            self._draw_map(screen, map_view_rect)

        self._draw_palette(screen, palette_rect)

    def _draw_tile(self, screen: pygame.Surface, name: str, rect: pygame.Rect) -> None:
        img = self._get_scaled_tile_image(name, rect.width)
        if img is not None:
            screen.blit(img, rect)
        else:
            pygame.draw.rect(screen, TILE_COLORS.get(name, UNKNOWN_TILE_COLOR), rect)

    def _draw_map(self, screen: pygame.Surface, map_view_rect: pygame.Rect) -> None:
        assert self.map is not None
        tile_size = self.params.tile_size

        for tile in self.map.tiles():
            sx = int(tile.x * tile_size - self.camera_x)
            sy = int(tile.y * tile_size - self.camera_y)

            rect = pygame.Rect(sx, sy, tile_size, tile_size)
            if not map_view_rect.colliderect(rect):
                continue

            self._draw_tile(screen, tile.type, rect)

            if self.params.show_grid:
                pygame.draw.rect(screen, (30, 30, 30), rect, 1)

    def _draw_palette(self, screen: pygame.Surface, palette_rect: pygame.Rect) -> None:
        tile_size = self.palette_tile_size
        pygame.draw.rect(screen, (10, 10, 10), palette_rect)

        assert self.font is not None

        start_y = max(self.palette_offset_y, palette_rect.y) + PALETTE_MARGIN

        for i, name in enumerate(self.palette_items):
            y = start_y + i * (tile_size + PALETTE_MARGIN)
            tile_rect = pygame.Rect(palette_rect.x + PALETTE_MARGIN, y, tile_size, tile_size)

            self._draw_tile(screen, name, tile_rect)

            if name == self.selected_tile:
                pygame.draw.rect(screen, (255, 255, 0), tile_rect, 3)
            else:
                pygame.draw.rect(screen, (60, 60, 60), tile_rect, 1)

            text_surf = self.font.render(name, True, (220, 220, 220))
            text_rect = text_surf.get_rect(
                midleft=(tile_rect.right + 8, tile_rect.centery)
            )
            screen.blit(text_surf, text_rect)

    # -------------------------------------------------------------- internals

    def _clamp_camera(self) -> None:
        if self.map is None:
            self.camera_x = 0
            self.camera_y = 0
            return

        screen = pygame.display.get_surface()
        if screen is None:
            return

        width, height = screen.get_size()
        tile_size = self.params.tile_size
        map_view_width = max(1, width - self.params.sidebar_width_px)

        max_x = max(0, self.map.width * tile_size - map_view_width)
        max_y = max(0, self.map.height * tile_size - height)

        self.camera_x = max(0, min(self.camera_x, max_x))
        self.camera_y = max(0, min(self.camera_y, max_y))
