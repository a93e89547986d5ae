from __future__ import annotations

import logging
import re
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from level_editor.core.errors import ErrorKind, Result
from level_editor.core.io import list_maps, map_path
from level_editor.core.operations import (
    create_map,
    load_map_file,
    paint_tile,
    save_map_file,
)
from level_editor.core.types import Map, MapTileType

from .config import AppConfig
from .renderer import PygameRenderer
from .tiles import build_tile_catalog, palette_names
from .ui.widgets import Button, TextInput, MenuDropDown, draw_label

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

ERROR_MESSAGES: Dict[ErrorKind, Tuple[str, str]] = {
    ErrorKind.INVALID_DIMENSION: ("Incorrect map size", "Width and height must be positive."),
    ErrorKind.OUT_OF_BOUNDS: ("Outside the map", "That position is not on the map."),
    ErrorKind.POSITION_MISMATCH: ("Incorrect map file", "Please specify a valid map file!"),
    ErrorKind.INCOMPLETE_MAP: ("Incomplete map", "Every tile of the map must be assigned."),
    ErrorKind.UNKNOWN_TILE_TYPE: ("Unknown tile type", "Please pick a tile type from the palette."),
    ErrorKind.PARSE_ERROR: ("Incorrect map file", "Please specify a valid map file!"),
    ErrorKind.IO_ERROR: ("File error", "The map file could not be accessed."),
}


def parse_int_field(text: str) -> Optional[int]:
    """Parse a dimension typed into the sidebar; None if it is not a number."""
    text = text.strip()
    if not _DIGITS.fullmatch(text):
        return None
    return int(text)


def describe_error(result: Result) -> str:
    if result.kind is None:
        return ""
    title, text = ERROR_MESSAGES[result.kind]
    return f"{title}: {text}"


class MapEditorApp:
    def __init__(self, config: AppConfig) -> None:
        self.cfg = config
        self.tile_types: Dict[str, MapTileType] = build_tile_catalog()
        self.renderer = PygameRenderer(config.render, palette_names(self.tile_types))
        self.map: Optional[Map] = None
        self.status: str = ""
        self.status_is_error: bool = False

        pygame.init()
        pygame.display.set_caption(self.cfg.render.window_title)

        self.window = pygame.display.set_mode((1200, 800), pygame.RESIZABLE)
        self.font = pygame.font.SysFont("consolas", 18)

        self.btn_new = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="New Map",
            font=self.font,
            on_click=self.new_map,
        )
        self.btn_save = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Save",
            font=self.font,
            on_click=self.save_current_map,
        )
        self.save_name_input = TextInput(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            text="",
            placeholder="map name...",
        )
        self.dropdown_load = MenuDropDown(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            label="Load",
        )

        n = self.cfg.new_map
        self.input_width = TextInput(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            text=str(n.width),
            placeholder="Width",
            max_length=4,
            digits_only=True,
        )
        self.input_height = TextInput(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            text=str(n.height),
            placeholder="Height",
            max_length=4,
            digits_only=True,
        )

        if n.default_type in self.tile_types:
            self.renderer.set_selected_tile(n.default_type)

        self.text_inputs: List[TextInput] = [
            self.save_name_input,
            self.input_width,
            self.input_height,
        ]

        self.update_load_dropdown()
        self._layout_ui()

        # camera dragging
        self.dragging = False

    # ---------------------------------------------------------------- Layout

    def _layout_ui(self) -> None:
        width, height = self.window.get_size()
        sidebar_width = self.cfg.render.sidebar_width_px

        x = width - sidebar_width + 10
        w = sidebar_width - 20
        y = 10
        h_btn = 32
        gap = 8

        # map size inputs side by side above "New Map"
        half = (w - gap) // 2
        self.input_width.rect = pygame.Rect(x, y, half, h_btn)
        self.input_height.rect = pygame.Rect(x + half + gap, y, half, h_btn)
        y += h_btn + gap

        for widget in (self.btn_new, self.btn_save, self.save_name_input, self.dropdown_load):
            widget.rect = pygame.Rect(x, y, w, h_btn)
            y += h_btn + gap

        self.renderer.palette_offset_y = y + 4
        self.status_pos = (x, self.renderer.palette_offset_y + self.renderer.palette_height() + gap)

    # ---------------------------------------------------------------- Status

    def _report(self, result: Result, success: str) -> bool:
        if result.ok:
            self.status = success
            self.status_is_error = False
            logger.info(success)
            return True

        self.status = describe_error(result)
        self.status_is_error = True
        logger.error("%s (%s)", self.status, result.message)
        return False

    # ---------------------------------------------------------------- UI data

    def update_load_dropdown(self) -> None:
        items = []
        for name in list_maps(self.cfg.maps_dir):
            def load_closure(name=name):
                self.load_map_by_name(name)
            items.append((name, load_closure))
        self.dropdown_load.set_items(items)

    # -------------------------------------------------------------- Map ops

    def new_map(self) -> None:
        width = parse_int_field(self.input_width.text)
        height = parse_int_field(self.input_height.text)
        if width is None or height is None:
            self.status = "Incorrect map size: please specify a width and a height."
            self.status_is_error = True
            return

        default_type = self.renderer.selected_tile or self.cfg.new_map.default_type
        result = create_map(width, height, default_type, self.tile_types)
        if self._report(result, f"Created {width}x{height} map."):
            self.map = result.value
            self.renderer.set_map(self.map)

    def save_current_map(self) -> None:
        if self.map is None:
            self.status = "No map to save."
            self.status_is_error = True
            return

        name = self.save_name_input.text.strip()
        if not name:
            self.status = "Please enter a map name first."
            self.status_is_error = True
            return

        path = map_path(self.cfg.maps_dir, name)
        if self._report(save_map_file(path, self.map), f"Saved map '{path.name}'."):
            self.update_load_dropdown()

    def load_map_by_name(self, name: str) -> None:
        path = map_path(self.cfg.maps_dir, name)
        result = load_map_file(path, self.tile_types)
        # the current map is kept when loading fails
        if self._report(result, f"Loaded map '{path.name}'."):
            self.map = result.value
            self.renderer.set_map(self.map)
            self.save_name_input.text = path.stem

    def _paint_at(self, tile_x: int, tile_y: int) -> None:
        if self.map is None or self.renderer.selected_tile is None:
            return
        if not self.map.in_bounds(tile_x, tile_y):
            return
        result = paint_tile(self.map, tile_x, tile_y, self.renderer.selected_tile, self.tile_types)
        if not result.ok:
            self._report(result, "")

    # -------------------------------------------------------------- Events

    def _dispatch_to_widgets(self, event: pygame.event.Event) -> None:
        self.btn_new.handle_event(event)
        self.btn_save.handle_event(event)
        for inp in self.text_inputs:
            inp.handle_event(event)

    def handle_mouse_down(self, event: pygame.event.Event) -> None:
        x, y = event.pos

        if event.button == 1:
            self._dispatch_to_widgets(event)

            if self.renderer.is_in_palette(x, y):
                index = self.renderer.get_palette_index_from_mouse(x, y)
                if 0 <= index < len(self.renderer.palette_items):
                    self.renderer.set_selected_tile(self.renderer.palette_items[index])
                return

            if self.renderer.is_in_map(x, y):
                self._paint_at(*self.renderer.get_map_coords_from_mouse(x, y))
                return

        # right or middle button: start camera drag
        if event.button in (2, 3) and self.renderer.is_in_map(x, y):
            self.dragging = True

    def handle_mouse_up(self, event: pygame.event.Event) -> None:
        if event.button in (2, 3):
            self.dragging = False

    def handle_mouse_motion(self, event: pygame.event.Event) -> None:
        self._dispatch_to_widgets(event)

        x, y = event.pos

        if self.dragging:
            self.renderer.move_camera(-event.rel[0], -event.rel[1])
            return

        # painting while holding left button
        if event.buttons[0] and self.renderer.is_in_map(x, y):
            self._paint_at(*self.renderer.get_map_coords_from_mouse(x, y))

    def handle_key(self, event: pygame.event.Event) -> None:
        if any(inp.active for inp in self.text_inputs):
            for inp in self.text_inputs:
                inp.handle_event(event)
            return

        if event.key == pygame.K_r:
            self.renderer.reset_camera()

    def handle_mouse_wheel(self, event: pygame.event.Event) -> None:
        # zoom only when over map, not over sidebar
        x, y = pygame.mouse.get_pos()
        if self.renderer.is_in_map(x, y):
            self.renderer.change_zoom(event.y)

    # ----------------------------------------------------------- Draw UI

    def draw_ui(self) -> None:
        self.btn_new.draw(self.window)
        self.btn_save.draw(self.window)
        for inp in self.text_inputs:
            inp.draw(self.window)

        if self.status:
            color = (255, 120, 120) if self.status_is_error else (160, 220, 160)
            draw_label(self.window, self.font, self.status, *self.status_pos, color=color)

        # drawn last so the open list covers the palette
        self.dropdown_load.draw(self.window)

    # ------------------------------------------------------------- Main loop

    def run(self) -> None:
        clock = pygame.time.Clock()
        running = True

        while running:
            clock.tick(60)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                if event.type == pygame.VIDEORESIZE:
                    self.window = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    self._layout_ui()
                    self.renderer.move_camera(0, 0)
                    continue

                if event.type == pygame.MOUSEBUTTONDOWN and self.dropdown_load.open:
                    # an open menu swallows the click
                    self.dropdown_load.handle_event(event)
                    continue

                self.dropdown_load.handle_event(event)

                if event.type == pygame.MOUSEBUTTONDOWN:
                    self.handle_mouse_down(event)
                elif event.type == pygame.MOUSEBUTTONUP:
                    self.handle_mouse_up(event)
                elif event.type == pygame.MOUSEMOTION:
                    self.handle_mouse_motion(event)
                elif event.type == pygame.MOUSEWHEEL:
                    self.handle_mouse_wheel(event)
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)

            self.renderer.draw()
            self.draw_ui()
            pygame.display.flip()

        pygame.quit()
        sys.exit()
