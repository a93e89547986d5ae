from __future__ import annotations

from typing import Callable, List, Tuple
import pygame

Color = Tuple[int, int, int]
MenuItem = Tuple[str, Callable[[], None]]

TEXT_COLOR: Color = (240, 240, 240)
EDGE_COLOR: Color = (20, 20, 20)


def _draw_box(surface: pygame.Surface, rect: pygame.Rect, fill: Color, edge: Color = EDGE_COLOR) -> None:
    pygame.draw.rect(surface, fill, rect, border_radius=4)
    pygame.draw.rect(surface, edge, rect, 1, border_radius=4)


def _is_left_click(event: pygame.event.Event) -> bool:
    return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1


class Button:
    def __init__(
        self,
        rect: pygame.Rect,
        text: str,
        font: pygame.font.Font,
        on_click: Callable[[], None],
    ) -> None:
        self.rect = rect
        self.text = text
        self.font = font
        self.on_click = on_click
        self.hover: bool = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif _is_left_click(event) and self.rect.collidepoint(event.pos):
            self.on_click()

    def draw(self, surface: pygame.Surface) -> None:
        _draw_box(surface, self.rect, (100, 100, 120) if self.hover else (70, 70, 80))
        label = self.font.render(self.text, True, TEXT_COLOR)
        surface.blit(label, label.get_rect(center=self.rect.center))


class TextInput:
    """
    Single-line text field, focused by clicking it and left with Return.
    With `digits_only`, only 0-9 can be typed.
    """

    def __init__(
        self,
        rect: pygame.Rect,
        font: pygame.font.Font,
        text: str = "",
        placeholder: str = "",
        max_length: int = 32,
        digits_only: bool = False,
    ) -> None:
        self.rect = rect
        self.font = font
        self.text = text
        self.placeholder = placeholder
        self.max_length = max_length
        self.digits_only = digits_only
        self.active: bool = False

    def accepts(self, char: str) -> bool:
        if len(self.text) >= self.max_length or not char.isprintable():
            return False
        return char in "0123456789" if self.digits_only else True

    def handle_event(self, event: pygame.event.Event) -> None:
        if _is_left_click(event):
            self.active = self.rect.collidepoint(event.pos)
            return

        if event.type != pygame.KEYDOWN or not self.active:
            return

        if event.key == pygame.K_RETURN:
            self.active = False
        elif event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif event.unicode and self.accepts(event.unicode):
            self.text += event.unicode

    def draw(self, surface: pygame.Surface) -> None:
        if self.active:
            _draw_box(surface, self.rect, (30, 30, 40), (200, 200, 255))
        else:
            _draw_box(surface, self.rect, (20, 20, 30), (80, 80, 100))

        if self.text:
            label = self.font.render(self.text, True, TEXT_COLOR)
        else:
            label = self.font.render(self.placeholder, True, (150, 150, 170))
        surface.blit(label, label.get_rect(midleft=(self.rect.x + 6, self.rect.centery)))


class MenuDropDown:
    """
    Header button that opens a list of (label, callback) entries below it.
    """

    def __init__(self, rect: pygame.Rect, font: pygame.font.Font, label: str = "Menu") -> None:
        self.rect = rect
        self.font = font
        self.label = label
        self.items: List[MenuItem] = []
        self.open: bool = False
        self.hover: bool = False

    def set_items(self, items: List[MenuItem]) -> None:
        self.items = items

    def _item_rect(self, index: int) -> pygame.Rect:
        h = self.rect.height
        return pygame.Rect(self.rect.x, self.rect.bottom + index * h, self.rect.width, h)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return

        if not _is_left_click(event):
            return

        if self.rect.collidepoint(event.pos):
            self.open = not self.open
            return

        if self.open:
            for i, (_label, callback) in enumerate(self.items):
                if self._item_rect(i).collidepoint(event.pos):
                    callback()
                    break
            # any click outside the header closes the menu
            self.open = False

    def draw(self, surface: pygame.Surface) -> None:
        _draw_box(surface, self.rect, (90, 90, 120) if self.hover or self.open else (60, 60, 80))
        header = self.font.render(f"{self.label} ▼", True, TEXT_COLOR)
        surface.blit(header, header.get_rect(center=self.rect.center))

        if not self.open:
            return

        for i, (label, _cb) in enumerate(self.items):
            item_rect = self._item_rect(i)
            pygame.draw.rect(surface, (40, 40, 55), item_rect)
            pygame.draw.rect(surface, (10, 10, 10), item_rect, 1)
            text = self.font.render(label, True, (230, 230, 230))
            surface.blit(text, text.get_rect(midleft=(item_rect.x + 6, item_rect.centery)))


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    x: int,
    y: int,
    color: Color = (220, 220, 220),
) -> None:
    surface.blit(font.render(text, True, color), (x, y))
