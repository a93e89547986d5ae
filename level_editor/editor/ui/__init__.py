from __future__ import annotations

from .widgets import Button, TextInput, MenuDropDown, draw_label

__all__ = [
    "Button",
    "TextInput",
    "MenuDropDown",
    "draw_label",
]
