import pygame
import pytest

from level_editor.core.errors import ErrorKind
from level_editor.core.operations import create_map, load_map, paint_tile
from level_editor.editor.app import ERROR_MESSAGES, describe_error, parse_int_field
from level_editor.editor.config import RenderParams
from level_editor.editor.renderer import PygameRenderer
from level_editor.editor.tiles import TILE_COLORS, build_tile_catalog, palette_names
from level_editor.editor.ui.widgets import Button, MenuDropDown, TextInput

from tests.helpers import map_stream


def test_tile_catalog():
    catalog = build_tile_catalog()
    assert {name: t.tag for name, t in catalog.items()} == {
        "Desert": 3,
        "Water": 5,
        "Grass": 1,
    }
    assert all(name == t.name for name, t in catalog.items())
    assert palette_names(catalog) == ["Grass", "Desert", "Water"]
    assert set(TILE_COLORS) == set(catalog)


def test_catalog_keys_work_as_type_lookup():
    catalog = build_tile_catalog()
    m = create_map(2, 2, "Grass", catalog).unwrap()
    assert paint_tile(m, 0, 1, "Water", catalog).ok
    assert paint_tile(m, 0, 1, "Lava", catalog).kind is ErrorKind.UNKNOWN_TILE_TYPE


@pytest.mark.parametrize(
    "text,expected",
    [("10", 10), (" 8 ", 8), ("0", 0), ("", None), ("abc", None), ("-3", None), ("2.5", None)],
)
def test_parse_int_field(text, expected):
    assert parse_int_field(text) == expected


def test_every_error_kind_has_a_message():
    assert set(ERROR_MESSAGES) == set(ErrorKind)


def test_describe_error():
    assert describe_error(create_map(1, 1, "Grass")) == ""

    bad_file = load_map(map_stream("x", 1, []))
    assert describe_error(bad_file).startswith("Incorrect map file")

    bad_size = create_map(0, 1, "Grass")
    assert describe_error(bad_size).startswith("Incorrect map size")


def test_renderer_mouse_to_tile():
    renderer = PygameRenderer(RenderParams(tile_size=32), ["Grass", "Water"])
    assert renderer.selected_tile == "Grass"
    assert renderer.get_map_coords_from_mouse(0, 0) == (0, 0)
    assert renderer.get_map_coords_from_mouse(65, 31) == (2, 0)

    renderer.camera_x = 32
    renderer.camera_y = 64
    assert renderer.get_map_coords_from_mouse(0, 0) == (1, 2)


def test_renderer_palette_index():
    renderer = PygameRenderer(RenderParams(), ["Grass", "Desert", "Water"])
    renderer.palette_offset_y = 100

    assert renderer.get_palette_index_from_mouse(0, 90) == -1
    assert renderer.get_palette_index_from_mouse(0, 104) == 0
    assert renderer.get_palette_index_from_mouse(0, 104 + 36) == 1
    assert renderer.get_palette_index_from_mouse(0, 104 + 2 * 36 + 5) == 2


def test_digits_only_input():
    field = TextInput(rect=pygame.Rect(0, 0, 10, 10), font=None, max_length=3, digits_only=True)
    assert field.accepts("4")
    assert not field.accepts("a")
    assert not field.accepts("-")

    field.text = "123"
    assert not field.accepts("4")

    free = TextInput(rect=pygame.Rect(0, 0, 10, 10), font=None)
    assert free.accepts("a")


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def test_dropdown_runs_clicked_item():
    chosen = []
    menu = MenuDropDown(rect=pygame.Rect(0, 0, 100, 20), font=None, label="Load")
    menu.set_items([("a.map", lambda: chosen.append("a")), ("b.map", lambda: chosen.append("b"))])

    menu.handle_event(_click((5, 5)))
    assert menu.open
    menu.handle_event(_click((5, 45)))
    assert chosen == ["b"]
    assert not menu.open


def test_dropdown_closes_on_outside_click():
    chosen = []
    menu = MenuDropDown(rect=pygame.Rect(0, 0, 100, 20), font=None)
    menu.set_items([("a.map", lambda: chosen.append("a"))])

    menu.handle_event(_click((5, 5)))
    menu.handle_event(_click((300, 300)))
    assert not menu.open
    assert chosen == []


def test_button_click():
    clicks = []
    button = Button(rect=pygame.Rect(10, 10, 50, 20), text="Save", font=None, on_click=lambda: clicks.append(1))
    button.handle_event(_click((0, 0)))
    button.handle_event(_click((20, 15)))
    assert clicks == [1]
