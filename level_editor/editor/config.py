from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from level_editor.core.config import NewMapParams


@dataclass
class RenderParams:
    tile_size: int = 32
    window_title: str = "Level Editor"
    show_grid: bool = True
    # Sidebar has a constant pixel width, independent of zoom
    sidebar_width_px: int = 220
    background_color: Tuple[int, int, int] = (15, 15, 20)


@dataclass
class AppConfig:
    new_map: NewMapParams = field(default_factory=NewMapParams)
    render: RenderParams = field(default_factory=RenderParams)
    maps_dir: Path = Path("maps")
