from __future__ import annotations
from dataclasses import dataclass


@dataclass
class NewMapParams:
    width: int = 10
    height: int = 8
    default_type: str = "Grass"
