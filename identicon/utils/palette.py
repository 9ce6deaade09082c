# identicon/utils/palette.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pathlib import Path

import yaml

HexColor = str

# Default candy colours, looked up by character code.
CANDY_COLORS: List[HexColor] = [
    "#F44336",
    "#E91E63",
    "#9C27B0",
    "#673AB7",
    "#3F51B5",
    "#2196F3",
    "#03A9F4",
    "#00BCD4",
    "#009688",
    "#4CAF50",
    "#8BC34A",
    "#CDDC39",
    "#FFC107",
    "#FF9800",
    "#FF5722",
    "#795548",
]


@dataclass
class Palette:
    colors: List[HexColor]
    name: Optional[str] = None

    def get(self, idx: int) -> HexColor:
        if not self.colors:
            return "#000000"
        return self.colors[idx % len(self.colors)]


def _flatten_color_sources(obj: Any) -> List[HexColor]:
    """
    Accept common palette shapes and produce a flat list of hex strings.
    Supported:
      - {'colors': ['#fff', '#000', ...]}
      - {'candy': ['#fff', ...]}
      - {'warm': ['#...'], 'cool': ['#...']}  # category dict → flattened in stable key order
      - ['#fff', '#000']  # raw list
    """
    if obj is None:
        return []
    if isinstance(obj, Palette):
        return list(obj.colors)
    if isinstance(obj, list):
        return [str(c) for c in obj]
    if isinstance(obj, dict):
        for key in ("colors", "candy"):
            if key in obj:
                val = obj[key]
                if isinstance(val, list):
                    return [str(c) for c in val]
                if isinstance(val, dict):
                    return [str(c) for c in val.values()]
        # Category dict → flatten by sorted keys for determinism
        flat: List[str] = []
        for k in sorted(obj.keys()):
            v = obj[k]
            if isinstance(v, list):
                flat.extend(str(c) for c in v)
            elif isinstance(v, str) and v.startswith("#"):
                flat.append(v)
        return flat
    if isinstance(obj, str) and obj.startswith("#"):
        return [obj]
    return []


def ensure_palette(obj: Any, *, name: Optional[str] = None) -> Palette:
    if isinstance(obj, Palette):
        return obj
    return Palette(colors=_flatten_color_sources(obj), name=name)


def load_palette(source: Union[str, Path, dict, list, Palette], *, name: Optional[str] = None) -> Palette:
    """
    Load a Palette from:
      - Path to .json or .yaml/.yml file
      - Dict or list of colours
      - Already-constructed Palette
    """
    if isinstance(source, Palette):
        return source
    if isinstance(source, (str, Path)):
        p = Path(source)
        if not p.exists():
            raise FileNotFoundError(f"Palette file not found: {p}")
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
        return ensure_palette(data, name=name or p.stem)
    return ensure_palette(source, name=name)


def default_candy_palette() -> Palette:
    return Palette(colors=list(CANDY_COLORS), name="candy")
