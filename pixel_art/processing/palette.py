from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple, Union

from ..errors import EmptyPaletteError, InvalidColorFormatError, UnknownPaletteError

RGB = Tuple[int, int, int]
Color = Sequence[float]

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{6})")


@dataclass(frozen=True)
class Palette:
    key: str
    name: str
    colors: Tuple[RGB, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise EmptyPaletteError()

    def __len__(self) -> int:
        return len(self.colors)

    def hex_colors(self) -> Tuple[str, ...]:
        return tuple("#%02x%02x%02x" % rgb for rgb in self.colors)


def parse_hex_color(value: str) -> RGB:
    if not isinstance(value, str):
        raise InvalidColorFormatError(value)
    match = _HEX_COLOR.fullmatch(value.strip())
    if match is None:
        raise InvalidColorFormatError(value)
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def palette_from_hex(colors: Iterable[str], key: str = "custom", name: str = "Custom") -> Palette:
    parsed: list[RGB] = []
    for value in colors:
        rgb = parse_hex_color(value)
        if rgb not in parsed:
            parsed.append(rgb)
    return Palette(key=key, name=name, colors=tuple(parsed))


_PALETTE_SOURCE: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    (
        "sunset",
        "Sunset Glow",
        ("#1a0a2e", "#3d1e6d", "#8b2f97", "#c94277", "#e86547", "#f4a261", "#f7d794", "#faf0ca", "#ffffff"),
    ),
    (
        "gameboy",
        "Game Boy",
        ("#0f380f", "#306230", "#8bac0f", "#9bbc0f"),
    ),
    (
        "pico8",
        "PICO-8",
        (
            "#000000", "#1d2b53", "#7e2553", "#008751", "#ab5236", "#5f574f", "#c2c3c7", "#fff1e8",
            "#ff004d", "#ffa300", "#ffec27", "#00e436", "#29adff", "#83769c", "#ff77a8", "#ffccaa",
        ),
    ),
    (
        "lospec_twilight",
        "Twilight",
        ("#0e0e12", "#1a1a2e", "#16213e", "#533483", "#e94560", "#f5a623", "#f7d794", "#eaf6f6"),
    ),
    (
        "vapor",
        "Vaporwave",
        ("#0d0221", "#0f084b", "#26408b", "#a6d9f7", "#f7cad0", "#ff6b97", "#ff3864", "#261447", "#7b2d8e", "#f0f0f0"),
    ),
    (
        "earthen",
        "Earthen",
        ("#2b2d42", "#3d405b", "#606c38", "#283618", "#dda15e", "#bc6c25", "#fefae0", "#d4a373", "#e9c46a"),
    ),
    (
        "neon",
        "Neon Noir",
        ("#0a0a0a", "#1a1a2e", "#0f3460", "#16c79a", "#e94560", "#f5a623", "#ff6b6b", "#ee5a24", "#ffffff"),
    ),
    (
        "pastel",
        "Soft Pastel",
        ("#355070", "#6d597a", "#b56576", "#e56b6f", "#eaac8b", "#e8d5b7", "#f0efeb", "#89b0ae", "#bee3db"),
    ),
)

PALETTES: Dict[str, Palette] = {
    key: palette_from_hex(colors, key=key, name=name) for key, name, colors in _PALETTE_SOURCE
}


def get_palette(key: str) -> Palette:
    try:
        return PALETTES[key]
    except (KeyError, TypeError):
        raise UnknownPaletteError(key) from None


def resolve_palette(palette: Union[str, Palette]) -> Palette:
    if isinstance(palette, Palette):
        return palette
    return get_palette(palette)


def list_palettes() -> Tuple[Palette, ...]:
    return tuple(PALETTES.values())


def color_distance(a: Color, b: Color) -> float:
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


def nearest_color(rgb: Color, colors: Sequence[RGB]) -> RGB:
    """Return the palette entry closest to ``rgb`` in squared RGB distance.

    The comparison is strict so that equidistant candidates resolve to the one
    that appears first in ``colors``.
    """

    if not colors:
        raise EmptyPaletteError()

    r, g, b = rgb[0], rgb[1], rgb[2]
    best = colors[0]
    best_distance = float("inf")
    for candidate in colors:
        R, G, B = candidate
        distance = (R - r) ** 2 + (G - g) ** 2 + (B - b) ** 2
        if distance < best_distance:
            best_distance = distance
            best = candidate
    return best
