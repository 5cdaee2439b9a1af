from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from PIL import Image

from ..config import DitheringMode
from .palette import RGB, nearest_color

Quantizer = Callable[[Image.Image, Sequence[RGB]], Image.Image]

_BAYER_4X4 = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)

# Floyd-Steinberg weights as (dx, dy, share); only cells after (x, y) in raster order.
_FS_KERNEL = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)


def _clamp(value: float) -> float:
    return min(255.0, max(0.0, value))


def bayer_threshold(x: int, y: int) -> float:
    return (_BAYER_4X4[y % 4][x % 4] / 16 - 0.5) * 64


def quantize_none(img: Image.Image, colors: Sequence[RGB]) -> Image.Image:
    img = img.convert("RGB")
    width, height = img.size
    src_pixels = img.load()
    out = Image.new("RGB", (width, height))
    dst_pixels = out.load()
    for y in range(height):
        for x in range(width):
            dst_pixels[x, y] = nearest_color(src_pixels[x, y], colors)
    return out


def floyd_steinberg(img: Image.Image, colors: Sequence[RGB]) -> Image.Image:
    """Error-diffusion dither in strict raster order.

    The working buffer keeps unclamped floats while error is propagated, so a
    pixel can be matched against an accumulated value outside [0, 255]. The
    result is clamped in one pass once every pixel has been visited.
    """

    img = img.convert("RGB")
    width, height = img.size
    src_pixels = img.load()
    work: List[List[float]] = [
        [float(channel) for channel in src_pixels[x, y][:3]]
        for y in range(height)
        for x in range(width)
    ]

    for y in range(height):
        for x in range(width):
            index = y * width + x
            old = work[index]
            new = nearest_color(old, colors)
            work[index] = [float(channel) for channel in new]
            error = (old[0] - new[0], old[1] - new[1], old[2] - new[2])

            for dx, dy, share in _FS_KERNEL:
                nx = x + dx
                ny = y + dy
                if nx < 0 or nx >= width or ny >= height:
                    continue
                target = work[ny * width + nx]
                target[0] += error[0] * share
                target[1] += error[1] * share
                target[2] += error[2] * share

    out = Image.new("RGB", (width, height))
    dst_pixels = out.load()
    for y in range(height):
        for x in range(width):
            r, g, b = work[y * width + x]
            dst_pixels[x, y] = (int(_clamp(r)), int(_clamp(g)), int(_clamp(b)))
    return out


def ordered_dither(img: Image.Image, colors: Sequence[RGB]) -> Image.Image:
    img = img.convert("RGB")
    width, height = img.size
    src_pixels = img.load()
    out = Image.new("RGB", (width, height))
    dst_pixels = out.load()
    for y in range(height):
        for x in range(width):
            threshold = bayer_threshold(x, y)
            r, g, b = src_pixels[x, y][:3]
            adjusted = (_clamp(r + threshold), _clamp(g + threshold), _clamp(b + threshold))
            dst_pixels[x, y] = nearest_color(adjusted, colors)
    return out


QUANTIZERS: Dict[DitheringMode, Quantizer] = {
    DitheringMode.NONE: quantize_none,
    DitheringMode.FLOYD_STEINBERG: floyd_steinberg,
    DitheringMode.ORDERED: ordered_dither,
}


def quantize(img: Image.Image, colors: Sequence[RGB], mode: DitheringMode | str) -> Image.Image:
    return QUANTIZERS[DitheringMode.parse(mode)](img, colors)
