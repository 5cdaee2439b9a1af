from __future__ import annotations

import math
from typing import Tuple

from PIL import Image

from ..errors import InvalidResolutionError, InvalidSourceSizeError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_size(width: int, height: int, resolution: int) -> Tuple[int, int]:
    """Size of the downsampled raster whose longer edge is ``resolution``."""

    if isinstance(resolution, bool) or not isinstance(resolution, int) or resolution < 1:
        raise InvalidResolutionError(resolution)
    if width < 1 or height < 1:
        raise InvalidSourceSizeError(width, height)

    aspect = width / height
    if aspect >= 1:
        out_w, out_h = resolution, _round_half_up(resolution / aspect)
    else:
        out_w, out_h = _round_half_up(resolution * aspect), resolution
    return max(1, out_w), max(1, out_h)


def resample(img: Image.Image, resolution: int) -> Image.Image:
    # Nearest-neighbour only: any smoothing would blur the blocks before quantization.
    size = target_size(img.width, img.height, resolution)
    return img.resize(size, Image.Resampling.NEAREST)
