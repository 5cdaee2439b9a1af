from __future__ import annotations

from typing import List

from PIL import Image

from ..config import CONTRAST_POLE
from ..errors import DivisionByZeroContrastError


def _clamp_channel(value: float) -> int:
    return int(round(min(255.0, max(0.0, value))))


def contrast_factor(contrast: float) -> float:
    if contrast >= CONTRAST_POLE:
        raise DivisionByZeroContrastError(contrast)
    return (259.0 * (contrast + 255.0)) / (255.0 * (259.0 - contrast))


def contrast_lut(contrast: float) -> List[int]:
    factor = contrast_factor(contrast)
    return [_clamp_channel(factor * (value - 128) + 128) for value in range(256)]


def apply_contrast(img: Image.Image, contrast: float) -> Image.Image:
    """Stretch every channel around mid-gray (128).

    ``contrast`` follows the usual [-100, 100] slider range; zero is a no-op.
    """

    if contrast == 0:
        return img.copy()
    return img.point(contrast_lut(contrast) * 3)


def apply_saturation(img: Image.Image, saturation: float) -> Image.Image:
    """Push each channel away from (or toward) the pixel's luma."""

    out = img.copy()
    if saturation == 1:
        return out

    width, height = out.size
    pixels = out.load()
    for y in range(height):
        for x in range(width):
            r, g, b = pixels[x, y][:3]
            gray = 0.299 * r + 0.587 * g + 0.114 * b
            pixels[x, y] = (
                _clamp_channel(gray + saturation * (r - gray)),
                _clamp_channel(gray + saturation * (g - gray)),
                _clamp_channel(gray + saturation * (b - gray)),
            )
    return out


def adjust_tone(img: Image.Image, contrast: float, saturation: float) -> Image.Image:
    # Saturation works on the contrast-adjusted channels, so the order matters.
    return apply_saturation(apply_contrast(img, contrast), saturation)
