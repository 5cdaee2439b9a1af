from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from ..config import PipelineConfig
from ..errors import InvalidSourceSizeError
from .dither import QUANTIZERS
from .enhance import adjust_tone
from .palette import resolve_palette
from .resample import resample

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    image: Image.Image
    width: int
    height: int


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info)


def _split_alpha(src: Image.Image) -> tuple[Image.Image, Optional[Image.Image]]:
    if _has_alpha(src):
        rgba = src.convert("RGBA")
        return rgba.convert("RGB"), rgba.getchannel("A")
    return src.convert("RGB"), None


def convert(source: Image.Image, config: PipelineConfig) -> ConversionResult:
    """Turn ``source`` into a low-resolution raster drawn only from the palette.

    Validation runs before any pixel work, so a bad config never produces a
    partial result. Transparency, when present, is resampled alongside the
    colors and re-attached to the quantized raster untouched.
    """

    mode = config.validate()
    palette = resolve_palette(config.palette)
    if source.width < 1 or source.height < 1:
        raise InvalidSourceSizeError(source.width, source.height)

    rgb, alpha = _split_alpha(source)
    small = resample(rgb, config.resolution)
    toned = adjust_tone(small, config.contrast, config.saturation)
    out = QUANTIZERS[mode](toned, palette.colors)

    if alpha is not None:
        out.putalpha(alpha.resize(out.size, Image.Resampling.NEAREST))

    LOGGER.debug(
        "converted %sx%s -> %sx%s palette=%s dithering=%s",
        source.width,
        source.height,
        out.width,
        out.height,
        palette.key,
        mode.value,
    )
    return ConversionResult(image=out, width=out.width, height=out.height)


def scale_for(width: int, height: int, target_max: int) -> int:
    return max(1, target_max // max(width, height))


def upscale(img: Image.Image, scale: int) -> Image.Image:
    """Blow every pixel up into a ``scale`` x ``scale`` block."""

    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 1:
        raise ValueError(f"Scale must be an integer >= 1, got {scale!r}")
    if scale == 1:
        return img.copy()
    return img.resize((img.width * scale, img.height * scale), Image.Resampling.NEAREST)


def render(source: Image.Image, config: PipelineConfig, target_max: int) -> Image.Image:
    result = convert(source, config)
    return upscale(result.image, scale_for(result.width, result.height, target_max))
