"""Image quantization pipeline components for the pixel art converter."""

from .dither import QUANTIZERS, bayer_threshold, floyd_steinberg, ordered_dither, quantize, quantize_none
from .enhance import adjust_tone, apply_contrast, apply_saturation, contrast_factor
from .palette import (
    PALETTES,
    Palette,
    color_distance,
    get_palette,
    list_palettes,
    nearest_color,
    palette_from_hex,
    parse_hex_color,
)
from .pipeline import ConversionResult, convert, render, scale_for, upscale
from .resample import resample, target_size

__all__ = [
    "QUANTIZERS",
    "bayer_threshold",
    "floyd_steinberg",
    "ordered_dither",
    "quantize",
    "quantize_none",
    "adjust_tone",
    "apply_contrast",
    "apply_saturation",
    "contrast_factor",
    "PALETTES",
    "Palette",
    "color_distance",
    "get_palette",
    "list_palettes",
    "nearest_color",
    "palette_from_hex",
    "parse_hex_color",
    "ConversionResult",
    "convert",
    "render",
    "scale_for",
    "upscale",
    "resample",
    "target_size",
]
