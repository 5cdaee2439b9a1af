"""Palette-quantized pixel art conversion."""

from .config import DitheringMode, PipelineConfig
from .processing import ConversionResult, convert, get_palette, render, upscale
from . import errors, infrastructure, processing

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ConversionResult",
    "DitheringMode",
    "PipelineConfig",
    "convert",
    "errors",
    "get_palette",
    "infrastructure",
    "processing",
    "render",
    "upscale",
]
