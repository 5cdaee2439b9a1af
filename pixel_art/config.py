from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from .errors import (
    DivisionByZeroContrastError,
    InvalidResolutionError,
    InvalidSaturationError,
    UnknownDitheringModeError,
)

if TYPE_CHECKING:  # pragma: no cover
    from .processing.palette import Palette


class DitheringMode(str, Enum):
    NONE = "none"
    FLOYD_STEINBERG = "floyd"
    ORDERED = "ordered"

    @classmethod
    def parse(cls, value: Union[str, "DitheringMode"]) -> "DitheringMode":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownDitheringModeError(value)
        key = value.strip().lower()
        key = _DITHERING_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownDitheringModeError(value) from None


_DITHERING_ALIASES = {
    "off": "none",
    "fs": "floyd",
    "floyd-steinberg": "floyd",
    "floyd_steinberg": "floyd",
    "bayer": "ordered",
}

# Contrast factor 259*(c+255) / (255*(259-c)) has its pole here.
CONTRAST_POLE = 259


@dataclass(frozen=True)
class PipelineConfig:
    resolution: int
    palette: Union[str, "Palette"]
    dithering: Union[DitheringMode, str] = DitheringMode.NONE
    contrast: float = 0.0
    saturation: float = 1.0

    def validate(self) -> DitheringMode:
        """Check the numeric parameters and return the parsed dithering mode.

        Palette lookup happens separately because custom palettes may be passed
        in directly instead of a registry key.
        """

        if (
            isinstance(self.resolution, bool)
            or not isinstance(self.resolution, int)
            or self.resolution < 1
        ):
            raise InvalidResolutionError(self.resolution)
        if self.contrast >= CONTRAST_POLE:
            raise DivisionByZeroContrastError(self.contrast)
        if self.saturation < 0:
            raise InvalidSaturationError(self.saturation)
        return DitheringMode.parse(self.dithering)


@dataclass(frozen=True)
class ConverterSettings:
    resolution: int
    palette: str
    dithering: str
    contrast: float
    saturation: float
    export_size: int
    thumbnail_size: int
    thumbnail_resolution: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ConverterSettings":
        return cls(
            resolution=int(os.getenv("PIXEL_RESOLUTION", "64")),
            palette=os.getenv("PIXEL_PALETTE", "sunset"),
            dithering=os.getenv("PIXEL_DITHERING", "floyd").lower(),
            contrast=float(os.getenv("PIXEL_CONTRAST", "20")),
            saturation=float(os.getenv("PIXEL_SATURATION", "1.3")),
            export_size=int(os.getenv("PIXEL_EXPORT_SIZE", "512")),
            thumbnail_size=int(os.getenv("PIXEL_THUMBNAIL_SIZE", "120")),
            thumbnail_resolution=int(os.getenv("PIXEL_THUMBNAIL_RESOLUTION", "48")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def pipeline_config(self, **overrides) -> PipelineConfig:
        values = {
            "resolution": self.resolution,
            "palette": self.palette,
            "dithering": self.dithering,
            "contrast": self.contrast,
            "saturation": self.saturation,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return PipelineConfig(**values)


SETTINGS = ConverterSettings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("pixel-art")
