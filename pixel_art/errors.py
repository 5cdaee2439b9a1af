"""Typed failures raised while validating a conversion request."""

from __future__ import annotations


class PixelArtError(ValueError):
    """Base class for every configuration error the converter raises."""


class UnknownPaletteError(PixelArtError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown palette: {key!r}")
        self.key = key


class InvalidColorFormatError(PixelArtError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid color {value!r}, expected #RRGGBB")
        self.value = value


class EmptyPaletteError(PixelArtError):
    def __init__(self) -> None:
        super().__init__("Palette must contain at least one color")


class InvalidResolutionError(PixelArtError):
    def __init__(self, resolution: object) -> None:
        super().__init__(f"Resolution must be an integer >= 1, got {resolution!r}")
        self.resolution = resolution


class UnknownDitheringModeError(PixelArtError):
    def __init__(self, mode: object) -> None:
        super().__init__(f"Unknown dithering mode: {mode!r}")
        self.mode = mode


class DivisionByZeroContrastError(PixelArtError):
    def __init__(self, contrast: float) -> None:
        super().__init__(f"Contrast must be below 259, got {contrast!r}")
        self.contrast = contrast


class InvalidSaturationError(PixelArtError):
    def __init__(self, saturation: float) -> None:
        super().__init__(f"Saturation must be non-negative, got {saturation!r}")
        self.saturation = saturation


class InvalidSourceSizeError(PixelArtError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Source image must be at least 1x1, got {width}x{height}")
        self.size = (width, height)
