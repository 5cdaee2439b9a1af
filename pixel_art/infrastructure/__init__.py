"""Image decoding and encoding collaborators."""

from .images import encode_png, load_image, save_png

__all__ = ["encode_png", "load_image", "save_png"]
