from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from PIL import Image, ImageOps

PathLike = Union[str, Path]


def load_image(path: PathLike) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        # Phone photos store rotation in EXIF; apply it so the aspect is right.
        return ImageOps.exif_transpose(img)


def encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def save_png(img: Image.Image, path: PathLike) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(encode_png(img))
    return target
