import pytest
from PIL import Image


def make_gradient(width: int, height: int, mode: str = "RGB") -> Image.Image:
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for y in range(height):
        for x in range(width):
            pixels[x, y] = (
                (x * 255) // max(1, width - 1),
                (y * 255) // max(1, height - 1),
                ((x + y) * 97) % 256,
            )
    return img.convert(mode) if mode != "RGB" else img


@pytest.fixture
def gradient():
    return make_gradient
