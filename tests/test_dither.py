import pytest
from PIL import Image

from pixel_art.config import DitheringMode
from pixel_art.errors import UnknownDitheringModeError
from pixel_art.processing.dither import (
    QUANTIZERS,
    bayer_threshold,
    floyd_steinberg,
    ordered_dither,
    quantize,
    quantize_none,
)
from pixel_art.processing.palette import get_palette, nearest_color

BLACK_WHITE = ((0, 0, 0), (255, 255, 255))
FS_KERNEL = ((1, 0, 7 / 16), (-1, 1, 3 / 16), (0, 1, 5 / 16), (1, 1, 1 / 16))


def _palette_image(colors, width=6, height=5):
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for y in range(height):
        for x in range(width):
            pixels[x, y] = colors[(x * 3 + y) % len(colors)]
    return img


@pytest.mark.parametrize("mode", list(DitheringMode))
def test_every_output_pixel_is_a_palette_member(gradient, mode):
    colors = get_palette("sunset").colors

    out = quantize(gradient(24, 18), colors, mode)

    assert out.mode == "RGB"
    assert out.size == (24, 18)
    assert set(out.getdata()) <= set(colors)


@pytest.mark.parametrize("mode", list(DitheringMode))
def test_quantizers_are_deterministic(gradient, mode):
    colors = get_palette("pico8").colors
    src = gradient(20, 12)

    first = QUANTIZERS[mode](src, colors)
    second = QUANTIZERS[mode](src, colors)

    assert first.tobytes() == second.tobytes()


def test_quantize_none_leaves_palette_images_unchanged():
    colors = get_palette("vapor").colors
    src = _palette_image(colors)

    assert quantize_none(src, colors).tobytes() == src.tobytes()


def test_floyd_steinberg_has_nothing_to_diffuse_on_palette_images():
    colors = get_palette("earthen").colors
    src = _palette_image(colors)

    assert floyd_steinberg(src, colors).tobytes() == src.tobytes()


def test_floyd_steinberg_preserves_average_tone():
    src = Image.new("RGB", (32, 32), (128, 128, 128))

    out = floyd_steinberg(src, BLACK_WHITE)
    values = [pixel[0] for pixel in out.getdata()]

    assert set(values) == {0, 255}
    assert abs(sum(values) / len(values) - 128) < 12


def test_floyd_steinberg_diffuses_error_to_the_right_first():
    # 100 -> black leaves +100 of error, 7/16 of which pushes the next pixel to white.
    src = Image.new("RGB", (2, 1), (100, 100, 100))
    src.putpixel((1, 0), (90, 90, 90))

    out = floyd_steinberg(src, BLACK_WHITE)

    assert out.getpixel((0, 0)) == (0, 0, 0)
    assert out.getpixel((1, 0)) == (255, 255, 255)


def test_floyd_steinberg_does_not_modify_input(gradient):
    src = gradient(10, 10)
    before = src.tobytes()

    floyd_steinberg(src, BLACK_WHITE)

    assert src.tobytes() == before


def test_bayer_threshold_tiles_every_four_pixels():
    for y in range(4):
        for x in range(4):
            value = bayer_threshold(x, y)
            assert bayer_threshold(x + 4, y) == value
            assert bayer_threshold(x, y + 4) == value
            assert bayer_threshold(x + 8, y + 12) == value

    assert bayer_threshold(0, 0) == -32
    assert bayer_threshold(0, 3) == pytest.approx(28)


def test_ordered_dither_pattern_repeats_on_flat_input():
    src = Image.new("RGB", (12, 8), (120, 120, 120))

    out = ordered_dither(src, BLACK_WHITE)

    for y in range(8):
        for x in range(12):
            assert out.getpixel((x, y)) == out.getpixel((x % 4, y % 4))
    assert set(out.getdata()) == set(BLACK_WHITE)


def test_quantize_rejects_unknown_mode(gradient):
    with pytest.raises(UnknownDitheringModeError):
        quantize(gradient(2, 2), BLACK_WHITE, "sparkle")


def _replay_diffusion(value, out):
    """Recompute every neighbour share of error from a dithered flat image."""

    width, height = out.size
    received = [[0.0] * width for _ in range(height)]
    shares = []  # (from_xy, to_xy or None when dropped off the edge, amount)
    for y in range(height):
        for x in range(width):
            old = value + received[y][x]
            chosen = out.getpixel((x, y))[0]
            assert chosen == nearest_color((old, old, old), BLACK_WHITE)[0]
            error = old - chosen
            for dx, dy, share in FS_KERNEL:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and ny < height:
                    received[ny][nx] += error * share
                    shares.append(((x, y), (nx, ny), error * share))
                else:
                    shares.append(((x, y), None, error * share))
    return shares


def test_floyd_steinberg_only_loses_error_at_the_edges():
    value = 77
    size = 40
    out = floyd_steinberg(Image.new("RGB", (size, size), (value,) * 3), BLACK_WHITE)
    outputs = [[out.getpixel((x, y))[0] for x in range(size)] for y in range(size)]

    shares = _replay_diffusion(value, out)

    # Every pixel's error is fully handed on: dropped shares only come from edge pixels.
    dropped = sum(amount for _, target, amount in shares if target is None)
    for source, target, _ in shares:
        if target is None:
            x, y = source
            assert x in (0, size - 1) or y == size - 1
    imbalance = value * size * size - sum(map(sum, outputs))
    assert imbalance == pytest.approx(dropped, abs=1e-6)

    lo, hi = 4, 36

    def inside(xy):
        return xy is not None and lo <= xy[0] < hi and lo <= xy[1] < hi

    window_in = sum(amount for src, dst, amount in shares if not inside(src) and inside(dst))
    window_out = sum(amount for src, dst, amount in shares if inside(src) and not inside(dst))
    window_outputs = [outputs[y][x] for y in range(lo, hi) for x in range(lo, hi)]
    window_imbalance = value * len(window_outputs) - sum(window_outputs)

    # Inside the window error is conserved: only what crosses its border changes the tone.
    assert window_imbalance == pytest.approx(window_out - window_in, abs=1e-6)
    assert abs(sum(window_outputs) / len(window_outputs) - value) < 1.5


@pytest.mark.parametrize("quantizer", [quantize_none, floyd_steinberg, ordered_dither])
def test_quantizers_accept_non_rgb_images(quantizer):
    out = quantizer(Image.new("L", (3, 2), 250), BLACK_WHITE)

    assert out.mode == "RGB"
    assert set(out.getdata()) <= set(BLACK_WHITE)
