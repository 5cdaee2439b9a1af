"""Command-line interface for the pixel art converter."""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image

from .config import SETTINGS, ConverterSettings, PipelineConfig, configure_logging
from .errors import PixelArtError
from .infrastructure.images import load_image, save_png
from .processing.palette import list_palettes, palette_from_hex, resolve_palette
from .processing.pipeline import convert, scale_for, upscale


def build_parser(settings: ConverterSettings = SETTINGS) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-art",
        description="Convert images into palette-quantized pixel art",
    )
    parser.add_argument("inputs", nargs="*", help="Input image paths")
    parser.add_argument("-o", "--output", help="Output path (single input only, default: <input>_pixel.png)")
    parser.add_argument("--output-dir", help="Directory for outputs when converting several files")
    parser.add_argument("-r", "--resolution", type=int, help=f"Long-edge pixel count (default: {settings.resolution})")
    parser.add_argument("-p", "--palette", help=f"Built-in palette key (default: {settings.palette})")
    parser.add_argument("--colors", help="Comma-separated #RRGGBB colors, overrides --palette")
    parser.add_argument("-d", "--dithering", help=f"none, floyd or ordered (default: {settings.dithering})")
    parser.add_argument("-c", "--contrast", type=float, help=f"Contrast, -100..100 (default: {settings.contrast:g})")
    parser.add_argument("-s", "--saturation", type=float, help=f"Saturation multiplier, 0..3 (default: {settings.saturation:g})")
    parser.add_argument("--scale", type=int, help="Explicit integer upscale factor")
    parser.add_argument("--size", type=int, help=f"Bounding box for the upscaled output (default: {settings.export_size})")
    parser.add_argument("--thumbnail", action="store_true", help="Use the thumbnail resolution and bounding box")
    parser.add_argument("-j", "--jobs", type=int, default=1, help="Files converted in parallel")
    parser.add_argument("--list-palettes", action="store_true", help="Print the built-in palettes and exit")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def config_from_args(args: argparse.Namespace, settings: ConverterSettings = SETTINGS) -> PipelineConfig:
    resolution = args.resolution
    if resolution is None and args.thumbnail:
        resolution = settings.thumbnail_resolution
    palette = palette_from_hex(args.colors.split(",")) if args.colors else args.palette
    config = settings.pipeline_config(
        resolution=resolution,
        palette=palette,
        dithering=args.dithering,
        contrast=args.contrast,
        saturation=args.saturation,
    )
    config.validate()
    resolve_palette(config.palette)
    return config


def output_path(source: Path, args: argparse.Namespace) -> Path:
    if args.output:
        return Path(args.output)
    directory = Path(args.output_dir) if args.output_dir else source.parent
    return directory / f"{source.stem}_pixel.png"


def convert_file(
    source: Path,
    target: Path,
    config: PipelineConfig,
    *,
    scale: Optional[int] = None,
    target_max: int = SETTINGS.export_size,
) -> Path:
    result = convert(load_image(source), config)
    factor = scale if scale is not None else scale_for(result.width, result.height, target_max)
    return save_png(upscale(result.image, factor), target)


def _print_palettes() -> None:
    for palette in list_palettes():
        print(f"{palette.key:<16} {palette.name:<12} {' '.join(palette.hex_colors())}")


def main(argv: Optional[Sequence[str]] = None, settings: ConverterSettings = SETTINGS) -> int:
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    logger = configure_logging()
    if args.quiet:
        logger.setLevel(logging.ERROR)

    if args.list_palettes:
        _print_palettes()
        return 0
    if not args.inputs:
        parser.error("at least one input image is required")
    if args.output and len(args.inputs) > 1:
        parser.error("--output only applies to a single input; use --output-dir")
    if args.scale is not None and args.scale < 1:
        parser.error("--scale must be >= 1")

    try:
        config = config_from_args(args, settings)
    except PixelArtError as exc:
        print(f"pixel-art: {exc}", file=sys.stderr)
        return 2

    target_max = args.size or (settings.thumbnail_size if args.thumbnail else settings.export_size)
    sources = [Path(item) for item in args.inputs]

    def run(source: Path) -> bool:
        target = output_path(source, args)
        try:
            convert_file(source, target, config, scale=args.scale, target_max=target_max)
        except (OSError, Image.DecompressionBombError) as exc:
            logger.error("%s: %s", source, exc)
            return False
        logger.info("%s -> %s", source, target)
        return True

    # Each worker owns its images; error diffusion stays sequential inside a file.
    with ThreadPoolExecutor(max_workers=max(1, args.jobs)) as pool:
        results: List[bool] = list(pool.map(run, sources))

    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
