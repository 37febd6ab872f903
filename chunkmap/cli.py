"""Command line interface: render region files to images and merge them."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tqdm import tqdm

from chunkmap.biomes import BiomeData, load_biomes_data
from chunkmap.block_colors import load_block_colors
from chunkmap.dimensions import Dimension
from chunkmap.images import ImageRenderType, create_map_image, create_region_images
from chunkmap.regions import parse_region_file

__all__ = ["render_regions", "merge_regions", "main"]

RGB = tuple[int, int, int]


def _region_files(folder: Path) -> list[Path]:
    return sorted(
        path
        for path in folder.iterdir()
        if path.suffix == ".mca" and path.is_file() and path.stat().st_size > 0
    )


def render_regions(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    render_type: ImageRenderType,
    dimension: Dimension,
    block_colors: Mapping[str, RGB],
    biomes_data: Mapping[str, BiomeData],
) -> list[Path]:
    """Render every non-empty ``.mca`` file of ``input_path`` into ``output_path``.

    Regions that fail to parse or render are reported on stderr and skipped.
    Returns the paths of the written images, sorted.
    """
    render_type = ImageRenderType(render_type)
    dimension = Dimension(dimension)
    region_files = _region_files(Path(input_path))
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    lock = threading.Lock()
    written: list[Path] = []

    with tqdm(total=len(region_files), unit="region") as progress:

        def render_one(path: Path) -> None:
            with lock:
                progress.set_postfix_str(f"Rendering {path.name}")
            try:
                region = parse_region_file(path)
            except (ValueError, OSError) as exc:
                tqdm.write(f"Failed to parse region: {exc}", file=sys.stderr)
            else:
                try:
                    images = create_region_images(
                        region.chunks, dimension, render_type, block_colors, biomes_data
                    )
                except (ValueError, KeyError) as exc:
                    tqdm.write(f"Failed to create region image: {exc}", file=sys.stderr)
                else:
                    for rx, rz, image in images:
                        target = output_dir / f"r.{rx}.{rz}.png"
                        image.save(target)
                        with lock:
                            written.append(target)
            with lock:
                progress.update(1)

        with ThreadPoolExecutor(max_workers=os.cpu_count() or 1) as pool:
            for future in [pool.submit(render_one, path) for path in region_files]:
                future.result()

    return sorted(written)


def merge_regions(
    folder: str | os.PathLike[str], output: str | os.PathLike[str]
) -> Path:
    """Merge the region images of ``folder`` into the PNG file ``output``."""
    target = Path(output)
    if not str(output).endswith(".png"):
        raise ValueError("Output must be a PNG file")
    create_map_image(folder).save(target)
    return target


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkmap", description="A tool to render Minecraft chunks"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    merge = commands.add_parser("merge", help="Merge chunk images into a single file")
    merge.add_argument("folder", help="Input folder containing chunk images")
    merge.add_argument("-o", "--output", required=True, help="Output file (PNG)")

    render = commands.add_parser("render", help="Render chunk data into images")
    render.add_argument("folder", help="Input folder containing chunk data")
    render.add_argument("-o", "--output", required=True, help="Output directory")
    render.add_argument(
        "-d",
        "--dimension",
        required=True,
        choices=[d.value for d in Dimension],
        help="Dimension to render",
    )
    render.add_argument(
        "-r",
        "--render",
        required=True,
        choices=[r.value for r in ImageRenderType],
        help="Render mode",
    )
    render.add_argument(
        "--blocks", required=True, help="JSON file mapping block names to #rrggbb colours"
    )
    render.add_argument("--biomes", required=True, help="JSON file of biome data")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool; returns the process exit status."""
    args = _build_parser().parse_args(argv)

    if args.command == "merge":
        try:
            merge_regions(args.folder, args.output)
        except (ValueError, OSError) as exc:
            print(f"Failed to merge regions: {exc}", file=sys.stderr)
            return 1
        print(f"Merged regions in {args.output}")
        return 0

    try:
        block_colors = load_block_colors(args.blocks)
        biomes_data = load_biomes_data(args.biomes)
    except (ValueError, OSError) as exc:
        print(f"Failed to load rendering data: {exc}", file=sys.stderr)
        return 1

    try:
        render_regions(
            args.folder,
            args.output,
            ImageRenderType(args.render),
            Dimension(args.dimension),
            block_colors,
            biomes_data,
        )
    except OSError as exc:
        print(f"Failed to render regions: {exc}", file=sys.stderr)
        return 1
    print("All regions rendered")
    return 0


if __name__ == "__main__":
    sys.exit(main())