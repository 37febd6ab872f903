# chunkmap

Render top-down maps of Minecraft worlds from their Anvil region files
(`r.X.Z.mca`).

chunkmap reads the region files of a world, finds the highest block of
every column in each fully generated chunk, and draws one 512×512 RGBA PNG
per region. The region images can then be stitched into a single map.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Colour data

Rendering needs two JSON files that you supply:

* a block colour table: a JSON object mapping block names (without the
  `minecraft:` prefix) to `#rrggbb` colours, e.g. `{"stone": "#7f7f7f"}`;
* biome data: a JSON list of objects, each with `name`, `temperature`,
  `downfall`, `foliage_color`, `grass_color` and `water_color` (the colours
  as `0xRRGGBB` integers).

Grass, water, most leaves, air and lava are coloured without the table
(grass, water and leaves from the biome). Blocks missing from the table are
drawn in `(233, 66, 245)`. A biome missing from the biome data falls back to
`plains`, which must then be present.

## Command line

Render every non-empty `.mca` file in a region folder to `r.X.Z.png` images:

```
chunkmap render path/to/world/region -o out/regions -d overworld -r textures \
    --blocks blocks.json --biomes biomes.json
```

* `-o` / `--output` is the output directory; it is created if needed.
* `-d` / `--dimension` picks the dimension: `overworld`, `nether` or `end`.
* `-r` / `--render` picks the render mode:
  * `textures` – block colours, with water tinted by depth and a light
    relief shading
  * `texturesnowater` – block colours of the floor beneath any water
  * `heightmap` – greyscale by height of the surface block
  * `biomes` – the biome's grass colour
  * `temperature` – blue (cold) to orange (warm) by biome temperature
  * `downfall` – black (dry) to white (wet) by biome downfall
  * `inhabited` – how long players have spent in each chunk
  * `lastupdated` – how recently each chunk was saved, over the last year
* `--blocks` and `--biomes` name the colour data files described above.

Regions are rendered on a pool of threads and a progress bar shows how far
along the run is. A region that cannot be parsed or drawn is reported on
stderr and skipped.

Merge the rendered region images into one picture:

```
chunkmap merge out/regions -o map.png
```

The output must be a `.png` file. Regions are placed by the coordinates in
their file names; gaps between them stay transparent.

The command exits with status 1 and a message on stderr when merging fails
or the colour data cannot be loaded.

## Library

The same steps are available from Python:

```python
from chunkmap.regions import parse_region_file
from chunkmap.dimensions import Dimension
from chunkmap.images import ImageRenderType, create_region_images, create_map_image
from chunkmap.block_colors import load_block_colors
from chunkmap.biomes import load_biomes_data

block_colors = load_block_colors("blocks.json")
biomes_data = load_biomes_data("biomes.json")

region = parse_region_file("world/region/r.0.0.mca")
for rx, rz, image in create_region_images(
    region.chunks, Dimension.OVERWORLD, ImageRenderType.TEXTURES, block_colors, biomes_data
):
    image.save(f"r.{rx}.{rz}.png")

create_map_image(".").save("map.png")
```

`chunkmap.cli.render_regions` and `chunkmap.cli.merge_regions` do what the
two commands do.

Lower-level pieces are public too:

* `chunkmap.nbt` – `loads` and `dumps` for uncompressed NBT, with typed
  wrappers (`Int`, `Long`, `LongArray`, …) for numeric tags and arrays.
* `chunkmap.regions` – `parse_region_bytes`, `parse_chunk_from_bytes` and
  `parse_region_file`; only zlib-compressed chunks with status
  `minecraft:full` (or no status) are kept.
* `chunkmap.chunks.parse_chunk_surface` – the 256 surface blocks and 16
  biomes of a chunk.
* `chunkmap.sections`, `chunkmap.heightmaps` – palette and heightmap
  decoding.
* `chunkmap.utils` – the colour ramps and coordinate helpers.
* `chunkmap.web.render_region_png` – turns the raw bytes of a region file
  into overworld texture renders as PNG-encoded `RegionPng` records.

Malformed data raises `ValueError` subclasses: `NbtError`, `SectionError`,
`ChunkError`, `RegionError` and `ImageError`.

## Limitations

* No block colour table or biome data ships with the package; you must
  provide both files.
* Only zlib-compressed chunks are read; chunks stored with other
  compression schemes are skipped.
* In the nether and the end, water depth is not taken into account.