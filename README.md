# retrotiles

retrotiles is a set of pure-Python building blocks for a classic 2D tile
engine in the style of 16-bit consoles. It covers asset data and the pixel
work at the level of single scanlines. It does not open a window and does not
draw frames.

## What is in the package

| Module | Contents |
| --- | --- |
| `retrotiles.files` | `AssetLoader` resolves and reads files relative to a base load path (`set_load_path`, `resolve`, `open`, `load`, `exists`). `split_filename` and `build_file_path` are helpers that take file names apart and put them together. |
| `retrotiles.bitmap` | `Palette` is a table of packed 32-bit colours. `Bitmap` is a raster with rows padded to four bytes. `pack_rgb32` packs a colour. |
| `retrotiles.loadbitmap` | `load_bitmap` reads PNG (through Pillow) or uncompressed BMP files as 8 bpp indexed bitmaps. `convert_24_to_indexed` and `convert_32_to_indexed` reduce true-colour images that have up to 255 colours. |
| `retrotiles.blitters` | `get_blitter` selects a scanline blitter: plain or colour-keyed, plain or scaled (16.16 fixed point), plain or blended, with an 8 or 32 bpp target. Also `blit_color`, `blit_mosaic_solid` and `blit_mosaic_blend`. |
| `retrotiles.base64dec` | `b64decode` is a tolerant base64 decoder with an optional output limit. |
| `retrotiles.sequences` | The data types `Sequence`, `SequenceFrame`, `ColorCycle`, `ColorStrip` and `SequencePack`. `parse_sequence_pack` and `load_sequence_pack` read `.sqx` XML files. |
| `retrotiles.tileset` | `Tileset` holds tile pixels indexed from 1. Also `TileAttributes` and the enums `LayerType` and `TilesetType`. |
| `retrotiles.tmx` | `parse_tmx` and `load_tmx` read the structure of a Tiled `.tmx` map: its size, background colour, tilesets and layers. `load_tmx` caches the last file it read. |
| `retrotiles.tilemap` | `Tilemap` and `Tile`. `load_tilemap` loads one tile layer from a `.tmx` file; the data may be CSV, base64 or zlib-compressed base64 (`decode_csv`, `decode_base64`). |
| `retrotiles.atlas` | `load_sprite_atlas` loads an atlas image and its descriptor. The descriptor is tried as json (`frames` array), then csv, then txt. Each sprite becomes a `SpriteData` entry. |
| `retrotiles.geometry` | `Matrix3`, `Affine`, `affine_matrix` (maps screen positions to layer positions) and `clip_rect`. |
| `retrotiles.indexlist` | `IndexList` is a doubly linked list over a fixed range of integer ids. |
| `retrotiles.sintable` | `calc_sin` and `calc_cos` are integer trigonometry from 8.8 fixed-point tables. |
| `retrotiles.actors` | `ActorPool` manages fixed actor slots with motion, callbacks and timers. `Actor` has a hitbox and a collision test. |

## Installation

```
pip install retrotiles
```

## Examples

### Load a tile layer from a Tiled map

```python
from retrotiles.files import AssetLoader
from retrotiles.tilemap import load_tilemap
from retrotiles.tileset import Tileset

loader = AssetLoader("assets/sonic")

def tileset_loader(tsx_path):
    # build a Tileset from the .tsx file referenced by the map
    return Tileset(256, 8, 8)

tilemap = load_tilemap(loader, "Sonic_md_fg1.tmx", None, tileset_loader)
print(tilemap.rows, tilemap.cols, tilemap.tile(0, 0).index)
```

The package does not read `.tsx` files itself. The `tileset_loader` callable
you pass in receives the path of the `.tsx` file and returns whatever tileset
object you want attached to the map.

### Indexed bitmaps and a scanline blit

```python
from retrotiles.loadbitmap import load_bitmap
from retrotiles.blitters import get_blitter

bitmap = load_bitmap(loader, "beach.png")
target = bytearray(bitmap.width * 4)
blit = get_blitter(32, key=True, scaling=False, blend=False)
blit(bitmap.data, bitmap.offset(0, 0), bitmap.palette, target, 0, bitmap.width, 1)
```

### Sequences and sprite atlases

```python
from retrotiles.sequences import load_sequence_pack
from retrotiles.atlas import load_sprite_atlas

pack = load_sequence_pack(loader, "Sonic_md_seq.sqx")
water = pack.find("seq_water")

image, sprites = load_sprite_atlas(loader, "atlas")
print(sprites[0].name, sprites[0].w, sprites[0].h)
```

### Layer transforms

```python
from retrotiles.geometry import Affine, affine_matrix

matrix = affine_matrix(0, 0, Affine(angle=45.0, dx=200, dy=120, sx=2.0, sy=2.0))
x, y = matrix.apply(10, 10)
```

### Actors

```python
from retrotiles.actors import ActorPool

pool = ActorPool(40)
index = pool.available(0, 10)
ship = pool.set(index, 1, 10, 20, 32, 16)
ship.vx = 2
pool.tasks(0)
print(ship.x, ship.hitbox)
```

## What the package does not do

- It has no renderer. It does not open a window, read input, or compose
  layers and sprites into a frame. The blitters work on one scanline at a
  time, and you drive them yourself.
- It has no layer object. Position wrapping, tile queries, column offsets,
  mosaic and world parallax are not provided. Only the matrix and clip
  helpers in `retrotiles.geometry` are.
- It does not play animations. Sequences and colour cycles are loaded as data
  only. Nothing advances frames or rotates palette entries over time.
- It does not load standalone palette files such as `.act`. Palettes come
  from images, or you build them with `Palette`.
- It does not read `.tsx` tileset files or resource packs.

## Errors

Failures raise Python exceptions; there are no status codes.

- A missing file raises `FileNotFoundError`.
- Malformed or unsupported data raises `ValueError`.
- A missing layer or sequence raises `LookupError` or `KeyError`.
- An out-of-range index raises `IndexError`.

## Running the tests

```
pip install "retrotiles[test]"
pytest
```