"""Building blocks for a 2D retro tile engine: asset loading, bitmaps, palettes, tilesets, TMX tilemaps, sequences, sprite atlases, scanline blitters and actors."""

__version__ = "0.1.0"