"""Convert images to SNES BGR555 palettes and 4bpp planar sprite data."""

from .bitplane import decode_sprite, encode_sprite, iter_tiles, write_sprite
from .color import bgr555_to_rgb888, rgb888_to_bgr555
from .errors import (
    EmptyPaletteError,
    EncoderError,
    PaletteCapacityError,
    ShapeMismatchError,
    SinkError,
    UnsupportedFormatError,
)
from .palette import build_palette, palette_to_bytes, write_palette

__version__ = "0.1.0"
