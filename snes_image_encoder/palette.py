from .color import rgb888_to_bgr555
from .errors import PaletteCapacityError, SinkError

# Index 0 is the transparent slot, so 1-based indices must fit in a byte.
MAX_PALETTE_COLORS = 255

# Written in front of the palette entries to fill the transparent slot.
ALPHA_COLOR = 0xFFFF


def build_palette(pixels):
    """Build the palette and the per-pixel index buffer.

    pixels is an iterable of (r, g, b) tuples in row-major order. Returns
    (palette, indices): palette is the list of unique BGR555 colors in the
    order they were first seen, indices holds palette position + 1 for
    every pixel.
    """
    palette = []
    positions = {}
    indices = bytearray()

    for r, g, b in pixels:
        color = rgb888_to_bgr555(r, g, b)
        idx = positions.get(color)
        if idx is None:
            if len(palette) >= MAX_PALETTE_COLORS:
                raise PaletteCapacityError(MAX_PALETTE_COLORS)
            palette.append(color)
            idx = len(palette)
            positions[color] = idx
        indices.append(idx)

    return palette, indices


def palette_to_bytes(palette):
    data = bytearray(ALPHA_COLOR.to_bytes(2, "little"))
    for color in palette:
        data.append(color & 0xFF)
        data.append((color >> 8) & 0xFF)
    return bytes(data)


def write_palette(path, palette):
    """Write the palette file, replacing any existing one."""
    data = palette_to_bytes(palette)
    try:
        with open(path, "wb") as pal_out:
            pal_out.write(data)
    except OSError as e:
        raise SinkError(path, e.strerror or e) from e
    return len(data)
