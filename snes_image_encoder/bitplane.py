"""4bpp planar encoding of 16x16 SNES sprites.

A sprite is four 8x8 tiles, numbered left to right, top to bottom:

    0 1
    2 3

Each tile is 32 bytes. The first 16 hold bitplanes 0 and 1 interleaved
row by row, the last 16 hold bitplanes 2 and 3 the same way:

    r0bp0 r0bp1 r1bp0 r1bp1 ... r7bp1 | r0bp2 r0bp3 ... r7bp3

Within a row byte the leftmost pixel is the most significant bit.
"""

from .errors import ShapeMismatchError, SinkError, UnsupportedFormatError

TILE_SIZE = 8
SPRITE_SIZE = 16
BPP = 4
TILES_PER_SPRITE = 4
TILE_BYTES = TILE_SIZE * BPP
SPRITE_BYTES = TILE_BYTES * TILES_PER_SPRITE


def _quadrant(num):
    # (col, row) origin of quadrant num inside a 2x2 block of 8x8 cells
    return (num & 0x01) * TILE_SIZE, ((num >> 1) & 0x01) * TILE_SIZE


def _check_format(stride, bpp):
    if bpp != BPP:
        raise UnsupportedFormatError(f"Only {BPP}bpp sprites are supported, got {bpp}bpp.")
    if stride != SPRITE_SIZE:
        raise UnsupportedFormatError(
            f"Only {SPRITE_SIZE}x{SPRITE_SIZE} sprites are supported, got a stride of {stride}.")


def _setup_bitplanes(indices, stride, tile_num):
    """Split one tile of the index buffer into single-bit bitplane cells.

    The four bitplanes share one stride x stride scratch buffer, bitplane n
    sitting in quadrant n the same way tile n sits in the sprite.
    """
    scratch = bytearray(stride * stride)
    col_offs, row_offs = _quadrant(tile_num)

    for tile_row in range(row_offs, row_offs + TILE_SIZE):
        for tile_col in range(col_offs, col_offs + TILE_SIZE):
            value = indices[tile_row * stride + tile_col]
            for bp_num in range(BPP):
                bp_col_offs, bp_row_offs = _quadrant(bp_num)
                pos = ((bp_row_offs + tile_row % TILE_SIZE) * stride
                       + bp_col_offs + tile_col % TILE_SIZE)
                scratch[pos] = (value >> bp_num) & 0x01

    return scratch


def _pack_bitplanes(scratch, stride):
    # Folds each 8-bit row into its first cell, in place.
    for bp_num in range(BPP):
        bp_col_offs, bp_row_offs = _quadrant(bp_num)
        for row in range(bp_row_offs, bp_row_offs + TILE_SIZE):
            byte = 0
            for col in range(bp_col_offs, bp_col_offs + TILE_SIZE):
                byte = ((byte << 1) ^ scratch[row * stride + col]) & 0xFF
            scratch[row * stride + bp_col_offs] = byte


def _row_byte(scratch, stride, bp_num, row):
    bp_col_offs, bp_row_offs = _quadrant(bp_num)
    return scratch[(bp_row_offs + row) * stride + bp_col_offs]


def _emit_tile(scratch, stride):
    out = bytearray()
    for low, high in ((0, 1), (2, 3)):
        for row in range(TILE_SIZE):
            out.append(_row_byte(scratch, stride, low, row))
            out.append(_row_byte(scratch, stride, high, row))
    return bytes(out)


def _encode_tile(indices, stride, tile_num):
    scratch = _setup_bitplanes(indices, stride, tile_num)
    _pack_bitplanes(scratch, stride)
    return _emit_tile(scratch, stride)


def iter_tiles(indices, stride=SPRITE_SIZE, bpp=BPP):
    """Yield the encoded bytes of each tile, tile 0 first.

    The buffer geometry is checked before anything is yielded.
    """
    _check_format(stride, bpp)
    if len(indices) != stride * stride:
        raise ShapeMismatchError(stride * stride, len(indices))
    return (_encode_tile(indices, stride, tile_num) for tile_num in range(TILES_PER_SPRITE))


def encode_sprite(indices, stride=SPRITE_SIZE, bpp=BPP):
    return b"".join(iter_tiles(indices, stride, bpp))


def write_sprite(path, indices, stride=SPRITE_SIZE, bpp=BPP):
    """Append one encoded sprite to path, flushing after every tile.

    The file is created if missing and never truncated, so repeated calls
    accumulate sprites. A failed write leaves a truncated sprite behind;
    callers should discard the file rather than retry into it.
    """
    tiles = iter_tiles(indices, stride, bpp)
    try:
        o = open(path, "ab")
    except OSError as e:
        raise SinkError(path, e.strerror or e) from e
    with o:
        return write_tiles(o, path, tiles)


def write_tiles(o, path, tiles):
    """Write encoded tiles to an open binary file, flushing each one."""
    written = 0
    try:
        for tile in tiles:
            o.write(tile)
            o.flush()
            written += len(tile)
    except OSError as e:
        raise SinkError(path, e.strerror or e) from e
    return written


def decode_sprite(data, stride=SPRITE_SIZE, bpp=BPP):
    """Rebuild the index buffer of one sprite from its planar bytes.

    Only the low four bits of each index survive encoding, so indices above
    15 come back masked.
    """
    _check_format(stride, bpp)
    if len(data) != SPRITE_BYTES:
        raise ShapeMismatchError(SPRITE_BYTES, len(data))

    indices = bytearray(stride * stride)
    for tile_num in range(TILES_PER_SPRITE):
        tile = data[tile_num * TILE_BYTES:(tile_num + 1) * TILE_BYTES]
        col_offs, row_offs = _quadrant(tile_num)
        for row in range(TILE_SIZE):
            planes = (tile[row * 2], tile[row * 2 + 1],
                      tile[TILE_BYTES // 2 + row * 2], tile[TILE_BYTES // 2 + row * 2 + 1])
            for col in range(TILE_SIZE):
                value = 0
                for bp_num, byte in enumerate(planes):
                    value |= ((byte >> (7 - col)) & 0x01) << bp_num
                indices[(row_offs + row) * stride + col_offs + col] = value
    return indices
