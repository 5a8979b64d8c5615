import sys
import os
import argparse
from PIL import UnidentifiedImageError

from .bitplane import BPP, SPRITE_SIZE, iter_tiles, write_tiles
from .color import bgr555_to_rgb888
from .errors import EmptyPaletteError, EncoderError, SinkError, UnsupportedFormatError
from .image import load_pixels
from .palette import build_palette, write_palette


def palette_path_for(output_path):
    return os.path.splitext(output_path)[0] + "_pal.bin"


def convert_pixels(width, height, pixels, output_path, palette_path=None, truncate=False):
    """Write the palette file and append the sprite data for a decoded image.

    Everything that can be rejected (color count, sprite size) is checked
    before either file is touched.
    """
    if palette_path is None:
        palette_path = palette_path_for(output_path)

    palette, indices = build_palette(pixels)
    if not palette:
        raise EmptyPaletteError()

    if width != SPRITE_SIZE or height != SPRITE_SIZE:
        raise UnsupportedFormatError(
            f"Only {SPRITE_SIZE}x{SPRITE_SIZE} images are supported, got {width}x{height}.")
    tiles = list(iter_tiles(indices, width, BPP))

    print(f"Palette:    {len(palette)} colors")
    for i, color in enumerate(palette[:16]):
        r, g, b = bgr555_to_rgb888(color)
        print(f"Index {i + 1:3}: 0x{color:04X} ({r:3}, {g:3}, {b:3})")
    if len(palette) >= 1 << BPP:
        print(f"WARNING: {len(palette)} colors do not fit {BPP}bpp, "
              f"sprite data keeps only the low {BPP} bits of each index.")

    # The sprite file is opened first so a bad output path leaves no palette.
    try:
        o = open(output_path, "wb" if truncate else "ab")
    except OSError as e:
        raise SinkError(output_path, e.strerror or e) from e

    with o:
        print(f"Output Pal: {palette_path}")
        write_palette(palette_path, palette)

        print(f"Output Img: {output_path} [{width}x{height}, {BPP}bpp planar]")
        try:
            written = write_tiles(o, output_path, tiles)
        except SinkError:
            os.remove(palette_path)
            raise
    return palette, written


def convert_image(image_path, output_path, palette_path=None, truncate=False):
    width, height, pixels = load_pixels(image_path)
    print(f"Processing: {image_path} ({width}x{height})")
    return convert_pixels(width, height, pixels, output_path, palette_path, truncate)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Convert a 16x16 image to an SNES BGR555 palette and 4bpp planar sprite.")
    parser.add_argument("-i", "--input", required=True, help="Input image (BMP, PNG, ...).")
    parser.add_argument("-o", "--output", required=True,
                        help="Sprite data file, appended to if it already exists.")
    parser.add_argument("-p", "--palette",
                        help="Palette file. Defaults to <output>_pal.bin.")
    parser.add_argument("--truncate", action="store_true",
                        help="Empty the sprite data file before writing instead of appending.")

    args = parser.parse_args(argv)

    try:
        palette, written = convert_image(args.input, args.output, args.palette, args.truncate)
    except FileNotFoundError:
        print(f"Error: File '{args.input}' not found.", file=sys.stderr)
        sys.exit(1)
    except UnidentifiedImageError:
        print(f"Error: Cannot read '{args.input}' as an image.", file=sys.stderr)
        sys.exit(1)
    except EncoderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: Cannot read '{args.input}': {e.strerror or e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {written} bytes of sprite data.")
    print("Done.")


if __name__ == "__main__":
    main()
