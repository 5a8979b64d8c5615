"""RGB888 <-> SNES BGR555 color conversion."""


def rgb888_to_bgr555(r, g, b):
    # 0bBBBBBGGGGGRRRRR, high bit unused
    r5 = (r & 0xF8) >> 3
    g5 = (g & 0xF8) >> 3
    b5 = (b & 0xF8) >> 3
    return r5 | (g5 << 5) | (b5 << 10)


def bgr555_to_rgb888(value):
    """Expand a BGR555 word back to an (r, g, b) tuple.

    The three bits dropped by rgb888_to_bgr555 come back as zeros.
    """
    r = (value & 0x1F) << 3
    g = ((value >> 5) & 0x1F) << 3
    b = ((value >> 10) & 0x1F) << 3
    return r, g, b
