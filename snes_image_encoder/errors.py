"""Exceptions raised while encoding a sprite."""


class EncoderError(Exception):
    pass


class PaletteCapacityError(EncoderError):
    def __init__(self, limit):
        super().__init__(f"Image has more than {limit} colors after BGR555 quantization.")
        self.limit = limit


class EmptyPaletteError(EncoderError):
    def __init__(self):
        super().__init__("No colors found, the palette would be empty.")


class ShapeMismatchError(EncoderError):
    def __init__(self, expected, actual):
        super().__init__(f"Expected {expected} bytes of sprite data, got {actual}.")
        self.expected = expected
        self.actual = actual


class UnsupportedFormatError(EncoderError):
    pass


class SinkError(EncoderError):
    """The output file could not be created, opened or written.

    The original OSError is chained as __cause__.
    """

    def __init__(self, path, reason):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
