from PIL import Image


def pixels_from_image(im):
    """Row-major list of (r, g, b) tuples for a Pillow image."""
    rgb_im = im.convert("RGB")
    width, height = rgb_im.size
    pixels = []
    for y in range(height):
        for x in range(width):
            pixels.append(rgb_im.getpixel((x, y)))
    return width, height, pixels


def load_pixels(image_path):
    with Image.open(image_path) as im:
        return pixels_from_image(im)
