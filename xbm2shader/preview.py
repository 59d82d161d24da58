from PIL import Image

from .xbm import bit_at


def render_preview(width, height, words, scale=1):
    # 1 = white in mode "1"; set bits are XBM foreground, drawn black
    img = Image.new('1', (width, height), 1)
    for y in range(height):
        for x in range(width):
            if bit_at(words, width, x, y):
                img.putpixel((x, y), 0)

    if scale > 1:
        img = img.resize((width * scale, height * scale), Image.NEAREST)
    return img


def save_preview(png_path, width, height, words, scale=1):
    render_preview(width, height, words, scale).save(png_path)
    return png_path
