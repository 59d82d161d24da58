import re
from collections import namedtuple

# width/height #defines, any symbol prefix; ASCII digits only
WIDTH_RE = re.compile(r'#define\s+\w+_width\s+(\d+)', re.M | re.A)
HEIGHT_RE = re.compile(r'#define\s+\w+_height\s+(\d+)', re.M | re.A)

# "<name>_bits[] = { ... };" with whatever qualifiers/types in front of it
BITS_RE = re.compile(r'[A-Za-z_]\w*_bits\[\]\s*=\s*\{(.*?)\};', re.S | re.A)

# hex (0x..) or bare decimal
NUMBER_RE = re.compile(r'0[xX][0-9A-Fa-f]+|\d+', re.A)


class ParseError(ValueError):
    pass


class Bitmap(namedtuple('Bitmap', 'width height raw')):
    """A parsed XBM: dimensions plus the raw row-padded byte stream."""

    __slots__ = ()

    @property
    def row_bytes(self):
        return (self.width + 7) // 8

    @property
    def words(self):
        return repack_bits(self.raw, self.width, self.height)

    def __repr__(self):
        return f"Bitmap({self.width}x{self.height}, {len(self.raw)} bytes)"


def parse_number(token):
    if not token.isascii():
        raise ParseError(f"bad number {token!r}")
    try:
        if token[:2] in ('0x', '0X'):
            value = int(token[2:], 16)
        else:
            value = int(token, 10)
    except ValueError:
        raise ParseError(f"bad number {token!r}") from None
    return max(value, 0)


def literal_bytes(value):
    # short-based XBMs write 16-bit values; store them little-endian
    if value <= 0xFF:
        return bytes([value])
    return bytes([value & 0xFF, (value >> 8) & 0xFF])


def parse_xbm(text):
    width_match = WIDTH_RE.search(text)
    height_match = HEIGHT_RE.search(text)
    if not width_match or not height_match:
        raise ParseError("failed to parse dimensions")

    width = int(width_match.group(1))
    height = int(height_match.group(1))
    if width == 0 or height == 0:
        raise ParseError("failed to parse dimensions")

    bits_match = BITS_RE.search(text)
    if not bits_match:
        raise ParseError("failed to parse bits array")

    tokens = NUMBER_RE.findall(bits_match.group(1))
    if not tokens:
        raise ParseError("no numbers found in bits array")

    raw = bytearray()
    for token in tokens:
        raw += literal_bytes(parse_number(token))

    return Bitmap(width, height, bytes(raw))


def read_xbm(xbm_path):
    # latin-1 decodes any byte sequence
    with open(xbm_path, 'r', encoding='latin-1') as f:
        xbm_data = f.read()
    return parse_xbm(xbm_data)


def repack_bits(raw, width, height):
    """Repack a row-padded XBM byte stream into tight 32-bit words.

    XBM rows are padded to whole bytes and read LSB-first, so bit 0 of a
    byte is the leftmost of its eight pixels. The output drops the row
    padding: pixel (x, y) lands at bit index y * width + x, again filled
    LSB-first within each word. A stream shorter than the dimensions imply
    leaves the missing pixels off.
    """
    row_bytes = (width + 7) // 8
    words = [0] * ((width * height + 31) // 32)

    for y in range(height):
        base = y * row_bytes
        for x in range(width):
            i = base + (x >> 3)
            if i >= len(raw):
                break
            if (raw[i] >> (x & 7)) & 1:  # LSB is leftmost pixel
                idx = y * width + x
                words[idx >> 5] |= 1 << (idx & 31)

    return words


def bit_at(words, width, x, y):
    # same lookup the generated shader does in xbm_bit()
    if x < 0 or y < 0 or x >= width:
        return False
    idx = y * width + x
    if (idx >> 5) >= len(words):
        return False
    return (words[idx >> 5] >> (idx & 31)) & 1 == 1
