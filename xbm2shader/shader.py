import re
import struct

SHADER_TYPES = ("canvas_item", "spatial")

HEX_COLOR_RE = re.compile(r'[0-9A-Fa-f]{8}')


class ColorError(ValueError):
    pass


def _float32(value):
    return struct.unpack('f', struct.pack('f', value))[0]


def format_float32(value):
    """Shortest %g text that reads back as the same 32-bit float."""
    f32 = _float32(value)
    for digits in range(1, 10):
        s = '%.*g' % (digits, f32)
        if _float32(float(s)) == f32:
            return s
    return '%.9g' % f32


def hex_to_vec4(hex_color):
    s = hex_color[1:] if hex_color.startswith('#') else hex_color
    if not HEX_COLOR_RE.fullmatch(s):
        raise ColorError(f"want #RRGGBBAA, got {hex_color!r}")
    channels = [int(s[i:i + 2], 16) / 255 for i in range(0, 8, 2)]
    return "vec4(%s)" % ",".join(format_float32(c) for c in channels)


BIT_LOOKUP = """\
bool xbm_bit(ivec2 p) {
    if (p.x < 0 || p.y < 0 || p.x >= int(WIDTH) || p.y >= int(HEIGHT)) return false;
    int idx = p.y * int(WIDTH) + p.x;
    uint w = DATA[idx >> 5];
    return ((w >> uint(idx & 31)) & 1u) == 1u;
}
"""

# Pixel-perfect tiling, locked to screen pixels
CANVAS_ITEM_FRAGMENT = """\
void fragment() {
    // Convert normalized screen UV (0..1) into integer screen pixel coords
    vec2 screen_px = floor(SCREEN_UV / SCREEN_PIXEL_SIZE);

    // Tile every WIDTH x HEIGHT screen pixels
    int px = int(mod(screen_px.x, float(WIDTH)));
    int py = int(mod(screen_px.y, float(HEIGHT)));
    ivec2 p = ivec2(px, py);

    bool on = xbm_bit(p);
    float v = on ? 1.0 : 0.0;
    if (invert) v = 1.0 - v;
    COLOR = mix(bg_color, fg_color, v);
}
"""

SPATIAL_FRAGMENT = """\
void fragment() {
    vec2 screen_px = floor(SCREEN_UV / SCREEN_PIXEL_SIZE);
    int px = int(mod(screen_px.x, float(WIDTH)));
    int py = int(mod(screen_px.y, float(HEIGHT)));
    ivec2 p = ivec2(px, py);

    bool on = xbm_bit(p);
    float v = on ? 1.0 : 0.0;
    if (invert) v = 1.0 - v;
    ALBEDO = mix(bg_color.rgb, fg_color.rgb, v);
    ALPHA  = mix(bg_color.a,   fg_color.a,   v);
}
"""


def build_shader(shader_type, width, height, words, fg, bg):
    """Render a self-contained Godot 4 shader around the packed words.

    ``fg`` and ``bg`` are already GLSL ``vec4(...)`` literals, see
    :func:`hex_to_vec4`.
    """
    if shader_type not in SHADER_TYPES:
        raise ValueError(f"unknown shader type {shader_type!r}")

    lines = [
        f"shader_type {shader_type};",
        "",
        f"const uint WIDTH = {width}u;",
        f"const uint HEIGHT = {height}u;",
        f"const uint WORDS = {len(words)}u;",
        "",
        "// Foreground = bit 1 (XBM 'black'); Background = bit 0",
        f"instance uniform vec4 fg_color = {fg};",
        f"instance uniform vec4 bg_color = {bg};",
        "instance uniform bool invert = false;",
        "",
        "const uint DATA[WORDS] = uint[](",
    ]
    for i, word in enumerate(words):
        sep = "," if i < len(words) - 1 else ""
        lines.append(f"    0x{word:08X}u{sep}")
    lines += [");", "", ""]

    out = "\n".join(lines) + BIT_LOOKUP + "\n"
    if shader_type == "canvas_item":
        out += CANVAS_ITEM_FRAGMENT
    else:
        out += SPATIAL_FRAGMENT
    return out


def convert_bitmap(bitmap, shader_type, fg_hex, bg_hex):
    # colours first so a bad flag fails before any repacking
    fg = hex_to_vec4(fg_hex)
    bg = hex_to_vec4(bg_hex)
    words = bitmap.words
    return words, build_shader(shader_type, bitmap.width, bitmap.height, words, fg, bg)
