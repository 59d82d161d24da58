# xbm2shader - convert XBM files into a self-contained Godot 4 shader
# Usage: xbm2shader -in test.xbm -out test.gdshader [-type canvas_item|spatial] [-fg "#000000FF"] [-bg "#00000000"]
import argparse
import sys

from . import __version__
from .config import DEFAULT_BG, DEFAULT_FG, DEFAULT_OUTPUT, DEFAULT_SHADER_TYPE
from .preview import save_preview
from .shader import SHADER_TYPES, ColorError, convert_bitmap
from .xbm import ParseError, read_xbm


def fail(msg):
    print("error:", msg, file=sys.stderr)
    sys.exit(1)


def xbm_to_shader(xbm_path, out_path, shader_type=DEFAULT_SHADER_TYPE,
                  fg=DEFAULT_FG, bg=DEFAULT_BG, preview_path=None):
    bitmap = read_xbm(xbm_path)
    words, source = convert_bitmap(bitmap, shader_type, fg, bg)

    with open(out_path, 'w') as f:
        f.write(source)
    if preview_path:
        save_preview(preview_path, bitmap.width, bitmap.height, words)

    return bitmap, words


def get_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='xbm2shader',
        description='Convert an XBM bitmap into a tiling Godot 4 shader')

    parser.add_argument('-in', '--in', dest='input', default='', help='input .xbm file')
    parser.add_argument('-out', '--out', dest='output', default=DEFAULT_OUTPUT,
                        help='output .gdshader path')
    parser.add_argument('-type', '--type', dest='shader_type', default=DEFAULT_SHADER_TYPE,
                        choices=SHADER_TYPES, help='shader type')
    parser.add_argument('-fg', '--fg', default=DEFAULT_FG, help='foreground RGBA (hex #RRGGBBAA)')
    parser.add_argument('-bg', '--bg', default=DEFAULT_BG, help='background RGBA (hex #RRGGBBAA)')
    parser.add_argument('--preview', default=None, help='also write a PNG preview here')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser.parse_args(argv)


def main(argv=None):
    args = get_args(argv)
    if not args.input:
        fail("missing -in")

    try:
        bitmap, words = xbm_to_shader(args.input, args.output, args.shader_type,
                                      args.fg, args.bg, args.preview)
    except (OSError, ParseError, ColorError) as e:
        fail(str(e))

    print(f"Wrote {args.output} ({bitmap.width}x{bitmap.height}, {len(words)} uints)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
