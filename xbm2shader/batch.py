import argparse
import os
import sys

from .cli import xbm_to_shader
from .config import DEFAULT_BG, DEFAULT_FG, DEFAULT_SHADER_TYPE
from .shader import SHADER_TYPES, ColorError, hex_to_vec4
from .xbm import ParseError


def convert_directory(input_dir, output_dir, shader_type=DEFAULT_SHADER_TYPE,
                      fg=DEFAULT_FG, bg=DEFAULT_BG):
    """Convert every .xbm in input_dir, returning (written, failures).

    A file that does not parse is reported and skipped so one bad bitmap
    doesn't stop the rest of the batch.
    """
    # bad colours would fail every file the same way
    hex_to_vec4(fg)
    hex_to_vec4(bg)

    os.makedirs(output_dir, exist_ok=True)

    written = []
    failures = []
    for filename in sorted(os.listdir(input_dir)):
        if not filename.lower().endswith(".xbm"):
            continue
        in_path = os.path.join(input_dir, filename)
        out_name = os.path.splitext(filename)[0] + ".gdshader"
        out_path = os.path.join(output_dir, out_name)
        print(f"Converting {filename} → {out_name}")
        try:
            bitmap, words = xbm_to_shader(in_path, out_path, shader_type, fg, bg)
        except (OSError, ParseError) as e:
            print(f"  skipped {filename}: {e}", file=sys.stderr)
            failures.append((filename, str(e)))
            continue
        print(f"Saved {out_path} ({bitmap.width}x{bitmap.height}, {len(words)} uints)")
        written.append(out_path)

    return written, failures


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='xbm2shader-batch',
        description='Convert a directory of XBM files into Godot 4 shaders')
    parser.add_argument('input_dir')
    parser.add_argument('output_dir')
    parser.add_argument('-type', '--type', dest='shader_type', default=DEFAULT_SHADER_TYPE,
                        choices=SHADER_TYPES)
    parser.add_argument('-fg', '--fg', default=DEFAULT_FG)
    parser.add_argument('-bg', '--bg', default=DEFAULT_BG)
    args = parser.parse_args(argv)

    try:
        written, failures = convert_directory(args.input_dir, args.output_dir,
                                              args.shader_type, args.fg, args.bg)
    except (OSError, ColorError) as e:
        print("error:", e, file=sys.stderr)
        return 1

    print(f"{len(written)} converted, {len(failures)} failed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
