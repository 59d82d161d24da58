from .xbm import Bitmap, ParseError, bit_at, parse_xbm, read_xbm, repack_bits
from .shader import SHADER_TYPES, ColorError, build_shader, convert_bitmap, hex_to_vec4

__version__ = "0.1.0"
