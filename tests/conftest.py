import pytest

SQUARE_XBM = """\
#define square_width 4
#define square_height 4
static unsigned char square_bits[] = {
   0x07, 0x0d, 0x0b, 0x0e };
"""

SMILEY_XBM = """\
#define smiley_width 8
#define smiley_height 2
static unsigned char smiley_bits[] = {
   0x81, 0x42 };
"""


@pytest.fixture
def square_xbm():
    return SQUARE_XBM


@pytest.fixture
def xbm_file(tmp_path):
    path = tmp_path / "square.xbm"
    path.write_text(SQUARE_XBM)
    return path


@pytest.fixture
def smiley_xbm():
    return SMILEY_XBM


@pytest.fixture
def latin1_xbm_bytes():
    return (b"/* caf\xe9 */\n#define cafe_width 8\n#define cafe_height 1\n"
            b"static char cafe_bits[] = { 0x07 };\n")
