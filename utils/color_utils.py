import re

from utils.errors import InvalidColorError

HEX_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")


def parse_hex_color(value, field="color"):
    """'#RRGGBB' -> (r, g, b, 255). Anything else raises InvalidColorError."""
    if not value or not HEX_COLOR_RE.fullmatch(value):
        raise InvalidColorError(f"Invalid {field}: {value!r}")
    c = int(value[1:], 16)
    return (c >> 16, (c >> 8) & 0xFF, c & 0xFF, 0xFF)
