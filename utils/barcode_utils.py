import logging
import os

from barcode import Code128
from barcode.errors import BarcodeError
from PIL import Image

from utils.errors import BarcodeEncodeError, BarcodeScaleError

log = logging.getLogger(__name__)

BASE_DPI = 96


def ensure_dir(path):
    os.makedirs(path, exist_ok=True)


def encode_code128(data):
    """Encode data as a Code128 module string ('1' = bar, '0' = space), quiet zone excluded."""
    if not data or any(ord(ch) > 127 for ch in data):
        raise BarcodeEncodeError(f"Failed to generate barcode: unsupported data {data!r}")
    try:
        return Code128(data).build()[0]
    except (BarcodeError, KeyError, ValueError, RuntimeError) as e:
        log.warning("code128 encode failed for %r: %s", data, e)
        raise BarcodeEncodeError(f"Failed to generate barcode: {e}") from e


def at_dpi(value):
    return value * BASE_DPI // 96


def scale_symbol(modules, width, height):
    """Rasterize a module string to exactly width x height pixels.

    Every module gets the same integer pixel width; the bars are centered and
    the leftover columns stay white.
    """
    count = len(modules)
    factor = width // count if count and width > 0 else 0
    if factor <= 0 or height <= 0:
        raise BarcodeScaleError(
            f"Failed to scale barcode: can not scale {count} modules to {width}x{height}"
        )

    strip = Image.new("L", (count, 1), 255)
    strip.putdata([0 if m == "1" else 255 for m in modules])
    bars = strip.resize((count * factor, height), Image.Resampling.NEAREST)

    out = Image.new("L", (width, height), 255)
    out.paste(bars, ((width - count * factor) // 2, 0))
    return out


def render_code128(data, width, height):
    return scale_symbol(encode_code128(data), at_dpi(width), at_dpi(height))
