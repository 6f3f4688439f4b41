import logging
import os
from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from utils.barcode_utils import render_code128
from utils.color_utils import parse_hex_color
from utils.errors import LayoutError

log = logging.getLogger(__name__)

# side padding and total vertical margin, in multiples of text_size
H_PAD_FACTOR = 2
V_PAD_FACTOR = 3

DEFAULT_FONT_FAMILY = "arial"
# family -> (regular, bold)
FONT_FAMILIES = {
    "arial": ("arial.ttf", "arial_black.ttf"),
    "dejavu": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
    "liberation": ("LiberationSans-Regular.ttf", "LiberationSans-Bold.ttf"),
}


def cell_width(spec):
    return spec.width + H_PAD_FACTOR * spec.text_size


def compute_canvas_size(specs):
    total_width = sum(cell_width(s) for s in specs)
    total_height = max(s.height + V_PAD_FACTOR * s.text_size for s in specs)
    if total_width <= 0 or total_height <= 0:
        raise LayoutError(f"Invalid barcode layout: canvas {total_width}x{total_height}")
    return total_width, total_height


def font_file(font_choice, bold):
    family = (font_choice or "").strip().lower()
    if family not in FONT_FAMILIES:
        if family:
            log.info("unknown font choice %r, using %s", font_choice, DEFAULT_FONT_FAMILY)
        family = DEFAULT_FONT_FAMILY
    regular, heavy = FONT_FAMILIES[family]
    return heavy if bold else regular


@lru_cache(maxsize=32)
def load_font(font_dir, filename, size):
    # TTF next to the app if present, otherwise Pillow's bundled face
    path = os.path.join(font_dir, filename)
    if os.path.exists(path):
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            log.warning("could not load font %s, using default", path)
    return ImageFont.load_default(size=size)


def compose_sheet(specs, font_dir="static/fonts"):
    """
    Draw every spec side by side onto one RGBA canvas.

    Each spec gets a padding cell of its own color spanning the full canvas
    height, the symbol inset by text_size from the cell's left and top, and
    its data as a label centered one text_size below the symbol.
    Colors are checked for all specs before anything is drawn.
    """
    colors = [
        (parse_hex_color(s.padding_color, "padding color"),
         parse_hex_color(s.text_color, "text color"))
        for s in specs
    ]
    total_width, total_height = compute_canvas_size(specs)

    canvas = Image.new("RGBA", (total_width, total_height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    x_offset = 0

    for spec, (padding_color, text_color) in zip(specs, colors):
        symbol = render_code128(spec.data, spec.width, spec.height)

        w = cell_width(spec)
        if w > 0:
            draw.rectangle([x_offset, 0, x_offset + w - 1, total_height - 1], fill=padding_color)
        canvas.paste(symbol, (x_offset + spec.text_size, spec.text_size))

        if spec.text_size > 0:
            font = load_font(font_dir, font_file(spec.font_choice, spec.bold), spec.text_size)
            text_x = x_offset + spec.text_size + spec.width // 2
            text_y = spec.text_size + spec.height + spec.text_size
            draw.text((text_x, text_y), spec.data, fill=text_color, font=font, anchor="mm")

        x_offset += w

    return canvas
