import re
from dataclasses import dataclass

from utils.errors import NoBarcodeDataError

MAX_BARCODES = 4
INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class BarcodeSpec:
    data: str
    width: int = 0
    height: int = 0
    padding_color: str = ""
    text_color: str = ""
    font_choice: str = ""
    text_size: int = 0
    bold: bool = False


def to_int(value):
    # anything but an optional sign and ASCII digits becomes 0, same as a blank field
    if not isinstance(value, str) or not INT_RE.fullmatch(value):
        return 0
    return int(value)


def parse_barcode_specs(form):
    """Build the ordered spec list from slots 1..MAX_BARCODES of a form mapping.

    Slots without data are skipped. Raises NoBarcodeDataError when nothing is left.
    """
    specs = []
    for i in range(1, MAX_BARCODES + 1):
        data = form.get(f"data{i}", "")
        if not data:
            continue
        specs.append(BarcodeSpec(
            data=data,
            width=to_int(form.get(f"width{i}")),
            height=to_int(form.get(f"height{i}")),
            padding_color=form.get(f"padding_color{i}", ""),
            text_color=form.get(f"text_color{i}", ""),
            font_choice=form.get(f"font_choice{i}", ""),
            text_size=to_int(form.get(f"text_size{i}")),
            bold=form.get(f"bold{i}") == "on",
        ))
    if not specs:
        raise NoBarcodeDataError()
    return specs
