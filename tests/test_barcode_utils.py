import pytest

from utils.barcode_utils import encode_code128, render_code128, scale_symbol
from utils.errors import BarcodeEncodeError, BarcodeScaleError


#============================================
def test_encode_returns_module_string() -> None:
    modules = encode_code128("A1")
    assert set(modules) == {"0", "1"}
    # start B, two symbols, checksum, stop pattern + termination bar
    assert len(modules) == 57
    assert modules.startswith("11")
    assert modules.endswith("11")


#============================================
def test_encode_rejects_non_ascii() -> None:
    with pytest.raises(BarcodeEncodeError) as excinfo:
        encode_code128("café")
    assert excinfo.value.status_code == 500


#============================================
def test_scale_produces_exact_size_with_centered_bars() -> None:
    image = scale_symbol("101", 10, 4)
    assert image.size == (10, 4)
    # factor 3, bars start at offset (10 - 9) // 2 = 0
    row = [image.getpixel((x, 2)) for x in range(10)]
    assert row == [0, 0, 0, 255, 255, 255, 0, 0, 0, 255]


#============================================
def test_scale_bars_span_full_height() -> None:
    image = scale_symbol("1", 3, 5)
    assert all(image.getpixel((1, y)) == 0 for y in range(5))


#============================================
@pytest.mark.parametrize("width,height", [(2, 10), (0, 10), (100, 0), (-5, 10)])
def test_scale_rejects_too_small_targets(width, height) -> None:
    with pytest.raises(BarcodeScaleError):
        scale_symbol("101", width, height)


#============================================
def test_render_code128_keeps_requested_size() -> None:
    assert render_code128("HELLO-128", 300, 90).size == (300, 90)
