import glob
import hashlib
import io
import logging
import os
import tempfile

from utils.barcode_utils import ensure_dir
from utils.errors import OutputWriteError

log = logging.getLogger(__name__)

FILE_PREFIX = "barcode_"


def save_png(image, out_dir):
    """Write image as PNG under a content-addressed name and return the file name.

    The bytes go to a temp file first and are moved into place, so a reader
    never sees a half written image.
    """
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    payload = buf.getvalue()
    name = f"{FILE_PREFIX}{hashlib.sha256(payload).hexdigest()[:16]}.png"

    tmp_path = None
    try:
        ensure_dir(out_dir)
        fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", suffix=".png", dir=out_dir)
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.replace(tmp_path, os.path.join(out_dir, name))
        tmp_path = None
    except OSError as e:
        log.exception("writing %s to %s failed", name, out_dir)
        raise OutputWriteError(f"Failed to save barcode: {e}") from e
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
    return name


def prune_generated(out_dir, keep):
    """Delete the oldest generated images so at most `keep` remain. keep <= 0 disables."""
    if keep <= 0:
        return []
    files = []
    for path in glob.glob(os.path.join(out_dir, f"{FILE_PREFIX}*.png")):
        try:
            files.append((os.path.getmtime(path), path))
        except FileNotFoundError:
            # pruned by another request
            continue
    files.sort(reverse=True)
    removed = []
    for _mtime, path in files[keep:]:
        try:
            os.remove(path)
            removed.append(path)
        except FileNotFoundError:
            pass
    if removed:
        log.info("pruned %d generated images", len(removed))
    return removed
