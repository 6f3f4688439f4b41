"""
Pytest configuration for local imports and a Flask test client.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
    """
    Ensure the repository root is on sys.path.
    """
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def generated_dir(tmp_path):
    """
    Directory for generated images, outside the repo's static folder.
    """
    path = tmp_path / "generated"
    path.mkdir()
    return path


#============================================
@pytest.fixture
def client(generated_dir):
    """
    Flask test client writing into a temporary output directory.
    """
    import app as barcode_app

    flask_app = barcode_app.app
    old_config = dict(flask_app.config)
    flask_app.config.update(
        TESTING=True,
        GENERATED_DIR=str(generated_dir),
        GENERATED_KEEP=50,
    )
    with flask_app.test_client() as test_client:
        yield test_client
    flask_app.config.clear()
    flask_app.config.update(old_config)
