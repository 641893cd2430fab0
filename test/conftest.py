import pytest
import textwrap
from pathlib import Path

from mustgen.loader import load_package

SUPPORT_FILES = Path(__file__).parent / "support_files"


@pytest.fixture
def support_files():
    return SUPPORT_FILES


@pytest.fixture
def testpkg():
    """The tagged fixture package under support_files/testpkg."""
    return load_package([SUPPORT_FILES / "testpkg"])


@pytest.fixture
def load_source(tmp_path):
    """Write Go source into a temporary package directory and load it."""

    def load(source: str, filename: str = "main.go"):
        path = tmp_path / filename
        path.write_text(textwrap.dedent(source))
        return load_package([path])

    return load
