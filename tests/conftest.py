import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import docpager
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from docpager.layout import (
    HEADER_FIRST_KEY,
    HEADER_REST_KEY,
    Block,
    ImageContent,
    PageGeometry,
    TableContent,
    TextContent,
)


# Common test fixtures
@pytest.fixture
def geometry():
    """Default A4 geometry."""
    return PageGeometry()


@pytest.fixture
def logo_image():
    """Create a simple logo image."""
    return Image.new("RGB", (240, 120), color=(30, 40, 50))


@pytest.fixture
def header_blocks(logo_image):
    """Leading header (logo + heading) and continuation header (logo)."""
    logo = ImageContent(logo_image, width=90, height=45)
    return (
        Block(key=HEADER_FIRST_KEY, content=(logo, TextContent("Document Heading", style="heading"))),
        Block(key=HEADER_REST_KEY, content=logo),
    )


@pytest.fixture
def make_blocks(header_blocks):
    """Factory: header markers plus one titled text block per entry."""
    def _create(texts, titles=None):
        blocks = [header_blocks[0]]
        for i, text in enumerate(texts):
            title = titles[i] if titles else f"Section {i}"
            blocks.append(Block(key=f"b{i}", title=title, content=TextContent(text)))
        blocks.append(header_blocks[1])
        return blocks
    return _create


@pytest.fixture
def table_block():
    return Block(
        key="employee",
        title="Employee details",
        content=TableContent(rows=(("Name", "Jane Doe"), ("Phone", ""), ("Email", "jane@example.com"))),
    )
