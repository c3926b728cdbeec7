import io

import pytest
from PIL import Image

from create_test_pdf import create_test_pdf


class RecordingPage:
    """Stands in for a SpreadPage and keeps every draw call in order."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.calls = []

    @property
    def placements(self):
        return [c[1:] for c in self.calls if c[0] == "draw_embedded"]

    @property
    def lines(self):
        return [c[1:] for c in self.calls if c[0] == "draw_line"]

    def draw_embedded(self, ref, x, y, width, height):
        self.calls.append(("draw_embedded", ref, x, y, width, height))

    def draw_line(self, start, end, thickness, color):
        self.calls.append(("draw_line", start, end, thickness, color))


class RecordingDocument:
    def __init__(self):
        self.pages = []

    def add_page(self, width, height):
        page = RecordingPage(width, height)
        self.pages.append(page)
        return page


@pytest.fixture
def make_document():
    """Factory for fresh recording documents."""
    return RecordingDocument


@pytest.fixture
def document():
    return RecordingDocument()


@pytest.fixture
def page():
    return RecordingPage(1224, 792)


@pytest.fixture
def sample_pdf(tmp_path):
    """Path to a 4-page, 8x10 inch test PDF."""
    return create_test_pdf(str(tmp_path / "input.pdf"), page_count=4)


@pytest.fixture
def make_pdf(tmp_path):
    """Factory: make_pdf(n) -> path to an n-page test PDF."""
    def _create(page_count):
        path = tmp_path / f"input_{page_count}.pdf"
        return create_test_pdf(str(path), page_count=page_count)
    return _create


@pytest.fixture
def sample_png():
    """PNG bytes of a small solid image."""
    img = Image.new("RGB", (40, 20), color="red")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
