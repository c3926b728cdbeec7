"""pikepdf-backed tests for the document/page primitives."""

import io

import pikepdf
import pytest
from pikepdf import Pdf, Name

from pdf_canvas import (
    BLACK,
    SpreadDocument,
    embed_image,
    embed_page,
    rgb,
)
from verify_pdf import page_content, stroked_segments


@pytest.fixture
def spread_document():
    document = SpreadDocument()
    yield document
    document.close()


def reopen(document):
    return Pdf.open(io.BytesIO(document.to_bytes()))


class TestSpreadDocument:

    def test_add_page_sets_media_box(self, spread_document):
        page = spread_document.add_page(1170, 738)

        assert (page.width, page.height) == (1170, 738)
        assert len(spread_document.pdf.pages) == 1
        assert spread_document.pages == [page]

    def test_invalid_size_is_rejected_by_pikepdf(self, spread_document):
        with pytest.raises(ValueError):
            spread_document.add_page(0, 792)

    def test_saved_document_reopens(self, spread_document):
        spread_document.add_page(612, 792)
        spread_document.add_page(612, 792)
        with reopen(spread_document) as pdf:
            assert len(pdf.pages) == 2


class TestDrawLine:

    def test_line_is_stroked_with_width_and_colour(self, spread_document):
        page = spread_document.add_page(612, 792)
        page.draw_line(start=(8, 25), end=(18, 25), thickness=1, color=BLACK)

        content = page.content()
        assert "1 w" in content
        assert "0 0 0 RG" in content
        assert stroked_segments(content) == [(8, 25, 18, 25)]

    def test_content_stream_tracks_every_call(self, spread_document):
        page = spread_document.add_page(612, 792)
        page.draw_line((0, 0), (10, 0))
        page.draw_line((0, 0), (0, 10), color=rgb(1, 0, 0))

        with reopen(spread_document) as pdf:
            segments = stroked_segments(page_content(pdf.pages[0]))
        assert segments == [(0, 0, 10, 0), (0, 0, 0, 10)]

    def test_negative_coordinates_are_written(self, spread_document):
        page = spread_document.add_page(612, 792)
        page.draw_line((-2, 5), (8, 5))
        assert stroked_segments(page.content()) == [(-2, 5, 8, 5)]


class TestEmbedPage:

    def test_foreign_page_becomes_form_xobject(self, spread_document, sample_pdf):
        with Pdf.open(sample_pdf) as src:
            ref = embed_page(spread_document, src.pages[0])
            assert ref.kind == "page"
            assert (ref.width, ref.height) == (576, 720)

            page = spread_document.add_page(1170, 738)
            name = page.draw_embedded(ref, x=9, y=9, width=576, height=720)
            data = spread_document.to_bytes()

        assert name == Name("/Fm0")
        with Pdf.open(io.BytesIO(data)) as pdf:
            xobjs = pdf.pages[0].obj[Name.Resources][Name.XObject]
            assert xobjs[Name("/Fm0")][Name.Subtype] == Name.Form
            assert "/Fm0 Do" in page_content(pdf.pages[0])

    def test_placement_scales_to_rectangle(self, spread_document, sample_pdf):
        with Pdf.open(sample_pdf) as src:
            ref = embed_page(spread_document, src.pages[0])
            page = spread_document.add_page(1200, 800)
            page.draw_embedded(ref, x=600, y=40, width=288, height=360)

        assert "0.500000 0 0 0.500000 600.0000 40.0000 cm" in page.content()

    def test_second_placement_gets_new_name(self, spread_document, sample_pdf):
        with Pdf.open(sample_pdf) as src:
            left = embed_page(spread_document, src.pages[0])
            right = embed_page(spread_document, src.pages[1])
            page = spread_document.add_page(1170, 738)
            first = page.draw_embedded(left, 9, 9, 576, 720)
            second = page.draw_embedded(right, 585, 9, 576, 720)

        assert (first, second) == (Name("/Fm0"), Name("/Fm1"))

    def test_page_from_same_document(self, spread_document):
        source = spread_document.add_page(300, 400)
        source.draw_line((0, 0), (300, 400))
        ref = embed_page(spread_document, source.page)
        assert (ref.width, ref.height) == (300, 400)


class TestEmbedImage:

    def test_png_becomes_image_xobject(self, spread_document, sample_png):
        ref = embed_image(spread_document, sample_png)

        assert ref.kind == "image"
        assert (ref.width, ref.height) == (40, 20)
        assert ref.xobject[Name.Subtype] == Name.Image
        assert ref.xobject[Name.ColorSpace] == Name.DeviceRGB
        assert len(ref.xobject.read_bytes()) == 40 * 20 * 3

    def test_image_placed_on_unit_square(self, spread_document, sample_png):
        ref = embed_image(spread_document, sample_png)
        page = spread_document.add_page(612, 792)
        name = page.draw_embedded(ref, x=10, y=20, width=200, height=100)

        assert name == Name("/Im0")
        assert "200.000000 0 0 100.000000 10.0000 20.0000 cm" in page.content()
        with reopen(spread_document) as pdf:
            assert len(pdf.pages[0].images) == 1


class TestPrintBoxes:

    def test_trim_box_inset_by_bleed(self, spread_document):
        page = spread_document.add_page(1170, 738)
        page.set_print_boxes(9)

        obj = page.page.obj
        assert [float(v) for v in obj[Name.TrimBox]] == [9, 9, 1161, 729]
        assert [float(v) for v in obj[Name.BleedBox]] == [0, 0, 1170, 738]
