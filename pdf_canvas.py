"""
Document / page primitives for spread composition, built on pikepdf.

A SpreadDocument hands out SpreadPages; each page keeps its drawing
operators as content-stream text and rewrites its single content stream
after every call, so the underlying pikepdf page is always current.
"""

import io
from collections import namedtuple

import pikepdf
from pikepdf import Pdf, Name, Array, Dictionary
from PIL import Image


Color = namedtuple("Color", "r g b")


def rgb(r, g, b):
    """Return a stroke colour with components in the 0..1 range."""
    return Color(float(r), float(g), float(b))


BLACK = rgb(0, 0, 0)

PROC_SET = [Name.PDF, Name.Text, Name.ImageB, Name.ImageC, Name.ImageI]


class EmbeddedContent:
    """Handle to a page or image already stored in a document as an XObject.

    ``kind`` is ``"page"`` for Form XObjects and ``"image"`` for Image
    XObjects. ``width``/``height`` are the natural size in points (pixels
    for images).
    """

    def __init__(self, xobject, width, height, kind="page", origin=(0.0, 0.0)):
        self.xobject = xobject
        self.width = width
        self.height = height
        self.kind = kind
        self.origin = origin

    def __repr__(self):
        return f"EmbeddedContent({self.kind}, {self.width:.2f} x {self.height:.2f})"


class SpreadPage:
    """A page being drawn on. Owned by its SpreadDocument."""

    def __init__(self, document, page):
        self.document = document
        self.page = page
        self._ops = []
        page.obj[Name.Contents] = pikepdf.Stream(document.pdf, b"")
        page.obj[Name.Resources] = Dictionary(
            XObject=Dictionary(),
            ProcSet=Array(PROC_SET),
        )

    @property
    def width(self):
        mbox = [float(v) for v in self.page.mediabox]
        return mbox[2] - mbox[0]

    @property
    def height(self):
        mbox = [float(v) for v in self.page.mediabox]
        return mbox[3] - mbox[1]

    def content(self):
        return "\n".join(self._ops)

    def _append(self, lines):
        self._ops.extend(lines)
        data = self.content().encode("latin-1")
        self.page.obj[Name.Contents].write(data)

    def _register(self, xobject, prefix):
        xobjects = self.page.obj[Name.Resources][Name.XObject]
        n = 0
        while Name(f"/{prefix}{n}") in xobjects:
            n += 1
        name = Name(f"/{prefix}{n}")
        xobjects[name] = xobject
        return name

    def draw_embedded(self, ref, x, y, width, height):
        """Place ``ref`` so that it fills the rectangle (x, y, width, height)."""
        if ref.kind == "image":
            name = self._register(ref.xobject, "Im")
            # Image XObjects occupy the unit square
            matrix = (width, height, x, y)
        else:
            name = self._register(ref.xobject, "Fm")
            sx = width / ref.width
            sy = height / ref.height
            ox, oy = ref.origin
            matrix = (sx, sy, x - sx * ox, y - sy * oy)

        sx, sy, tx, ty = matrix
        self._append([
            "q",
            f"{sx:.6f} 0 0 {sy:.6f} {tx:.4f} {ty:.4f} cm",
            f"{name} Do",
            "Q",
        ])
        return name

    def draw_line(self, start, end, thickness=1, color=BLACK):
        """Stroke a straight segment from ``start`` to ``end``."""
        x1, y1 = start
        x2, y2 = end
        self._append([
            "q",
            f"{thickness} w",
            f"{color.r:g} {color.g:g} {color.b:g} RG",
            f"{x1:.4f} {y1:.4f} m {x2:.4f} {y2:.4f} l S",
            "Q",
        ])

    def set_print_boxes(self, bleed):
        """Set TrimBox inset by ``bleed`` and BleedBox equal to the MediaBox."""
        media_w = self.width
        media_h = self.height
        obj = self.page.obj
        obj[Name.TrimBox] = Array([bleed, bleed,
                                   media_w - bleed, media_h - bleed])
        obj[Name.BleedBox] = Array([0, 0, media_w, media_h])


class SpreadDocument:
    """Output document that spread pages are added to."""

    def __init__(self, pdf=None):
        self.pdf = pdf if pdf is not None else Pdf.new()
        self.pages = []

    def add_page(self, width, height):
        # pikepdf rejects sizes outside 3..14400 pt with ValueError
        page = self.pdf.add_blank_page(page_size=(width, height))
        spread_page = SpreadPage(self, page)
        self.pages.append(spread_page)
        return spread_page

    def save(self, target):
        self.pdf.save(target, linearize=False)

    def to_bytes(self):
        buf = io.BytesIO()
        self.save(buf)
        return buf.getvalue()

    def close(self):
        self.pdf.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def read_page_contents(page_obj):
    """Concatenate a page's content stream(s) into one bytes object."""
    if Name.Contents not in page_obj:
        return b""
    contents = page_obj[Name.Contents]
    if isinstance(contents, pikepdf.Array):
        data = b""
        for stream_ref in contents:
            data += stream_ref.read_bytes() + b"\n"
        return data
    return contents.read_bytes()


def embed_page(document, source_page):
    """Wrap ``source_page`` as a Form XObject inside ``document``.

    The source page may belong to another Pdf; it is copied in first. That
    Pdf must stay open until ``document`` is saved.
    """
    pdf = document.pdf
    mbox = [float(v) for v in source_page.mediabox]
    x0, y0, x1, y1 = mbox

    page_obj = source_page.obj
    if not page_obj.is_owned_by(pdf):
        page_obj = pdf.copy_foreign(page_obj)

    content_data = read_page_contents(page_obj)
    resources = page_obj.get(Name.Resources, Dictionary())

    form_xobj = pikepdf.Stream(pdf, content_data)
    form_xobj[Name.Type] = Name.XObject
    form_xobj[Name.Subtype] = Name.Form
    form_xobj[Name.BBox] = Array([x0, y0, x1, y1])
    form_xobj[Name.Resources] = resources

    return EmbeddedContent(form_xobj, x1 - x0, y1 - y0,
                           kind="page", origin=(x0, y0))


def embed_image(document, source):
    """Store a raster image (path, bytes or file object) as an Image XObject."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    with Image.open(source) as img:
        rgb_img = img.convert("RGB")

    width, height = rgb_img.size
    image_xobj = pikepdf.Stream(document.pdf, rgb_img.tobytes())
    image_xobj[Name.Type] = Name.XObject
    image_xobj[Name.Subtype] = Name.Image
    image_xobj[Name.Width] = width
    image_xobj[Name.Height] = height
    image_xobj[Name.ColorSpace] = Name.DeviceRGB
    image_xobj[Name.BitsPerComponent] = 8

    return EmbeddedContent(image_xobj, width, height, kind="image")
