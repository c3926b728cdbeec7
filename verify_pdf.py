#!/usr/bin/env python3
"""Dump the structure of a spread PDF: boxes, placed XObjects and mark lines."""

import re
import sys

import pikepdf
from pikepdf import Name

from pdf_canvas import read_page_contents


SEGMENT_RE = re.compile(
    r"(-?[\d.]+) (-?[\d.]+) m (-?[\d.]+) (-?[\d.]+) l S")


def page_content(page):
    """Return a page's content stream as text."""
    return read_page_contents(page.obj).decode("latin-1")


def stroked_segments(content):
    """Return (x1, y1, x2, y2) for every ``m ... l S`` segment in ``content``."""
    return [tuple(float(v) for v in m.groups())
            for m in SEGMENT_RE.finditer(content)]


def verify(path):
    pdf = pikepdf.open(path)

    for i, page in enumerate(pdf.pages):
        print(f"=== Spread {i+1} ===")

        mbox = [float(v) for v in page.mediabox]
        print(f"MediaBox: {mbox}")

        for box_name in (Name.TrimBox, Name.BleedBox):
            if box_name in page.obj:
                box = [float(v) for v in page.obj[box_name]]
                print(f"{str(box_name)[1:]}: {box}")
            else:
                print(f"{str(box_name)[1:]}: MISSING!")

        res = page.obj.get(Name.Resources, {})
        if Name.XObject in res:
            xobjs = res[Name.XObject]
            for name, xobj in xobjs.items():
                print(f"  {name}: Subtype={xobj.get(Name.Subtype)}")

        segments = stroked_segments(page_content(page))
        print(f"Mark lines: {len(segments)}")
        for x1, y1, x2, y2 in segments:
            print(f"  ({x1:.2f}, {y1:.2f}) -> ({x2:.2f}, {y2:.2f})")
        print()

    pdf.close()


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "test_output.pdf"
    verify(path)
