#!/usr/bin/env python3
"""
PDF Spread Production Tool

Prepares single-page PDFs for spread printing by:
1. Pairing pages left/right (optionally keeping the cover alone on the right)
2. Placing each pair side by side on one sheet with bleed on all four sides
3. Adding cut marks at the trim corners and alignment marks at the spine
4. Setting correct PDF boxes (MediaBox, TrimBox, BleedBox)

Usage:
    python pdf_spread_production.py input.pdf [output.pdf]
        [--bleed PT] [--extra-gutter PT] [--cover-alone]

If no output path is given, produces input_spreads.pdf
"""

import argparse
import io
import os
import re
import sys

from pikepdf import Pdf, Name

from pdf_canvas import SpreadDocument, embed_page
from spread_page import SpreadSpec, compose_spread
from verify_pdf import page_content, stroked_segments


# ── Constants (all in points: 1 inch = 72 pt) ──────────────────────────────
PTS_PER_INCH = 72
DEFAULT_BLEED_IN = 0.125
DEFAULT_BLEED = DEFAULT_BLEED_IN * PTS_PER_INCH           # 9 pt

CUT_MARK_COUNT = 8
GUTTER_MARK_COUNT = 2


def get_page_dimensions(page):
    """Return (x0, y0, width, height) in points from the page's MediaBox."""
    mbox = page.mediabox
    x0, y0, x1, y1 = [float(v) for v in mbox]
    return x0, y0, x1 - x0, y1 - y0


def sanitize_file_name(name):
    """Strip export timestamps and extensions; always end in ``.pdf``."""
    if not name:
        return "Processed_File.pdf"
    name = re.sub(r"(_\d{8}_\d{6}(_\d+)?)+\.pdf$", "", name, flags=re.I)
    name = re.sub(r"\.pdf+$", "", name, flags=re.I)
    return name.strip() + ".pdf"


def plan_spreads(page_count, cover_alone=False):
    """Pair page indices into (left, right) spreads.

    With ``cover_alone`` the first page sits by itself on the right. An odd
    page left over at the end gets a spread with an empty right side.
    """
    spreads = []
    start = 0
    if cover_alone and page_count > 0:
        spreads.append((None, 0))
        start = 1

    for left in range(start, page_count, 2):
        right = left + 1 if left + 1 < page_count else None
        spreads.append((left, right))
    return spreads


def spread_spec_for(pdf, bleed=DEFAULT_BLEED, extra_gutter=0):
    """Build the spread geometry from the first page of ``pdf``."""
    if len(pdf.pages) == 0:
        raise ValueError("Input PDF has no pages.")
    _, _, img_w, img_h = get_page_dimensions(pdf.pages[0])
    return SpreadSpec.for_pages(img_w, img_h, bleed, extra_gutter)


def generate_spread_pdf(data, bleed=DEFAULT_BLEED, extra_gutter=0,
                        cover_alone=False, verbose=False):
    """Turn PDF bytes of single pages into PDF bytes of printer spreads."""
    src = Pdf.open(io.BytesIO(data))
    try:
        spec = spread_spec_for(src, bleed, extra_gutter)
        spreads = plan_spreads(len(src.pages), cover_alone)

        if verbose:
            print(f"  Page size   = {spec.img_width:.2f} × {spec.img_height:.2f} pt "
                  f"({spec.img_width/72:.3f}\" × {spec.img_height/72:.3f}\")")
            print(f"  Spread size = {spec.width:.2f} × {spec.height:.2f} pt "
                  f"({spec.width/72:.4f}\" × {spec.height/72:.4f}\")")
            print(f"  Bleed = {spec.bleed:.2f} pt, extra gutter = {spec.extra_gutter:.2f} pt")
            print(f"  {len(src.pages)} page(s) -> {len(spreads)} spread(s)\n")

        out = io.BytesIO()
        with SpreadDocument() as document:
            for n, (left_idx, right_idx) in enumerate(spreads):
                left = right = None
                if left_idx is not None:
                    left = embed_page(document, src.pages[left_idx])
                if right_idx is not None:
                    right = embed_page(document, src.pages[right_idx])

                page = compose_spread(document, spec, left, right)
                page.set_print_boxes(spec.bleed)

                if verbose:
                    left_label = left_idx + 1 if left_idx is not None else "-"
                    right_label = right_idx + 1 if right_idx is not None else "-"
                    print(f"  Spread {n + 1}: left = {left_label}, right = {right_label}")

            document.save(out)
    finally:
        src.close()

    return out.getvalue()


def verify_page(page, spec):
    """Check one output spread against ``spec``; returns label/pass dicts."""
    mbox = [float(v) for v in page.mediabox]
    media_w = mbox[2] - mbox[0]
    media_h = mbox[3] - mbox[1]

    has_trim = Name.TrimBox in page.obj
    tbox = [float(v) for v in page.obj.get(Name.TrimBox, page.mediabox)]
    bleed_l = tbox[0] - mbox[0]
    bleed_r = mbox[2] - tbox[2]
    bleed_b = tbox[1] - mbox[1]
    bleed_t = mbox[3] - tbox[3]

    marks = len(stroked_segments(page_content(page)))
    expected_marks = CUT_MARK_COUNT + GUTTER_MARK_COUNT

    checks = [
        (f"Spread width = {spec.width:.2f} pt",
         abs(media_w - spec.width) < 0.01),
        (f"Spread height = {spec.height:.2f} pt",
         abs(media_h - spec.height) < 0.01),
        ("TrimBox present", has_trim),
        ("BleedBox present", Name.BleedBox in page.obj),
        (f"Bleed Left = {spec.bleed:.2f} pt", abs(bleed_l - spec.bleed) < 0.01),
        (f"Bleed Right = {spec.bleed:.2f} pt", abs(bleed_r - spec.bleed) < 0.01),
        (f"Bleed Top = {spec.bleed:.2f} pt", abs(bleed_t - spec.bleed) < 0.01),
        (f"Bleed Bottom = {spec.bleed:.2f} pt", abs(bleed_b - spec.bleed) < 0.01),
        (f"Mark lines = {expected_marks}", marks == expected_marks),
    ]
    return [{"label": label, "pass": ok} for label, ok in checks]


def verify_output(path, spec):
    """Open the output PDF and print verification info."""
    pdf = Pdf.open(path)
    print("VERIFICATION:")
    print(f"{'─'*60}")

    results = []
    for i, page in enumerate(pdf.pages):
        checks = verify_page(page, spec)
        all_pass = all(c["pass"] for c in checks)
        results.append({"page": i + 1, "checks": checks, "all_pass": all_pass})

        print(f"  Spread {i+1}:")
        for c in checks:
            status = "PASS" if c["pass"] else "FAIL"
            print(f"    [{status}] {c['label']}")
        if all_pass:
            print(f"    All checks passed.")
        else:
            print(f"    WARNING: Some checks failed!")
        print()

    pdf.close()
    return results


def process_pdf(input_path, output_path=None, bleed=DEFAULT_BLEED,
                extra_gutter=0, cover_alone=False):
    """Compose all pages of a PDF into spreads and write the result."""
    if not os.path.isfile(input_path):
        print(f"Error: File not found: {input_path}")
        sys.exit(1)

    if output_path is None:
        base, ext = os.path.splitext(input_path)
        output_path = f"{base}_spreads{ext}"

    print(f"PDF Spread Production Tool")
    print(f"{'='*60}")
    print(f"Input:  {input_path}")
    print(f"Output: {output_path}")
    print(f"Bleed: {bleed:.2f} pt on all sides")
    print(f"{'='*60}")
    print()

    with open(input_path, "rb") as f:
        data = f.read()

    with Pdf.open(input_path) as src:
        spec = spread_spec_for(src, bleed, extra_gutter)

    result = generate_spread_pdf(data, bleed=bleed, extra_gutter=extra_gutter,
                                 cover_alone=cover_alone, verbose=True)
    with open(output_path, "wb") as f:
        f.write(result)

    print()
    print(f"{'='*60}")
    print(f"Saved spread PDF: {output_path}")
    print()

    return verify_output(output_path, spec)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compose single pages into printer spreads with cut marks.")
    parser.add_argument("input", help="input PDF")
    parser.add_argument("output", nargs="?", default=None,
                        help="output PDF (default: <input>_spreads.pdf)")
    parser.add_argument("--bleed", type=float, default=DEFAULT_BLEED,
                        help="bleed in points (default: %(default)s)")
    parser.add_argument("--extra-gutter", type=float, default=0,
                        help="extra spine allowance in points")
    parser.add_argument("--cover-alone", action="store_true",
                        help="put the first page alone on the right of spread 1")
    args = parser.parse_args(argv)

    results = process_pdf(args.input, args.output, bleed=args.bleed,
                          extra_gutter=args.extra_gutter,
                          cover_alone=args.cover_alone)
    return 0 if all(r["all_pass"] for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
