#!/usr/bin/env python3
"""Create a multi-page test PDF for validating the spread production tool."""

import sys

from reportlab.lib.units import inch
from reportlab.pdfgen import canvas
from reportlab.lib.colors import HexColor


PAGE_COLORS = ["#f5f0e8", "#1a2332", "#e8f0f5", "#2d4a6f"]


def create_test_pdf(output_path="test_input.pdf", page_count=4,
                    width=8 * inch, height=10 * inch):
    """Create ``page_count`` portrait pages, each labelled with its number."""
    c = canvas.Canvas(output_path, pagesize=(width, height))

    for n in range(page_count):
        bg = PAGE_COLORS[n % len(PAGE_COLORS)]
        c.setFillColor(HexColor(bg))
        c.rect(0, 0, width, height, fill=1, stroke=0)

        dark = n % 2 == 1
        c.setFillColor(HexColor("#ffffff" if dark else "#333333"))
        c.setFont("Helvetica-Bold", 36)
        c.drawCentredString(width / 2, height / 2 + 20, "Spread Test")
        c.setFont("Helvetica", 18)
        c.drawCentredString(width / 2, height / 2 - 20, f"Page {n + 1}")

        # Edge markers: the spine side must meet the facing page exactly
        c.setFillColor(HexColor("#ff3366"))
        c.rect(0, height / 2 - 5, 10, 10, fill=1, stroke=0)
        c.rect(width - 10, height / 2 - 5, 10, 10, fill=1, stroke=0)

        c.showPage()

    c.save()
    print(f"Created test PDF: {output_path} ({page_count} pages, "
          f"{width/72:.1f}\" × {height/72:.1f}\")")
    return output_path


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 4
    create_test_pdf(page_count=count)
