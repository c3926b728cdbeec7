"""
Printer guide marks for two-page spreads.

Cut marks sit at the four trim corners; gutter marks sit at the spine,
one short tick near the bottom edge and one near the top edge.
All coordinates are in points with the origin at the bottom-left.
"""

from collections import namedtuple

from pdf_canvas import BLACK


MARK_THICKNESS = 1
MARK_COLOR = BLACK

MarkLine = namedtuple("MarkLine", "start end thickness color")

# (corner, axis) -> (x anchor, y anchor, start offset, end offset)
# Anchors are trim edges: left/bottom = bleed, right = width - bleed,
# top = height - bleed. The offsets are calibrated per mark and are not
# symmetric between corners.
CUT_MARKS = {
    ("bottom-left", "horizontal"): ("left", "bottom", (-10, 7), (0, 7)),
    ("bottom-left", "vertical"): ("left", "bottom", (7, -10), (7, 0)),
    ("bottom-right", "horizontal"): ("right", "bottom", (0, 7), (10, 7)),
    ("bottom-right", "vertical"): ("right", "bottom", (-7, -10), (-7, 0)),
    ("top-left", "horizontal"): ("left", "top", (-10, -16), (1, -16)),
    ("top-left", "vertical"): ("left", "top", (7, -10), (7, 0)),
    ("top-right", "horizontal"): ("right", "top", (-2, -16), (9, -16)),
    ("top-right", "vertical"): ("right", "top", (-8, -9), (-8, 1)),
}

# Gutter tick: runs from (edge - GUTTER_MARK_LENGTH) up to the edge
GUTTER_MARK_LENGTH = 10
DEFAULT_OFFSET1 = -1
DEFAULT_OFFSET2 = 30


def draw_mark_line(page, start, end):
    page.draw_line(start=start, end=end,
                   thickness=MARK_THICKNESS, color=MARK_COLOR)


def trim_edges(width, height, bleed):
    return {
        "left": bleed,
        "right": width - bleed,
        "bottom": bleed,
        "top": height - bleed,
    }


def cut_mark_line(mark, width, height, bleed):
    """Resolve one CUT_MARKS entry to a MarkLine."""
    x_anchor, y_anchor, (dx1, dy1), (dx2, dy2) = CUT_MARKS[mark]
    edges = trim_edges(width, height, bleed)
    x, y = edges[x_anchor], edges[y_anchor]
    return MarkLine((x + dx1, y + dy1), (x + dx2, y + dy2),
                    MARK_THICKNESS, MARK_COLOR)


def cut_mark_lines(width, height, bleed):
    return [cut_mark_line(mark, width, height, bleed) for mark in CUT_MARKS]


def draw_cut_marks(page, width, height, bleed):
    """Draw an L of two short segments at each trim corner (8 in total)."""
    for line in cut_mark_lines(width, height, bleed):
        draw_mark_line(page, line.start, line.end)


def center_mark_positions(img_width, bleed, extra_gutter=0,
                          offset1=DEFAULT_OFFSET1, offset2=DEFAULT_OFFSET2):
    """Return the three candidate spine X positions.

    Only the first one is drawn; ``extra_gutter`` and ``offset2`` feed the
    other two and do not move the marks.
    """
    center_x1 = img_width + bleed + offset1
    center_x2 = img_width + bleed + extra_gutter
    center_x3 = img_width + bleed + offset2
    return center_x1, center_x2, center_x3


def center_mark_lines(img_width, bleed, final_height, extra_gutter=0,
                      offset1=DEFAULT_OFFSET1, offset2=DEFAULT_OFFSET2):
    center_x1, _, _ = center_mark_positions(img_width, bleed, extra_gutter,
                                            offset1, offset2)
    x = center_x1 + 1
    bottom = bleed
    top = final_height - bleed
    return [
        MarkLine((x, bottom - GUTTER_MARK_LENGTH), (x, bottom),
                 MARK_THICKNESS, MARK_COLOR),
        MarkLine((x, top - GUTTER_MARK_LENGTH), (x, top),
                 MARK_THICKNESS, MARK_COLOR),
    ]


def draw_center_marks(page, img_width, bleed, final_height, extra_gutter=0,
                      offset1=DEFAULT_OFFSET1, offset2=DEFAULT_OFFSET2):
    """Draw the two spine alignment ticks near the bottom and top edges."""
    for line in center_mark_lines(img_width, bleed, final_height,
                                  extra_gutter, offset1, offset2):
        draw_mark_line(page, line.start, line.end)
