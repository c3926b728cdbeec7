"""
Spread composition: two single pages side by side on one sheet with bleed,
cut marks and spine marks.
"""

from dataclasses import dataclass

from spread_marks import draw_cut_marks, draw_center_marks


@dataclass(frozen=True)
class SpreadSpec:
    """Geometry of one spread, in points.

    ``width``/``height`` are the final sheet size including bleed. Nothing
    here is validated: if ``margin_x + 2 * img_width`` exceeds ``width`` the
    pages and marks simply land off the sheet or overlap.
    """

    width: float
    height: float
    margin_x: float
    margin_y: float
    img_width: float
    img_height: float
    bleed: float
    extra_gutter: float = 0

    @classmethod
    def for_pages(cls, img_width, img_height, bleed, extra_gutter=0):
        """Spec for two pages of the given size with ``bleed`` on every side."""
        return cls(
            width=2 * img_width + 2 * bleed,
            height=img_height + 2 * bleed,
            margin_x=bleed,
            margin_y=bleed,
            img_width=img_width,
            img_height=img_height,
            bleed=bleed,
            extra_gutter=extra_gutter,
        )


def compose_spread(document, spec, left=None, right=None):
    """Add a spread page to ``document`` and return it.

    ``left``/``right`` are embedded page or image handles; either may be
    None for a single-sided spread. The right page abuts the left one with
    no gap.
    """
    page = document.add_page(spec.width, spec.height)

    if left is not None:
        page.draw_embedded(left, x=spec.margin_x, y=spec.margin_y,
                           width=spec.img_width, height=spec.img_height)

    if right is not None:
        page.draw_embedded(right, x=spec.margin_x + spec.img_width,
                           y=spec.margin_y,
                           width=spec.img_width, height=spec.img_height)

    draw_cut_marks(page, spec.width, spec.height, spec.bleed)
    draw_center_marks(page, img_width=spec.img_width, bleed=spec.bleed,
                      final_height=spec.height,
                      extra_gutter=spec.extra_gutter)

    return page
