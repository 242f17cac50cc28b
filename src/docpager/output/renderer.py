"""
Module: output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page: the page's header followed by
    its blocks, top-down from the padding edge.

Key Functions:
    - render_to_pdf(): Write the document to a file
    - render_to_bytes(): Return the document as bytes

Dependencies:
    - reportlab: PDF generation
    - layout.blocks: Shared block wrapper

Used By:
    - controller: Document builds
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Union

from reportlab.pdfgen import canvas

from docpager.layout.blocks import StyleSheet, build_frame, build_stylesheet
from docpager.layout.config import BlockStyle, PageGeometry
from docpager.layout.models import Block, BlockSequence, LayoutResult, PagePlan, split_sequence

logger = logging.getLogger(__name__)

# Footer configuration
FOOTER_FONT = "Helvetica"
FOOTER_FONT_SIZE = 7


def render_to_pdf(
    layout: LayoutResult,
    blocks: Sequence[Block],
    output_path: Path,
    *,
    geometry: Optional[PageGeometry] = None,
    style: Optional[BlockStyle] = None,
    show_page_numbers: bool = False,
) -> None:
    """
    Render layout result to PDF file.

    Args:
        layout: Layout result from the packer
        blocks: The block sequence the layout was computed for
        output_path: Path to write PDF
        geometry: Page geometry used for measurement
        style: Block style used for measurement
        show_page_numbers: Draw "Page i of n" in the bottom padding

    Raises:
        ValueError: If the layout does not match the block sequence
        IOError: If PDF cannot be written

    Example:
        >>> render_to_pdf(layout, blocks, Path("output/document.pdf"))
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    _render(layout, blocks, str(output_path), geometry, style, show_page_numbers)

    logger.info(f"Rendered {layout.page_count} pages to {output_path}")


def render_to_bytes(
    layout: LayoutResult,
    blocks: Sequence[Block],
    *,
    geometry: Optional[PageGeometry] = None,
    style: Optional[BlockStyle] = None,
    show_page_numbers: bool = False,
) -> bytes:
    """Render layout result and return the PDF bytes."""
    buf = io.BytesIO()
    _render(layout, blocks, buf, geometry, style, show_page_numbers)
    return buf.getvalue()


def _render(
    layout: LayoutResult,
    blocks: Sequence[Block],
    target: Union[str, BinaryIO],
    geometry: Optional[PageGeometry],
    style: Optional[BlockStyle],
    show_page_numbers: bool,
) -> None:
    geometry = geometry or PageGeometry()
    styles = build_stylesheet(style)
    sequence = split_sequence(blocks)
    _check_layout(layout, sequence)

    if layout.page_count == 0:
        logger.warning("Empty layout, creating empty PDF")

    c = canvas.Canvas(target, pagesize=geometry.page_size)
    for page in layout.pages:
        _render_page(c, page, sequence, geometry, styles)
        if show_page_numbers:
            _draw_footer(c, page.index, layout.page_count, geometry)
        c.showPage()
    c.save()


def _check_layout(layout: LayoutResult, sequence: BlockSequence) -> None:
    """Every placeable position must appear exactly once, in order."""
    placed = [p for page in layout.pages for p in page.positions]
    expected = list(range(len(sequence.placeables)))
    if placed != expected:
        raise ValueError(
            f"Layout does not match block sequence: "
            f"placed positions {placed}, expected {expected}"
        )
    for page in layout.pages:
        if page.is_empty:
            raise ValueError(f"Layout contains empty page {page.index}")


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    sequence: BlockSequence,
    geometry: PageGeometry,
    styles: StyleSheet,
) -> None:
    """
    Render a single page to the canvas.

    Args:
        c: ReportLab canvas
        page: Page plan with block positions
        sequence: Validated block sequence
        geometry: Page geometry
        styles: Shared stylesheet
    """
    header = sequence.header_for(page.index)

    cursor = _draw_frame(c, header, geometry.padding, geometry, styles)

    for i, position in enumerate(page.positions):
        if i:
            cursor += geometry.block_spacing
        cursor = _draw_frame(c, sequence.placeables[position], cursor, geometry, styles)

    logger.debug(f"Rendered page {page.index} with {page.placement_count} blocks")


def _draw_frame(
    c: canvas.Canvas,
    block: Block,
    top: float,
    geometry: PageGeometry,
    styles: StyleSheet,
) -> float:
    """
    Draw a block with its top edge at ``top`` (measured from page top).

    Returns:
        Y offset (from page top) of the block's bottom edge
    """
    frame = build_frame(block, geometry.content_width, styles)
    _, height = frame.wrapOn(c, geometry.content_width, geometry.content_height)
    frame.drawOn(c, geometry.padding, _transform_y(geometry.page_height, top, height))
    return top + height


def _draw_footer(c: canvas.Canvas, page_index: int, page_count: int, geometry: PageGeometry) -> None:
    """
    Draw centered "Page i of n" inside the bottom padding.

    Args:
        c: ReportLab canvas
        page_index: 0-indexed page number
        page_count: Total pages
        geometry: Page geometry
    """
    text = f"Page {page_index + 1} of {page_count}"

    c.saveState()
    c.setFont(FOOTER_FONT, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)

    text_width = c.stringWidth(text, FOOTER_FONT, FOOTER_FONT_SIZE)
    x_pt = (geometry.page_width - text_width) / 2
    y_pt = max(0.0, (geometry.padding - FOOTER_FONT_SIZE) / 2)

    c.drawString(x_pt, y_pt, text)
    c.restoreState()


def _transform_y(page_height_pt: float, top_pt: float, height_pt: float) -> float:
    """
    Convert a top-down Y coordinate to ReportLab's bottom-up Y.

    Args:
        page_height_pt: Page height in points
        top_pt: Y of the element's top edge, from page top
        height_pt: Height of element

    Returns:
        Y of the element's bottom edge, from page bottom
    """
    return page_height_pt - top_pt - height_pt
