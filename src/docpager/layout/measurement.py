"""
Module: layout.measurement

Purpose:
    Measure the settled rendered height of every block and of both
    page headers. Blocks are wrapped at the final content width on an
    off-surface ReportLab canvas that is never saved, so the
    measurement pass never reaches the output document.

Key Functions:
    - measure_blocks(): Measure a full block sequence

Dependencies:
    - reportlab: Canvas used as the measurement surface
    - layout.blocks: Shared block wrapper

Used By:
    - controller: Pagination passes
"""

from __future__ import annotations

import io
import logging
from typing import Dict, List, Optional, Sequence

from reportlab.pdfgen import canvas

from .blocks import StyleSheet, build_frame, build_stylesheet
from .config import BlockStyle, PageGeometry
from .models import Block, MeasuredHeights, split_sequence

logger = logging.getLogger(__name__)


def measure_blocks(
    blocks: Sequence[Block],
    geometry: PageGeometry,
    style: Optional[BlockStyle] = None,
) -> MeasuredHeights:
    """
    Measure every placeable block and both header markers.

    Each call allocates a new height array and a new measurement
    surface; nothing is reused between passes. A block whose content
    raises while being built or wrapped keeps an undefined (None)
    height and is recorded in ``failures``.

    Args:
        blocks: Full sequence including both header markers
        geometry: Page geometry (content width is W - 2P)
        style: Visual settings shared with the renderer

    Returns:
        MeasuredHeights aligned with the placeable positions

    Raises:
        BlockSequenceError: If the sequence itself is invalid

    Example:
        >>> measured = measure_blocks(blocks, PageGeometry())
        >>> measured.block_heights
        (112.5, 87.0, 41.25)
    """
    sequence = split_sequence(blocks)
    styles = build_stylesheet(style)
    surface = _create_surface(geometry)
    width = geometry.content_width

    heights: List[Optional[float]] = [None] * len(sequence.placeables)
    failures: Dict[str, str] = {}

    for position, block in enumerate(sequence.placeables):
        heights[position] = _settled_height(block, surface, width, geometry, styles, failures)

    first_header = _settled_height(sequence.first_header, surface, width, geometry, styles, failures)
    rest_header = _settled_height(sequence.rest_header, surface, width, geometry, styles, failures)

    measured = MeasuredHeights(
        block_heights=tuple(heights),
        first_header_height=first_header,
        rest_header_height=rest_header,
        failures=failures,
    )

    if failures:
        logger.warning(f"Measurement incomplete: {len(failures)} of {len(blocks)} blocks failed")
    else:
        logger.debug(
            f"Measured {len(heights)} blocks "
            f"(first header {first_header:.1f}pt, rest header {rest_header:.1f}pt)"
        )
    return measured


def _create_surface(geometry: PageGeometry) -> canvas.Canvas:
    """Canvas backed by a throwaway buffer; never saved or shown."""
    return canvas.Canvas(io.BytesIO(), pagesize=geometry.page_size)


def _settled_height(
    block: Block,
    surface: canvas.Canvas,
    width: float,
    geometry: PageGeometry,
    styles: StyleSheet,
    failures: Dict[str, str],
) -> Optional[float]:
    """
    Wrap one block and read back its height.

    Returns None (never zero) if the block fails to render.
    """
    try:
        frame = build_frame(block, width, styles)
        _, height = frame.wrapOn(surface, width, geometry.content_height)
    except Exception as e:
        logger.error(f"Could not measure block {block.key!r}: {e}")
        failures[block.key] = f"{type(e).__name__}: {e}"
        return None

    logger.debug(f"Block {block.key!r} measured at {height:.1f}pt")
    return float(height)
