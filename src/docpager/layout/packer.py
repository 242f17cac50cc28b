"""
Module: layout.packer

Purpose:
    Partition measured blocks into pages using single-pass greedy
    placement. Blocks are never split or reordered.

Key Functions:
    - page_capacity(): Capacity of a page by index
    - pack_pages(): Pure greedy partition of block heights
    - paginate(): Build a LayoutResult from a measurement pass

Algorithm:
    1. Start an empty page with the capacity of page 0
    2. increment = (spacing if page has blocks else 0) + height
    3. If it does not fit and the page has blocks, close the page and
       start the next one with this block
    4. Otherwise add the block to the current page
    5. Close the final non-empty page

Dependencies:
    - layout.models: MeasuredHeights, PagePlan, LayoutResult
    - layout.config: PageGeometry

Used By:
    - controller: Pagination passes
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .config import PageGeometry
from .models import LayoutResult, MeasuredHeights, PagePlan

logger = logging.getLogger(__name__)

Partition = Tuple[Tuple[int, ...], ...]


class PaginationError(Exception):
    """Error while paginating a block sequence."""
    pass


class MeasurementIncompleteError(PaginationError):
    """
    Raised when a block or header height is undefined.

    Attributes:
        missing_positions: Placeable positions without a height
        failures: Block key -> error message from the measurement pass
    """

    def __init__(
        self,
        missing_positions: Sequence[int],
        failures: Optional[Dict[str, str]] = None,
        message: Optional[str] = None,
    ) -> None:
        self.missing_positions = tuple(missing_positions)
        self.failures = dict(failures or {})
        if message is None:
            message = f"Missing heights for block positions {list(self.missing_positions)}"
        super().__init__(message)


def page_capacity(page_index: int, first_page_capacity: float, rest_page_capacity: float) -> float:
    """Only page 0 carries the leading header."""
    return first_page_capacity if page_index == 0 else rest_page_capacity


def pack_pages(
    heights: Sequence[Optional[float]],
    first_page_capacity: float,
    rest_page_capacity: float,
    spacing: float,
) -> Partition:
    """
    Greedily assign block positions to pages.

    Pure function: identical inputs always give an identical partition.
    A block taller than its page's capacity is placed alone on that page
    and overflows it.

    Args:
        heights: Settled height per block position
        first_page_capacity: Usable height on page 0
        rest_page_capacity: Usable height on every later page
        spacing: Gap between consecutive blocks on a page

    Returns:
        Tuple of pages, each a tuple of positions in original order

    Raises:
        MeasurementIncompleteError: If any height is None
        ValueError: On negative heights or spacing

    Example:
        >>> pack_pages([100, 100, 100], 250, 300, 10)
        ((0, 1), (2,))
    """
    missing = [i for i, h in enumerate(heights) if h is None]
    if missing:
        raise MeasurementIncompleteError(missing)
    if spacing < 0:
        raise ValueError(f"spacing must be non-negative: {spacing}")

    pages: List[Tuple[int, ...]] = []
    current: List[int] = []
    used = 0.0

    for position, height in enumerate(heights):
        if height < 0:
            raise ValueError(f"Block height must be non-negative: position {position} = {height}")

        increment = (spacing if current else 0.0) + height
        limit = page_capacity(len(pages), first_page_capacity, rest_page_capacity)

        if used + increment > limit and current:
            pages.append(tuple(current))
            current = [position]
            used = height
        else:
            current.append(position)
            used += increment

    if current:
        pages.append(tuple(current))

    return tuple(pages)


def paginate(measured: MeasuredHeights, geometry: PageGeometry) -> LayoutResult:
    """
    Arrange measured blocks onto pages.

    Args:
        measured: Heights from layout.measurement.measure_blocks()
        geometry: Page geometry used for the measurement

    Returns:
        LayoutResult with page plans and header heights

    Raises:
        MeasurementIncompleteError: If any block or header height is missing
    """
    if not measured.is_complete:
        missing = measured.missing_positions
        parts = []
        if missing:
            parts.append(f"block positions {list(missing)}")
        if measured.first_header_height is None:
            parts.append("first header")
        if measured.rest_header_height is None:
            parts.append("rest header")
        raise MeasurementIncompleteError(
            missing,
            measured.failures,
            message=f"Measurement incomplete: missing {', '.join(parts)}",
        )

    first_capacity = geometry.first_page_capacity(measured.first_header_height)
    rest_capacity = geometry.rest_page_capacity(measured.rest_header_height)
    spacing = geometry.block_spacing
    heights = measured.block_heights

    partition = pack_pages(heights, first_capacity, rest_capacity, spacing)

    pages: List[PagePlan] = []
    warnings: List[str] = []
    for index, positions in enumerate(partition):
        capacity = page_capacity(index, first_capacity, rest_capacity)
        height_used = _page_height([heights[p] for p in positions], spacing)
        page = PagePlan(index=index, positions=positions, capacity=capacity, height_used=height_used)
        if page.overflows:
            message = (
                f"Block {positions[0]} overflows page {index}: "
                f"{height_used:.1f}pt needed, {capacity:.1f}pt available"
            )
            logger.warning(message)
            warnings.append(message)
        pages.append(page)

    logger.info(f"Paginated {len(heights)} blocks onto {len(pages)} pages")

    return LayoutResult(
        pages=tuple(pages),
        first_header_height=measured.first_header_height,
        rest_header_height=measured.rest_header_height,
        warnings=warnings,
    )


def _page_height(heights: Sequence[float], spacing: float) -> float:
    """Accumulate in the same order as pack_pages() so overflow checks agree."""
    used = 0.0
    for i, height in enumerate(heights):
        used += (spacing if i else 0.0) + height
    return used
