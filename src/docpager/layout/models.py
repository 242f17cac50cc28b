"""
Module: layout.models

Purpose:
    Data models for pagination.
    Immutable dataclasses representing blocks, measurements and pages.

Key Classes:
    - Block: Atomic unit of document content
    - BlockVariant: Visual wrapper variant of a block
    - BlockSequence: Header markers split from the placeable blocks
    - MeasuredHeights: Settled heights from one measurement pass
    - PagePlan: Block positions assigned to one page
    - LayoutResult: Final page partition

Key Functions:
    - split_sequence(): Validate a block sequence and split off header markers

Dependencies:
    - dataclasses (std)

Used By:
    - layout.measurement: Produces MeasuredHeights
    - layout.packer: Produces LayoutResult
    - output.renderer: Consumes LayoutResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple


HEADER_PREFIX = "__header"
HEADER_FIRST_KEY = "__header_first"
HEADER_REST_KEY = "__header_rest"


class BlockSequenceError(ValueError):
    """Raised when a block sequence cannot be paginated as given."""


class BlockVariant(str, Enum):
    """Closed set of block wrappers."""

    BLOCK = "block"
    SUBTLE = "subtle"


class ContentItem(Protocol):
    """Renderable payload of a block (see ``layout.content``)."""

    def build(self, width: float, styles: Any, text_style: Any) -> List[Any]:
        ...

    def fingerprint(self) -> str:
        ...


@dataclass(frozen=True)
class Block:
    """
    Atomic, unsplittable unit of document content (immutable).

    The pagination engine never looks inside ``content``; it only
    measures the rendered block.

    Attributes:
        key: Stable identity, unique within a sequence
        variant: Visual wrapper (titled block or subtle annotation)
        content: Tuple of content items, rendered top to bottom
        title: Title shown in the title band (``block`` variant only)

    Example:
        >>> block = Block(key="notes", content=TextContent("Hello"), title="Notes")
        >>> block.content
        (TextContent(text='Hello', style=None),)
    """

    key: str
    variant: BlockVariant = BlockVariant.BLOCK
    content: Tuple[ContentItem, ...] = ()
    title: str = ""

    def __post_init__(self) -> None:
        """Normalise content and variant."""
        if not isinstance(self.variant, BlockVariant):
            object.__setattr__(self, "variant", BlockVariant(self.variant))
        if isinstance(self.content, (list, tuple)):
            object.__setattr__(self, "content", tuple(self.content))
        else:
            object.__setattr__(self, "content", (self.content,))

    @property
    def is_header_marker(self) -> bool:
        """True for the reserved leading/continuation header markers."""
        return self.key.startswith(HEADER_PREFIX)


@dataclass(frozen=True)
class BlockSequence:
    """
    A validated block sequence.

    Attributes:
        first_header: Leading header marker (page 0)
        rest_header: Continuation header marker (pages 1..n)
        placeables: Blocks to paginate, in original order
    """

    first_header: Block
    rest_header: Block
    placeables: Tuple[Block, ...]

    def header_for(self, page_index: int) -> Block:
        """Header marker drawn on the given page."""
        return self.first_header if page_index == 0 else self.rest_header


def split_sequence(blocks: Sequence[Block]) -> BlockSequence:
    """
    Validate a block sequence and split off its header markers.

    Header markers may appear anywhere in the sequence; they never
    occupy a position among the placeable blocks.

    Args:
        blocks: Full sequence including both header markers

    Returns:
        BlockSequence with headers and placeable blocks

    Raises:
        BlockSequenceError: On empty or duplicate keys, missing or repeated
            header markers, or unknown reserved keys
    """
    seen: set[str] = set()
    headers: Dict[str, Block] = {}
    placeables: List[Block] = []

    for block in blocks:
        if not block.key:
            raise BlockSequenceError("Block key must not be empty")
        if block.key in seen:
            raise BlockSequenceError(f"Duplicate block key: {block.key!r}")
        seen.add(block.key)

        if block.is_header_marker:
            if block.key not in (HEADER_FIRST_KEY, HEADER_REST_KEY):
                raise BlockSequenceError(
                    f"Unknown reserved key {block.key!r} "
                    f"(expected {HEADER_FIRST_KEY!r} or {HEADER_REST_KEY!r})"
                )
            headers[block.key] = block
        else:
            placeables.append(block)

    missing = [key for key in (HEADER_FIRST_KEY, HEADER_REST_KEY) if key not in headers]
    if missing:
        raise BlockSequenceError(f"Missing header marker(s): {', '.join(missing)}")

    return BlockSequence(
        first_header=headers[HEADER_FIRST_KEY],
        rest_header=headers[HEADER_REST_KEY],
        placeables=tuple(placeables),
    )


@dataclass(frozen=True)
class MeasuredHeights:
    """
    Settled heights from one measurement pass.

    A ``None`` height means the block (or header) failed to render;
    it is never replaced by zero.

    Attributes:
        block_heights: Height per placeable position
        first_header_height: Height of the leading header
        rest_header_height: Height of the continuation header
        failures: Block key -> error message for failed measurements
    """

    block_heights: Tuple[Optional[float], ...]
    first_header_height: Optional[float]
    rest_header_height: Optional[float]
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def missing_positions(self) -> Tuple[int, ...]:
        """Placeable positions whose height is undefined."""
        return tuple(i for i, h in enumerate(self.block_heights) if h is None)

    @property
    def is_complete(self) -> bool:
        """True when every block and both headers were measured."""
        return (
            not self.missing_positions
            and self.first_header_height is not None
            and self.rest_header_height is not None
        )


@dataclass(frozen=True)
class PagePlan:
    """
    Blocks assigned to a single page.

    Attributes:
        index: Page number (0-indexed)
        positions: Placeable positions on this page, in order
        capacity: Usable height for blocks on this page
        height_used: Sum of block heights plus spacing between them

    Example:
        >>> page = PagePlan(index=0, positions=(0, 1), capacity=250, height_used=210)
        >>> page.overflows
        False
    """

    index: int
    positions: Tuple[int, ...]
    capacity: float
    height_used: float

    @property
    def uses_first_header(self) -> bool:
        """Only page 0 carries the leading header."""
        return self.index == 0

    @property
    def placement_count(self) -> int:
        """Number of blocks on this page."""
        return len(self.positions)

    @property
    def is_empty(self) -> bool:
        return len(self.positions) == 0

    @property
    def overflows(self) -> bool:
        """True when the content is taller than the page capacity."""
        return self.height_used > self.capacity


@dataclass(frozen=True)
class LayoutResult:
    """
    Final page partition with header heights and diagnostics.

    Attributes:
        pages: Tuple of PagePlans
        first_header_height: Measured leading header height
        rest_header_height: Measured continuation header height
        warnings: Overflow warnings
        signature: Sequence signature this partition was computed for
        generation: Pass number that produced this partition

    Example:
        >>> result.page_count
        2
        >>> result.partition
        ((0, 1), (2,))
    """

    pages: Tuple[PagePlan, ...]
    first_header_height: float
    rest_header_height: float
    warnings: List[str] = field(default_factory=list)
    signature: str = ""
    generation: int = 0

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of placed blocks across all pages."""
        return sum(p.placement_count for p in self.pages)

    @property
    def partition(self) -> Tuple[Tuple[int, ...], ...]:
        """Page partition as plain tuples of positions."""
        return tuple(p.positions for p in self.pages)

    def page_of(self, position: int) -> int:
        """Page index holding the given placeable position."""
        for page in self.pages:
            if position in page.positions:
                return page.index
        raise KeyError(position)
