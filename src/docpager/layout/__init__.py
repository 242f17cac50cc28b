"""
Module: docpager.layout

Purpose:
    Pagination engine: measure blocks on an off-surface canvas, then
    partition them into fixed-size pages.

Key Functions:
    - measure_blocks(): Settled heights of blocks and headers
    - pack_pages(): Pure greedy page partition
    - paginate(): Build a LayoutResult from measured heights
    - sequence_signature(): Recompute-on-change fingerprint

Key Classes:
    - PageGeometry: Page size, padding and spacing
    - Block: Atomic unit of content
    - LayoutResult: Page partition

Dependencies:
    - reportlab: Measurement surface and flowables
    - PIL: Image content

Used By:
    - docpager.controller: Pagination passes
    - docpager.output.renderer: Final drawing
"""

from .config import BlockStyle, PageGeometry
from .models import (
    HEADER_FIRST_KEY,
    HEADER_REST_KEY,
    Block,
    BlockSequence,
    BlockSequenceError,
    BlockVariant,
    LayoutResult,
    MeasuredHeights,
    PagePlan,
    split_sequence,
)
from .content import FlowableContent, ImageContent, TableContent, TextContent
from .blocks import BlockFrame, StyleSheet, build_frame, build_stylesheet
from .measurement import measure_blocks
from .packer import MeasurementIncompleteError, PaginationError, pack_pages, page_capacity, paginate
from .signature import SignatureMode, sequence_signature

__all__ = [
    # Config
    "PageGeometry",
    "BlockStyle",
    # Models
    "HEADER_FIRST_KEY",
    "HEADER_REST_KEY",
    "Block",
    "BlockVariant",
    "BlockSequence",
    "BlockSequenceError",
    "MeasuredHeights",
    "PagePlan",
    "LayoutResult",
    "split_sequence",
    # Content
    "TextContent",
    "TableContent",
    "ImageContent",
    "FlowableContent",
    # Block wrapper
    "BlockFrame",
    "StyleSheet",
    "build_frame",
    "build_stylesheet",
    # Functions
    "measure_blocks",
    "pack_pages",
    "page_capacity",
    "paginate",
    "sequence_signature",
    "SignatureMode",
    # Errors
    "PaginationError",
    "MeasurementIncompleteError",
]
