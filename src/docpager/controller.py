"""
Module: docpager.controller

Purpose:
    Orchestrate pagination passes.
    Signature → Measure → Pack → (Render)

Key Functions:
    - build_document(): One-shot entry point from blocks to PDF

Key Classes:
    - PaginationController: Recomputes pagination when the block
      sequence's signature changes and keeps the last valid result
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - docpager.layout: Measurement, packing and signatures
    - docpager.output: PDF rendering

Used By:
    - scripts/render_sample_document.py
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config import DocumentConfig
from .layout import (
    Block,
    BlockSequenceError,
    LayoutResult,
    MeasurementIncompleteError,
    PaginationError,
    measure_blocks,
    paginate,
    sequence_signature,
)
from .output.renderer import render_to_pdf

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        pdf_path: Path to generated PDF
        layout: Page partition used for the PDF
        page_count: Number of pages generated
        warnings: Overflow warnings from pagination
    """

    pdf_path: Path
    layout: LayoutResult
    page_count: int
    warnings: Tuple[str, ...]


class PaginationController:
    """
    Keeps a block sequence paginated.

    Each call to update() compares the sequence signature with the one
    the current layout was computed for. Only a changed signature starts
    a new pass; passes always measure and pack from scratch. A pass
    that cannot measure every block is dropped and the previous layout
    (or none) stays current.

    Example:
        >>> controller = PaginationController()
        >>> layout = controller.update(blocks)
        >>> controller.update(blocks) is layout
        True
    """

    def __init__(self, config: Optional[DocumentConfig] = None) -> None:
        self.config = config or DocumentConfig()
        self.last_error: Optional[PaginationError] = None
        self._layout: Optional[LayoutResult] = None
        self._blocks: Tuple[Block, ...] = ()
        self._generation = 0

    @property
    def layout(self) -> Optional[LayoutResult]:
        """Last valid layout, or None if no pass has succeeded yet."""
        return self._layout

    @property
    def blocks(self) -> Tuple[Block, ...]:
        """Blocks to render with the current layout."""
        return self._blocks

    @property
    def generation(self) -> int:
        """Number of passes started so far."""
        return self._generation

    def update(self, blocks: Sequence[Block]) -> Optional[LayoutResult]:
        """
        Re-paginate if the sequence signature changed.

        Args:
            blocks: Full block sequence including header markers

        Returns:
            The current layout after this update (may be the previous
            one, or None, if measurement failed)

        Raises:
            BlockSequenceError: If the sequence is invalid
        """
        blocks = tuple(blocks)
        signature = sequence_signature(blocks, self.config.signature_mode)

        if self._layout is not None and signature == self._layout.signature:
            logger.debug("Signature unchanged, keeping current pagination")
            self._blocks = blocks
            return self._layout

        self._generation += 1
        generation = self._generation

        try:
            layout = self._run_pass(blocks, signature, generation)
        except MeasurementIncompleteError as e:
            if generation != self._generation:
                logger.debug(f"Discarding superseded failed pass {generation}: {e}")
                return self._layout
            self.last_error = e
            logger.warning(f"Pagination pass {generation} aborted, keeping previous layout: {e}")
            return self._layout

        if generation != self._generation:
            logger.debug(f"Discarding superseded pass {generation}")
            return self._layout

        self._layout = layout
        self._blocks = blocks
        self.last_error = None
        return layout

    def render(self, output_path: Path) -> Path:
        """
        Render the current layout to PDF.

        Raises:
            PaginationError: If no pass has succeeded yet
        """
        if self._layout is None:
            raise PaginationError("No valid pagination to render")

        render_to_pdf(
            self._layout,
            self._blocks,
            output_path,
            geometry=self.config.geometry,
            style=self.config.style,
            show_page_numbers=self.config.show_page_numbers,
        )
        return Path(output_path)

    def _run_pass(self, blocks: Tuple[Block, ...], signature: str, generation: int) -> LayoutResult:
        measured = measure_blocks(blocks, self.config.geometry, self.config.style)
        layout = paginate(measured, self.config.geometry)
        return dataclasses.replace(layout, signature=signature, generation=generation)


def build_document(
    blocks: Sequence[Block],
    output_path: Path,
    config: Optional[DocumentConfig] = None,
) -> BuildResult:
    """
    Build a paginated PDF from start to finish.

    Pipeline:
    1. Validate the block sequence
    2. Measure blocks and headers off-surface
    3. Pack blocks onto pages
    4. Render to PDF

    Args:
        blocks: Full block sequence including header markers
        output_path: Path to write PDF
        config: Document configuration

    Returns:
        BuildResult with path, layout and warnings

    Raises:
        BuildError: If any step fails

    Example:
        >>> result = build_document(blocks, Path("output/plan.pdf"))
        >>> print(f"Generated {result.page_count} pages")
    """
    start_time = time.perf_counter()
    controller = PaginationController(config)

    try:
        layout = controller.update(blocks)
    except BlockSequenceError as e:
        raise BuildError(f"Invalid block sequence: {e}") from e

    if layout is None:
        raise BuildError(f"Could not paginate document: {controller.last_error}") from controller.last_error

    try:
        pdf_path = controller.render(Path(output_path))
    except OSError as e:
        raise BuildError(f"Failed to write PDF: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Built {layout.page_count} pages in {elapsed:.2f}s")

    return BuildResult(
        pdf_path=pdf_path,
        layout=layout,
        page_count=layout.page_count,
        warnings=tuple(layout.warnings),
    )
