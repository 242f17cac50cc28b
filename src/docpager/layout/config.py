"""
Module: layout.config

Purpose:
    Configuration for the pagination engine.
    Defines page geometry (size, padding, spacing) and block styling.

Key Classes:
    - PageGeometry: Immutable physical page geometry
    - BlockStyle: Immutable visual settings for the block wrapper

Dependencies:
    - dataclasses (std)

Used By:
    - layout.measurement: Off-surface measurement width
    - layout.packer: Page capacities
    - output.renderer: Final page geometry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# A4 in PDF points (1/72 inch)
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
DEFAULT_PADDING_PT = 30.0
DEFAULT_BLOCK_SPACING_PT = 9.0


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page geometry (immutable).

    All lengths are PDF points. Padding is applied uniformly on all
    four sides of the page.

    Attributes:
        page_width: Page width (W)
        page_height: Page height (H)
        padding: Uniform padding on every side (P)
        block_spacing: Vertical gap between consecutive blocks (S)

    Example:
        >>> geometry = PageGeometry(page_width=600, page_height=800, padding=50)
        >>> geometry.content_height
        700.0
        >>> geometry.first_page_capacity(100)
        600.0
    """

    page_width: float = A4_WIDTH_PT
    page_height: float = A4_HEIGHT_PT
    padding: float = DEFAULT_PADDING_PT
    block_spacing: float = DEFAULT_BLOCK_SPACING_PT

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative: {self.padding}")
        if self.block_spacing < 0:
            raise ValueError(f"block_spacing must be non-negative: {self.block_spacing}")
        if self.content_width <= 0:
            raise ValueError("Padding exceeds page width")
        if self.content_height <= 0:
            raise ValueError("Padding exceeds page height")

    @property
    def page_size(self) -> Tuple[float, float]:
        """(width, height) tuple as expected by ReportLab."""
        return (self.page_width, self.page_height)

    @property
    def content_width(self) -> float:
        """Width available for blocks (W - 2P)."""
        return float(self.page_width - 2 * self.padding)

    @property
    def content_height(self) -> float:
        """Usable content height per page (H - 2P)."""
        return float(self.page_height - 2 * self.padding)

    def first_page_capacity(self, first_header_height: float) -> float:
        """Height left for blocks on page 0 after the leading header."""
        return self.content_height - first_header_height

    def rest_page_capacity(self, rest_header_height: float) -> float:
        """Height left for blocks on continuation pages."""
        return self.content_height - rest_header_height


@dataclass(frozen=True)
class BlockStyle:
    """
    Visual settings shared by the measurement pass and the renderer.

    Colours are hex strings understood by ``reportlab.lib.colors.HexColor``.

    Attributes:
        font_name: Regular font
        bold_font_name: Font for block titles and table labels
        italic_font_name: Font for subtle annotations
        font_size: Body text size
        heading_font_size: Size of header headings
        small_font_size: Size used by ``small`` text and compact tables
        leading_ratio: Line height as a multiple of font size
        title_padding_x: Horizontal padding of the title band
        title_padding_y: Vertical padding of the title band
        body_padding: Padding around block body content
        subtle_padding_x: Horizontal padding of subtle annotations
        subtle_padding_y: Vertical padding of subtle annotations
        cell_padding_x: Horizontal table cell padding
        cell_padding_y: Vertical table cell padding
        header_gap: Gap after each header item (logo, heading)
        title_background: Title band colour
        subtle_background: Subtle annotation band colour
        text_color: Default text colour
    """

    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"
    italic_font_name: str = "Helvetica-Oblique"
    font_size: float = 9.0
    heading_font_size: float = 13.5
    small_font_size: float = 7.5
    leading_ratio: float = 1.625

    title_padding_x: float = 6.0
    title_padding_y: float = 3.0
    body_padding: float = 6.0
    subtle_padding_x: float = 9.0
    subtle_padding_y: float = 3.0
    cell_padding_x: float = 6.0
    cell_padding_y: float = 3.0
    header_gap: float = 18.0

    title_background: str = "#F3F4F6"
    subtle_background: str = "#F9FAFB"
    text_color: str = "#111827"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("font_size", "heading_font_size", "small_font_size", "leading_ratio"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive: {value}")
        for name in (
            "title_padding_x",
            "title_padding_y",
            "body_padding",
            "subtle_padding_x",
            "subtle_padding_y",
            "cell_padding_x",
            "cell_padding_y",
            "header_gap",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
