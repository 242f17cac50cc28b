"""
Module: docpager.config

Purpose:
    Configuration dataclass for paginated document builds. Immutable
    configuration with validation on construction.

Key Classes:
    - DocumentConfig: Geometry, styling and recomputation settings

Dependencies:
    - dataclasses (std)

Used By:
    - docpager.controller: PaginationController and build_document()
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docpager.layout.config import BlockStyle, PageGeometry
from docpager.layout.signature import SignatureMode


@dataclass(frozen=True)
class DocumentConfig:
    """
    Configuration for building a paginated document (immutable).

    Attributes:
        geometry: Page size, padding and block spacing
        style: Visual settings shared by measurement and rendering
        signature_mode: Fields that trigger re-pagination on change
        show_page_numbers: Draw "Page i of n" in the bottom padding

    Example:
        >>> config = DocumentConfig(show_page_numbers=True)
        >>> config.show_page_numbers
        True
    """

    geometry: PageGeometry = field(default_factory=PageGeometry)
    style: BlockStyle = field(default_factory=BlockStyle)
    signature_mode: SignatureMode = SignatureMode.LAYOUT
    show_page_numbers: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.signature_mode, SignatureMode):
            object.__setattr__(self, "signature_mode", SignatureMode(self.signature_mode))
