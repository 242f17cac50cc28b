"""
Module: layout.content

Purpose:
    Renderable payloads carried by blocks.
    Each payload builds fresh ReportLab flowables for a given width
    and exposes a fingerprint of everything that affects its height.

Key Classes:
    - TextContent: Pre-wrapped text paragraph(s)
    - TableContent: Two-column label/value table
    - ImageContent: Pillow image (e.g. a logo bar)
    - FlowableContent: Custom flowable factory

Dependencies:
    - reportlab: Flowables
    - PIL: Image payloads

Used By:
    - layout.blocks: Block wrapper
    - layout.signature: Content fingerprints
"""

from __future__ import annotations

import hashlib
import io
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Paragraph, Table, TableStyle
from reportlab.platypus import Image as ImageFlowable

if TYPE_CHECKING:
    from .blocks import StyleSheet

PLACEHOLDER = "—"  # em dash for empty table values


def markup(text: str) -> str:
    """Escape text for a Paragraph, keeping explicit line breaks."""
    return "<br/>".join(escape(line) for line in text.split("\n"))


@dataclass(frozen=True)
class TextContent:
    """
    Text rendered as a wrapping paragraph.

    Newlines are kept as hard line breaks.

    Attributes:
        text: Plain text (no markup)
        style: Paragraph style name, or None for the block's default
    """

    text: str
    style: Optional[str] = None

    def build(self, width: float, styles: StyleSheet, text_style: ParagraphStyle) -> List[Flowable]:
        para_style = styles[self.style] if self.style else text_style
        return [Paragraph(markup(self.text), para_style)]

    def fingerprint(self) -> str:
        return json.dumps(["text", self.style, self.text])


@dataclass(frozen=True)
class TableContent:
    """
    Two-column label/value table.

    Attributes:
        rows: (label, value) pairs; empty values show a dash
        label_ratio: Share of the width used by the label column
        small: Use the small font size
    """

    rows: Tuple[Tuple[str, str], ...]
    label_ratio: float = 0.4
    small: bool = False

    def __post_init__(self) -> None:
        rows = tuple((str(label), "" if value is None else str(value)) for label, value in self.rows)
        object.__setattr__(self, "rows", rows)
        if not 0 < self.label_ratio < 1:
            raise ValueError(f"label_ratio must be between 0 and 1: {self.label_ratio}")

    def build(self, width: float, styles: StyleSheet, text_style: ParagraphStyle) -> List[Flowable]:
        if not self.rows:
            return []

        prefix = "small_" if self.small else ""
        label_style = styles[f"{prefix}cell_label"]
        value_style = styles[f"{prefix}cell_value"]
        data = [
            [Paragraph(markup(label), label_style), Paragraph(markup(value.strip() or PLACEHOLDER), value_style)]
            for label, value in self.rows
        ]
        label_width = width * self.label_ratio
        table = Table(data, colWidths=[label_width, width - label_width], hAlign="LEFT")
        pad_x, pad_y = styles.config.cell_padding_x, styles.config.cell_padding_y
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), pad_x),
            ("RIGHTPADDING", (0, 0), (-1, -1), pad_x),
            ("TOPPADDING", (0, 0), (-1, -1), pad_y),
            ("BOTTOMPADDING", (0, 0), (-1, -1), pad_y),
        ]))
        return [table]

    def fingerprint(self) -> str:
        return json.dumps(["table", self.label_ratio, self.small, [list(r) for r in self.rows]])


@dataclass(frozen=True)
class ImageContent:
    """
    Pillow image drawn at a fixed size.

    Attributes:
        image: Source image
        width: Drawn width in points
        height: Drawn height in points
        align: LEFT, CENTER or RIGHT
    """

    image: Image.Image
    width: float
    height: float
    align: str = "RIGHT"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive: {self.width}x{self.height}")
        if self.align not in ("LEFT", "CENTER", "RIGHT"):
            raise ValueError(f"Invalid align: {self.align!r}")

    def build(self, width: float, styles: StyleSheet, text_style: ParagraphStyle) -> List[Flowable]:
        return [ImageFlowable(_pil_to_buffer(self.image), width=self.width, height=self.height, hAlign=self.align)]

    def fingerprint(self) -> str:
        digest = hashlib.sha1(self.image.tobytes()).hexdigest()
        return json.dumps(["image", self.image.mode, list(self.image.size), self.width, self.height, self.align, digest])


@dataclass(frozen=True)
class FlowableContent:
    """
    Custom content built by a factory.

    The factory is called once per measurement or render pass with the
    available width and must return a flowable or a list of flowables.
    ``fingerprint_text`` should change whenever the built height can
    change; when it is empty the factory object itself identifies the
    content, so a new factory always re-paginates.

    Attributes:
        factory: Callable(width) -> Flowable | list[Flowable]
        fingerprint_text: Caller-supplied fingerprint
    """

    factory: Callable[[float], Any]
    fingerprint_text: str = ""

    def build(self, width: float, styles: StyleSheet, text_style: ParagraphStyle) -> List[Flowable]:
        built = self.factory(width)
        if isinstance(built, Flowable):
            return [built]
        return list(built)

    def fingerprint(self) -> str:
        name = getattr(self.factory, "__qualname__", type(self.factory).__name__)
        # Without caller text, distinct factory objects must not collide
        identity = self.fingerprint_text or f"id:{id(self.factory)}"
        return json.dumps(["flowable", name, identity])


def _pil_to_buffer(img: Image.Image) -> io.BytesIO:
    """
    Encode a PIL image as PNG for ReportLab.

    Args:
        img: PIL Image object

    Returns:
        Seeked-to-start buffer holding PNG bytes
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
