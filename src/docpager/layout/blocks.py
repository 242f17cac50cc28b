"""
Module: layout.blocks

Purpose:
    The single block wrapper shared by the measurement pass and the
    final renderer. Both call build_frame() with the same width and
    styles, so measured and rendered geometry cannot diverge.

Key Classes:
    - StyleSheet: Paragraph styles derived from a BlockStyle
    - BlockFrame: Flowable drawing one block (or header) with its chrome

Key Functions:
    - build_stylesheet(): Create paragraph styles from config
    - build_frame(): Wrap a block for measuring or drawing

Dependencies:
    - reportlab: Flowable, ParagraphStyle, colors

Used By:
    - layout.measurement: Off-surface wrap
    - output.renderer: Visible draw
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Paragraph

from .config import BlockStyle
from .content import markup
from .models import Block, BlockVariant


@dataclass(frozen=True)
class StyleSheet:
    """Paragraph styles plus the BlockStyle they were built from."""

    config: BlockStyle
    paragraphs: Dict[str, ParagraphStyle]

    def __getitem__(self, name: str) -> ParagraphStyle:
        try:
            return self.paragraphs[name]
        except KeyError:
            raise KeyError(f"Unknown paragraph style: {name!r}") from None


@lru_cache(maxsize=8)
def build_stylesheet(style: Optional[BlockStyle] = None) -> StyleSheet:
    """
    Create the paragraph styles used by every block.

    Args:
        style: Visual settings (defaults to BlockStyle())

    Returns:
        StyleSheet with body, subtle, title, heading, small and table
        cell styles
    """
    style = style or BlockStyle()
    text_color = colors.HexColor(style.text_color)

    def make(name: str, font: str, size: float, **kwargs) -> ParagraphStyle:
        return ParagraphStyle(
            name,
            fontName=font,
            fontSize=size,
            leading=size * style.leading_ratio,
            textColor=text_color,
            **kwargs,
        )

    paragraphs = {
        "body": make("body", style.font_name, style.font_size),
        "subtle": make("subtle", style.italic_font_name, style.font_size),
        "title": make("title", style.bold_font_name, style.font_size),
        "heading": make("heading", style.bold_font_name, style.heading_font_size, alignment=TA_CENTER),
        "small": make("small", style.font_name, style.small_font_size),
        "cell_label": make("cell_label", style.font_name, style.font_size),
        "cell_value": make("cell_value", style.font_name, style.font_size),
        "small_cell_label": make("small_cell_label", style.font_name, style.small_font_size),
        "small_cell_value": make("small_cell_value", style.font_name, style.small_font_size),
    }
    return StyleSheet(config=style, paragraphs=paragraphs)


@dataclass
class _Section:
    """A band of the frame: optional background, padding and stacked flowables."""

    flowables: List[Flowable]
    pad_x: float = 0.0
    pad_y: float = 0.0
    background: Optional[colors.Color] = None
    item_gap: float = 0.0
    trailing: float = 0.0
    sizes: List[Tuple[float, float]] = field(default_factory=list)
    height: float = 0.0


class BlockFrame(Flowable):
    """
    Flowable rendering one block inside its visual wrapper.

    ``block`` variant: optional title band, then a padded body.
    ``subtle`` variant: a single light band with italic text.
    Header markers: bare stack of content items, each followed by
    the configured header gap.

    Content flowables are built freshly in the constructor, so every
    pass (measurement or render) works on its own objects.
    """

    def __init__(self, block: Block, width: float, styles: StyleSheet) -> None:
        super().__init__()
        self.block = block
        self.frame_width = width
        self.styles = styles
        self._sections = self._build_sections()

    def _build_sections(self) -> List[_Section]:
        cfg = self.styles.config
        block = self.block

        if block.is_header_marker:
            items = self._build_content(self.frame_width, self.styles["heading"])
            return [_Section(
                flowables=items,
                item_gap=cfg.header_gap,
                trailing=cfg.header_gap if items else 0.0,
            )]

        if block.variant is BlockVariant.SUBTLE:
            inner = self.frame_width - 2 * cfg.subtle_padding_x
            return [_Section(
                flowables=self._build_content(inner, self.styles["subtle"]),
                pad_x=cfg.subtle_padding_x,
                pad_y=cfg.subtle_padding_y,
                background=colors.HexColor(cfg.subtle_background),
                item_gap=cfg.cell_padding_y,
            )]

        sections: List[_Section] = []
        if block.title:
            sections.append(_Section(
                flowables=[Paragraph(markup(block.title), self.styles["title"])],
                pad_x=cfg.title_padding_x,
                pad_y=cfg.title_padding_y,
                background=colors.HexColor(cfg.title_background),
            ))
        inner = self.frame_width - 2 * cfg.body_padding
        sections.append(_Section(
            flowables=self._build_content(inner, self.styles["body"]),
            pad_x=cfg.body_padding,
            pad_y=cfg.body_padding,
            item_gap=cfg.cell_padding_y,
        ))
        return sections

    def _build_content(self, width: float, text_style: ParagraphStyle) -> List[Flowable]:
        flowables: List[Flowable] = []
        for item in self.block.content:
            flowables.extend(item.build(width, self.styles, text_style))
        return flowables

    def wrap(self, availWidth: float, availHeight: float) -> Tuple[float, float]:
        canv = getattr(self, "canv", None)
        total = 0.0
        for section in self._sections:
            inner = self.frame_width - 2 * section.pad_x
            section.sizes = [f.wrapOn(canv, inner, availHeight) for f in section.flowables]
            content = sum(h for _, h in section.sizes)
            content += section.item_gap * max(0, len(section.sizes) - 1)
            section.height = content + 2 * section.pad_y + section.trailing
            total += section.height
        self.width = self.frame_width
        self.height = total
        return self.width, self.height

    def draw(self) -> None:
        y = self.height
        for section in self._sections:
            y -= section.height
            band_height = section.height - section.trailing
            if section.background is not None and band_height > 0:
                self.canv.saveState()
                self.canv.setFillColor(section.background)
                self.canv.rect(0, y + section.trailing, self.frame_width, band_height, stroke=0, fill=1)
                self.canv.restoreState()

            inner = self.frame_width - 2 * section.pad_x
            cursor = y + section.height - section.pad_y
            for i, (flowable, (w, h)) in enumerate(zip(section.flowables, section.sizes)):
                if i:
                    cursor -= section.item_gap
                cursor -= h
                flowable.drawOn(self.canv, section.pad_x, cursor, _sW=max(0.0, inner - w))


def build_frame(block: Block, width: float, styles: StyleSheet) -> BlockFrame:
    """
    Wrap a block for measuring or drawing.

    Args:
        block: Block or header marker
        width: Content width (page width minus padding)
        styles: StyleSheet from build_stylesheet()

    Returns:
        Unwrapped BlockFrame; call wrapOn() before reading its height
    """
    return BlockFrame(block, width, styles)
