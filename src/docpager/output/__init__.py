"""
Module: docpager.output

Purpose:
    PDF output for paginated documents.

Key Functions:
    - render_to_pdf(): Write a LayoutResult to a PDF file
    - render_to_bytes(): Render a LayoutResult to PDF bytes
"""

from .renderer import render_to_bytes, render_to_pdf

__all__ = ["render_to_pdf", "render_to_bytes"]
