"""
Render a sample employee re-integration plan.

Builds the block sequence for a multi-section plan (two header markers,
titled tables, a subtle privacy note and a legend), paginates it and
writes the PDF. Use --long-notes to push blocks onto later pages.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

# Add src to path so we can import docpager
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from PIL import Image, ImageDraw

from docpager import DocumentConfig, build_document
from docpager.controller import BuildError
from docpager.layout import (
    HEADER_FIRST_KEY,
    HEADER_REST_KEY,
    Block,
    BlockVariant,
    ImageContent,
    TableContent,
    TextContent,
)

logger = logging.getLogger("render_sample")

TITLE = "Re-integration plan, second track"


def make_logo() -> Image.Image:
    """Plain two-tone logo bar."""
    img = Image.new("RGB", (240, 120), color=(255, 255, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 30, 239, 89], fill=(31, 41, 55))
    draw.text((20, 50), "VALENTINEZ", fill=(255, 255, 255))
    return img


def fmt_date(value: Optional[date]) -> str:
    return value.strftime("%d %B %Y") if value else ""


def yes_no(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "Yes" if value else "No"


def sample_blocks(long_notes: int = 0) -> List[Block]:
    logo = ImageContent(make_logo(), width=90, height=45)

    blocks = [
        Block(key=HEADER_FIRST_KEY, content=(logo, TextContent(TITLE, style="heading"))),
        Block(
            key="employee",
            title="Employee details",
            content=TableContent(rows=(
                ("Name", "Jane Doe"),
                ("Phone", "+31 6 1234 5678"),
                ("Email", "jane.doe@example.com"),
                ("Date of birth", fmt_date(date(1984, 3, 14))),
            )),
        ),
        Block(
            key="trajectory",
            title="Trajectory details",
            content=TableContent(rows=(
                ("First day of sickness", fmt_date(date(2025, 1, 6))),
                ("Registration date", fmt_date(date(2026, 2, 2))),
                ("Intake date", fmt_date(date(2026, 2, 16))),
                ("Occupational expert", "R. de Vries"),
                ("Company doctor", ""),
            )),
        ),
        Block(
            key="client",
            title="Client details",
            content=TableContent(rows=(
                ("Employer", "Example Logistics B.V."),
                ("Contact person", "M. Jansen"),
                ("Phone", ""),
                ("Email", "hr@example.com"),
            )),
        ),
        Block(
            key="basics",
            title="Background",
            content=TableContent(rows=(
                ("Current job", "Warehouse planner"),
                ("Education level", "MBO 4"),
                ("Driving licence", yes_no(True)),
                ("Own transport", yes_no(True)),
                ("Owns a PC", yes_no(False)),
                ("Contract hours", "32 hours per week"),
            )),
        ),
    ]

    for i in range(long_notes):
        blocks.append(Block(
            key=f"notes-{i + 1}",
            title=f"Progress notes {i + 1}",
            content=TextContent(
                "The employee attended all scheduled coaching sessions and worked on "
                "an updated CV. Vacancies in planning and logistics administration "
                "were reviewed together.\n" * 6
            ),
        ))

    blocks.extend([
        Block(
            key="privacy",
            variant=BlockVariant.SUBTLE,
            content=TextContent(
                "Note: in line with the GDPR this report contains no medical terms or "
                "diagnoses. See our website for the privacy and complaints policy."
            ),
        ),
        Block(key=HEADER_REST_KEY, content=logo),
        Block(
            key="legend",
            title="Legend",
            content=TableContent(
                rows=(
                    ("FDS", "First day of sickness"),
                    ("OE", "Occupational expert"),
                    ("CD", "Company doctor"),
                    ("TP", "Trajectory plan"),
                    ("PR", "Progress report"),
                ),
                small=True,
            ),
        ),
    ])
    return blocks


def main() -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Render a sample paginated document")
    parser.add_argument("--output", type=Path, default=Path("workspace/sample_document.pdf"), help="PDF path")
    parser.add_argument("--long-notes", type=int, default=0, help="Number of long note blocks to add")
    parser.add_argument("--page-numbers", action="store_true", help="Draw page numbers")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    config = DocumentConfig(show_page_numbers=args.page_numbers)
    try:
        result = build_document(sample_blocks(args.long_notes), args.output, config)
    except BuildError as e:
        logger.error(str(e))
        return 1

    for warning in result.warnings:
        logger.warning(warning)
    for page in result.layout.pages:
        logger.info(f"Page {page.index + 1}: blocks {list(page.positions)} ({page.height_used:.0f}/{page.capacity:.0f}pt)")
    print(f"[OK] Wrote {result.page_count} pages to {result.pdf_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
