"""
Tests for the pagination controller and build_document().
"""

import pytest
from reportlab.platypus import Spacer

from docpager import BuildError, DocumentConfig, PaginationController, build_document
from docpager.layout import (
    Block,
    FlowableContent,
    PaginationError,
    SignatureMode,
    TextContent,
)

PARAGRAPH = "Coaching sessions were attended and vacancies were reviewed together. " * 30


def _broken(width):
    raise RuntimeError("image not loaded")


class TestDocumentConfig:
    """Tests for DocumentConfig."""

    def test_init_when_mode_string_then_enum(self):
        config = DocumentConfig(signature_mode="narrow")

        assert config.signature_mode is SignatureMode.NARROW

    def test_init_when_invalid_mode_then_raises(self):
        with pytest.raises(ValueError):
            DocumentConfig(signature_mode="everything")


class TestPaginationController:
    """Tests for PaginationController."""

    def test_init_when_created_then_no_layout(self):
        controller = PaginationController()

        assert controller.layout is None
        assert controller.generation == 0

    def test_update_when_first_call_then_layout_computed(self, make_blocks):
        controller = PaginationController()

        layout = controller.update(make_blocks(["a", "b"]))

        assert layout is not None
        assert layout.partition == ((0, 1),)
        assert layout.generation == 1
        assert layout.signature
        assert controller.layout is layout

    def test_update_when_signature_unchanged_then_cached_layout(self, make_blocks):
        controller = PaginationController()
        layout = controller.update(make_blocks(["a", "b"]))

        again = controller.update(make_blocks(["a", "b"]))

        assert again is layout
        assert controller.generation == 1

    def test_update_when_content_changes_then_recomputed(self, make_blocks):
        controller = PaginationController()
        first = controller.update(make_blocks(["a"]))

        second = controller.update(make_blocks([PARAGRAPH] * 6))

        assert second is not first
        assert second.generation == 2
        assert second.page_count > 1
        assert controller.generation == 2

    def test_update_when_narrow_mode_and_content_changes_then_not_recomputed(self, make_blocks):
        controller = PaginationController(DocumentConfig(signature_mode=SignatureMode.NARROW))
        first = controller.update(make_blocks(["a"]))

        second = controller.update(make_blocks([PARAGRAPH]))

        assert second is first
        assert controller.blocks[1].content[0].text == PARAGRAPH

    def test_update_when_measurement_fails_then_previous_layout_kept(self, make_blocks, header_blocks):
        # Arrange
        controller = PaginationController()
        good = controller.update(make_blocks(["a", "b"]))
        first, rest = header_blocks
        broken = [first, Block(key="b0", content=FlowableContent(_broken)), rest]

        # Act
        result = controller.update(broken)

        # Assert
        assert result is good
        assert controller.layout is good
        assert controller.generation == 2
        assert controller.last_error is not None
        assert controller.last_error.missing_positions == (0,)

    def test_update_when_first_pass_fails_then_no_layout(self, header_blocks):
        controller = PaginationController()
        first, rest = header_blocks

        result = controller.update([first, Block(key="x", content=FlowableContent(_broken)), rest])

        assert result is None
        assert controller.layout is None

    def test_update_when_recovered_then_error_cleared(self, make_blocks, header_blocks):
        controller = PaginationController()
        first, rest = header_blocks
        controller.update([first, Block(key="x", content=FlowableContent(_broken)), rest])

        layout = controller.update(make_blocks(["a"]))

        assert layout is not None
        assert controller.last_error is None

    def test_render_when_no_layout_then_raises(self, tmp_path):
        controller = PaginationController()

        with pytest.raises(PaginationError, match="No valid pagination"):
            controller.render(tmp_path / "out.pdf")

    def test_render_when_layout_then_pdf_written(self, make_blocks, tmp_path):
        controller = PaginationController()
        controller.update(make_blocks(["a", "b"]))

        path = controller.render(tmp_path / "nested" / "out.pdf")

        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")


class TestBuildDocument:
    """Tests for build_document()."""

    def test_build_when_valid_blocks_then_result(self, make_blocks, tmp_path):
        # Arrange
        blocks = make_blocks([PARAGRAPH] * 8)
        output = tmp_path / "plan.pdf"

        # Act
        result = build_document(blocks, output)

        # Assert
        assert result.pdf_path == output
        assert output.exists()
        assert result.page_count == result.layout.page_count
        assert result.page_count > 1
        assert result.warnings == ()

    def test_build_when_missing_header_then_build_error(self, tmp_path):
        blocks = [Block(key="__header_first"), Block(key="a", content=TextContent("x"))]

        with pytest.raises(BuildError, match="Invalid block sequence"):
            build_document(blocks, tmp_path / "out.pdf")

    def test_build_when_measurement_fails_then_build_error(self, header_blocks, tmp_path):
        first, rest = header_blocks
        blocks = [first, Block(key="x", content=FlowableContent(_broken)), rest]

        with pytest.raises(BuildError, match="Could not paginate"):
            build_document(blocks, tmp_path / "out.pdf")

    def test_build_when_block_overflows_then_warning_returned(self, header_blocks, tmp_path):
        first, rest = header_blocks
        config = DocumentConfig()
        tall = FlowableContent(lambda width: Spacer(width, config.geometry.content_height * 2), "tall")
        blocks = [first, Block(key="tall", content=tall), rest]

        result = build_document(blocks, tmp_path / "out.pdf", config)

        assert result.page_count == 1
        assert len(result.warnings) == 1

class TestPaginationControllerRecompute:
    """Recompute-on-change for custom content and overlapping passes."""

    def test_update_when_custom_factory_replaced_then_recomputed(self, header_blocks):
        # Arrange
        controller = PaginationController()
        first, rest = header_blocks

        def blocks_of(height):
            return [
                first,
                Block(key="x", content=FlowableContent(lambda width: Spacer(width, height))),
                Block(key="y", content=FlowableContent(lambda width: Spacer(width, height))),
                rest,
            ]

        short = controller.update(blocks_of(10))

        # Act
        tall = controller.update(blocks_of(700))

        # Assert
        assert short.partition == ((0, 1),)
        assert tall is not short
        assert tall.generation == 2
        assert tall.partition == ((0,), (1,))

    def test_update_when_newer_pass_commits_during_measurement_then_older_discarded(
        self, make_blocks, header_blocks
    ):
        # Arrange
        controller = PaginationController()
        first, rest = header_blocks
        newer = tuple(make_blocks(["newer"]))
        calls = []

        def reentrant(width):
            if not calls:
                calls.append(width)
                controller.update(newer)
            return Spacer(width, 10)

        older = [first, Block(key="older", content=FlowableContent(reentrant, "older")), rest]

        # Act
        layout = controller.update(older)

        # Assert
        assert controller.generation == 2
        assert layout is controller.layout
        assert layout.generation == 2
        assert controller.blocks == newer

    def test_update_when_superseded_pass_fails_then_error_not_recorded(self, make_blocks, header_blocks):
        # Arrange
        controller = PaginationController()
        first, rest = header_blocks
        newer = tuple(make_blocks(["newer"]))

        def reentrant_then_fail(width):
            controller.update(newer)
            raise RuntimeError("stale content")

        older = [first, Block(key="older", content=FlowableContent(reentrant_then_fail, "older")), rest]

        # Act
        layout = controller.update(older)

        # Assert
        assert layout is not None
        assert layout.generation == 2
        assert controller.blocks == newer
        assert controller.last_error is None
