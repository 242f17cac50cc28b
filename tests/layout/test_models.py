"""
Unit tests for layout models and sequence validation.
"""

import pytest

from docpager.layout import (
    HEADER_FIRST_KEY,
    HEADER_REST_KEY,
    Block,
    BlockSequenceError,
    BlockVariant,
    LayoutResult,
    MeasuredHeights,
    PagePlan,
    TextContent,
    split_sequence,
)


class TestBlock:
    """Tests for Block dataclass."""

    def test_init_when_single_content_then_wrapped_in_tuple(self):
        content = TextContent("hello")
        block = Block(key="a", content=content)

        assert block.content == (content,)

    def test_init_when_list_content_then_tuple(self):
        items = [TextContent("a"), TextContent("b")]
        block = Block(key="a", content=items)

        assert block.content == tuple(items)

    def test_init_when_variant_string_then_enum(self):
        block = Block(key="a", variant="subtle")

        assert block.variant is BlockVariant.SUBTLE

    def test_init_when_unknown_variant_then_raises(self):
        with pytest.raises(ValueError):
            Block(key="a", variant="fancy")

    def test_is_header_marker_when_reserved_key_then_true(self):
        assert Block(key=HEADER_FIRST_KEY).is_header_marker
        assert Block(key=HEADER_REST_KEY).is_header_marker
        assert not Block(key="body").is_header_marker


class TestSplitSequence:
    """Tests for split_sequence()."""

    def test_split_when_headers_anywhere_then_excluded_from_placeables(self):
        blocks = [
            Block(key=HEADER_FIRST_KEY),
            Block(key="a"),
            Block(key=HEADER_REST_KEY),
            Block(key="b"),
        ]

        sequence = split_sequence(blocks)

        assert [b.key for b in sequence.placeables] == ["a", "b"]
        assert sequence.first_header.key == HEADER_FIRST_KEY
        assert sequence.rest_header.key == HEADER_REST_KEY

    def test_header_for_when_page_zero_then_first_header(self):
        sequence = split_sequence([Block(key=HEADER_FIRST_KEY), Block(key=HEADER_REST_KEY)])

        assert sequence.header_for(0).key == HEADER_FIRST_KEY
        assert sequence.header_for(1).key == HEADER_REST_KEY
        assert sequence.header_for(7).key == HEADER_REST_KEY

    def test_split_when_missing_header_then_raises(self):
        with pytest.raises(BlockSequenceError, match=HEADER_REST_KEY):
            split_sequence([Block(key=HEADER_FIRST_KEY), Block(key="a")])

    def test_split_when_duplicate_key_then_raises(self):
        blocks = [Block(key=HEADER_FIRST_KEY), Block(key="a"), Block(key="a"), Block(key=HEADER_REST_KEY)]

        with pytest.raises(BlockSequenceError, match="Duplicate"):
            split_sequence(blocks)

    def test_split_when_unknown_reserved_key_then_raises(self):
        blocks = [Block(key=HEADER_FIRST_KEY), Block(key="__header_middle"), Block(key=HEADER_REST_KEY)]

        with pytest.raises(BlockSequenceError, match="reserved"):
            split_sequence(blocks)

    def test_split_when_empty_key_then_raises(self):
        with pytest.raises(BlockSequenceError, match="empty"):
            split_sequence([Block(key="")])


class TestMeasuredHeights:
    """Tests for MeasuredHeights completeness."""

    def test_is_complete_when_all_measured_then_true(self):
        measured = MeasuredHeights((10.0, 0.0), 50.0, 20.0)

        assert measured.is_complete
        assert measured.missing_positions == ()

    def test_is_complete_when_block_missing_then_false(self):
        measured = MeasuredHeights((10.0, None, 5.0), 50.0, 20.0)

        assert not measured.is_complete
        assert measured.missing_positions == (1,)

    def test_is_complete_when_header_missing_then_false(self):
        measured = MeasuredHeights((10.0,), None, 20.0)

        assert not measured.is_complete
        assert measured.missing_positions == ()


class TestPagePlanAndLayoutResult:
    """Tests for PagePlan and LayoutResult helpers."""

    def test_overflows_when_height_exceeds_capacity_then_true(self):
        assert PagePlan(index=0, positions=(0,), capacity=300, height_used=500).overflows
        assert not PagePlan(index=0, positions=(0,), capacity=300, height_used=300).overflows

    def test_uses_first_header_when_index_zero_then_true(self):
        assert PagePlan(index=0, positions=(0,), capacity=1, height_used=0).uses_first_header
        assert not PagePlan(index=1, positions=(1,), capacity=1, height_used=0).uses_first_header

    def test_layout_result_when_two_pages_then_partition_and_counts(self):
        layout = LayoutResult(
            pages=(
                PagePlan(index=0, positions=(0, 1), capacity=250, height_used=210),
                PagePlan(index=1, positions=(2,), capacity=300, height_used=100),
            ),
            first_header_height=50,
            rest_header_height=0,
        )

        assert layout.page_count == 2
        assert layout.total_placements == 3
        assert layout.partition == ((0, 1), (2,))
        assert layout.page_of(2) == 1

    def test_page_of_when_unknown_position_then_raises(self):
        layout = LayoutResult(pages=(), first_header_height=0, rest_header_height=0)

        with pytest.raises(KeyError):
            layout.page_of(0)
