"""Tests for pi_styling.measure"""
import pytest

from pi_styling import config, measure
from pi_styling.measure import (
    Block,
    block_height,
    block_size,
    block_width,
    char_width,
    grapheme_width,
    line_width,
    split_graphemes,
)


class TestLineWidth:
    def test_ascii(self):
        assert line_width("hello") == 5

    def test_empty(self):
        assert line_width("") == 0

    def test_escapes_not_counted(self, red):
        assert line_width(red("hello")) == 5

    def test_cjk_is_double_width(self):
        assert line_width("中文") == 4

    def test_combining_mark_is_zero_width(self):
        assert line_width("e\u0301") == 1

    def test_emoji(self):
        assert line_width("👍") == 2

    def test_flag(self):
        assert line_width("\U0001f1fa\U0001f1f8") == 2

    def test_zwj_sequence(self):
        assert line_width("👨\u200d👩\u200d👧") == 2

    def test_tab(self):
        assert line_width("\tx") == config.TAB_WIDTH + 1

    def test_control_char_is_zero_width(self):
        assert line_width("a\x07b") == 2

    def test_mixed_styles_and_wide(self, bold):
        assert line_width(bold("中") + "x" + bold("y")) == 4

    def test_cache_is_bounded(self):
        for i in range(config.WIDTH_CACHE_SIZE + 50):
            line_width(f"中{i}")
        assert len(measure._width_cache) <= config.WIDTH_CACHE_SIZE


class TestGraphemes:
    def test_ascii(self):
        assert split_graphemes("abc") == ["a", "b", "c"]

    def test_combining_joins_base(self):
        assert split_graphemes("e\u0301x") == ["e\u0301", "x"]

    def test_flag_pairs(self):
        assert split_graphemes("\U0001f1fa\U0001f1f8\U0001f1ec\U0001f1e7") == [
            "\U0001f1fa\U0001f1f8",
            "\U0001f1ec\U0001f1e7",
        ]

    def test_zwj_joins(self):
        assert len(split_graphemes("👨\u200d👩\u200d👧")) == 1

    def test_skin_tone(self):
        clusters = split_graphemes("👍\U0001f3fd")
        assert len(clusters) == 1
        assert grapheme_width(clusters[0]) == 2

    def test_char_width(self):
        assert char_width("a") == 1
        assert char_width("中") == 2
        assert char_width("\u0301") == 0


class TestBlock:
    def test_of(self):
        block = Block.of("ab\nc")
        assert block.lines == ("ab", "c")
        assert block.width == 2
        assert block.height == 2

    def test_of_block_returns_same(self):
        block = Block.of("x")
        assert Block.of(block) is block

    def test_empty_string_is_one_line(self):
        block = Block.of("")
        assert block.height == 1
        assert block.width == 0
        assert block.is_empty

    def test_no_lines(self):
        block = Block.empty()
        assert block.height == 0
        assert block.is_empty

    def test_text_round_trip(self):
        assert Block.of("a\nbb").text == "a\nbb"
        assert str(Block.of("a\nbb")) == "a\nbb"

    def test_styled_width(self, red):
        assert Block.of(red("abc") + "\nd").width == 3

    def test_frozen(self):
        block = Block.of("x")
        with pytest.raises(AttributeError):
            block.width = 9  # type: ignore[misc]


class TestBlockDimensions:
    def test_width_of_empty(self):
        assert block_width("") == 0

    def test_height_of_empty(self):
        assert block_height("") == 1

    def test_trailing_newline_adds_line(self):
        assert block_height("a\nb\n") == 3

    def test_size(self):
        assert block_size("abc\n中文字") == (6, 2)

    def test_accepts_block(self):
        assert block_size(Block.of("ab\nc")) == (2, 2)
