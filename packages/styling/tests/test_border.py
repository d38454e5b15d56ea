"""Tests for pi_styling.border"""
import pytest
from pydantic import ValidationError

from pi_styling import border
from pi_styling.border import BorderChars, BorderSpec, border_dimensions, frame, frame_block
from pi_styling.measure import block_height, block_width, line_width


class TestPresets:
    def test_normal(self):
        assert frame(border.normal(), "hi") == "┌──┐\n│hi│\n└──┘"

    def test_rounded(self):
        assert frame(border.rounded(), "x") == "╭─╮\n│x│\n╰─╯"

    def test_thick(self):
        assert frame(border.thick(), "x") == "┏━┓\n┃x┃\n┗━┛"

    def test_double(self):
        assert frame(border.double(), "x") == "╔═╗\n║x║\n╚═╝"

    def test_ascii(self):
        assert frame(border.ascii(), "x") == "+-+\n|x|\n+-+"

    def test_hidden(self):
        assert frame(border.hidden(), "x") == "   \n x \n   "

    def test_preset_by_name(self):
        assert border.preset("double") == border.double()

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown border preset"):
            border.preset("wavy")  # type: ignore[arg-type]


class TestCustom:
    def test_missing_glyphs_come_from_normal(self):
        spec = border.custom(top="=")
        assert spec.type == "custom"
        assert spec.chars.top == "="
        assert spec.chars.left == "│"

    def test_mapping_and_keywords(self):
        spec = border.custom({"top": "=", "bottom": "="}, bottom="~")
        assert spec.chars.top == "="
        assert spec.chars.bottom == "~"

    def test_sides(self):
        spec = border.custom(sides=(True, False, True, False))
        assert spec.sides == (True, False, True, False)

    def test_wide_glyph_rejected(self):
        with pytest.raises(ValidationError):
            border.custom(top="==")

    def test_empty_glyph_rejected(self):
        with pytest.raises(ValidationError):
            border.custom(left="")

    def test_styled_glyph_accepted(self, red):
        spec = border.custom(left=red("│"))
        assert frame(spec, "x").split("\n")[1] == red("│") + "x│"

    def test_non_bool_sides_rejected(self):
        with pytest.raises(ValidationError):
            BorderSpec(chars=border.normal().chars, sides=(1, 1, 1, 1))

    def test_frozen(self):
        spec = border.normal()
        with pytest.raises(ValidationError):
            spec.type = "thick"


class TestOperations:
    def test_with_sides_keeps_chars(self):
        spec = border.with_sides(border.thick(), True, False, True, False)
        assert spec.type == "thick"
        assert spec.sides == (True, False, True, False)

    def test_with_chars(self):
        spec = border.with_chars(border.top_only(border.normal()), top="=")
        assert spec.chars.top == "="
        assert spec.sides == (True, False, False, False)

    @pytest.mark.parametrize("op,expected", [
        (border.top_only, (True, False, False, False)),
        (border.right_only, (False, True, False, False)),
        (border.bottom_only, (False, False, True, False)),
        (border.left_only, (False, False, False, True)),
        (border.horizontal_only, (True, False, True, False)),
        (border.vertical_only, (False, True, False, True)),
        (border.no_sides, (False, False, False, False)),
    ])
    def test_side_shortcuts(self, op, expected):
        assert op(border.normal()).sides == expected

    def test_all_sides(self):
        assert border.all_sides(border.no_sides(border.normal())).sides == (True, True, True, True)

    def test_enable_sides_is_exact(self):
        assert border.enable_sides(border.normal(), ["top", "left"]).sides == (True, False, False, True)

    def test_disable_sides(self):
        assert border.disable_sides(border.normal(), ["top"]).sides == (False, True, True, True)

    def test_toggle_side(self):
        spec = border.toggle_side(border.normal(), "right")
        assert spec.sides == (True, False, True, True)
        assert border.toggle_side(spec, "right").sides == (True, True, True, True)

    def test_unknown_side(self):
        with pytest.raises(ValueError, match="Unknown border side"):
            border.enable_sides(border.normal(), ["middle"])  # type: ignore[list-item]

    def test_convert_style_keeps_sides(self):
        spec = border.convert_style(border.top_only(border.normal()), "double")
        assert spec.type == "double"
        assert spec.chars.top == "═"
        assert spec.sides == (True, False, False, False)

    def test_merge(self):
        spec = border.merge(border.normal(), chars={"top": "="}, sides=[False, True, True, True])
        assert spec.type == "normal"
        assert spec.chars.top == "="
        assert spec.sides == (False, True, True, True)

    def test_merge_nothing_is_equal(self):
        assert border.merge(border.rounded()) == border.rounded()

    def test_visible_sides(self):
        assert border.visible_sides(border.vertical_only(border.normal())) == ("right", "left")
        assert not border.has_visible_sides(border.no_sides(border.normal()))

    def test_operations_do_not_mutate(self):
        spec = border.normal()
        border.top_only(spec)
        assert spec.sides == (True, True, True, True)


class TestFrame:
    def test_empty_content(self):
        assert frame(border.normal(), "") == "┌┐\n└┘"

    def test_ragged_lines_padded(self):
        assert frame(border.normal(), "a\nbbb") == "┌───┐\n│a  │\n│bbb│\n└───┘"

    @pytest.mark.parametrize("spec", [
        border.normal(),
        border.rounded(),
        border.thick(),
        border.double(),
        border.ascii(),
        border.hidden(),
        border.custom(
            top="^", right=">", bottom="v", left="<",
            top_left="1", top_right="2", bottom_left="3", bottom_right="4",
        ),
    ], ids=lambda spec: spec.type)
    @pytest.mark.parametrize("content", ["x", "a\nbbb", "中文\nx", "\x1b[31mhello\x1b[0m\n\n.."])
    def test_adds_two_columns(self, spec, content):
        out = frame(spec, content)
        assert block_width(out) == block_width(content) + 2
        assert block_height(out) == block_height(content) + 2
        assert {line_width(ln) for ln in out.split("\n")} == {block_width(content) + 2}

    def test_custom_glyphs_placed(self):
        spec = border.custom(
            top="^", right=">", bottom="v", left="<",
            top_left="1", top_right="2", bottom_left="3", bottom_right="4",
        )
        assert frame(spec, "ab") == "1^^2\n<ab>\n3vv4"

    def test_every_line_same_width(self, red):
        out = frame(border.rounded(), red("hello") + "\n中\nx")
        widths = {line_width(ln) for ln in out.split("\n")}
        assert widths == {7}

    def test_dimensions(self):
        block = frame_block(border.normal(), "abc\nd")
        assert (block.width, block.height) == (5, 4)

    def test_padding(self):
        assert frame(border.normal(), "x", padding=1) == "┌───┐\n│   │\n│ x │\n│   │\n└───┘"

    def test_min_width(self):
        assert frame(border.normal(), "x", min_width=3) == "┌───┐\n│x  │\n└───┘"

    def test_min_height(self):
        assert frame(border.normal(), "x", min_height=3) == "┌─┐\n│x│\n│ │\n│ │\n└─┘"

    def test_negative_padding(self):
        with pytest.raises(ValueError):
            frame(border.normal(), "x", padding=-1)

    def test_top_only_has_no_corners(self):
        assert frame(border.top_only(border.normal()), "ab") == "──\nab"

    def test_left_only_keeps_ragged_lines(self):
        assert frame(border.left_only(border.normal()), "a\nbb") == "│a\n│bb"

    def test_no_sides_is_identity(self):
        assert frame(border.no_sides(border.normal()), "a\nbb") == "a\nbb"

    def test_horizontal_only(self):
        assert frame(border.horizontal_only(border.normal()), "ab") == "──\nab\n──"

    def test_top_and_right_corner(self):
        spec = border.with_sides(border.normal(), True, True, False, False)
        assert frame(spec, "a\nbb") == "──┐\na │\nbb│"

    def test_styled_content_kept(self, bold):
        out = frame(border.normal(), bold("hi"))
        assert out.split("\n")[1] == "│" + bold("hi") + "│"


class TestBorderDimensions:
    def test_full_border(self):
        dims = border_dimensions(border.normal(), "abc\nd")
        assert dims.total_width == 5
        assert dims.total_height == 4
        assert dims.content_width == 3
        assert dims.content_height == 2

    def test_partial_border(self):
        dims = border_dimensions(border.top_only(border.normal()), "abc")
        assert (dims.total_width, dims.total_height) == (3, 2)
        assert dims.has_top and not dims.has_left

    def test_empty(self):
        dims = border_dimensions(border.normal(), "")
        assert (dims.total_width, dims.total_height) == (2, 2)


class TestBorderChars:
    def test_requires_every_glyph(self):
        with pytest.raises(ValidationError):
            BorderChars(top="-")  # type: ignore[call-arg]
