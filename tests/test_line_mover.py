"""Tests for edkit.line_mover -- moving lines and regions up and down."""

from __future__ import annotations

import pytest

from edkit.buffer import Buffer
from edkit.line_mover import (
    move_line_down,
    move_line_up,
    move_lines_down,
    move_lines_up,
    move_text_down,
    move_text_up,
)


class TestMoveLine:
    def test_move_line_up_swaps_with_previous(self) -> None:
        buf = Buffer(text="one\ntwo\nthree")
        buf.set_cursor(1, 2)
        assert move_line_up(buf) is True
        assert buf.get_lines() == ["two", "one", "three"]
        assert buf.point == (0, 2)

    def test_move_line_down_swaps_with_next(self) -> None:
        buf = Buffer(text="one\ntwo\nthree")
        buf.set_cursor(1, 1)
        assert move_line_down(buf) is True
        assert buf.get_lines() == ["one", "three", "two"]
        assert buf.point == (2, 1)

    def test_column_kept_when_neighbor_is_shorter(self) -> None:
        buf = Buffer(text="abcdef\nx")
        buf.set_cursor(0, 5)
        move_line_down(buf)
        assert buf.get_lines() == ["x", "abcdef"]
        assert buf.point == (1, 5)

    def test_first_line_up_is_noop(self) -> None:
        buf = Buffer(text="one\ntwo")
        buf.set_cursor(0, 1)
        assert move_line_up(buf) is False
        assert buf.get_lines() == ["one", "two"]
        assert buf.point == (0, 1)

    def test_last_line_down_is_noop(self) -> None:
        buf = Buffer(text="one\ntwo")
        buf.set_cursor(1, 2)
        assert move_line_down(buf) is False
        assert buf.get_lines() == ["one", "two"]
        assert buf.point == (1, 2)

    def test_single_line_buffer(self) -> None:
        buf = Buffer(text="only")
        assert move_line_up(buf) is False
        assert move_line_down(buf) is False

    def test_last_line_before_final_newline_down_is_noop(self) -> None:
        buf = Buffer(text="a\nb\nc\n")
        buf.set_cursor(2, 1)
        assert move_line_down(buf) is False
        assert buf.get_text() == "a\nb\nc\n"
        assert buf.point == (2, 1)

    def test_line_after_final_newline_up_is_noop(self) -> None:
        buf = Buffer(text="a\nb\n")
        buf.set_cursor(2, 0)
        assert move_line_up(buf) is False
        assert buf.get_text() == "a\nb\n"

    def test_final_newline_kept_when_moving_down(self) -> None:
        buf = Buffer(text="a\nb\nc\n")
        buf.set_cursor(1, 0)
        assert move_line_down(buf) is True
        assert buf.get_text() == "a\nc\nb\n"

    def test_empty_line_before_final_newline_is_text(self) -> None:
        buf = Buffer(text="a\n\n")
        buf.set_cursor(0, 0)
        assert move_line_down(buf) is True
        assert buf.get_text() == "\na\n"

    @pytest.mark.parametrize("col", [0, 1, 3, 5])
    def test_up_then_down_restores_buffer_and_column(self, col: int) -> None:
        text = "alpha\nbravo\ncharlie\ndelta"
        buf = Buffer(text=text)
        buf.set_cursor(2, col)
        move_line_up(buf)
        move_line_down(buf)
        assert buf.get_text() == text
        assert buf.point == (2, col)


class TestMoveRegion:
    def test_block_moves_up(self) -> None:
        buf = Buffer(text="a\nb\nc\nd\ne")
        buf.set_mark(1, 0)
        buf.set_cursor(2, 1)
        assert move_lines_up(buf) is True
        assert buf.get_lines() == ["b", "c", "a", "d", "e"]
        assert buf.mark == (0, 0)
        assert buf.point == (1, 1)
        assert buf.region_active is True

    def test_block_moves_down(self) -> None:
        buf = Buffer(text="a\nb\nc\nd\ne")
        buf.set_mark(1, 0)
        buf.set_cursor(2, 1)
        assert move_lines_down(buf) is True
        assert buf.get_lines() == ["a", "d", "b", "c", "e"]
        assert buf.mark == (2, 0)
        assert buf.point == (3, 1)

    def test_partial_lines_move_whole(self) -> None:
        buf = Buffer(text="zero\none\ntwo\nthree")
        buf.set_mark(1, 2)
        buf.set_cursor(2, 1)
        move_lines_up(buf)
        assert buf.get_lines() == ["one", "two", "zero", "three"]

    def test_region_ending_at_line_start_excludes_that_line(self) -> None:
        buf = Buffer(text="a\nb\nc\nd\ne")
        buf.set_mark(1, 0)
        buf.set_cursor(3, 0)
        move_lines_down(buf)
        assert buf.get_lines() == ["a", "d", "b", "c", "e"]
        assert buf.mark == (2, 0)
        assert buf.point == (4, 0)

    def test_point_before_mark(self) -> None:
        buf = Buffer(text="a\nb\nc\nd")
        buf.set_cursor(2, 0)
        buf.set_mark(3, 1)
        buf.set_cursor(2, 0)
        move_lines_up(buf)
        assert buf.get_lines() == ["a", "c", "d", "b"]

    def test_block_at_top_cannot_move_up(self) -> None:
        buf = Buffer(text="a\nb\nc")
        buf.set_mark(0, 0)
        buf.set_cursor(1, 1)
        assert move_lines_up(buf) is False
        assert buf.get_lines() == ["a", "b", "c"]

    def test_block_at_bottom_cannot_move_down(self) -> None:
        buf = Buffer(text="a\nb\nc")
        buf.set_mark(1, 0)
        buf.set_cursor(2, 1)
        assert move_lines_down(buf) is False
        assert buf.get_lines() == ["a", "b", "c"]

    def test_other_lines_keep_relative_order(self) -> None:
        lines = [f"line{i}" for i in range(8)]
        buf = Buffer(text="\n".join(lines))
        buf.set_mark(3, 0)
        buf.set_cursor(5, 2)
        move_lines_up(buf)
        result = buf.get_lines()
        assert result[2:5] == ["line3", "line4", "line5"]
        rest = [line for line in result if line not in ("line3", "line4", "line5")]
        assert rest == ["line0", "line1", "line2", "line6", "line7"]

    def test_region_ending_at_line_start_moved_to_bottom_and_back(self) -> None:
        buf = Buffer(text="a\nb\nc")
        buf.set_mark(0, 0)
        buf.set_cursor(2, 0)
        assert move_lines_down(buf) is True
        assert buf.get_lines() == ["c", "a", "b"]
        assert buf.mark == (1, 0)
        assert buf.point == (2, 1)
        assert move_lines_up(buf) is True
        assert buf.get_lines() == ["a", "b", "c"]
        assert buf.mark == (0, 0)
        assert buf.point == (1, 1)

    def test_block_moves_above_final_newline(self) -> None:
        buf = Buffer(text="a\nb\nc\n")
        buf.set_mark(0, 0)
        buf.set_cursor(2, 0)
        assert move_lines_down(buf) is True
        assert buf.get_text() == "c\na\nb\n"
        assert buf.point == (3, 0)
        assert move_lines_down(buf) is False
        assert move_lines_up(buf) is True
        assert buf.get_text() == "a\nb\nc\n"

    def test_region_on_line_after_final_newline_does_not_move(self) -> None:
        buf = Buffer(text="a\nb\n")
        buf.set_mark(2, 0)
        buf.set_cursor(2, 0)
        assert move_lines_up(buf) is False
        assert buf.get_text() == "a\nb\n"

    def test_without_region_does_nothing(self) -> None:
        buf = Buffer(text="a\nb")
        buf.set_cursor(1, 0)
        assert move_lines_up(buf) is False


class TestMoveTextDispatch:
    def test_uses_line_without_region(self) -> None:
        buf = Buffer(text="a\nb\nc")
        buf.set_cursor(2, 0)
        move_text_up(buf)
        assert buf.get_lines() == ["a", "c", "b"]

    def test_uses_region_when_active(self) -> None:
        buf = Buffer(text="a\nb\nc\nd")
        buf.set_mark(0, 0)
        buf.set_cursor(1, 1)
        move_text_down(buf)
        assert buf.get_lines() == ["c", "a", "b", "d"]

    def test_inactive_mark_uses_line(self) -> None:
        buf = Buffer(text="a\nb\nc")
        buf.set_mark(0, 0, activate=False)
        buf.set_cursor(1, 0)
        move_text_down(buf)
        assert buf.get_lines() == ["a", "c", "b"]
