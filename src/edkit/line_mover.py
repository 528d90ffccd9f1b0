"""Move the current line, or the lines of the active region, up or down."""

from __future__ import annotations

from edkit.buffer import Buffer


def move_line_up(buffer: Buffer) -> bool:
    """Exchange the cursor line with the line above, keeping the column.

    Returns False (and changes nothing) on the first line.
    """
    line, col = buffer.point
    if line == 0 or line > buffer.last_text_line:
        return False
    lines = buffer.get_lines()
    lines[line - 1], lines[line] = lines[line], lines[line - 1]
    buffer.replace_lines(lines)
    buffer.set_cursor(line - 1, col)
    return True


def move_line_down(buffer: Buffer) -> bool:
    """Exchange the cursor line with the line below, keeping the column.

    Returns False (and changes nothing) on the last line. The empty line
    after a final newline is end of buffer, never a neighbor.
    """
    line, col = buffer.point
    if line >= buffer.last_text_line:
        return False
    lines = buffer.get_lines()
    lines[line], lines[line + 1] = lines[line + 1], lines[line]
    buffer.replace_lines(lines)
    buffer.set_cursor(line + 1, col)
    return True


def _region_line_span(buffer: Buffer) -> tuple[int, int, bool] | None:
    """First and last line touched by the region.

    A region ending exactly at a line start does not touch that line; the
    third element reports that case so the point can land back on a line
    start after the move.
    """
    bounds = buffer.region_bounds()
    if bounds is None:
        return None
    (start_line, _), (end_line, end_col) = bounds
    if end_col == 0 and end_line > start_line:
        return start_line, end_line - 1, True
    return start_line, end_line, False


def _move_region(buffer: Buffer, delta: int) -> bool:
    span = _region_line_span(buffer)
    if span is None:
        return False
    first, last, ends_at_line_start = span
    if first + delta < 0 or max(last, last + delta) > buffer.last_text_line:
        return False
    lines = buffer.get_lines()

    block = lines[first : last + 1]
    del lines[first : last + 1]
    insert_at = first + delta
    lines[insert_at:insert_at] = block
    buffer.replace_lines(lines)

    buffer.set_mark(insert_at, 0)
    after_block = insert_at + len(block)
    if ends_at_line_start and after_block < len(lines):
        buffer.set_cursor(after_block, 0)
    else:
        # No line follows the block: end it on its last line instead
        end_line = after_block - 1
        buffer.set_cursor(end_line, len(lines[end_line]))
    return True


def move_lines_up(buffer: Buffer) -> bool:
    """Move the lines of the active region one line up, keeping it active."""
    return _move_region(buffer, -1)


def move_lines_down(buffer: Buffer) -> bool:
    """Move the lines of the active region one line down, keeping it active."""
    return _move_region(buffer, 1)


def move_text_up(buffer: Buffer) -> bool:
    if buffer.region_active:
        return move_lines_up(buffer)
    return move_line_up(buffer)


def move_text_down(buffer: Buffer) -> bool:
    if buffer.region_active:
        return move_lines_down(buffer)
    return move_line_down(buffer)
