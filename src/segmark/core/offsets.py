"""Character arithmetic between segment markers.

Both helpers take a line-length table: ``line_lengths[i]`` is the number of
characters on line ``i`` excluding its terminator. Every line boundary counts as
exactly :data:`NEWLINE_WIDTH` characters, so ``\\r\\n`` sources behave like ``\\n``
ones as long as the table was built from the line contents alone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .markers import SegmentMarker

LOGGER = logging.getLogger(__name__)

NEWLINE_WIDTH = 1


def segment_diff(line_lengths: Sequence[int], a: SegmentMarker, b: SegmentMarker) -> int:
    """Return the number of characters from ``a`` to ``b`` (negative when ``b`` precedes ``a``)."""

    diff = b.column - a.column

    # a before b
    for line_index in range(a.line, b.line):
        diff += line_lengths[line_index] + NEWLINE_WIDTH

    # a after b
    for line_index in range(a.line - 1, b.line - 1, -1):
        diff -= line_lengths[line_index] + NEWLINE_WIDTH

    return diff


def offset_segment(line_lengths: Sequence[int], marker: SegmentMarker, offset: int) -> SegmentMarker:
    """Return a new marker moved ``offset`` characters from ``marker``.

    Positive offsets move forward, negative ones backward, rolling over line
    boundaries as needed. Movement stops at the first and last lines: a result
    that would fall before the document start keeps a negative column on line 0,
    and one past the end keeps a column beyond the last line's length. Such
    results are returned as-is; see :func:`~segmark.core.markers.is_out_of_bounds`.
    """

    if offset == 0:
        return marker

    line = marker.line
    column = marker.column + offset
    last_line = len(line_lengths) - 1

    while line < last_line and column > line_lengths[line]:
        column -= line_lengths[line] + NEWLINE_WIDTH
        line += 1
    while line > 0 and column < 0:
        line -= 1
        column += line_lengths[line] + NEWLINE_WIDTH

    if column < 0 or (line == last_line and column > line_lengths[line]):
        LOGGER.debug(
            "Offset %d from %s left the document; returning %d:%d",
            offset,
            marker,
            line,
            column,
        )
    return SegmentMarker(line, column)


__all__ = ["NEWLINE_WIDTH", "offset_segment", "segment_diff"]
