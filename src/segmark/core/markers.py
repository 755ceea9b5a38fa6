"""Segment markers: immutable ``(line, column)`` positions in a line-oriented document."""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True, frozen=True)
class SegmentMarker(Sequence[int]):
    """A zero-based ``line``/``column`` pair marking the start of a segment.

    The end of a segment is implied by the next marker that is greater than or
    equal to it. Construction only coerces the fields to integers; columns that
    fall outside the line (negative, or past the line length) stay representable
    because :func:`~segmark.core.offsets.offset_segment` uses them to report
    positions beyond the document edges.
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", self._coerce_index(self.line, "line"))
        object.__setattr__(self, "column", self._coerce_index(self.column, "column"))

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise ValueError(f"SegmentMarker {label} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"SegmentMarker {label} must be an integer") from exc

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index in (0, -2):
            return self.line
        if index in (1, -1):
            return self.column
        raise IndexError("SegmentMarker index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.column

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def to_tuple(self) -> tuple[int, int]:
        """Return the marker as a ``(line, column)`` tuple."""

        return (self.line, self.column)

    def to_dict(self) -> dict[str, int]:
        """Return the marker as a JSON-friendly object."""

        return {"line": self.line, "column": self.column}

    @classmethod
    def from_value(cls, value: Any) -> SegmentMarker:
        """Coerce ``value`` into a :class:`SegmentMarker`.

        Accepts an existing marker, a ``{"line", "column"}`` mapping, a two item
        sequence, a ``"line:column"`` string or any object exposing ``line`` and
        ``column`` attributes.
        """

        if isinstance(value, SegmentMarker):
            return value
        if value is None:
            raise ValueError("SegmentMarker value is required")
        if isinstance(value, str):
            return cls._parse(value)
        if isinstance(value, Mapping):
            line = value.get("line")
            column = value.get("column")
            if line is None or column is None:
                raise ValueError("SegmentMarker mappings require line and column keys")
            return cls(line, column)
        if isinstance(value, Sequence) and not isinstance(value, bytes):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("SegmentMarker sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        column = getattr(value, "column", None)
        if line is not None and column is not None:
            return cls(line, column)
        raise TypeError("Unsupported SegmentMarker input")

    @classmethod
    def _parse(cls, text: str) -> SegmentMarker:
        line, sep, column = text.strip().partition(":")
        if not sep or not line or not column:
            raise ValueError(f"Invalid marker {text!r}; expected 'line:column'")
        return cls(line, column)

    @classmethod
    def start(cls) -> SegmentMarker:
        """Return the marker for the first character of a document."""

        return cls(0, 0)


def compare_segments(a: SegmentMarker, b: SegmentMarker) -> int:
    """Compare two markers for use in sorting or searching.

    Returns a positive number if ``a`` is after ``b``, a negative number if ``a``
    is before ``b`` and zero if both denote the same position.
    """

    return a.column - b.column if a.line == b.line else a.line - b.line


marker_sort_key = functools.cmp_to_key(compare_segments)


class MarkerValidationError(ValueError):
    """Raised when a marker does not address a position inside its line-length table."""

    def __init__(self, message: str, *, marker: SegmentMarker, line_count: int) -> None:
        super().__init__(message)
        self.marker = marker
        self.line_count = line_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "invalid_marker",
            "message": str(self),
            "marker": self.marker.to_dict(),
            "line_count": self.line_count,
        }


def is_valid_marker(line_lengths: Sequence[int], marker: SegmentMarker) -> bool:
    """Return ``True`` when ``marker`` addresses a real position in ``line_lengths``."""

    if not 0 <= marker.line < len(line_lengths):
        return False
    return 0 <= marker.column <= line_lengths[marker.line]


def validate_marker(line_lengths: Sequence[int], marker: SegmentMarker) -> SegmentMarker:
    """Return ``marker`` unchanged or raise :class:`MarkerValidationError`."""

    line_count = len(line_lengths)
    if not 0 <= marker.line < line_count:
        raise MarkerValidationError(
            f"Marker {marker} is outside the document ({line_count} lines)",
            marker=marker,
            line_count=line_count,
        )
    length = line_lengths[marker.line]
    if not 0 <= marker.column <= length:
        raise MarkerValidationError(
            f"Marker {marker} column is outside line {marker.line} (length {length})",
            marker=marker,
            line_count=line_count,
        )
    return marker


def is_out_of_bounds(line_lengths: Sequence[int], marker: SegmentMarker) -> bool:
    """Return ``True`` when a shifted marker ran past the start or end of the document."""

    if marker.column < 0:
        return True
    if 0 <= marker.line < len(line_lengths):
        return marker.column > line_lengths[marker.line]
    return True


__all__ = [
    "MarkerValidationError",
    "SegmentMarker",
    "compare_segments",
    "is_out_of_bounds",
    "is_valid_marker",
    "marker_sort_key",
    "validate_marker",
]
