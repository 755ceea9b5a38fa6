"""Core position types and arithmetic."""

from .markers import (
    MarkerValidationError,
    SegmentMarker,
    compare_segments,
    is_out_of_bounds,
    is_valid_marker,
    marker_sort_key,
    validate_marker,
)
from .offsets import NEWLINE_WIDTH, offset_segment, segment_diff

__all__ = [
    "MarkerValidationError",
    "NEWLINE_WIDTH",
    "SegmentMarker",
    "compare_segments",
    "is_out_of_bounds",
    "is_valid_marker",
    "marker_sort_key",
    "offset_segment",
    "segment_diff",
    "validate_marker",
]
