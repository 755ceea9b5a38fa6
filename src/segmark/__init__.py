"""Position arithmetic over line-oriented documents."""

from .core import (
    NEWLINE_WIDTH,
    MarkerValidationError,
    SegmentMarker,
    compare_segments,
    is_out_of_bounds,
    is_valid_marker,
    marker_sort_key,
    offset_segment,
    segment_diff,
    validate_marker,
)

__version__ = "0.1.0"

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
