"""CLI helper to compare, measure and shift segment markers."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from ..config import load_settings
from ..core.markers import (
    MarkerValidationError,
    SegmentMarker,
    compare_segments,
    is_out_of_bounds,
    validate_marker,
)
from ..core.offsets import offset_segment, segment_diff
from ..utils.logging import get_logger, setup_logging

LOGGER = get_logger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(
            {
                "log_level": args.log_level,
                "log_dir": args.log_dir,
                "log_to_file": True if args.log_file else None,
                "strict": True if args.strict else None,
            }
        )
        level = settings.resolved_level()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    setup_logging(level, log_dir=settings.log_dir, log_to_file=settings.log_to_file)

    if args.command == "compare":
        result: dict[str, Any] = {"result": compare_segments(args.a, args.b)}
    else:
        try:
            line_lengths = _resolve_line_lengths(args.lines, args.text_file)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {args.text_file}: {exc}", file=sys.stderr)
            return 2
        markers = [args.a, args.b] if args.command == "diff" else [args.marker]
        try:
            for marker in markers:
                if settings.strict:
                    validate_marker(line_lengths, marker)
                else:
                    _check_marker_line(line_lengths, marker)
        except MarkerValidationError as exc:
            LOGGER.warning("Rejected marker: %s", exc)
            print(f"error: {exc}", file=sys.stderr)
            return 1
        if args.command == "diff":
            result = {"result": segment_diff(line_lengths, args.a, args.b)}
        else:
            shifted = offset_segment(line_lengths, args.marker, args.offset)
            result = {
                "result": shifted.to_dict(),
                "out_of_bounds": is_out_of_bounds(line_lengths, shifted),
            }

    _emit(result, as_json=args.json)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="segmark",
        description="Compare, measure and shift line:column markers within a document.",
    )
    parser.add_argument("--json", action="store_true", help="Print results as a JSON object.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject markers that do not address a position inside the line-length table.",
    )
    parser.add_argument("--log-level", help="Logging level name (defaults to SEGMARK_LOG_LEVEL or WARNING).")
    parser.add_argument("--log-file", action="store_true", help="Also write logs to segmark.log.")
    parser.add_argument("--log-dir", type=Path, help="Directory for segmark.log (defaults to SEGMARK_LOG_DIR).")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Order two markers.")
    compare.add_argument("a", type=_marker_arg, help="First marker as line:column.")
    compare.add_argument("b", type=_marker_arg, help="Second marker as line:column.")

    diff = subparsers.add_parser("diff", help="Count the characters from one marker to another.")
    _add_table_arguments(diff)
    diff.add_argument("a", type=_marker_arg, help="Start marker as line:column.")
    diff.add_argument("b", type=_marker_arg, help="End marker as line:column.")

    shift = subparsers.add_parser("shift", help="Move a marker by a signed number of characters.")
    _add_table_arguments(shift)
    shift.add_argument("marker", type=_marker_arg, help="Marker to move as line:column.")
    shift.add_argument("offset", type=int, help="Signed character offset.")
    return parser


def _add_table_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--lines",
        type=_line_lengths_arg,
        help="Comma-separated line lengths, e.g. 10,8,12.",
    )
    source.add_argument(
        "--text-file",
        type=Path,
        help="UTF-8 file whose line lengths are measured.",
    )


def _marker_arg(value: str) -> SegmentMarker:
    try:
        return SegmentMarker.from_value(value)
    except (TypeError, ValueError) as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _line_lengths_arg(value: str) -> list[int]:
    lengths: list[int] = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        try:
            number = int(chunk)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid line length {chunk!r}") from exc
        if number < 0:
            raise argparse.ArgumentTypeError(f"line lengths must be non-negative, got {number}")
        lengths.append(number)
    return lengths


def _check_marker_line(line_lengths: list[int], marker: SegmentMarker) -> None:
    # Columns stay unchecked outside --strict; lines must index the table.
    line_count = len(line_lengths)
    if not 0 <= marker.line < line_count:
        raise MarkerValidationError(
            f"Marker {marker} is outside the document ({line_count} lines)",
            marker=marker,
            line_count=line_count,
        )


def _resolve_line_lengths(lines: list[int] | None, text_file: Path | None) -> list[int]:
    if text_file is None:
        return list(lines or [])
    text = text_file.read_text(encoding="utf-8")
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [len(line) for line in normalized.split("\n")]


def _emit(result: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, sort_keys=True))
        return
    value = result["result"]
    if isinstance(value, dict):
        value = f"{value['line']}:{value['column']}"
    if result.get("out_of_bounds"):
        print(f"{value} (out of bounds)")
    else:
        print(value)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
