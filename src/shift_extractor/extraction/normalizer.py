"""Helpers for turning a parsed model response into typed shift records.

Extraction is best-effort per entry: a malformed shift is dropped on its own
and never invalidates its siblings.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from shift_extractor.extraction.parser import ParsedNode, ParsedTree
from shift_extractor.models import AllDayShift, ExtractedShift, ExtractionOutcome, TimedShift

logger = structlog.get_logger()

ALL_DAY_TYPE = "all-day"
TIMED_TYPE = "timed"


def _text(node: ParsedNode | None) -> str | None:
    if not isinstance(node, str):
        return None
    return node.strip() or None


def _parse_confidence(node: ParsedNode | None) -> float | None:
    s = _text(node)
    if s is None:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not 0.0 <= value <= 1.0:
        return None
    return value


def _shift_from_node(node: ParsedNode) -> ExtractedShift | None:
    """Interpret one ``<shift>`` entry, or return None if it does not conform."""

    if not isinstance(node, dict):
        return None

    shift_type = (_text(node.get("type")) or "").casefold()
    metadata = {
        "notes": _text(node.get("notes")),
        "explanation": _text(node.get("explanation")),
        "confidence": _parse_confidence(node.get("confidence")),
    }

    try:
        if shift_type == ALL_DAY_TYPE:
            date = _text(node.get("date"))
            if date is None:
                return None
            return AllDayShift(date=date, **metadata)

        if shift_type == TIMED_TYPE:
            start = _text(node.get("start"))
            end = _text(node.get("end"))
            if start is None or end is None:
                return None
            return TimedShift(start=start, end=end, **metadata)
    except ValidationError:
        return None

    return None


def extract_errors(tree: ParsedTree) -> list[str]:
    """Collect model-reported error messages in document order."""

    errors: list[str] = []
    for node in tree.errors:
        message = _text(node)
        if message is None:
            logger.debug("error_entry_skipped", node_type=type(node).__name__)
            continue
        errors.append(message)
    return errors


def extract_shifts(tree: ParsedTree) -> list[ExtractedShift]:
    """Collect well-formed shifts in document order, dropping the rest."""

    shifts: list[ExtractedShift] = []
    for index, node in enumerate(tree.shifts):
        shift = _shift_from_node(node)
        if shift is None:
            logger.debug("shift_entry_dropped", index=index)
            continue
        shifts.append(shift)
    return shifts


def normalize_outcome(tree: ParsedTree) -> ExtractionOutcome:
    """Convert a parsed response into an ExtractionOutcome.

    Args:
        tree: Parsed model response.

    Returns:
        ExtractionOutcome: Shifts and errors, both in document order.
    """

    outcome = ExtractionOutcome(errors=extract_errors(tree), shifts=extract_shifts(tree))
    logger.info(
        "response_normalized",
        error_count=len(outcome.errors),
        shift_count=len(outcome.shifts),
        dropped_count=len(tree.shifts) - len(outcome.shifts),
    )
    return outcome
