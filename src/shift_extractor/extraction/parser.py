"""Parse the model's tagged-block response into a small intermediate tree.

The model is asked for sibling blocks (thinking, summary, errors, schedule)
with no single root element, and it does not always comply exactly: replies
can carry code fences, stray prose, HTML entities or unescaped ``&`` and
``<`` characters. This module is
tolerant of that noise but reports genuinely broken markup as a
``ParseFailure`` rather than raising.

No semantic checks happen here. Date formats, shift types and required
fields are the normalizer's concern.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Union

import structlog

logger = structlog.get_logger()

ParsedNode = Union[str, dict[str, "ParsedNode"]]

_ROOT_TAG = "response"

# Blocks that are always list-valued, whatever their cardinality in the reply.
_REPEATED_BLOCKS: dict[str, str] = {
    "errors": "error",
    "schedule": "shift",
}

# Free-text blocks are lifted out before XML parsing; their prose often
# contains characters that are not valid markup.
_FREE_TEXT_BLOCKS = ("thinking", "summary")

_FENCE_RE = re.compile(r"```[a-zA-Z]*")
_XML_DECL_RE = re.compile(r"<\?xml[^>]*\?>")
# ElementTree only knows the five predefined XML entities.
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)")
_BARE_LT_RE = re.compile(r"<(?![A-Za-z/!?])")
_BLOCK_OPEN_RE = re.compile(r"<(?:errors|schedule)\b")
_BLOCK_CLOSE_RE = re.compile(r"</(?:errors|schedule)\s*>")


@dataclass(frozen=True)
class ParsedTree:
    """The structural content of a model response.

    ``errors`` and ``shifts`` are lists even when the reply holds a single
    entry or none at all. Each node is either the stripped text of a leaf
    element or a mapping of child tag to node.
    """

    errors: list[ParsedNode] = field(default_factory=list)
    shifts: list[ParsedNode] = field(default_factory=list)
    summary: str | None = None
    thinking: str | None = None


@dataclass(frozen=True)
class ParseFailure:
    """The response could not be read as markup."""

    reason: str


def _lift_free_text(text: str, tag: str) -> tuple[str, str | None]:
    pattern = re.compile(rf"<{tag}>(.*?)</{tag}>", re.S)
    m = pattern.search(text)
    if not m:
        return text, None
    inner = m.group(1).strip() or None
    return text[: m.start()] + text[m.end():], inner


def _markup_span(text: str) -> tuple[int, int]:
    """Return the [start, end) span worth handing to the XML parser.

    Prefer the errors/schedule blocks so prose around them, which may contain
    tag-like text, is left out. Otherwise fall back to the outermost brackets.
    """
    openings = list(_BLOCK_OPEN_RE.finditer(text))
    start = openings[0].start() if openings else text.find("<")

    closings = list(_BLOCK_CLOSE_RE.finditer(text))
    # A block opened after the last close is truncated; keep it in so it fails.
    if openings and closings and closings[-1].end() > openings[-1].start():
        return start, closings[-1].end()
    return start, text.rfind(">") + 1


def _node(element: ET.Element) -> ParsedNode:
    if len(element) == 0:
        return (element.text or "").strip()

    children: dict[str, ParsedNode] = {}
    for child in element:
        # Repeated tags within one entry are ambiguous; keep the first.
        children.setdefault(child.tag, _node(child))
    return children


def _collect(root: ET.Element, container: str, item: str) -> list[ParsedNode]:
    nodes: list[ParsedNode] = []
    for block in root.iter(container):
        for child in block:
            if child.tag == item:
                nodes.append(_node(child))
    return nodes


def parse_response(raw_text: object) -> ParsedTree | ParseFailure:
    """Parse a raw model reply.

    Args:
        raw_text: Text returned by the vision model.

    Returns:
        ParsedTree on success, ParseFailure if the reply is not usable markup.
    """

    if not isinstance(raw_text, str):
        return ParseFailure(reason="response was not text")

    text = _FENCE_RE.sub("", raw_text)
    text = _XML_DECL_RE.sub("", text)

    lifted: dict[str, str | None] = {}
    for tag in _FREE_TEXT_BLOCKS:
        text, lifted[tag] = _lift_free_text(text, tag)

    start, end = _markup_span(text)
    if start == -1 or end < start:
        if any(v is not None for v in lifted.values()):
            # Only free-text blocks were present.
            return ParsedTree(summary=lifted["summary"], thinking=lifted["thinking"])
        return ParseFailure(reason="response contained no markup")

    region = _BARE_AMPERSAND_RE.sub("&amp;", text[start:end])
    region = _BARE_LT_RE.sub("&lt;", region)

    try:
        root = ET.fromstring(f"<{_ROOT_TAG}>{region}</{_ROOT_TAG}>")
    except ET.ParseError as e:
        logger.debug("response_parse_failed", error=str(e))
        return ParseFailure(reason=f"malformed markup: {e}")

    if len(root) == 0 and all(v is None for v in lifted.values()):
        return ParseFailure(reason="response contained no markup blocks")

    collected = {
        container: _collect(root, container, item) for container, item in _REPEATED_BLOCKS.items()
    }
    return ParsedTree(
        errors=collected["errors"],
        shifts=collected["schedule"],
        summary=lifted["summary"],
        thinking=lifted["thinking"],
    )
