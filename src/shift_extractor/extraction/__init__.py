"""Shift extraction from vision model responses.

This package contains the prompt contract sent to the model and the
parsing/normalization steps applied to its reply.
"""

from .normalizer import normalize_outcome
from .parser import ParsedTree, ParseFailure, parse_response
from .prompt import PROMPT_VERSION, SYSTEM_PROMPT, build_shift_extraction_prompt

__all__ = [
    "PROMPT_VERSION",
    "SYSTEM_PROMPT",
    "ParseFailure",
    "ParsedTree",
    "build_shift_extraction_prompt",
    "normalize_outcome",
    "parse_response",
]
