"""Upload orchestration."""

from .upload_agent import (
    GENERATION_FAILED_MESSAGE,
    NO_SHIFTS_MESSAGE,
    PARSE_FAILED_MESSAGE,
    UploadAgent,
    process_upload,
)

__all__ = [
    "GENERATION_FAILED_MESSAGE",
    "NO_SHIFTS_MESSAGE",
    "PARSE_FAILED_MESSAGE",
    "UploadAgent",
    "process_upload",
]
