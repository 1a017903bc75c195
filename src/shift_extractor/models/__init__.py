"""Data models for Shift Extractor.

This module contains Pydantic models for data validation and serialization.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from shift_extractor.models.upload import MediaType, ShiftExtractionRequest, UploadImage


class _ShiftBase(BaseModel):
    """Metadata the model may attach to either shift shape."""

    model_config = ConfigDict(frozen=True)

    notes: Optional[str] = Field(default=None, description="Additional notes about the shift")
    explanation: Optional[str] = Field(
        default=None,
        description="Model's visual reasoning for extracting this shift",
    )
    confidence: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Model's confidence in this shift",
    )


class AllDayShift(_ShiftBase):
    """A shift covering a whole calendar day."""

    kind: Literal["all-day"] = "all-day"
    date: str = Field(description="Calendar date as YYYY-MM-DD")


class TimedShift(_ShiftBase):
    """A shift with explicit local start and end wall-clock times."""

    kind: Literal["timed"] = "timed"
    start: str = Field(description="Local start as YYYY-MM-DDTHH:MM, no offset")
    end: str = Field(description="Local end as YYYY-MM-DDTHH:MM, no offset")


ExtractedShift = Annotated[Union[AllDayShift, TimedShift], Field(discriminator="kind")]


class ExtractionOutcome(BaseModel):
    """Shifts and errors recovered from a single model response."""

    shifts: list[ExtractedShift] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class UploadResult(BaseModel):
    """Result of processing an upload.

    Either ``success`` is True and ``shifts`` holds the extracted shifts, or
    ``success`` is False and ``errors`` holds user-facing messages.
    """

    success: bool = Field(description="Whether extraction succeeded")
    shifts: list[ExtractedShift] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, shifts: list[ExtractedShift]) -> UploadResult:
        return cls(success=True, shifts=list(shifts))

    @classmethod
    def fail(cls, errors: list[str]) -> UploadResult:
        return cls(success=False, errors=list(errors))

    @property
    def error_message(self) -> str:
        """Errors joined for direct display to the user."""
        return "\n".join(self.errors)


__all__ = [
    "AllDayShift",
    "ExtractedShift",
    "ExtractionOutcome",
    "MediaType",
    "ShiftExtractionRequest",
    "TimedShift",
    "UploadImage",
    "UploadResult",
]
