"""Upload request models.

An upload is held in memory for the lifetime of a single extraction; nothing
here is persisted.
"""

from __future__ import annotations

import base64
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shift_extractor.exceptions import UnsupportedMediaTypeError


class MediaType(str, Enum):
    """Image media types accepted by the extraction pipeline."""

    PNG = "image/png"
    JPEG = "image/jpeg"
    WEBP = "image/webp"


_SUFFIX_MEDIA_TYPES: dict[str, MediaType] = {
    ".png": MediaType.PNG,
    ".jpg": MediaType.JPEG,
    ".jpeg": MediaType.JPEG,
    ".webp": MediaType.WEBP,
}


class UploadImage(BaseModel):
    """A single uploaded schedule image."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw image bytes")
    media_type: MediaType = Field(description="Declared image media type")

    @classmethod
    def from_path(cls, path: Path) -> UploadImage:
        """Load an image from disk, inferring the media type from its suffix.

        Raises:
            UnsupportedMediaTypeError: If the file extension is not accepted.
        """
        media_type = _SUFFIX_MEDIA_TYPES.get(path.suffix.lower())
        if media_type is None:
            raise UnsupportedMediaTypeError(
                f"Unsupported image type for {path.name}. "
                f"Accepted: {', '.join(m.value for m in MediaType)}"
            )
        return cls(data=path.read_bytes(), media_type=media_type)

    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class ShiftExtractionRequest(BaseModel):
    """Everything needed to extract one resident's shifts from an upload."""

    model_config = ConfigDict(frozen=True)

    resident_name: str = Field(min_length=1, description="Resident whose shifts are extracted")
    extra_context: str | None = Field(
        default=None,
        description="Free-text hints, e.g. how the resident's name is abbreviated",
    )
    text: str | None = Field(
        default=None,
        description="Plain-language description of shifts, used alongside or instead of images",
    )
    images: list[UploadImage] = Field(
        default_factory=list,
        description="Schedule images in upload order; later images may rely on earlier headers",
    )

    @field_validator("resident_name", mode="before")
    @classmethod
    def _strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("extra_context", "text", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v
