"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture
def mock_settings():
    """Provide mock settings for testing."""
    from shift_extractor.config import Settings

    return Settings(
        anthropic_api_key="test-key",
        anthropic_base_url="http://test-anthropic",
        anthropic_model="test-model",
        log_level="DEBUG",
        debug=True,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Provide a tiny payload standing in for PNG data."""
    return b"\x89PNG\r\n\x1a\nfake-image-data"


@pytest.fixture
def sample_request(png_bytes):
    """Provide an upload request with two images."""
    from shift_extractor.models import MediaType, ShiftExtractionRequest, UploadImage

    return ShiftExtractionRequest(
        resident_name="An Nguyen",
        extra_context="An's name is abbreviated as 'AN'",
        images=[
            UploadImage(data=png_bytes, media_type=MediaType.PNG),
            UploadImage(data=b"jpeg-bytes", media_type=MediaType.JPEG),
        ],
    )


@pytest.fixture
def two_shift_response() -> str:
    """Provide a well-formed reply with two all-day shifts and no errors."""
    return """
<thinking>
The image is a monthly grid; AN appears on the 2nd & the 6th.
</thinking>
<summary>
October 2024 call calendar.
</summary>
<errors>
</errors>
<schedule>
  <shift>
    <type>all-day</type>
    <date>2024-10-02</date>
    <notes></notes>
    <explanation>AN in the cell for Wednesday 2nd</explanation>
    <confidence>0.9</confidence>
  </shift>
  <shift>
    <type>all-day</type>
    <date>2024-10-06</date>
  </shift>
</schedule>
"""


@pytest.fixture
def resident_not_found_response() -> str:
    """Provide a reply reporting that the resident is missing."""
    return (
        "<errors><error>Resident name not found in the schedule image.</error></errors>"
        "<schedule></schedule>"
    )
