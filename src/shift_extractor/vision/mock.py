"""Offline stand-in for the vision client.

Returns a fixed reply so the rest of the pipeline can be exercised without
an API key or network access.
"""

from typing import Optional

import structlog

from shift_extractor.models import ShiftExtractionRequest

logger = structlog.get_logger()

SAMPLE_RESPONSE = """<thinking>
Monthly calendar for October 2024 with one resident per day.
</thinking>
<summary>
Sample schedule with five all-day shifts and one timed shift.
</summary>
<errors>
</errors>
<schedule>
  <shift><type>all-day</type><date>2024-10-02</date></shift>
  <shift><type>all-day</type><date>2024-10-06</date></shift>
  <shift><type>all-day</type><date>2024-10-09</date></shift>
  <shift><type>timed</type><start>2024-10-10T12:00</start><end>2024-10-11T00:00</end></shift>
  <shift><type>all-day</type><date>2024-10-15</date></shift>
  <shift><type>all-day</type><date>2024-10-19</date></shift>
</schedule>
"""


class MockVisionClient:
    """Vision client that replies with canned text."""

    def __init__(self, raw_text: Optional[str] = None) -> None:
        self.raw_text = SAMPLE_RESPONSE if raw_text is None else raw_text
        self.requests: list[ShiftExtractionRequest] = []

    async def generate(self, request: ShiftExtractionRequest) -> str:
        self.requests.append(request)
        logger.info("mock_vision_response", image_count=len(request.images))
        return self.raw_text
