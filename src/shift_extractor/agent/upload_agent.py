"""Upload processing agent.

This module turns a single schedule upload into a list of shifts or a list of
user-facing error messages. Every expected failure is recovered here; callers
only ever see an UploadResult.
"""

import structlog

from shift_extractor.config import Settings
from shift_extractor.extraction.normalizer import normalize_outcome
from shift_extractor.extraction.parser import ParseFailure, parse_response
from shift_extractor.models import ShiftExtractionRequest, UploadResult
from shift_extractor.vision.client import AnthropicVisionClient, VisionClient

logger = structlog.get_logger()

GENERATION_FAILED_MESSAGE = "Could not generate shifts."
PARSE_FAILED_MESSAGE = "Failed to parse response."
NO_SHIFTS_MESSAGE = "No shifts could be created. Please try uploading another image."


async def process_upload(client: VisionClient, request: ShiftExtractionRequest) -> UploadResult:
    """Extract shifts for one upload.

    Errors reported by the model fail the whole upload, even when shifts were
    extracted alongside them. An empty shift list is still a success; deciding
    whether that is usable is left to the caller.

    Args:
        client: Vision client used for the single model round trip.
        request: The upload to process.

    Returns:
        UploadResult: Shifts on success, error messages on failure.
    """
    log = logger.bind(image_count=len(request.images))

    try:
        raw_text = await client.generate(request)
    except Exception as e:
        log.error("shift_generation_failed", error=str(e), error_type=type(e).__name__)
        return UploadResult.fail([GENERATION_FAILED_MESSAGE])

    tree = parse_response(raw_text)
    if isinstance(tree, ParseFailure):
        log.warning("shift_response_unparseable", reason=tree.reason)
        return UploadResult.fail([PARSE_FAILED_MESSAGE])

    outcome = normalize_outcome(tree)
    if outcome.errors:
        log.info(
            "shift_extraction_reported_errors",
            error_count=len(outcome.errors),
            discarded_shift_count=len(outcome.shifts),
        )
        return UploadResult.fail(outcome.errors)

    log.info("shift_extraction_succeeded", shift_count=len(outcome.shifts))
    return UploadResult.ok(outcome.shifts)


class UploadAgent:
    """Processes schedule uploads with a configured vision client."""

    def __init__(
        self,
        vision_client: VisionClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the upload agent.

        Args:
            vision_client: Vision model client. If None, creates an Anthropic client.
            settings: Application settings. If None, uses default settings.
        """
        from shift_extractor.config import get_settings

        self.settings = settings or get_settings()
        self.vision_client = vision_client or AnthropicVisionClient(settings=self.settings)
        logger.info("upload_agent_initialized", client=type(self.vision_client).__name__)

    async def process(self, request: ShiftExtractionRequest) -> UploadResult:
        """Process a single upload.

        Args:
            request: The upload to process.

        Returns:
            UploadResult: Shifts on success, error messages on failure.
        """
        return await process_upload(self.vision_client, request)
