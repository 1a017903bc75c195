"""Anthropic vision client implementation.

This module provides a client that sends a shift extraction prompt and the
uploaded schedule images to the Anthropic Messages API.
"""

from typing import Any, Optional, Protocol

import httpx
import structlog

from shift_extractor.config import Settings
from shift_extractor.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    VisionConnectionError,
    VisionInferenceError,
)
from shift_extractor.extraction.prompt import (
    PROMPT_VERSION,
    SYSTEM_PROMPT,
    build_shift_extraction_prompt,
)
from shift_extractor.models import ShiftExtractionRequest

logger = structlog.get_logger()


class VisionClient(Protocol):
    """Anything that can turn an extraction request into raw model text."""

    async def generate(self, request: ShiftExtractionRequest) -> str: ...


def build_messages_payload(
    request: ShiftExtractionRequest,
    *,
    model: str,
    max_tokens: int,
) -> dict[str, Any]:
    """Build the Messages API body for one extraction request.

    The prompt is the first content part; images follow in upload order.
    """

    prompt = build_shift_extraction_prompt(
        resident_name=request.resident_name,
        extra_context=request.extra_context,
        text=request.text,
    )

    content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
    for image in request.images:
        content.append(
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.media_type.value,
                    "data": image.base64_data(),
                },
            }
        )

    return {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": 0,
        "system": SYSTEM_PROMPT,
        "messages": [{"role": "user", "content": content}],
    }


def first_text_part(data: dict[str, Any]) -> str:
    """Return the first text content part of a Messages API reply.

    Raises:
        EmptyResponseError: If the reply has no text part.
    """

    for part in data.get("content") or []:
        if isinstance(part, dict) and part.get("type") == "text" and isinstance(part.get("text"), str):
            return part["text"]
    raise EmptyResponseError("model reply contained no text content")


class AnthropicVisionClient:
    """Vision model client for shift extraction.

    Each call to ``generate`` performs exactly one request with no retries
    and no streaming.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the vision client.

        Args:
            api_key: Anthropic API key. If None, taken from settings.
            settings: Application settings. If None, uses default settings.
            transport: Optional httpx transport, mainly for tests.
        """
        from shift_extractor.config import get_settings

        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.anthropic_api_key
        self._transport = transport
        logger.info(
            "vision_client_initialized",
            base_url=self.settings.anthropic_base_url,
            model=self.settings.anthropic_model,
        )

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError(
                "Anthropic API key is not configured. Set SHIFT_EXTRACTOR_ANTHROPIC_API_KEY."
            )
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.settings.anthropic_version,
            "content-type": "application/json",
        }

    async def generate(self, request: ShiftExtractionRequest) -> str:
        """Send the extraction request and return the model's raw text.

        Args:
            request: The upload to extract shifts from.

        Returns:
            The first text part of the model reply.

        Raises:
            ConfigurationError: If no API key is available.
            VisionConnectionError: If the service cannot be reached.
            VisionInferenceError: If the service rejects the request or replies
                with something other than a Messages API object.
            EmptyResponseError: If the reply has no text part.
        """
        headers = self._headers()
        payload = build_messages_payload(
            request,
            model=self.settings.anthropic_model,
            max_tokens=self.settings.anthropic_max_tokens,
        )
        url = f"{self.settings.anthropic_base_url.rstrip('/')}/v1/messages"

        logger.info(
            "vision_request_sent",
            model=self.settings.anthropic_model,
            image_count=len(request.images),
            has_text=request.text is not None,
            prompt_version=PROMPT_VERSION,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.anthropic_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("vision_request_failed", error=str(e))
            raise VisionConnectionError(f"Unable to reach vision model service: {e}") from e

        if response.status_code != 200:
            logger.error(
                "vision_request_rejected",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise VisionInferenceError(f"Vision model request failed with status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise VisionInferenceError("Vision model reply was not valid JSON") from e
        if not isinstance(data, dict):
            raise VisionInferenceError("Vision model reply was not a JSON object")

        text = first_text_part(data)
        logger.info(
            "vision_response_received",
            stop_reason=data.get("stop_reason"),
            response_length=len(text),
        )
        logger.debug("vision_response_text", text=text)
        return text
