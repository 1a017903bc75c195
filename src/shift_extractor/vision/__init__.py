"""Vision model clients used to read schedule images."""

from .client import AnthropicVisionClient, VisionClient
from .mock import MockVisionClient

__all__ = ["AnthropicVisionClient", "MockVisionClient", "VisionClient"]
