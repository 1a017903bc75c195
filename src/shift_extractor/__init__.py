"""Shift Extractor - turn call schedule images into structured shifts.

This package extracts a medical resident's on-call shifts from uploaded
schedule images using a vision-capable language model.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from shift_extractor.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__", "__author__"]
