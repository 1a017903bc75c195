"""Custom exceptions for Shift Extractor."""


class ShiftExtractorError(Exception):
    """Base exception for all Shift Extractor errors."""


class ConfigurationError(ShiftExtractorError):
    """Exception raised for configuration related errors."""


class VisionConnectionError(ShiftExtractorError):
    """Exception raised when unable to reach the vision model service."""


class VisionInferenceError(ShiftExtractorError):
    """Exception raised when the vision model request fails."""


class EmptyResponseError(VisionInferenceError):
    """Exception raised when the model reply has no text content."""


class ValidationError(ShiftExtractorError):
    """Exception raised for upload data validation errors."""


class UnsupportedMediaTypeError(ValidationError):
    """Exception raised when an image is not one of the accepted media types."""
