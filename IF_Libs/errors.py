"""
User-facing error types for InstaFilter.

Every failure the user can see derives from ``InstaFilterError`` and carries
the message shown in the error dialog. The kinds are not distinguished by
recovery strategy: each one ends the current attempt and is reported once.

Classes:
    InstaFilterError: Base class with a user-facing message
    SourceLoadFailed: The photo could not be read or decoded
    FilterProducedNoOutput: The filter returned no image
    RasterizationFailed: The filtered image could not be turned into pixels
"""

from typing import Optional

MESSAGE_FAILED_TO_LOAD = "Failed to load the selected image"
MESSAGE_INVALID_IMAGE_DATA = "The selected image data is invalid"
MESSAGE_FAILED_TO_PROCESS = "Failed to process image"
MESSAGE_FAILED_TO_RENDER = "Failed to create final image"


class InstaFilterError(Exception):
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class SourceLoadFailed(InstaFilterError):
    default_message = MESSAGE_FAILED_TO_LOAD

    @classmethod
    def invalid_data(cls) -> "SourceLoadFailed":
        return cls(MESSAGE_INVALID_IMAGE_DATA)


class FilterProducedNoOutput(InstaFilterError):
    default_message = MESSAGE_FAILED_TO_PROCESS


class RasterizationFailed(InstaFilterError):
    default_message = MESSAGE_FAILED_TO_RENDER
