"""
Filter Session for InstaFilter.

The session owns the current (filter kind, intensity, source image) triple
and the output image derived from it. Every change to one of the three
synchronously recomputes the output:

1. without a source image nothing happens
2. the intensity is mapped to the filter's parameters
3. the filter executor runs
4. on success the result is rasterized and replaces the output image
5. on failure the error is reported once and the previous output stays

UI state that used to live in view fields (selected filter, error alerts,
listeners) is passed in explicitly through ``SessionConfig``.

Example:
    >>> errors = []
    >>> session = FilterSession(SessionConfig(error_handler=errors.append))
    >>> session.load_source(Image.open("photo.jpg"))
    >>> session.set_filter("Gaussian Blur")
    >>> session.set_intensity(0.25)
    >>> session.output_image.size
    (640, 480)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union
import logging

from IF_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_FILTER_NAME,
    DEFAULT_INTENSITY,
    DEFAULT_JPEG_QUALITY,
    MAX_INTENSITY,
    MIN_INTENSITY,
)
from IF_Libs.errors import FilterProducedNoOutput, InstaFilterError, RasterizationFailed
from IF_Libs.FilterLib.filter_executors import FilterExecutorRegistry, get_default_registry
from IF_Libs.FilterLib.filter_kinds import FilterKind
from IF_Libs.FilterLib.parameter_mapper import map_intensity_to_parameters
from IF_Libs.ImageEditingLib.image_io import (
    decode_image_bytes,
    encode_image,
    export_image,
    rasterize_output,
)

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[InstaFilterError], None]
OutputCallback = Callable[[Any], None]
FilterChangedCallback = Callable[[FilterKind], None]

# Failures raised by imaging backends while rendering a filter
EXECUTOR_FAILURES = (ValueError, TypeError, OSError, MemoryError)


def validate_intensity(intensity: Any) -> float:
    """
    Check that an intensity lies in [0, 1].

    Raises:
        ValueError: If the value is not a number in range
    """
    try:
        value = float(intensity)
    except (TypeError, ValueError):
        raise ValueError(f"intensity must be a number, got {intensity!r}")

    if not (MIN_INTENSITY <= value <= MAX_INTENSITY):
        raise ValueError(f"intensity must be {MIN_INTENSITY} <= i <= {MAX_INTENSITY}, got {value}")
    return value


@dataclass
class SessionConfig:
    """Configuration for a filter session.

    Attributes:
        filter_name: Filter selected on startup (value or display name)
        intensity: Initial intensity in [0, 1]
        error_handler: Receives each user-facing error exactly once. When
                       None, errors are raised to the caller instead
        on_output: Called with every new output image
        on_filter_changed: Called whenever a filter is selected
        registry: Executor registry (default: the global Pillow registry)
    """
    filter_name: str = DEFAULT_FILTER_NAME
    intensity: float = DEFAULT_INTENSITY
    error_handler: Optional[ErrorHandler] = None
    on_output: Optional[OutputCallback] = None
    on_filter_changed: Optional[FilterChangedCallback] = None
    registry: Optional[FilterExecutorRegistry] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the persistable fields to a dictionary."""
        return {
            "filter_name": self.filter_name,
            "intensity": self.intensity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Create from dictionary, ignoring unknown and callback fields."""
        filtered = {k: v for k, v in data.items() if k in ("filter_name", "intensity")}
        return cls(**filtered)


class FilterSession:
    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config or SessionConfig()
        self._filter_kind = FilterKind.from_name(self.config.filter_name)
        self._intensity = validate_intensity(self.config.intensity)
        self._registry = self.config.registry or get_default_registry()
        self._source: Optional[Any] = None
        self._output: Optional[Any] = None

    @property
    def filter_kind(self) -> FilterKind:
        return self._filter_kind

    @property
    def intensity(self) -> float:
        return self._intensity

    @property
    def source_image(self) -> Optional[Any]:
        return self._source

    @property
    def output_image(self) -> Optional[Any]:
        return self._output

    @property
    def has_source(self) -> bool:
        return self._source is not None

    @property
    def parameters(self) -> Dict[str, float]:
        """Parameters the current filter receives for the current intensity."""
        return map_intensity_to_parameters(self._filter_kind, self._intensity)

    def set_filter(self, kind: Any) -> Optional[Any]:
        """
        Select a filter and recompute.

        Args:
            kind: FilterKind member or filter name

        Returns:
            The new output image, or None if nothing was rendered

        Raises:
            KeyError: If kind does not name a filter
        """
        self._filter_kind = FilterKind.from_name(kind)
        logger.debug(f"Filter selected: {self._filter_kind.value}")

        if self.config.on_filter_changed is not None:
            self.config.on_filter_changed(self._filter_kind)

        return self.recompute()

    def set_intensity(self, intensity: float) -> Optional[Any]:
        """
        Change the intensity and recompute.

        Raises:
            ValueError: If intensity is outside [0, 1]
        """
        self._intensity = validate_intensity(intensity)
        return self.recompute()

    def load_source(self, image: Any) -> Optional[Any]:
        """
        Replace the source image and recompute.

        Raises:
            TypeError: If image is not a PIL Image
        """
        if not hasattr(image, "filter"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        self._source = image
        logger.debug(f"Source image loaded: {image.size[0]}x{image.size[1]} {image.mode}")
        return self.recompute()

    def load_source_bytes(self, data: Optional[bytes]) -> Optional[Any]:
        """
        Decode raw photo bytes into the source image and recompute.

        A decode failure is reported as SourceLoadFailed and no recompute
        is attempted.
        """
        try:
            image = decode_image_bytes(data)
        except InstaFilterError as e:
            self.report_error(e)
            return None
        return self.load_source(image)

    def recompute(self) -> Optional[Any]:
        """
        Render the current filter over the source image.

        Returns:
            The new output image, or None when there is no source or the
            attempt failed (the previous output is kept in that case)
        """
        if self._source is None:
            logger.debug("No source image loaded, skipping recompute")
            return None

        kind = self._filter_kind
        parameters = map_intensity_to_parameters(kind, self._intensity)
        logger.debug(f"Recomputing {kind.value} with {parameters}")

        try:
            result = self._registry.execute(kind, self._source, parameters)
        except EXECUTOR_FAILURES as e:
            logger.debug(f"Executor for {kind.value} raised: {e}")
            error = FilterProducedNoOutput()
            error.__cause__ = e
            self.report_error(error)
            return None

        if result is None:
            self.report_error(FilterProducedNoOutput())
            return None

        try:
            output = rasterize_output(result)
        except RasterizationFailed as e:
            self.report_error(e)
            return None

        self._output = output
        if self.config.on_output is not None:
            self.config.on_output(output)
        return output

    def report_error(self, error: InstaFilterError) -> None:
        """
        Surface a user-facing error once.

        Raises:
            InstaFilterError: When no error handler is configured
        """
        logger.warning(f"{type(error).__name__}: {error.message}")

        if self.config.error_handler is None:
            raise error
        self.config.error_handler(error)

    def encode_output(
        self,
        save_format: str = DEFAULT_EXPORT_FORMAT,
        quality: int = DEFAULT_JPEG_QUALITY,
    ) -> bytes:
        """
        Encode the current output image for sharing.

        Raises:
            ValueError: If no output image exists yet
        """
        if self._output is None:
            raise ValueError("No output image to encode")
        return encode_image(self._output, save_format, quality)

    def export_output(
        self,
        output_path: Union[str, Path],
        save_format: Optional[str] = None,
        quality: int = DEFAULT_JPEG_QUALITY,
    ) -> Path:
        """
        Write the current output image to disk.

        Raises:
            ValueError: If no output image exists yet
            OSError: If the file cannot be written
        """
        if self._output is None:
            raise ValueError("No output image to export")
        return export_image(self._output, output_path, save_format, quality)
