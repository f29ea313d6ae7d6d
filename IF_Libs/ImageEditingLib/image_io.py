"""
Image decoding, rasterization and export for InstaFilter.

This module sits at the edges of the filter pipeline: it turns raw photo
bytes into a decoded source image, turns a filter result into a displayable
raster, and encodes the final image for sharing.

Functions:
    decode_image_bytes: Decode raw encoded bytes into a PIL Image
    load_image_file: Read and decode a photo from disk
    is_supported_format: Check a path's extension against supported formats
    rasterize_output: Force a filter result into a displayable raster
    get_save_kwargs: PIL Image.save() kwargs for an export format
    encode_image: Encode an image to bytes for sharing
    export_image: Write an image to disk for sharing
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Optional, Union

from PIL import Image, ImageOps

from IF_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_JPEG_QUALITY,
    SUPPORTED_STANDARD_IMAGES,
)
from IF_Libs.errors import RasterizationFailed, SourceLoadFailed

RASTER_MODES = ("RGB", "RGBA")


def _normalize_mode(image: Any) -> Any:
    if image.mode in RASTER_MODES:
        return image
    has_alpha = image.mode in ("LA", "PA") or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


def decode_image_bytes(data: Optional[bytes]) -> Any:
    """
    Decode raw encoded image bytes.

    The EXIF orientation tag is applied so the photo appears the way the
    camera took it.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...)

    Returns:
        Fully loaded PIL Image in RGB or RGBA mode

    Raises:
        SourceLoadFailed: If no bytes were supplied or they cannot be decoded
    """
    if not data:
        raise SourceLoadFailed()

    try:
        image = Image.open(BytesIO(data))
        image.load()
        image = ImageOps.exif_transpose(image)
        return _normalize_mode(image)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise SourceLoadFailed.invalid_data() from e


def load_image_file(file_path: Union[str, Path]) -> Any:
    """
    Read and decode a photo from disk.

    Raises:
        SourceLoadFailed: If the file cannot be read or decoded
    """
    file_path = Path(file_path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise SourceLoadFailed() from e
    return decode_image_bytes(data)


def is_supported_format(file_path: Union[str, Path]) -> bool:
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def rasterize_output(image: Any) -> Any:
    """
    Turn a filter result into a displayable, exportable raster.

    Args:
        image: PIL Image returned by a filter executor

    Returns:
        Loaded PIL Image in RGB or RGBA mode

    Raises:
        RasterizationFailed: If the result is not an image, has no pixels,
            or cannot be loaded or converted
    """
    if not hasattr(image, "load") or not hasattr(image, "size"):
        raise RasterizationFailed()

    width, height = image.size
    if width <= 0 or height <= 0:
        raise RasterizationFailed()

    try:
        image.load()
        return _normalize_mode(image)
    except (OSError, ValueError, MemoryError) as e:
        raise RasterizationFailed() from e


def get_save_kwargs(save_format: str = DEFAULT_EXPORT_FORMAT, quality: int = DEFAULT_JPEG_QUALITY) -> Dict[str, Any]:
    """Get PIL Image.save() kwargs based on format."""
    # PIL uses "JPEG" not "JPG"
    save_format = save_format.upper()
    if save_format == "JPG":
        save_format = "JPEG"

    kwargs: Dict[str, Any] = {"format": save_format}

    if save_format == "JPEG":
        kwargs["quality"] = max(1, min(100, int(quality)))

    return kwargs


def _prepare_for_format(image: Any, save_format: str) -> Any:
    # JPEG has no alpha channel
    if save_format == "JPEG" and image.mode != "RGB":
        return image.convert("RGB")
    return image


def encode_image(
    image: Any,
    save_format: str = DEFAULT_EXPORT_FORMAT,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Encode an image to bytes for sharing.

    Args:
        image: PIL Image
        save_format: PNG, JPEG/JPG, ... (default PNG)
        quality: JPEG quality 1-100

    Returns:
        Encoded image bytes
    """
    if not hasattr(image, "save"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    kwargs = get_save_kwargs(save_format, quality)
    buffer = BytesIO()
    _prepare_for_format(image, kwargs["format"]).save(buffer, **kwargs)
    return buffer.getvalue()


def export_image(
    image: Any,
    output_path: Union[str, Path],
    save_format: Optional[str] = None,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Save an image to disk for sharing.

    The format defaults to the one implied by the file extension, falling
    back to PNG.

    Returns:
        Path the image was written to

    Raises:
        OSError: If the target directory does not exist or cannot be written
    """
    output_path = Path(output_path)

    if not output_path.parent.is_dir():
        raise OSError(f"Output directory does not exist: {output_path.parent}")

    if save_format is None:
        suffix = output_path.suffix.lower().lstrip(".")
        save_format = suffix if suffix in ("png", "jpg", "jpeg", "bmp", "tiff", "webp") else DEFAULT_EXPORT_FORMAT

    output_path.write_bytes(encode_image(image, save_format, quality))
    return output_path
