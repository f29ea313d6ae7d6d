"""
ImageEditingLib - Image models and I/O

This module provides the photo model and the helpers that decode incoming
photos and encode filtered results for sharing.
"""

from IF_Libs.ImageEditingLib.image_models import PhotoRecord
from IF_Libs.ImageEditingLib.image_io import (
    decode_image_bytes,
    load_image_file,
    is_supported_format,
    rasterize_output,
    get_save_kwargs,
    encode_image,
    export_image,
)

__all__ = [
    "PhotoRecord",
    "decode_image_bytes",
    "load_image_file",
    "is_supported_format",
    "rasterize_output",
    "get_save_kwargs",
    "encode_image",
    "export_image",
]
