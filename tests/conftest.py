"""
Pytest configuration and shared fixtures for InstaFilter tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from image_helpers import encode, make_gradient_image


@pytest.fixture
def sample_image():
    """
    Provide a 64x48 RGB gradient image.

    Returns:
        PIL Image in RGB mode
    """
    return make_gradient_image()


@pytest.fixture
def rgba_image():
    """Provide a 64x48 RGBA image with a half-transparent right side."""
    image = make_gradient_image(mode="RGBA")
    alpha = Image.new("L", image.size, 255)
    alpha.paste(128, (32, 0, 64, 48))
    image.putalpha(alpha)
    return image


@pytest.fixture
def png_bytes(sample_image):
    """Provide the sample image encoded as PNG bytes."""
    return encode(sample_image)


@pytest.fixture
def settings_dir(tmp_path):
    """
    Provide a temporary base directory for settings files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture
    """
    return tmp_path
