"""
Pillow-backed filter operations.

Each filter kind is rendered by composing Pillow primitives (ImageFilter,
ImageOps, resampling) with numpy where Pillow has no direct equivalent:

- Crystallize: Voronoi cells filled with the colour at each cell's seed
- Edges: Pillow's FIND_EDGES kernel
- Gaussian blur: Pillow's GaussianBlur
- Pixellate: box downsample followed by nearest-neighbour upsample
- Sepia tone: colorized grayscale blended with the source
- Unsharp mask: Pillow's UnsharpMask
- Vignette: radial darkening towards the corners

Parameters arrive already mapped from the intensity slider. They are only
clamped to what the underlying primitive needs to run (block sizes of at
least two pixels, positive radii). Zero-strength parameters return an
unmodified copy.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg")
    >>> sepia = apply_sepia_tone(img, intensity=0.5)
    >>> blocks = apply_pixellate(img, scale=10)
"""

import math
from typing import Any, Dict, Optional, Tuple

import numpy as np
from PIL import Image, ImageFilter, ImageOps

from IF_Libs.constants import (
    CRYSTALLIZE_SEED,
    PARAM_INTENSITY,
    PARAM_RADIUS,
    PARAM_SCALE,
    SEPIA_DARK,
    SEPIA_LIGHT,
)
from IF_Libs.FilterLib.filter_kinds import FilterKind


def _check_image(image: Any) -> None:
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def _has_alpha(image: Any) -> bool:
    if image.mode in ("RGBA", "LA", "PA"):
        return True
    return image.mode == "P" and "transparency" in image.info


def _split_alpha(image: Any) -> Tuple[Any, Optional[Any]]:
    """Return (RGB image, alpha band or None)."""
    if _has_alpha(image):
        rgba = image.convert("RGBA")
        return rgba.convert("RGB"), rgba.getchannel("A")
    return image.convert("RGB"), None


def _restore_alpha(result: Any, alpha: Optional[Any]) -> Any:
    if alpha is None:
        return result
    result = result.convert("RGBA")
    result.putalpha(alpha)
    return result


def _working_copy(image: Any) -> Any:
    """RGB or RGBA copy of the image, depending on transparency."""
    return image.convert("RGBA" if _has_alpha(image) else "RGB")


# ============================================================================
# Crystallize
# ============================================================================

def apply_crystallize(image: Any, radius: float = 20.0) -> Any:
    """
    Break the image into polygonal cells of flat colour.

    Seeds are placed on a jittered grid with ``radius`` pixel spacing and
    every pixel takes the colour found at its nearest seed. The jitter uses
    a fixed random seed, so the same input always yields the same cells.

    Args:
        image: PIL Image
        radius: Cell spacing in pixels (values below 2 leave the image as is)

    Returns:
        Crystallized PIL Image (RGB, or RGBA when the input has alpha)
    """
    _check_image(image)

    cell = int(round(radius))
    if cell < 2:
        return _working_copy(image)

    rgb, alpha = _split_alpha(image)
    pixels = np.asarray(rgb)
    height, width = pixels.shape[:2]

    rows = height // cell + 1
    cols = width // cell + 1
    rng = np.random.default_rng(CRYSTALLIZE_SEED)
    jitter = rng.random((rows, cols, 2))
    seed_y = np.clip((np.arange(rows)[:, None] + jitter[..., 0]) * cell, 0, height - 1).astype(np.float32)
    seed_x = np.clip((np.arange(cols)[None, :] + jitter[..., 1]) * cell, 0, width - 1).astype(np.float32)

    xs = np.arange(width, dtype=np.float32)[None, :]
    cell_x = np.arange(width) // cell
    neighbour_cols = [np.clip(cell_x + dx, 0, cols - 1) for dx in (-1, 0, 1)]

    crystallized = np.empty_like(pixels)

    # Rendered one row of cells at a time so memory stays proportional to
    # the image width rather than its area
    for row in range(rows):
        top = row * cell
        bottom = min(top + cell, height)
        if top >= bottom:
            break

        ys = np.arange(top, bottom, dtype=np.float32)[:, None]
        band_shape = (bottom - top, width)
        best_dist = np.full(band_shape, np.inf, dtype=np.float32)
        best_y = np.zeros(band_shape, dtype=np.int32)
        best_x = np.zeros(band_shape, dtype=np.int32)

        # The nearest seed always lives in one of the 3x3 neighbouring cells
        for ny in (max(row - 1, 0), row, min(row + 1, rows - 1)):
            for nx in neighbour_cols:
                sy = seed_y[ny, nx][None, :]
                sx = seed_x[ny, nx][None, :]
                dist = (sy - ys) ** 2 + (sx - xs) ** 2
                closer = dist < best_dist
                best_dist = np.where(closer, dist, best_dist)
                best_y = np.where(closer, sy.astype(np.int32), best_y)
                best_x = np.where(closer, sx.astype(np.int32), best_x)

        crystallized[top:bottom] = pixels[best_y, best_x]

    return _restore_alpha(Image.fromarray(crystallized), alpha)


# ============================================================================
# Edges
# ============================================================================

def apply_edges(image: Any) -> Any:
    """Highlight edges; flat regions turn black."""
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    return _restore_alpha(rgb.filter(ImageFilter.FIND_EDGES), alpha)


# ============================================================================
# Gaussian Blur
# ============================================================================

def apply_gaussian_blur(image: Any, radius: float = 10.0) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        radius: Blur radius in pixels (0 = no blur)

    Returns:
        Blurred PIL Image
    """
    _check_image(image)

    working = _working_copy(image)
    if radius <= 0:
        return working
    return working.filter(ImageFilter.GaussianBlur(radius=float(radius)))


# ============================================================================
# Pixellate
# ============================================================================

def apply_pixellate(image: Any, scale: float = 8.0) -> Any:
    """
    Replace the image with square blocks of averaged colour.

    Args:
        image: PIL Image
        scale: Block edge length in pixels (values below 2 leave the image as is)

    Returns:
        Pixellated PIL Image, same size as the input
    """
    _check_image(image)

    working = _working_copy(image)
    block = int(round(scale))
    if block < 2:
        return working

    width, height = working.size
    small_size = (max(1, math.ceil(width / block)), max(1, math.ceil(height / block)))
    small = working.resize(small_size, Image.Resampling.BOX)
    enlarged = small.resize((small_size[0] * block, small_size[1] * block), Image.Resampling.NEAREST)
    return enlarged.crop((0, 0, width, height))


# ============================================================================
# Sepia Tone
# ============================================================================

def apply_sepia_tone(image: Any, intensity: float = 1.0) -> Any:
    """
    Tint the image in warm brown tones.

    Args:
        image: PIL Image
        intensity: Blend amount between source (0) and full sepia (1)

    Returns:
        Toned PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    toned = ImageOps.colorize(ImageOps.grayscale(rgb), black=SEPIA_DARK, white=SEPIA_LIGHT)
    result = Image.blend(rgb, toned, float(intensity))
    return _restore_alpha(result, alpha)


# ============================================================================
# Unsharp Mask
# ============================================================================

def apply_unsharp_mask(image: Any, radius: float = 2.5, intensity: float = 0.5) -> Any:
    """
    Sharpen the image by amplifying the difference from a blurred copy.

    Args:
        image: PIL Image
        radius: Blur radius of the mask in pixels
        intensity: Sharpening strength (1.0 = 100 percent)

    Returns:
        Sharpened PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    percent = int(round(float(intensity) * 100))
    if radius <= 0 or percent <= 0:
        return _restore_alpha(rgb, alpha)

    sharpened = rgb.filter(ImageFilter.UnsharpMask(radius=float(radius), percent=percent, threshold=0))
    return _restore_alpha(sharpened, alpha)


# ============================================================================
# Vignette
# ============================================================================

def apply_vignette(image: Any, radius: float = 100.0, intensity: float = 0.0) -> Any:
    """
    Darken the image towards its corners.

    Args:
        image: PIL Image
        radius: Falloff reach as a percentage of the half diagonal
                (100 = darkening peaks exactly at the corners)
        intensity: Darkening strength at the falloff edge (0 = none,
                   negative values brighten)

    Returns:
        Vignetted PIL Image
    """
    _check_image(image)

    rgb, alpha = _split_alpha(image)
    reach = float(radius) / 100.0
    if intensity == 0 or reach <= 0:
        return _restore_alpha(rgb, alpha)

    pixels = np.asarray(rgb, dtype=np.float32)
    height, width = pixels.shape[:2]
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
    center_y = (height - 1) / 2.0
    center_x = (width - 1) / 2.0
    half_diagonal = max(math.hypot(center_x, center_y), 1.0)

    distance = np.hypot(ys - center_y, xs - center_x) / half_diagonal
    falloff = np.clip(distance / reach, 0.0, 1.0) ** 2
    shade = 1.0 - float(intensity) * falloff

    shaded = np.clip(pixels * shade[..., None], 0, 255).astype(np.uint8)
    return _restore_alpha(Image.fromarray(shaded), alpha)


# ============================================================================
# Executors
# ============================================================================

def _param(kind: FilterKind, parameters: Dict[str, Any], key: str) -> float:
    if key in parameters:
        return float(parameters[key])
    return float(kind.descriptor.defaults[key])


def execute_crystallize(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_crystallize(image, _param(FilterKind.CRYSTALLIZE, parameters, PARAM_RADIUS))


def execute_edges(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_edges(image)


def execute_gaussian_blur(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_gaussian_blur(image, _param(FilterKind.GAUSSIAN_BLUR, parameters, PARAM_RADIUS))


def execute_pixellate(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_pixellate(image, _param(FilterKind.PIXELLATE, parameters, PARAM_SCALE))


def execute_sepia_tone(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_sepia_tone(image, _param(FilterKind.SEPIA_TONE, parameters, PARAM_INTENSITY))


def execute_unsharp_mask(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_unsharp_mask(
        image,
        radius=_param(FilterKind.UNSHARP_MASK, parameters, PARAM_RADIUS),
        intensity=_param(FilterKind.UNSHARP_MASK, parameters, PARAM_INTENSITY),
    )


def execute_vignette(image: Any, parameters: Dict[str, Any]) -> Any:
    return apply_vignette(
        image,
        radius=_param(FilterKind.VIGNETTE, parameters, PARAM_RADIUS),
        intensity=_param(FilterKind.VIGNETTE, parameters, PARAM_INTENSITY),
    )
