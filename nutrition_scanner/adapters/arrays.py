"""Conversions between domain images and numpy arrays."""

from __future__ import annotations

import cv2
import numpy as np
import numpy.typing as npt

from ..domain.entities.image import ImageOrientation, RawImage

ImageArray = npt.NDArray[np.uint8]  # HxW or HxWx3, RGB


def to_rgb_array(image: RawImage) -> ImageArray:
    """Pixel data as an RGB (or grayscale) uint8 array."""
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    return np.asarray(image.to_array(), dtype=np.uint8)


def oriented_array(image: RawImage, orientation: ImageOrientation) -> ImageArray:
    """Pixel data turned so the content appears upright."""
    arr = to_rgb_array(image)
    if orientation == ImageOrientation.DOWN:
        arr = np.rot90(arr, 2)
    elif orientation == ImageOrientation.LEFT:
        arr = np.rot90(arr, -1)
    elif orientation == ImageOrientation.RIGHT:
        arr = np.rot90(arr, 1)
    return np.ascontiguousarray(arr)


def to_gray(arr: ImageArray) -> ImageArray:
    """Convert RGB array to grayscale."""
    if arr.ndim == 2:
        return arr
    return cv2.cvtColor(arr, cv2.COLOR_RGB2GRAY)
