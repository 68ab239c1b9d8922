"""Image entity - abstraction over image data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable


class ImageOrientation(str, Enum):
    """Orientation hint passed to the vision engines.

    Tells an engine how the pixel buffer must be turned to appear upright.
    """
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@runtime_checkable
class ImageData(Protocol):
    """Protocol for image data - allows different backends."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def mode(self) -> str: ...

    def crop(self, box: tuple[int, int, int, int]) -> ImageData: ...

    def convert(self, mode: str) -> ImageData: ...

    def save(self, path: Path | str, **kwargs) -> None: ...


@dataclass(frozen=True, slots=True)
class RawImage:
    """Domain entity representing a captured image.

    Wraps underlying image data without exposing implementation details.
    Never mutated; every operation returns a new instance.
    """
    _data: ImageData
    source_path: Path | None = None

    @property
    def width(self) -> int:
        return self._data.width

    @property
    def height(self) -> int:
        return self._data.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def mode(self) -> str:
        return self._data.mode

    def crop(self, x: int, y: int, w: int, h: int) -> RawImage:
        """Crop to region and return new image."""
        return RawImage(
            _data=self._data.crop((x, y, x + w, y + h)),
            source_path=self.source_path
        )

    def convert(self, mode: str) -> RawImage:
        """Convert to different color mode."""
        return RawImage(
            _data=self._data.convert(mode),
            source_path=self.source_path
        )

    def save(self, path: Path | str) -> None:
        """Save image to path."""
        self._data.save(path)

    @classmethod
    def from_file(cls, path: Path | str) -> RawImage:
        """Load image from file."""
        path = Path(path)
        # Lazy import - domain doesn't depend on PIL
        from PIL import Image as PILImage
        with PILImage.open(path) as img:
            img.load()
            return cls(_data=img.convert("RGB"), source_path=path)

    @classmethod
    def from_array(cls, data: object, source_path: Path | None = None) -> RawImage:
        """Create from numpy array or other data."""
        from PIL import Image as PILImage
        return cls(_data=PILImage.fromarray(data), source_path=source_path)

    def to_array(self) -> object:
        """Convert to numpy array."""
        import numpy as np
        return np.array(self._data)
