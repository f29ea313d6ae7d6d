"""
Image data models for InstaFilter.

Classes:
    PhotoRecord: A loaded photo with its origin and decoded original
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass
class PhotoRecord:
    name: str
    original: 'Image.Image'
    path: Optional[Path] = None

    @property
    def size(self):
        return self.original.size
