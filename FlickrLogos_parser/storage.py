"""
Filesystem and image I/O used by the converter.

The conversion core only talks to a storage object, so tests or other
front-ends can hand in their own implementation with the same methods.
"""

import shutil
from pathlib import Path
from typing import List

from PIL import Image

# PNG cannot hold these modes
_CONVERT_TO_RGB = {"CMYK", "YCbCr", "LAB", "HSV"}


class LocalStorage:
    """Reads the source dataset from and writes the parsed dataset to local disk."""

    def list_dirs(self, path: Path) -> List[Path]:
        """Sub-directories of `path` in name order."""
        return sorted(p for p in Path(path).iterdir() if p.is_dir())

    def list_files(self, path: Path, pattern: str) -> List[Path]:
        """Files of `path` matching `pattern` in name order."""
        return sorted(p for p in Path(path).glob(pattern) if p.is_file())

    def read_lines(self, path: Path) -> List[str]:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()

    def open_image(self, path: Path) -> Image.Image:
        # caller closes it, use as `with storage.open_image(p) as im:`
        return Image.open(path)

    def save_image(self, image: Image.Image, path: Path) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        if image.mode in _CONVERT_TO_RGB:
            with image.convert("RGB") as rgb:
                rgb.save(path, format="PNG")
        else:
            image.save(path, format="PNG")

    def write_text(self, path: Path, text: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)

    def reset_dir(self, path: Path) -> None:
        """Delete `path` if present and create it empty."""
        path = Path(path)
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True)

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
