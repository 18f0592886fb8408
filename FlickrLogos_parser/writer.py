from pathlib import Path
from typing import Iterable, List, Optional

from .bboxes import TransformedBox
from .classes import capitalize_first
from .config import CLASSES_FILE, SPLITS, TRUNCATION_FILE, TRUNCATION_HEADER
from .storage import LocalStorage


def images_dir(output_root: Path, split: str) -> Path:
    return Path(output_root) / split / "images"


def labels_dir(output_root: Path, split: str) -> Path:
    return Path(output_root) / split / "labels"


class LabelWriter:
    """
    Writes the label files of a parsed dataset and the run-wide artifacts.

    classes.txt and mayBeTruncated.txt are collected while the run goes on
    and written when the writer is closed.
    """

    def __init__(self, output_root: Path, storage: Optional[LocalStorage] = None):
        self.output_root = Path(output_root)
        self.storage = storage or LocalStorage()
        self.class_names: List[str] = []
        self.truncated: List[str] = []
        self.labels_written = 0
        self.boxes_written = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        # a failing disk would only raise again and hide the first error
        if exc_type is None or not issubclass(exc_type, OSError):
            self.close()
        return False

    def images_dir(self, split: str) -> Path:
        return images_dir(self.output_root, split)

    def labels_dir(self, split: str) -> Path:
        return labels_dir(self.output_root, split)

    def make_dirs(self) -> None:
        for split in SPLITS:
            self.storage.make_dirs(self.images_dir(split))
            self.storage.make_dirs(self.labels_dir(split))

    def write_label(self, split: str, stem: str, boxes: Iterable[TransformedBox]) -> Path:
        """One line per box, in annotation order. No boxes gives an empty file."""
        lines = [box.to_line() for box in boxes]
        path = self.labels_dir(split) / f"{stem}.txt"
        self.storage.write_text(path, "".join(line + "\n" for line in lines))
        self.labels_written += 1
        self.boxes_written += len(lines)
        return path

    def add_class(self, name: str) -> None:
        self.class_names.append(capitalize_first(name))

    def flag_truncated(self, stem: str) -> None:
        # one entry per flagged box, duplicates are kept
        self.truncated.append(stem)

    def class_list_text(self) -> str:
        return "".join(f"{name}," for name in self.class_names)

    def truncation_text(self) -> str:
        return "".join(f"{line}\n" for line in [TRUNCATION_HEADER] + self.truncated)

    def close(self) -> None:
        self.storage.write_text(self.output_root / CLASSES_FILE, self.class_list_text())
        self.storage.write_text(self.output_root / TRUNCATION_FILE, self.truncation_text())
