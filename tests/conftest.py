from pathlib import Path

import pytest
from PIL import Image

HEADER = "x y width height"


def make_image(path: Path, size=(200, 100), color=(200, 30, 30)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="JPEG")
    return path


def make_annotation(path: Path, boxes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [HEADER] + [" ".join(str(v) for v in box) for box in boxes]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_dataset(tmp_path):
    """
    Build a FlickrLogos-like classes directory.

    `classes` maps class name -> number of images; image names run 0000, 0001, ...
    across all classes. Every non background image gets one box
    (10, 20, 40, 30) on a 200x100 image.
    """

    def _make(classes, size=(200, 100), boxes=((10, 20, 40, 30),), background="no-logo"):
        root = tmp_path / "classes"
        n = 0
        for class_name, count in classes.items():
            (root / "jpg" / class_name).mkdir(parents=True, exist_ok=True)
            (root / "masks" / class_name).mkdir(parents=True, exist_ok=True)
            for _ in range(count):
                name = f"{n:04d}.jpg"
                n += 1
                make_image(root / "jpg" / class_name / name, size=size)
                if class_name != background:
                    make_annotation(root / "masks" / class_name / f"{name}.bboxes.txt", boxes)
        return root

    return _make
