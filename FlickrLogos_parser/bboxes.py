"""
Bounding box conversion from FlickrLogos pixel boxes to KITTI or Darknet labels.

A FlickrLogos box line is "x y width height" in pixels of the original image.
Both output formats work on the rescaled image, so every coordinate is
multiplied by the image's scale ratio first.
"""

from typing import NamedTuple, Union

from .exceptions import AnnotationError


class RawBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    def touches_edge(self) -> bool:
        """Box starts on the left or top border, so the object may be truncated."""
        return self.x == 0 or self.y == 0


class KittiBox(NamedTuple):
    class_label: str
    x_min: int
    y_min: int
    x_max: int
    y_max: int

    def to_line(self) -> str:
        # type truncated occluded alpha | bbox | dimensions(3) location(3) rotation_y
        return (f"{self.class_label} 0.00 0 0.0 "
                f"{self.x_min} {self.y_min} {self.x_max} {self.y_max} "
                f"0.0 0.0 0.0 0.0 0.0 0.0 0.0")


class DarknetBox(NamedTuple):
    class_id: int
    cx_norm: float
    cy_norm: float
    w_norm: float
    h_norm: float

    def to_line(self) -> str:
        return f"{self.class_id} {self.cx_norm} {self.cy_norm} {self.w_norm} {self.h_norm}"


TransformedBox = Union[KittiBox, DarknetBox]


def parse_bbox_line(line: str, source: str = "<annotation>", line_no: int = 0) -> RawBox:
    """Parse one 'x y width height' line; extra fields are ignored."""
    parts = line.split()
    if len(parts) < 4:
        raise AnnotationError(f"{source}:{line_no}: expected 'x y width height', got {line.strip()!r}")
    try:
        x, y, w, h = map(float, parts[:4])
    except ValueError:
        raise AnnotationError(f"{source}:{line_no}: non-numeric coordinate in {line.strip()!r}") from None
    return RawBox(x, y, w, h)


def to_kitti(box: RawBox, ratio: float, img_width: int, img_height: int,
             class_label: str, class_id: int) -> KittiBox:
    """Absolute corners in the scaled image."""
    x1 = round(box.x * ratio)
    y1 = round(box.y * ratio)
    x2 = round((box.x + box.width) * ratio)
    y2 = round((box.y + box.height) * ratio)
    return KittiBox(class_label, x1, y1, x2, y2)


def to_darknet(box: RawBox, ratio: float, img_width: int, img_height: int,
               class_label: str, class_id: int) -> DarknetBox:
    """Center and size in scaled pixels, divided by the scaled image size."""
    x1 = round((box.x + 0.5 * box.width) * ratio)
    y1 = round((box.y + 0.5 * box.height) * ratio)
    x2 = round(box.width * ratio)
    y2 = round(box.height * ratio)

    # a zero coordinate is not accepted by darknet
    if x1 == 0:
        x1 = 1
    if y1 == 0:
        y1 = 1

    # rounding may push the box one pixel past the border
    if x1 + x2 > img_width:
        x2 -= 1
    if y1 + y2 > img_height:
        y2 -= 1

    return DarknetBox(class_id, x1 / img_width, y1 / img_height, x2 / img_width, y2 / img_height)


TRANSFORMS = {
    "kitti": to_kitti,
    "darknet": to_darknet,
}


def transform_box(label_format: str, box: RawBox, ratio: float, img_width: int, img_height: int,
                  class_label: str, class_id: int) -> TransformedBox:
    try:
        transform = TRANSFORMS[label_format]
    except KeyError:
        raise ValueError(f"Unknown label format {label_format!r}, expected one of {sorted(TRANSFORMS)}") from None
    return transform(box, ratio, img_width, img_height, class_label, class_id)
