from typing import Tuple

from PIL import Image


def compute_scale(width: int, height: int, max_side_length: int) -> Tuple[float, int, int]:
    """Uniform ratio fitting (width, height) into max_side_length, plus the scaled size."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")

    ratio_x = max_side_length / width
    ratio_y = max_side_length / height
    ratio = min(ratio_x, ratio_y)

    # small images are scaled up as well
    new_width = max(1, round(width * ratio))
    new_height = max(1, round(height * ratio))
    return ratio, new_width, new_height


def scale_image(image: Image.Image, max_side_length: int) -> Tuple[Image.Image, float]:
    """
    Resize `image` so its longer side equals max_side_length.

    Returns a new image (the caller closes it) and the ratio used for both axes.
    """
    ratio, new_width, new_height = compute_scale(image.width, image.height, max_side_length)
    scaled = image.resize((new_width, new_height), Image.Resampling.BILINEAR)
    return scaled, ratio
