import math
from typing import List, Sequence, Tuple, TypeVar

TRAIN = "train"
VAL = "val"

T = TypeVar("T")


class DatasetSplitter:
    """
    Order-preserving train/val split of one class's images.

    The last floor(n * test_percentage) images of a class go to val, the
    rest to train. No shuffling, so the same listing gives the same split.
    """

    def __init__(self, test_percentage: float):
        if test_percentage < 0:
            raise ValueError(f"test_percentage must not be negative, got {test_percentage}")
        self.test_percentage = test_percentage
        self._remaining_train = 0

    def test_count(self, image_count: int) -> int:
        return min(image_count, math.floor(image_count * self.test_percentage))

    def start_class(self, image_count: int) -> Tuple[int, int]:
        """Reset the counter for a class with `image_count` images; returns (train, val) sizes."""
        val = self.test_count(image_count)
        self._remaining_train = image_count - val
        return image_count - val, val

    def next_split(self) -> str:
        """Split of the next image of the current class, in listing order."""
        if self._remaining_train > 0:
            self._remaining_train -= 1
            return TRAIN
        return VAL

    def split(self, images: Sequence[T]) -> List[Tuple[T, str]]:
        self.start_class(len(images))
        return [(img, self.next_split()) for img in images]
