"""
Verifies image-label consistency of a parsed FlickrLogos dataset.

Usage:
    flickrlogos-verify --dataset /path/to/parsed32_512_kitti
"""

import argparse
import logging
from pathlib import Path
from typing import Set, Tuple

from .config import LOG_FORMAT, OUTPUT_IMAGE_EXT, SPLITS
from .writer import images_dir, labels_dir

logger = logging.getLogger(__name__)

# offenders listed per direction
MAX_REPORTED = 10


def unpaired_stems(dataset_root: Path, split: str) -> Tuple[Set[str], Set[str]]:
    """(images without a label, labels without an image) of one split, by file stem."""
    image_stems = {p.stem for p in images_dir(dataset_root, split).glob(f"*{OUTPUT_IMAGE_EXT}")}
    label_stems = {p.stem for p in labels_dir(dataset_root, split).glob("*.txt")}
    return image_stems - label_stems, label_stems - image_stems


def verify_split(dataset_root: Path, split: str) -> bool:
    if not images_dir(dataset_root, split).is_dir() or not labels_dir(dataset_root, split).is_dir():
        logger.warning("Missing directories for split: %s", split)
        return False

    missing_labels, missing_images = unpaired_stems(dataset_root, split)

    for name in sorted(missing_labels)[:MAX_REPORTED]:
        logger.warning("%s: %s%s has no %s.txt", split, name, OUTPUT_IMAGE_EXT, name)
    for name in sorted(missing_images)[:MAX_REPORTED]:
        logger.warning("%s: %s.txt has no %s%s", split, name, name, OUTPUT_IMAGE_EXT)

    if missing_labels or missing_images:
        logger.warning("%s: %d images without label, %d labels without image",
                       split, len(missing_labels), len(missing_images))
        return False

    logger.info("%s is consistent: all image-label pairs present.", split)
    return True


def verify_output(dataset_root: Path) -> bool:
    # check every split, even after a failing one
    results = [verify_split(Path(dataset_root), split) for split in SPLITS]
    return all(results)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Verify image-label consistency of a parsed dataset.")
    parser.add_argument("--dataset", type=Path, required=True, help="Path to the parsed dataset root")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    if verify_output(args.dataset):
        logger.info("All splits passed verification successfully!")
        return 0
    logger.warning("Some issues found. Please check the logs above.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
