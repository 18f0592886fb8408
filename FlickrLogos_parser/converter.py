"""
Converts the FlickrLogos-32 dataset to KITTI or Darknet training layout.

Every class folder below <classes>/jpg is rescaled, split into train/val
and written to <classes>/parsed32_<side>_<format> as:
- {train,val}/images/*.png
- {train,val}/labels/*.txt in the chosen label format
- classes.txt and mayBeTruncated.txt
- train.txt, val.txt, flickrlogos.names, flickrlogos.data (darknet only)
"""

import argparse
import logging
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .bboxes import TRANSFORMS, TransformedBox, parse_bbox_line, transform_box
from .classes import ClassEntry, ClassRegistry, capitalize_first
from .config import (ANNOTATION_SUFFIX, ANNOTATIONS_SUBDIR, BACKGROUND_CLASS, CLASSES_DIR, IMAGE_GLOB,
                     IMAGES_SUBDIR, LABEL_FORMAT, LABEL_FORMATS, LOG_FORMAT, MAX_SIDE_LENGTH,
                     OUTPUT_IMAGE_EXT, OUTPUT_PREFIX, USE_NO_LOGO, VAL_PERCENTAGE)
from .darknet import write_darknet_files
from .exceptions import AnnotationError, ConfigurationError, ConversionError
from .scaling import scale_image
from .splitting import TRAIN, VAL, DatasetSplitter
from .storage import LocalStorage
from .verify_dataset import verify_output
from .writer import LabelWriter

logger = logging.getLogger(__name__)


class ImageRecord(NamedTuple):
    source_path: Path
    original_width: int
    original_height: int
    scale_ratio: float
    scaled_width: int
    scaled_height: int
    split: str


class ConversionSummary(NamedTuple):
    output_root: Path
    class_names: List[str]
    train_images: int
    val_images: int
    boxes: int
    truncated: List[str]


# === UTILITIES ===

def output_dir_for(classes_dir: Path, max_side_length: int, label_format: str) -> Path:
    return Path(classes_dir) / f"{OUTPUT_PREFIX}_{max_side_length}_{label_format}"


def check_output_dir(output_dir: Path, classes_dir: Path,
                     images_subdir: str = IMAGES_SUBDIR, annotations_subdir: str = ANNOTATIONS_SUBDIR) -> None:
    """The output root is wiped before a run, so it must not hold any of the source dataset."""
    output_root = Path(output_dir).resolve()
    classes_dir = Path(classes_dir).resolve()

    if output_root == classes_dir or output_root in classes_dir.parents:
        raise ConfigurationError(f"Output directory {output_dir} would delete the classes directory {classes_dir}")
    for source in (classes_dir / images_subdir, classes_dir / annotations_subdir):
        if output_root == source or source in output_root.parents:
            raise ConfigurationError(f"Output directory {output_dir} lies inside the source folder {source}")


def validate_config(classes_dir: Path, val_percentage: float, max_side_length: int, label_format: str,
                    images_subdir: str = IMAGES_SUBDIR, annotations_subdir: str = ANNOTATIONS_SUBDIR,
                    output_dir: Optional[Path] = None) -> None:
    """Raise ConfigurationError before anything is written."""
    classes_dir = Path(classes_dir)
    if not classes_dir.is_dir():
        raise ConfigurationError(f"Directory does not exist or could not be found: {classes_dir}")
    if not (classes_dir / images_subdir).is_dir() or not (classes_dir / annotations_subdir).is_dir():
        raise ConfigurationError(
            f"{images_subdir} or {annotations_subdir} directory could not be found in {classes_dir}")
    if not 0.0 <= val_percentage <= 1.0:
        raise ConfigurationError(f"Validation percentage must be within [0, 1], got {val_percentage}")
    if isinstance(max_side_length, bool) or not isinstance(max_side_length, int) or max_side_length <= 0:
        raise ConfigurationError(f"Max side length must be a positive int, got {max_side_length!r}")
    if label_format not in TRANSFORMS:
        raise ConfigurationError(
            f"No valid format ({' or '.join(LABEL_FORMATS)}) given for label parsing: {label_format!r}")
    if output_dir is not None:
        check_output_dir(output_dir, classes_dir, images_subdir, annotations_subdir)


def annotation_path_for(annotations_root: Path, class_name: str, image_path: Path) -> Path:
    return Path(annotations_root) / class_name / f"{image_path.stem}{ANNOTATION_SUFFIX}"


def read_annotation(path: Path, storage: LocalStorage) -> List[str]:
    try:
        return storage.read_lines(path)
    except FileNotFoundError:
        raise AnnotationError(f"Annotation file not found: {path}") from None
    except UnicodeDecodeError as e:
        raise AnnotationError(f"Annotation file is not valid UTF-8 text: {path} ({e.reason})") from e


def convert_annotations(lines: Sequence[str], record: ImageRecord, label_format: str, entry: ClassEntry,
                        source: str = "<annotation>") -> Tuple[List[TransformedBox], int]:
    """
    Transform the box lines of one annotation file.

    Line 0 is the header and is skipped; every other line must hold a box.
    Returns the boxes in file order and the number of boxes touching the
    left or top border.
    """
    boxes: List[TransformedBox] = []
    edge_hits = 0
    class_label = capitalize_first(entry.name)
    for line_no, line in enumerate(lines[1:], start=1):
        raw = parse_bbox_line(line, source=source, line_no=line_no)
        boxes.append(transform_box(label_format, raw, record.scale_ratio,
                                   record.scaled_width, record.scaled_height,
                                   class_label, entry.numeric_id))
        # TODO check width/height against the right and bottom border as well
        if raw.touches_edge():
            edge_hits += 1
    return boxes, edge_hits


def convert_image(image_path: Path, entry: ClassEntry, split: str, writer: LabelWriter, *,
                  max_side_length: int, label_format: str, annotations_root: Path,
                  is_background: bool = False, storage: Optional[LocalStorage] = None) -> ImageRecord:
    """Scale one image, write its label file and its PNG copy into `split`."""
    storage = storage or LocalStorage()
    stem = image_path.stem

    with storage.open_image(image_path) as image:
        scaled, ratio = scale_image(image, max_side_length)
        try:
            record = ImageRecord(image_path, image.width, image.height, ratio,
                                 scaled.width, scaled.height, split)

            boxes: List[TransformedBox] = []
            if not is_background:
                ann_path = annotation_path_for(annotations_root, entry.name, image_path)
                lines = read_annotation(ann_path, storage)
                boxes, edge_hits = convert_annotations(lines, record, label_format, entry, source=str(ann_path))
                for _ in range(edge_hits):
                    writer.flag_truncated(stem)

            writer.write_label(split, stem, boxes)
            storage.save_image(scaled, writer.images_dir(split) / f"{stem}{OUTPUT_IMAGE_EXT}")
        finally:
            scaled.close()

    return record


# === MAIN WORKFLOW ===

def convert_dataset(classes_dir: Path, val_percentage: float = VAL_PERCENTAGE, use_no_logo: bool = USE_NO_LOGO,
                    max_side_length: int = MAX_SIDE_LENGTH, label_format: str = LABEL_FORMAT, *,
                    output_dir: Optional[Path] = None, images_subdir: str = IMAGES_SUBDIR,
                    annotations_subdir: str = ANNOTATIONS_SUBDIR, background_class: str = BACKGROUND_CLASS,
                    storage: Optional[LocalStorage] = None, progress: bool = True) -> ConversionSummary:
    validate_config(classes_dir, val_percentage, max_side_length, label_format,
                    images_subdir, annotations_subdir, output_dir)

    storage = storage or LocalStorage()
    classes_dir = Path(classes_dir)
    images_root = classes_dir / images_subdir
    annotations_root = classes_dir / annotations_subdir
    output_root = Path(output_dir) if output_dir is not None else output_dir_for(
        classes_dir, max_side_length, label_format)

    storage.reset_dir(output_root)

    registry = ClassRegistry(background_class)
    splitter = DatasetSplitter(val_percentage)
    counts = {TRAIN: 0, VAL: 0}

    with LabelWriter(output_root, storage) as writer:
        writer.make_dirs()

        for class_dir in storage.list_dirs(images_root):
            class_name = class_dir.name
            entry = registry.register(class_name, include_background=use_no_logo)
            if not entry.include_in_registry:
                logger.info('Skipping background class "%s"', class_name)
                continue

            images = storage.list_files(class_dir, IMAGE_GLOB)
            n_train, n_val = splitter.start_class(len(images))
            logger.info('%d class "%s" - split into (train, %d), (val, %d)',
                        entry.numeric_id, class_name, n_train, n_val)

            is_background = registry.is_background(class_name)
            for image_path in tqdm(images, desc=class_name, unit="img", disable=not progress):
                split = splitter.next_split()
                convert_image(image_path, entry, split, writer,
                              max_side_length=max_side_length, label_format=label_format,
                              annotations_root=annotations_root, is_background=is_background,
                              storage=storage)
                counts[split] += 1

            writer.add_class(class_name)

    if label_format == "darknet":
        files = write_darknet_files(output_root, writer.class_names, storage=storage)
        logger.info("Darknet files saved to: %s", files["data"])

    summary = ConversionSummary(output_root, list(writer.class_names), counts[TRAIN], counts[VAL],
                                writer.boxes_written, list(writer.truncated))
    logger.info("Parsed %d classes into %s: train=%d val=%d boxes=%d, %d boxes flagged as maybe truncated",
                len(summary.class_names), output_root, summary.train_images, summary.val_images,
                summary.boxes, len(summary.truncated))
    return summary


def str2bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("true", "yes", "1"):
        return True
    if v in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"No valid bool value (e.g. false) given: {value!r}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Parse FlickrLogos-32 class folders into KITTI or darknet training data.")
    parser.add_argument("classes_dir", type=Path, nargs="?", default=CLASSES_DIR,
                        help='FlickrLogos-32 classes directory ("FlickrLogos-v2/classes")')
    parser.add_argument("percentage", type=float, nargs="?", default=VAL_PERCENTAGE,
                        help="Fraction of every class used for validation (e.g. 0.1)")
    parser.add_argument("use_no_logo", type=str2bool, nargs="?", default=USE_NO_LOGO,
                        help="Use no-logo images? (true/false)")
    parser.add_argument("max_side_length", type=int, nargs="?", default=MAX_SIDE_LENGTH,
                        help="Max side length of rescaled images in px (e.g. 512)")
    parser.add_argument("label_format", type=str.lower, nargs="?", default=LABEL_FORMAT,
                        choices=LABEL_FORMATS, help="Label format")
    parser.add_argument("--output", type=Path, default=None,
                        help="Output directory (default: <classes_dir>/parsed32_<side>_<format>)")
    parser.add_argument("--images-subdir", default=IMAGES_SUBDIR, help="Image folder below classes_dir")
    parser.add_argument("--annotations-subdir", default=ANNOTATIONS_SUBDIR,
                        help="Bounding box folder below classes_dir")
    parser.add_argument("--no-verify", action="store_true", help="Skip the image/label consistency check")
    parser.add_argument("--no-progress", action="store_true", help="Hide the per-class progress bars")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        # log lines go through tqdm.write so they do not break the progress bars
        with logging_redirect_tqdm():
            summary = convert_dataset(args.classes_dir, args.percentage, args.use_no_logo,
                                      args.max_side_length, args.label_format,
                                      output_dir=args.output, images_subdir=args.images_subdir,
                                      annotations_subdir=args.annotations_subdir,
                                      progress=not args.no_progress)
    except ConversionError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("File system error: %s", e)
        return 1

    if not args.no_verify and not verify_output(summary.output_root):
        logger.warning("Parsed dataset in %s is not consistent, see above", summary.output_root)

    logger.info("Dataset conversion complete!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
