"""
Convenience re-exports so callers can simply:
    from FlickrLogos_parser import convert_dataset, ClassRegistry, ...
"""

from .bboxes import DarknetBox, KittiBox, RawBox, parse_bbox_line, to_darknet, to_kitti, transform_box
from .classes import ClassEntry, ClassRegistry, capitalize_first
from .converter import ConversionSummary, ImageRecord, convert_dataset, output_dir_for
from .exceptions import AnnotationError, ConfigurationError, ConversionError
from .scaling import compute_scale, scale_image
from .splitting import TRAIN, VAL, DatasetSplitter
from .storage import LocalStorage
from .verify_dataset import verify_output
from .writer import LabelWriter

__all__ = [
    # boxes
    "RawBox", "KittiBox", "DarknetBox", "parse_bbox_line", "to_kitti", "to_darknet", "transform_box",
    # classes / split / scale
    "ClassEntry", "ClassRegistry", "capitalize_first", "DatasetSplitter", "TRAIN", "VAL",
    "compute_scale", "scale_image",
    # pipeline
    "convert_dataset", "output_dir_for", "ConversionSummary", "ImageRecord",
    "LabelWriter", "LocalStorage", "verify_output",
    # errors
    "ConversionError", "ConfigurationError", "AnnotationError",
]
