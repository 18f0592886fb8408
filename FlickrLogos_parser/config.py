from pathlib import Path

# === CONFIGURATION FILE FOR FLICKRLOGOS-32 TO KITTI / DARKNET CONVERSION ===

# Path to the FlickrLogos-32 classes directory containing the jpg/ and masks/ folders
CLASSES_DIR = Path("FlickrLogos-32plus_dataset_v2/FlickrLogos-v2/classes")

# Sub-folders of CLASSES_DIR: one folder per class below each of them
IMAGES_SUBDIR = "jpg"
ANNOTATIONS_SUBDIR = "masks"

# Companion annotation file of <name>.jpg is <name>.jpg.bboxes.txt
IMAGE_GLOB = "*.jpg"
ANNOTATION_SUFFIX = ".jpg.bboxes.txt"

# Images without any logo; optionally left out of the class ids
BACKGROUND_CLASS = "no-logo"
USE_NO_LOGO = False

# Fraction of every class moved into the validation split
VAL_PERCENTAGE = 0.1

# Longest image side after rescaling, in pixels
MAX_SIDE_LENGTH = 512

# Label format: "kitti" writes class names with pixel corners,
# "darknet" writes class ids with normalized center/size
LABEL_FORMAT = "kitti"
LABEL_FORMATS = ("kitti", "darknet")

# Output folder is <CLASSES_DIR>/<OUTPUT_PREFIX>_<side>_<format>
OUTPUT_PREFIX = "parsed32"
OUTPUT_IMAGE_EXT = ".png"
SPLITS = ("train", "val")

# Run-wide artifacts in the output root
CLASSES_FILE = "classes.txt"
TRUNCATION_FILE = "mayBeTruncated.txt"
TRUNCATION_HEADER = (
    "Please check the following files for truncation. The objects are marked as "
    "\"not truncated\" right now, but have their bounding box on the edge of the image."
)

# Base name of the Darknet .names/.data files
DARKNET_NAME = "flickrlogos"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
