"""
Darknet training side-files for a parsed dataset.

Outputs include:
- train.txt / val.txt listing the images of each split
- <name>.names with one class per line
- <name>.data pointing darknet at the files above
"""

from pathlib import Path
from typing import Dict, List, Optional

from .config import DARKNET_NAME, OUTPUT_IMAGE_EXT, SPLITS
from .storage import LocalStorage
from .writer import images_dir, labels_dir


def generate_split_txt(img_dir: Path, label_dir: Path, output_txt: Path,
                       storage: Optional[LocalStorage] = None) -> int:
    """Create a split .txt file listing image paths that have a label. Returns the count."""
    storage = storage or LocalStorage()
    lines = []
    for img_file in storage.list_files(img_dir, f"*{OUTPUT_IMAGE_EXT}"):
        label_file = Path(label_dir) / f"{img_file.stem}.txt"
        if label_file.exists():
            lines.append(str(img_file.resolve()))
    storage.write_text(output_txt, "".join(line + "\n" for line in lines))
    return len(lines)


def generate_darknet_files(output_dir: Path, split_txts: Dict[str, Path], class_names: List[str],
                           name: str = DARKNET_NAME, storage: Optional[LocalStorage] = None) -> Dict[str, Path]:
    """Generate .names and .data files for darknet training."""
    storage = storage or LocalStorage()
    output_dir = Path(output_dir)
    names_path = output_dir / f"{name}.names"
    data_path = output_dir / f"{name}.data"

    storage.write_text(names_path, "".join(n + "\n" for n in class_names))
    storage.write_text(data_path, (
        f"classes = {len(class_names)}\n"
        f"train = {split_txts['train']}\n"
        f"valid = {split_txts['val']}\n"
        f"names = {names_path}\n"
        f"backup = {output_dir / 'backup'}\n"
    ))
    return {"names": names_path, "data": data_path}


def write_darknet_files(output_root: Path, class_names: List[str],
                        storage: Optional[LocalStorage] = None) -> Dict[str, Path]:
    output_root = Path(output_root)
    split_txts = {}
    for split in SPLITS:
        split_txt = output_root / f"{split}.txt"
        generate_split_txt(images_dir(output_root, split), labels_dir(output_root, split),
                           split_txt, storage=storage)
        split_txts[split] = split_txt.resolve()

    files = generate_darknet_files(output_root.resolve(), split_txts, class_names, storage=storage)
    files.update(split_txts)
    return files
