import pytest

from FlickrLogos_parser.bboxes import DarknetBox, KittiBox
from FlickrLogos_parser.config import TRUNCATION_HEADER
from FlickrLogos_parser.writer import LabelWriter, images_dir, labels_dir


def test_label_file_has_one_line_per_box_in_order(tmp_path):
    writer = LabelWriter(tmp_path)
    writer.make_dirs()
    path = writer.write_label("train", "1234", [
        KittiBox("Pepsi", 5, 5, 15, 20),
        KittiBox("Pepsi", 1, 2, 3, 4),
    ])

    assert path == tmp_path / "train" / "labels" / "1234.txt"
    assert path.read_text().splitlines() == [
        "Pepsi 0.00 0 0.0 5 5 15 20 0.0 0.0 0.0 0.0 0.0 0.0 0.0",
        "Pepsi 0.00 0 0.0 1 2 3 4 0.0 0.0 0.0 0.0 0.0 0.0 0.0",
    ]
    assert writer.boxes_written == 2


def test_empty_label_file(tmp_path):
    writer = LabelWriter(tmp_path)
    path = writer.write_label("val", "bg", [])
    assert path.read_text() == ""
    assert writer.labels_written == 1


def test_darknet_labels(tmp_path):
    writer = LabelWriter(tmp_path)
    path = writer.write_label("train", "x", [DarknetBox(2, 0.5, 0.25, 0.1, 0.2)])
    assert path.read_text() == "2 0.5 0.25 0.1 0.2\n"


def test_artifacts_are_written_on_close(tmp_path):
    with LabelWriter(tmp_path) as writer:
        for name in ["adidas", "bMW", "pepsi"]:
            writer.add_class(name)
        writer.flag_truncated("111")
        writer.flag_truncated("111")
        writer.flag_truncated("222")

    assert (tmp_path / "classes.txt").read_text() == "Adidas,BMW,Pepsi,"
    assert (tmp_path / "mayBeTruncated.txt").read_text().splitlines() == [
        TRUNCATION_HEADER, "111", "111", "222",
    ]


def test_no_classes_gives_empty_class_list(tmp_path):
    LabelWriter(tmp_path).close()
    assert (tmp_path / "classes.txt").read_text() == ""


def test_os_error_is_not_masked_by_close(tmp_path):
    with pytest.raises(OSError, match="disk full"):
        with LabelWriter(tmp_path) as writer:
            writer.add_class("pepsi")
            raise OSError("disk full")

    assert not (tmp_path / "classes.txt").exists()
    assert not (tmp_path / "mayBeTruncated.txt").exists()


def test_other_errors_still_write_artifacts(tmp_path):
    with pytest.raises(ValueError):
        with LabelWriter(tmp_path) as writer:
            writer.add_class("pepsi")
            raise ValueError("bad box")

    assert (tmp_path / "classes.txt").read_text() == "Pepsi,"


def test_layout_helpers_match_writer(tmp_path):
    writer = LabelWriter(tmp_path)
    assert writer.images_dir("val") == images_dir(tmp_path, "val") == tmp_path / "val" / "images"
    assert writer.labels_dir("train") == labels_dir(tmp_path, "train") == tmp_path / "train" / "labels"
