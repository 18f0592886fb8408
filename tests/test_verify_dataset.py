from FlickrLogos_parser.verify_dataset import main, unpaired_stems, verify_output, verify_split


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


def _layout(root, train=("a", "b"), val=("c",)):
    for split, stems in (("train", train), ("val", val)):
        for stem in stems:
            _touch(root / split / "images" / f"{stem}.png")
            _touch(root / split / "labels" / f"{stem}.txt")
    return root


def test_consistent_dataset(tmp_path):
    root = _layout(tmp_path / "parsed")
    assert unpaired_stems(root, "train") == (set(), set())
    assert verify_output(root)
    assert main(["--dataset", str(root)]) == 0


def test_missing_label_is_reported(tmp_path, caplog):
    root = _layout(tmp_path / "parsed")
    (root / "train" / "labels" / "a.txt").unlink()

    assert unpaired_stems(root, "train") == ({"a"}, set())
    assert not verify_split(root, "train")
    assert "a.png has no a.txt" in caplog.text
    assert not verify_output(root)


def test_missing_image_is_reported(tmp_path, caplog):
    root = _layout(tmp_path / "parsed")
    (root / "val" / "images" / "c.png").unlink()

    assert unpaired_stems(root, "val") == (set(), {"c"})
    assert not verify_output(root)
    assert "c.txt has no c.png" in caplog.text


def test_every_split_is_checked_after_a_failure(tmp_path, caplog):
    root = _layout(tmp_path / "parsed")
    (root / "train" / "labels" / "a.txt").unlink()
    (root / "val" / "images" / "c.png").unlink()

    assert not verify_output(root)
    assert "a.png has no a.txt" in caplog.text
    assert "c.txt has no c.png" in caplog.text


def test_missing_split_directory(tmp_path):
    root = _layout(tmp_path / "parsed", val=())
    assert not verify_split(root, "val")
    assert not verify_output(root)
    assert main(["--dataset", str(root)]) == 1
