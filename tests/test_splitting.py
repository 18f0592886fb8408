import math

import pytest

from FlickrLogos_parser.splitting import TRAIN, VAL, DatasetSplitter


@pytest.mark.parametrize("n", [0, 1, 7, 10, 40, 73])
@pytest.mark.parametrize("percentage", [0.0, 0.1, 0.25, 0.5, 0.75, 1.0])
def test_val_is_the_trailing_floor_share(n, percentage):
    images = [f"{i}.jpg" for i in range(n)]
    splits = [s for _, s in DatasetSplitter(percentage).split(images)]

    n_val = math.floor(n * percentage)
    assert splits == [TRAIN] * (n - n_val) + [VAL] * n_val


def test_split_keeps_listing_order_and_is_repeatable():
    splitter = DatasetSplitter(0.2)
    images = ["b.jpg", "a.jpg", "c.jpg", "e.jpg", "d.jpg"]
    first = splitter.split(images)

    assert [img for img, _ in first] == images
    assert first == splitter.split(images)
    assert first[-1] == ("d.jpg", VAL)


def test_counter_resets_per_class():
    splitter = DatasetSplitter(0.5)
    assert splitter.start_class(4) == (2, 2)
    assert [splitter.next_split() for _ in range(4)] == [TRAIN, TRAIN, VAL, VAL]

    assert splitter.start_class(2) == (1, 1)
    assert [splitter.next_split() for _ in range(2)] == [TRAIN, VAL]


def test_percentage_above_one_puts_everything_in_val():
    splitter = DatasetSplitter(1.5)
    assert splitter.test_count(4) == 4
    assert [s for _, s in splitter.split(range(4))] == [VAL] * 4


def test_negative_percentage_is_rejected():
    with pytest.raises(ValueError):
        DatasetSplitter(-0.1)
