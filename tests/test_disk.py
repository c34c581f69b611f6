import pytest

from slmon.components.disk import disk_free, disk_perc, disk_total, disk_used

UNITS = {"", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"}


@pytest.mark.parametrize("func", [disk_free, disk_total, disk_used])
def test_sizes_have_human_shape(func, tmp_path):
    value, sep, unit = func(tmp_path).partition(" ")
    assert sep == " "
    assert unit in UNITS
    whole, dot, frac = value.partition(".")
    assert dot == "."
    assert whole.isdigit()
    assert len(frac) == 1


@pytest.mark.parametrize("func", [disk_free, disk_perc, disk_total, disk_used])
def test_missing_path_is_none(func, tmp_path):
    assert func(tmp_path / "missing") is None


def test_perc_in_range(tmp_path):
    value = int(disk_perc(tmp_path))
    assert 0 <= value <= 100