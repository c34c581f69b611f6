import pytest

from slmon.components import memory
from slmon.util import fmt_human


def _meminfo_text(fields):
    return "".join(f"{name}:{value:>16} kB\n" for name, value in fields.items())


SAMPLE = {
    "MemTotal": 16 * 1024 * 1024,
    "MemFree": 4 * 1024 * 1024,
    "MemAvailable": 9 * 1024 * 1024,
    "Buffers": 512 * 1024,
    "Cached": 3 * 1024 * 1024,
    "SwapCached": 2048,
    "SwapTotal": 8 * 1024 * 1024,
    "SwapFree": 6 * 1024 * 1024,
}


@pytest.fixture
def meminfo(tmp_path, monkeypatch):
    def write(fields):
        path = tmp_path / "meminfo"
        path.write_text(_meminfo_text(fields))
        monkeypatch.setattr(memory, "MEMINFO", str(path))
        return path

    return write


def test_parse_meminfo_round_trip():
    assert memory.parse_meminfo(_meminfo_text(SAMPLE)) == SAMPLE


def test_parse_meminfo_skips_malformed_lines():
    text = "garbage line\nMemTotal: 100 kB\nHugePages_Total:       0\nBad: x kB\n"
    assert memory.parse_meminfo(text) == {"MemTotal": 100, "HugePages_Total": 0}


def test_ram_free_uses_available(meminfo):
    meminfo(SAMPLE)
    assert memory.ram_free() == fmt_human(SAMPLE["MemAvailable"] * 1024, 1024)


def test_ram_total_in_whole_gib(meminfo):
    meminfo(SAMPLE)
    assert memory.ram_total() == "16G"


def test_ram_used_and_perc_consistent(meminfo):
    meminfo(SAMPLE)
    used = memory.ram_used()
    assert used.endswith("G")
    assert int(used[:-1]) <= int(memory.ram_total()[:-1])
    perc = int(memory.ram_perc())
    assert 0 <= perc <= 100


def test_ram_perc_zero_total(meminfo):
    fields = dict(SAMPLE, MemTotal=0, MemFree=0, Buffers=0, Cached=0)
    meminfo(fields)
    assert memory.ram_perc() is None


def test_ram_missing_fields(meminfo):
    meminfo({"MemTotal": 1024})
    assert memory.ram_used() is None
    assert memory.ram_perc() is None
    assert memory.ram_free() is None


def test_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(memory, "MEMINFO", str(tmp_path / "absent"))
    assert memory.ram_total() is None
    assert memory.swap_total() is None


def test_swap_total_and_free(meminfo):
    meminfo(SAMPLE)
    assert memory.swap_total() == fmt_human(SAMPLE["SwapTotal"] * 1024, 1024)
    assert memory.swap_free() == fmt_human(SAMPLE["SwapFree"] * 1024, 1024)


def test_swap_used_all_free(meminfo):
    meminfo(dict(SAMPLE, SwapFree=SAMPLE["SwapTotal"], SwapCached=0))
    assert memory.swap_used() == fmt_human(0, 1024)


def test_swap_perc_half(meminfo):
    meminfo(dict(SAMPLE, SwapTotal=1000, SwapFree=500, SwapCached=0))
    assert memory.swap_perc() == "50"


def test_swap_perc_no_swap(meminfo):
    meminfo(dict(SAMPLE, SwapTotal=0, SwapFree=0, SwapCached=0))
    assert memory.swap_perc() is None


def test_swap_perc_in_range(meminfo):
    meminfo(SAMPLE)
    assert 0 <= int(memory.swap_perc()) <= 100