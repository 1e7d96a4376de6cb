import pytest

from slstatus.memory import (
    ram_free,
    ram_perc,
    ram_total,
    ram_used,
    swap_free,
    swap_perc,
    swap_total,
    swap_used,
)

MEMINFO = (
    "MemTotal:       16777216 kB\n"
    "MemFree:         4194304 kB\n"
    "MemAvailable:    8388608 kB\n"
    "Buffers:         1048576 kB\n"
    "Cached:          2097152 kB\n"
    "SwapCached:            0 kB\n"
    "Active:          3000000 kB\n"
    "SwapTotal:       2097152 kB\n"
    "SwapFree:        1048576 kB\n"
)


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO)
    return str(path)


def test_ram_total(meminfo):
    assert ram_total(None, meminfo) == "16G"


def test_ram_used(meminfo):
    assert ram_used(None, meminfo) == "9G"


def test_ram_free_reports_available(meminfo):
    assert ram_free(None, meminfo) == "8.0 Gi"


def test_ram_perc_within_bounds(meminfo):
    assert 0 <= int(ram_perc(None, meminfo)) <= 100


def test_ram_perc_zero_total(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO.replace("16777216", "0"))
    assert ram_perc(None, str(path)) is None


def test_ram_needs_fields_in_order(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 100 kB\nBuffers: 5 kB\n")
    assert ram_free(None, str(path)) is None
    assert ram_used(None, str(path)) is None


def test_ram_total_alone(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 0 kB\n")
    assert ram_total(None, str(path)) == "0G"


def test_ram_missing_file(tmp_path):
    assert ram_total(None, str(tmp_path / "absent")) is None


def test_swap_half_used_equals_free(meminfo):
    assert swap_used(None, meminfo) == swap_free(None, meminfo)


def test_swap_total_exceeds_parts(meminfo):
    total = swap_total(None, meminfo)
    assert total.endswith("Gi")
    assert float(total.split()[0]) > float(swap_free(None, meminfo).split()[0])


def test_swap_perc_within_bounds(meminfo):
    assert 0 <= int(swap_perc(None, meminfo)) <= 100


def test_swap_perc_without_swap(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("SwapCached: 0 kB\nSwapTotal: 0 kB\nSwapFree: 0 kB\n")
    assert swap_perc(None, str(path)) is None


def test_swap_missing_field(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("SwapTotal: 100 kB\n")
    assert swap_used(None, str(path)) is None
    assert swap_free(None, str(path)) is None


def test_swap_missing_file(tmp_path):
    assert swap_total(None, str(tmp_path / "absent")) is None