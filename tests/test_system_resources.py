import pytest

from hyprline.system_resources import (
    CpuStats,
    LinuxSystemResources,
    parse_cpu_stats,
    parse_memory_info,
)

MEMINFO = "MemTotal:        2097152 kB\nMemFree:          100 kB\nMemAvailable:    1048576 kB\n"


def test_parse_cpu_stats_sums_counters():
    stats = parse_cpu_stats("cpu  1 2 3 4 5\ncpu0 1 1 1 1 1\n")
    assert stats == CpuStats(total=15, idle=4)


def test_parse_cpu_stats_skips_unparsable_fields():
    assert parse_cpu_stats("cpu 1 x 2 3 4") == parse_cpu_stats("cpu 1 2 3 4")


@pytest.mark.parametrize(
    "text",
    ["", "cpu0 1 2 3 4\n", "cpu 1 2 3\n", "intr 1 2 3 4\ncpu 1 2 3 4\n"],
)
def test_parse_cpu_stats_rejects(text):
    assert parse_cpu_stats(text) is None


def test_parse_memory_info_worked_example():
    assert parse_memory_info(MEMINFO) == (50.0, 1.0, 2.0)


def test_parse_memory_info_invariants():
    usage, used_gb, total_gb = parse_memory_info("MemTotal: 8000 kB\nMemAvailable: 3000 kB\n")
    assert usage == pytest.approx(used_gb / total_gb * 100.0)
    assert total_gb * 1024 * 1024 == pytest.approx(8000)
    assert used_gb * 1024 * 1024 == pytest.approx(5000)


def test_parse_memory_info_zero_total():
    assert parse_memory_info("MemTotal: 0 kB\nMemAvailable: 0 kB\n") == (0.0, 0.0, 0.0)


def test_parse_memory_info_available_above_total_saturates():
    usage, used_gb, _ = parse_memory_info("MemTotal: 100 kB\nMemAvailable: 500 kB\n")
    assert usage == 0.0
    assert used_gb == 0.0


@pytest.mark.parametrize(
    "text",
    ["MemTotal: 100 kB\n", "MemAvailable: 100 kB\n", "MemTotal: abc kB\nMemAvailable: 1 kB\n", ""],
)
def test_parse_memory_info_missing(text):
    assert parse_memory_info(text) is None


@pytest.fixture
def proc(tmp_path):
    stat = tmp_path / "stat"
    meminfo = tmp_path / "meminfo"
    stat.write_text("cpu 100 0 100 800\n")
    meminfo.write_text(MEMINFO)
    return stat, meminfo


def test_first_cpu_reading_is_zero(proc):
    stat, meminfo = proc
    assert LinuxSystemResources(stat, meminfo).cpu_usage() == 0.0


def test_all_idle_is_zero_usage(proc):
    stat, meminfo = proc
    resources = LinuxSystemResources(stat, meminfo)
    resources.cpu_usage()
    stat.write_text("cpu 100 0 100 1800\n")
    assert resources.cpu_usage() == 0.0


def test_no_idle_is_full_usage(proc):
    stat, meminfo = proc
    resources = LinuxSystemResources(stat, meminfo)
    resources.cpu_usage()
    stat.write_text("cpu 600 0 600 800\n")
    assert resources.cpu_usage() == 100.0


def test_unchanged_counters_give_zero(proc):
    stat, meminfo = proc
    resources = LinuxSystemResources(stat, meminfo)
    resources.cpu_usage()
    assert resources.cpu_usage() == 0.0


def test_mixed_usage_is_within_bounds(proc):
    stat, meminfo = proc
    resources = LinuxSystemResources(stat, meminfo)
    resources.cpu_usage()
    stat.write_text("cpu 300 5 150 1000\n")
    usage = resources.cpu_usage()
    assert 0.0 < usage < 100.0


def test_get_resources_reports_memory(proc):
    stat, meminfo = proc
    result = LinuxSystemResources(stat, meminfo).get_resources()
    assert (result.memory_usage, result.memory_used_gb, result.memory_total_gb) == parse_memory_info(
        MEMINFO
    )
    assert result.cpu_usage == 0.0


def test_get_resources_without_meminfo_is_none(proc, tmp_path):
    stat, _ = proc
    assert LinuxSystemResources(stat, tmp_path / "missing").get_resources() is None


def test_missing_stat_gives_zero_cpu(proc, tmp_path):
    _, meminfo = proc
    result = LinuxSystemResources(tmp_path / "missing", meminfo).get_resources()
    assert result.cpu_usage == 0.0
    assert result.memory_total_gb == parse_memory_info(MEMINFO)[2]