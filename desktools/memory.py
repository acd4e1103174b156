"""CPU, RAM and swap usage components read from the kernel's proc files."""

import re

from .util import fmt_human, read_file

PROC_STAT = "/proc/stat"
MEMINFO = "/proc/meminfo"
CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"

_MEM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
_UINT = re.compile(r"\s*\+?(\d+)")
_LONG = re.compile(r"\s*([+-]?\d+)")
# user nice system idle iowait irq softirq: all but idle and iowait count as busy
_BUSY = (0, 1, 2, 5, 6)


def _cdiv(num, den):
    """Integer division truncating toward zero."""
    quotient = abs(num) // abs(den)
    return quotient if (num >= 0) == (den > 0) else -quotient


def _read_cpu_times(path):
    text = read_file(path)
    if text is None:
        return None
    tokens = text.split()
    if len(tokens) < 8:
        return None
    try:
        return tuple(float(token) for token in tokens[1:8])
    except ValueError:
        return None


class CpuUsage:
    """CPU usage in percent between two successive readings of the stat file."""

    def __init__(self, stat_path=PROC_STAT):
        self.stat_path = stat_path
        self._previous = None

    def perc(self, arg=None):
        """Return the busy share since the last call, or None on the first call."""
        current = _read_cpu_times(self.stat_path)
        if current is None:
            return None
        previous, self._previous = self._previous, current
        if previous is None or previous[0] == 0:
            return None

        total = sum(current) - sum(previous)
        if total == 0:
            return None
        busy = sum(current[i] for i in _BUSY) - sum(previous[i] for i in _BUSY)
        return str(int(100 * busy / total))


_cpu = CpuUsage()


def cpu_perc(arg=None):
    """Return the system-wide CPU usage in percent."""
    return _cpu.perc(arg)


def cpu_freq(arg=None, path=CPU_FREQ):
    """Return the current frequency of the first CPU."""
    text = read_file(path)
    if text is None:
        return None
    found = _UINT.match(text)
    if not found:
        return None
    return fmt_human(int(found.group(1)) * 1000, 1000)


def _meminfo(path, count):
    """Read the first ``count`` leading fields of meminfo, which must appear in order."""
    text = read_file(path)
    if text is None:
        return None
    pattern = "".join(rf"\s*{name}:\s*\+?(\d+)\s*kB" for name in _MEM_FIELDS[:count])
    found = re.match(pattern, text)
    return [int(group) for group in found.groups()] if found else None


def ram_free(arg=None, path=MEMINFO):
    """Return the available memory."""
    fields = _meminfo(path, 3)
    if fields is None:
        return None
    return fmt_human(fields[2] * 1024, 1024)


def ram_perc(arg=None, path=MEMINFO):
    """Return the used memory in percent, buffers and cache not counted."""
    fields = _meminfo(path, 5)
    if fields is None:
        return None
    total, free, _available, buffers, cached = fields
    if total == 0:
        return None
    return str(_cdiv(100 * ((total - free) - (buffers + cached)), total))


def ram_total(arg=None, path=MEMINFO):
    """Return the total memory."""
    fields = _meminfo(path, 1)
    if fields is None:
        return None
    return fmt_human(fields[0] * 1024, 1024)


def ram_used(arg=None, path=MEMINFO):
    """Return the used memory, buffers and cache not counted."""
    fields = _meminfo(path, 5)
    if fields is None:
        return None
    total, free, _available, buffers, cached = fields
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def _swap_info(path, *names):
    """Return the requested Swap* fields of meminfo, or None if any is missing."""
    text = read_file(path)
    if text is None:
        return None
    wanted = set(names)
    values = {}
    for line in text.splitlines():
        if not wanted:
            break
        for name in ("SwapTotal", "SwapFree", "SwapCached"):
            if name in wanted and line.startswith(name):
                wanted.discard(name)
                found = _LONG.match(line[len(name) + 1:])
                if found:
                    values[name] = int(found.group(1))
                break
    if any(name not in values for name in names):
        return None
    return values


def swap_free(arg=None, path=MEMINFO):
    """Return the free swap space."""
    info = _swap_info(path, "SwapFree")
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(arg=None, path=MEMINFO):
    """Return the used swap space in percent, swap cache not counted."""
    info = _swap_info(path, "SwapTotal", "SwapFree", "SwapCached")
    if info is None or info["SwapTotal"] == 0:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return str(_cdiv(100 * used, info["SwapTotal"]))


def swap_total(arg=None, path=MEMINFO):
    """Return the total swap space."""
    info = _swap_info(path, "SwapTotal")
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(arg=None, path=MEMINFO):
    """Return the used swap space, swap cache not counted."""
    info = _swap_info(path, "SwapTotal", "SwapFree", "SwapCached")
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)