"""Simple system information components: files, time, disks, host and user data."""

import os
import pwd
import re
import socket
import subprocess
import sys
import time

from .util import fmt_human, read_file, warn

_LINE_MAX = 1022
_BUF_SIZE = 1024
_ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"
_UINT = re.compile(r"\s*\+?(\d+)")


def _scan_uint(text):
    if text is None:
        return None
    found = _UINT.match(text)
    return int(found.group(1)) if found else None


def _first_line(data):
    line = data[:_LINE_MAX]
    newline = line.find("\n")
    if newline != -1:
        line = line[:newline]
    return line or None


def _uptime_clock():
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME", "CLOCK_MONOTONIC"):
        if hasattr(time, name):
            return getattr(time, name)
    return None


def cat(path):
    """Return the first line of ``path`` without its newline, or None."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as fh:
            line = fh.readline(_LINE_MAX)
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror}")
        return None
    return _first_line(line)


def datetime(fmt):
    """Return the local time formatted with strftime ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= _BUF_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def _statvfs(path):
    try:
        return os.statvfs(path)
    except OSError as exc:
        warn(f"statvfs '{path}': {exc.strerror}")
        return None


def disk_free(path):
    """Return the space available to unprivileged users on the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path):
    """Return the used share of the filesystem in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path):
    """Return the total size of the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path):
    """Return the used space of the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def entropy(arg=None):
    """Return the kernel's available entropy; infinity where the system has no pool count."""
    if not sys.platform.startswith("linux"):
        return "\u221e"
    value = _scan_uint(read_file(_ENTROPY_AVAIL))
    return None if value is None else str(value)


def hostname(arg=None):
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostname: {exc.strerror}")
        return None


def kernel_release(arg=None):
    """Return the kernel release, as ``uname -r`` prints it."""
    try:
        return os.uname().release
    except OSError as exc:
        warn(f"uname: {exc.strerror}")
        return None


def load_avg(arg=None):
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path):
    """Return the number of entries in directory ``path``."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror}")
        return None
    return str(count)


def run_command(cmd):
    """Run ``cmd`` through the shell and return the first line it prints."""
    try:
        proc = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        warn(f"popen '{cmd}': {exc.strerror}")
        return None
    return _first_line(proc.stdout.decode("utf-8", errors="replace"))


def uptime(arg=None):
    """Return the system uptime as hours and minutes."""
    clock = _uptime_clock()
    try:
        seconds = int(time.clock_gettime(clock))
    except (OSError, TypeError):
        warn(f"clock_gettime {clock}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid(arg=None):
    """Return the real group id of the current process."""
    return str(os.getgid())


def uid(arg=None):
    """Return the effective user id of the current process."""
    return str(os.geteuid())


def username(arg=None):
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None


def temp(file):
    """Return the temperature in degrees Celsius read from a millidegree sensor file."""
    value = _scan_uint(read_file(file))
    return None if value is None else str(value // 1000)