"""Network components: transfer speeds, interface addresses and wireless link data."""

import array
import fcntl
import os
import re
import socket
import struct

import psutil

from .util import fmt_human, read_file, warn

NET_ROOT = "/sys/class/net"
PROC_WIRELESS = "/proc/net/wireless"
DEFAULT_INTERVAL = 1000

_UINT = re.compile(r"\s*\+?(\d+)")
_LINK_QUALITY = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")
_COUNTER_MOD = 2 ** 64
_LINE_MAX = 1022
_IFNAMSIZ = 16
_IWREQ_SIZE = 32
_IW_ESSID_MAX_SIZE = 32
_SIOCGIWESSID = 0x8B1B
_IWREQ = struct.Struct("16sPHH")


def _scan_uint(text):
    if text is None:
        return None
    found = _UINT.match(text)
    return int(found.group(1)) if found else None


class NetSpeed:
    """Bytes per second moved through an interface between two successive calls."""

    def __init__(self, counter, interval=DEFAULT_INTERVAL, root=NET_ROOT):
        self.counter = counter
        self.interval = interval
        self.root = root
        self._bytes = 0

    def __call__(self, interface):
        """Return the speed since the last call, or None on the first reading."""
        previous = self._bytes
        path = os.path.join(self.root, interface, "statistics", self.counter)
        value = _scan_uint(read_file(path))
        if value is None:
            return None
        self._bytes = value
        if previous == 0:
            return None
        delta = (value - previous) % _COUNTER_MOD
        return fmt_human((delta * 1000 % _COUNTER_MOD) // self.interval, 1024)


_rx = NetSpeed("rx_bytes")
_tx = NetSpeed("tx_bytes")


def netspeed_rx(interface):
    """Return the receive speed of ``interface``."""
    return _rx(interface)


def netspeed_tx(interface):
    """Return the transmit speed of ``interface``."""
    return _tx(interface)


def _ip(interface, family):
    try:
        addresses = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc.strerror}")
        return None
    for address in addresses.get(interface, ()):
        if address.family == family:
            return address.address
    return None


def ipv4(interface):
    """Return the first IPv4 address of ``interface``."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface):
    """Return the first IPv6 address of ``interface``."""
    return _ip(interface, socket.AF_INET6)


def rssi_to_perc(rssi):
    """Map a signal strength in dBm to a percentage."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def wifi_perc(interface, root=NET_ROOT, proc_path=PROC_WIRELESS):
    """Return the link quality of a wireless interface that is up, in percent."""
    operstate = os.path.join(root, interface, "operstate")
    try:
        with open(operstate, encoding="utf-8", errors="replace", newline="") as fh:
            status = fh.readline(4)
    except OSError as exc:
        warn(f"fopen '{operstate}': {exc.strerror}")
        return None
    if status != "up\n":
        return None

    try:
        with open(proc_path, encoding="utf-8", errors="replace", newline="") as fh:
            lines = []
            for _ in range(3):
                line = fh.readline(_LINE_MAX)
                if not line:
                    break
                lines.append(line)
    except OSError as exc:
        warn(f"fopen '{proc_path}': {exc.strerror}")
        return None
    if len(lines) < 3:
        return None

    data = lines[2]
    start = data.find(interface)
    if start == -1:
        return None
    found = _LINK_QUALITY.match(data[start + len(interface) + 2:])
    if not found:
        return None
    # 70 is the maximum link quality the kernel reports
    return str(int(int(found.group(1)) / 70 * 100))


def wifi_essid(interface):
    """Return the ESSID the wireless interface is associated with."""
    name = interface.encode()
    if len(name) >= _IFNAMSIZ:
        warn("vsnprintf: Output truncated")
        return None

    essid = array.array("B", bytes(_IW_ESSID_MAX_SIZE + 1))
    address, length = essid.buffer_info()
    request = _IWREQ.pack(name, address, length, 0).ljust(_IWREQ_SIZE, b"\0")
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror}")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), _SIOCGIWESSID, request)
        except OSError as exc:
            warn(f"ioctl 'SIOCGIWESSID': {exc.strerror}")
            return None

    raw = essid.tobytes().split(b"\0", 1)[0]
    return raw.decode("utf-8", errors="replace") or None