"""Status line generator: renders components and sets the root window name or prints."""

import os
import re
import select
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional

from .network import DEFAULT_INTERVAL, wifi_essid
from .power import battery_perc
from .sysinfo import datetime, kernel_release
from .util import warn

INTERVAL = DEFAULT_INTERVAL
UNKNOWN_STR = "f"
MAXLEN = 2048

_USAGE = "usage: slstatus [-s] [-1]"
_DIRECTIVE = re.compile(r"%(s|%)?")


@dataclass(frozen=True)
class Component:
    """A status item: a function, the format its result goes in, and its argument."""

    func: Callable[[Any], Optional[str]]
    fmt: str
    arg: Any = None


ARGS = (
    Component(battery_perc, "| %s% \U000f0079 | ", "BAT0"),
    Component(wifi_essid, "%s  | ", "wlp2s0"),
    Component(datetime, " %s | ", "%a %d %B  %I:%M %p"),
    Component(kernel_release, " %s", None),
)


def _format(fmt, value):
    return _DIRECTIVE.sub(lambda m: value if m.group(1) == "s" else "%", fmt)


def render(components, unknown=UNKNOWN_STR, maxlen=MAXLEN):
    """Join the formatted components, cut to fit ``maxlen - 1`` bytes."""
    parts = []
    used = 0
    for component in components:
        value = component.func(component.arg)
        if value is None:
            value = unknown
        piece = _format(component.fmt, value).encode("utf-8")
        room = maxlen - used
        if len(piece) >= room:
            warn("vsnprintf: Output truncated")
            parts.append(piece[:max(room - 1, 0)])
            break
        parts.append(piece)
        used += len(piece)
    return b"".join(parts).decode("utf-8", errors="ignore")


class _Options(NamedTuple):
    to_stdout: bool
    once: bool


def parse_args(argv):
    """Parse ``-s`` and ``-1``; raise ValueError on anything else."""
    args = list(argv)
    to_stdout = once = False
    i = 0
    while i < len(args) and args[i].startswith("-") and len(args[i]) > 1:
        arg = args[i]
        i += 1
        if arg == "--":
            break
        for char in arg[1:]:
            if char == "1":
                once = to_stdout = True
            elif char == "s":
                to_stdout = True
            else:
                raise ValueError(f"unknown option -{char}")
    if i < len(args):
        raise ValueError("unexpected argument")
    return _Options(to_stdout, once)


def _pad(length):
    return -length % 4


class _XConnection:
    """A minimal X11 client able to set the name of the root window."""

    _FAMILY_LOCAL = 256
    _FAMILY_WILD = 65535
    _COOKIE = b"MIT-MAGIC-COOKIE-1"
    _CHANGE_PROPERTY = 18
    _WM_NAME = 39
    _STRING = 31

    def __init__(self, display):
        host, number, screen = self._parse_display(display)
        local = host in ("", "unix")
        self._sock = self._connect(host, number, local)
        try:
            self.root = self._handshake(self._read_auth(number, local), screen)
        except BaseException:
            self._sock.close()
            raise

    @staticmethod
    def _parse_display(display):
        if not display:
            raise ValueError("no display")
        host, sep, rest = display.rpartition(":")
        if not sep:
            raise ValueError(f"bad display {display!r}")
        number, _, screen = rest.partition(".")
        return host, int(number), int(screen or 0)

    @staticmethod
    def _connect(host, number, local):
        if not local:
            return socket.create_connection((host, 6000 + number))
        path = f"/tmp/.X11-unix/X{number}"
        candidates = [path]
        if sys.platform.startswith("linux"):
            candidates.append("\0" + path)
        error = None
        for candidate in candidates:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(candidate)
                return sock
            except OSError as exc:
                sock.close()
                error = exc
        raise error

    def _read_auth(self, number, local):
        path = os.environ.get("XAUTHORITY") or os.path.join(
            os.path.expanduser("~"), ".Xauthority"
        )
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError:
            return b"", b""
        hostname = socket.gethostname().encode()
        wanted = str(number).encode()
        pos = 0
        while pos + 2 <= len(data):
            family = int.from_bytes(data[pos:pos + 2], "big")
            pos += 2
            fields = []
            for _ in range(4):
                length = int.from_bytes(data[pos:pos + 2], "big")
                pos += 2
                fields.append(data[pos:pos + length])
                pos += length
            if pos > len(data):
                break
            address, display, name, cookie = fields
            if name != self._COOKIE or display not in (b"", wanted):
                continue
            is_local = family == self._FAMILY_WILD or (
                family == self._FAMILY_LOCAL and address == hostname
            )
            if is_local == local or family == self._FAMILY_WILD:
                return name, cookie
        return b"", b""

    def _recv_exact(self, size):
        chunks = []
        while size:
            chunk = self._sock.recv(size)
            if not chunk:
                raise ConnectionError("X server closed the connection")
            chunks.append(chunk)
            size -= len(chunk)
        return b"".join(chunks)

    def _handshake(self, auth, screen):
        name, cookie = auth
        request = (
            struct.pack("<BxHHHHxx", 0x6C, 11, 0, len(name), len(cookie))
            + name + bytes(_pad(len(name)))
            + cookie + bytes(_pad(len(cookie)))
        )
        self._sock.sendall(request)
        header = self._recv_exact(8)
        (extra,) = struct.unpack_from("<H", header, 6)
        body = self._recv_exact(extra * 4)
        if header[0] != 1:
            reason = body[:header[1]].decode("latin-1", errors="replace")
            raise ConnectionError(f"X server refused connection: {reason}")

        (vendor_len,) = struct.unpack_from("<H", body, 16)
        n_screens, n_formats = body[20], body[21]
        if screen >= n_screens:
            raise ConnectionError(f"no screen {screen}")
        offset = 32 + vendor_len + _pad(vendor_len) + 8 * n_formats
        for _ in range(screen):
            n_depths = body[offset + 39]
            offset += 40
            for _ in range(n_depths):
                (n_visuals,) = struct.unpack_from("<H", body, offset + 2)
                offset += 8 + 24 * n_visuals
        (root,) = struct.unpack_from("<I", body, offset)
        return root

    def set_root_name(self, data):
        """Replace WM_NAME of the root window with ``data``."""
        padding = _pad(len(data))
        request = struct.pack(
            "<BBHIIIBxxxI",
            self._CHANGE_PROPERTY, 0, 6 + (len(data) + padding) // 4,
            self.root, self._WM_NAME, self._STRING, 8, len(data),
        ) + data + bytes(padding)
        self._sock.sendall(request)

    def close(self):
        self._sock.close()


class _SignalWaiter:
    """Sleeps that SIGUSR1 cuts short and SIGINT or SIGTERM end the loop after."""

    _SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)

    def __init__(self):
        self.done = False
        self._read = self._write = None
        self._saved = {}
        self._saved_fd = -1

    def _handle(self, signo, frame):
        if signo != signal.SIGUSR1:
            self.done = True

    def __enter__(self):
        if threading.current_thread() is not threading.main_thread():
            return self
        self._read, self._write = os.pipe()
        os.set_blocking(self._write, False)
        self._saved_fd = signal.set_wakeup_fd(self._write)
        for signo in self._SIGNALS:
            self._saved[signo] = signal.signal(signo, self._handle)
        return self

    def wait(self, timeout):
        if self._read is None:
            time.sleep(timeout)
            return
        ready, _, _ = select.select([self._read], [], [], timeout)
        if ready:
            os.read(self._read, 512)

    def __exit__(self, *exc_info):
        if self._read is None:
            return False
        for signo, handler in self._saved.items():
            signal.signal(signo, signal.SIG_DFL if handler is None else handler)
        signal.set_wakeup_fd(self._saved_fd)
        os.close(self._read)
        os.close(self._write)
        return False


def main(argv=None):
    """Run the status loop; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ValueError:
        warn(_USAGE)
        return 1

    display = None
    if not options.to_stdout:
        try:
            display = _XConnection(os.environ.get("DISPLAY"))
        except (OSError, ValueError):
            warn("XOpenDisplay: Failed to open display")
            return 1

    try:
        with _SignalWaiter() as waiter:
            while True:
                start = time.monotonic()
                status = render(ARGS, UNKNOWN_STR, MAXLEN)
                try:
                    if display is None:
                        print(status, flush=True)
                    else:
                        display.set_root_name(status.encode("utf-8"))
                except OSError as exc:
                    warn(f"{'puts' if display is None else 'XStoreName'}: {exc.strerror}")
                    return 1
                if options.once or waiter.done:
                    break
                remaining = INTERVAL / 1000 - (time.monotonic() - start)
                if remaining >= 0:
                    waiter.wait(remaining)
                if waiter.done:
                    break
        if display is not None:
            try:
                display.set_root_name(b"")
            except OSError as exc:
                warn(f"XStoreName: {exc.strerror}")
                return 1
    finally:
        if display is not None:
            display.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())