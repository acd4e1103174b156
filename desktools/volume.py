"""Mixer volume component using the OSS mixer interface."""

import fcntl
import os
import struct

from .util import warn

_INT = struct.Struct("i")
# _IOR('M', nr, int)
_IOR_M_INT = 0x80044D00
_SOUND_MIXER_READ_DEVMASK = _IOR_M_INT | 0xFE
_SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)


def _read_int(fd, request):
    return _INT.unpack(fcntl.ioctl(fd, request, _INT.pack(0)))[0]


def vol_perc(card):
    """Return the master volume of the mixer device ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror}")
        return None

    value = None
    try:
        try:
            devmask = _read_int(fd, _SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror}")
            return None
        for index, name in enumerate(_SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    value = _read_int(fd, _IOR_M_INT | index)
                except OSError as exc:
                    warn(f"ioctl 'MIXER_READ({index})': {exc.strerror}")
                    return None
    finally:
        os.close(fd)

    if value is None:
        return None
    return str(value & 0xFF)