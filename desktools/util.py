"""Shared helpers for the status components: warnings, number formatting, file reading."""

import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}


def warn(message):
    """Write a warning line to standard error."""
    print(message, file=sys.stderr)


def fmt_human(num, base):
    """Format ``num`` with one decimal and an SI (1000) or IEC (1024) prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_file(path):
    """Return the text of ``path``, or None (after a warning) if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as fh:
            return fh.read()
    except OSError as exc:
        warn(f"open '{path}': {exc.strerror}")
        return None