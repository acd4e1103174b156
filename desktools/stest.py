"""Filter a list of files by properties, like test(1) applied to many files."""

import os
import stat
import sys
from dataclasses import dataclass, field
from typing import Optional, Tuple

_FLAGS = "abcdefghlpqrsuvwx"
_PATH_MAX = 4096
_USAGE = "usage: stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"


@dataclass(frozen=True)
class Options:
    """Parsed command line: test flags, reference times and the files to test."""

    flags: frozenset = frozenset()
    newer: Optional[int] = None
    older: Optional[int] = None
    paths: Tuple[str, ...] = field(default_factory=tuple)


def _mtime(st):
    return st.st_mtime_ns // 1_000_000_000


def parse_args(argv):
    """Parse options; raise ValueError on an unknown flag or a missing file argument."""
    args = list(argv)
    flags = set()
    times = {"n": None, "o": None}
    i = 0
    while i < len(args) and args[i].startswith("-") and len(args[i]) > 1:
        arg = args[i]
        if arg == "--":
            i += 1
            break
        for pos in range(1, len(arg)):
            char = arg[pos]
            if char in times:
                rest = arg[pos + 1:]
                if rest:
                    reference = rest
                elif i + 1 < len(args):
                    i += 1
                    reference = args[i]
                else:
                    raise ValueError(f"option -{char} requires a file")
                try:
                    times[char] = _mtime(os.stat(reference))
                except OSError as exc:
                    print(f"{reference}: {exc.strerror}", file=sys.stderr)
                    times[char] = None
                break
            if char not in _FLAGS:
                raise ValueError(f"unknown option -{char}")
            flags.add(char)
        i += 1
    return Options(frozenset(flags), times["n"], times["o"], tuple(args[i:]))


def _passes(path, name, options, st):
    flags = options.flags
    mode = st.st_mode
    checks = (
        ("a" in flags or not name.startswith(".")),
        ("b" not in flags or stat.S_ISBLK(mode)),
        ("c" not in flags or stat.S_ISCHR(mode)),
        ("d" not in flags or stat.S_ISDIR(mode)),
        ("e" not in flags or os.access(path, os.F_OK)),
        ("f" not in flags or stat.S_ISREG(mode)),
        ("g" not in flags or bool(mode & stat.S_ISGID)),
        ("h" not in flags or os.path.islink(path)),
        (options.newer is None or _mtime(st) > options.newer),
        (options.older is None or _mtime(st) < options.older),
        ("p" not in flags or stat.S_ISFIFO(mode)),
        ("r" not in flags or os.access(path, os.R_OK)),
        ("s" not in flags or st.st_size > 0),
        ("u" not in flags or bool(mode & stat.S_ISUID)),
        ("w" not in flags or os.access(path, os.W_OK)),
        ("x" not in flags or os.access(path, os.X_OK)),
    )
    return all(checks)


def matches(path, name, options):
    """Tell whether ``path`` passes every requested test, inverted by -v."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        ok = False
    else:
        ok = _passes(path, name, options, st)
    return ok != ("v" in options.flags)


def _candidates(options):
    if not options.paths:
        for line in sys.stdin:
            if line.endswith("\n"):
                line = line[:-1]
            yield line, line
        return
    for arg in options.paths:
        if "l" in options.flags:
            try:
                names = os.listdir(arg)
            except OSError:
                yield arg, arg
                continue
            for name in [".", ".."] + names:
                path = f"{arg}/{name}"
                if len(os.fsencode(path)) < _PATH_MAX:
                    yield path, name
        else:
            yield arg, arg


def main(argv=None):
    """Print the names that pass; return 0 on a match, 1 on none, 2 on a usage error."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ValueError:
        print(_USAGE, file=sys.stderr)
        return 2

    found = False
    for path, name in _candidates(options):
        if matches(path, name, options):
            if "q" in options.flags:
                return 0
            found = True
            print(name)
    sys.stdout.flush()
    return 0 if found else 1


if __name__ == "__main__":
    sys.exit(main())