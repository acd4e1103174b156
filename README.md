# desktools

Small tools for a minimal Linux desktop:

- **status components**, functions that each return one short piece of
  text about the system (battery, CPU, memory, disk, network, time and
  more), or `None` when the value cannot be read;
- a **status printer** that joins components into one line at a fixed
  interval and either prints it or sets it as the name of the X root
  window;
- a **file test filter** that prints the paths that pass a set of tests;
- the **matching and line-editing logic** of a type-to-filter menu.

## Installation

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## The status printer

```sh
desktools-status         # set the X root window name every second
desktools-status -s      # print the status line to standard output every second
desktools-status -1      # print the status line once, then exit
```

`-1` implies `-s`. Any other option or argument prints a usage line and
exits with status 1. Without `-s`, the printer connects to the display
named by `DISPLAY` (using the cookie from `XAUTHORITY` or
`~/.Xauthority`), writes each line to the root window's `WM_NAME`, and
clears it on exit.

SIGINT and SIGTERM end the loop after the current line; SIGUSR1 cuts the
wait short and refreshes the line at once.

The line is built from `desktools.slstatus.ARGS`, a tuple of
`desktools.slstatus.Component` entries, each pairing a component function
with a format (in which `%s` stands for the value and `%%` for a percent
sign) and an argument. By default it shows the battery charge of `BAT0`,
the ESSID of `wlp2s0`, the local date and time and the kernel release;
components that return `None` show as `f`.

`desktools.slstatus.render(components, unknown, maxlen)` builds one line
from such a list, putting `unknown` in place of any `None` result. If the
line would reach `maxlen` bytes, it is cut to `maxlen - 1` bytes, a
warning is written to standard error and the remaining components are
skipped.

## Components

Every component takes its main argument first (a path, an interface name,
a battery name, a format string, or an ignored placeholder) and returns a
string or `None`. Some accept a further keyword argument naming the file
or directory to read, which defaults to the usual place under `/proc` or
`/sys`.

| Module              | Functions |
|---------------------|-----------|
| `desktools.sysinfo` | `cat`, `datetime`, `disk_free`, `disk_perc`, `disk_total`, `disk_used`, `entropy`, `hostname`, `kernel_release`, `load_avg`, `num_files`, `run_command`, `uptime`, `gid`, `uid`, `username`, `temp` |
| `desktools.power`   | `battery_perc`, `battery_state`, `battery_remaining` (each also takes `root`, the power-supply directory) |
| `desktools.memory`  | `cpu_perc`, `cpu_freq`, `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` (all but `cpu_perc` also take `path`), and the `CpuUsage` sampler |
| `desktools.volume`  | `vol_perc` (an OSS mixer device such as `/dev/mixer`) |
| `desktools.network` | `netspeed_rx`, `netspeed_tx`, `ipv4`, `ipv6`, `wifi_perc`, `wifi_essid`, `rssi_to_perc`, and the `NetSpeed` sampler |

```python
from desktools import power, sysinfo, util

sysinfo.datetime("%F %T")        # e.g. "2024-05-01 12:30:00"
sysinfo.num_files("/tmp")        # number of entries, without "." and ".."
power.battery_state("BAT0")      # "+", "-", "o" or "?"
util.fmt_human(1536, 1024)       # "1.5 Ki"
```

Components that report a usage or a rate since the last call
(`cpu_perc`, `netspeed_rx`, `netspeed_tx`, and `CpuUsage.perc` and
`NetSpeed` instances) return `None` on their first call, because there is
nothing to compare with yet. `NetSpeed` takes the counter file name
(`rx_bytes` or `tx_bytes`) and the interval in milliseconds between calls.

`entropy` returns `∞` on systems other than Linux. `run_command` runs its
argument through the shell and returns the first line it prints.

Sizes are formatted by `desktools.util.fmt_human(num, base)` with one
decimal and a prefix: base 1000 gives `k`, `M`, `G`, …; base 1024 gives
`Ki`, `Mi`, `Gi`, …. Any other base raises `ValueError`. Warnings from
the components go to standard error through `desktools.util.warn`.

## The file test filter

```sh
desktools-stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]
```

Prints each named file (or, without names, each path read from standard
input, one per line) that passes every selected test:

| Flag | Test |
|------|------|
| `-a` | include hidden files |
| `-b` | block special |
| `-c` | character special |
| `-d` | directory |
| `-e` | exists |
| `-f` | regular file |
| `-g` | set-group-id |
| `-h` | symbolic link |
| `-l` | test the entries of each named directory instead |
| `-n file` | newer than *file* |
| `-o file` | older than *file* |
| `-p` | named pipe |
| `-q` | print nothing; exit on the first match |
| `-r` | readable |
| `-s` | not empty |
| `-u` | set-user-id |
| `-v` | invert: print the files that fail |
| `-w` | writable |
| `-x` | executable |

The exit status is 0 if any file matched, 1 if none did, and 2 on a usage
error. For example, to list the executables in a directory:

```sh
desktools-stest -flx /usr/bin
```

From Python, `desktools.stest.parse_args(argv)` returns an `Options`
value (raising `ValueError` on a usage error) and
`desktools.stest.matches(path, name, options)` applies the tests to one
path.

## Menu matching

`desktools.menu` holds the filtering and input-editing logic of a
type-to-filter menu:

- `read_items(stream)` reads one `Item` per line (standard input by
  default);
- `match(items, text, case_insensitive)` keeps the items that contain
  every space-separated word of `text`, ordered as exact matches first,
  then items starting with the first word, then other matches, each group
  in input order;
- `cistrstr(haystack, needle)` returns the index of a case-insensitive
  match, or `None`;
- `InputLine` is the editable input field, with `insert`, `backspace`,
  `delete`, `kill_to_end`, `kill_to_start`, `delete_word`,
  `move_word_edge`, `move_left`, `move_right` and `complete`.

## What the package does not do

- `desktools.menu` draws nothing: there is no menu window, no keyboard
  handling and no command that runs a menu. It provides only the matching
  and editing logic for a program that does.
- There are no keyboard-indicator or keyboard-layout components.
- The components read Linux interfaces (`/proc`, `/sys`, wireless and OSS
  ioctls); on other systems most of them return `None`.