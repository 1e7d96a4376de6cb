# slstatus

A small status monitor for window managers such as dwm. Once a second it
gathers pieces of system information (CPU load, memory, date and time and
more), formats them into one line and either stores that line as the name of
the X root window or prints it to standard output.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Usage

```
slstatus [-v] [-s] [-1]
```

- `-v` writes `slstatus-1.0` to standard error and exits with status 1.
- `-s` writes the status line to standard output rather than to the root
  window name.
- `-1` writes the status line once and exits (implies `-s`).

Flags may be combined, as in `-s1`. Any other argument is a usage error.

With no options the program talks to the X server named by `DISPLAY`
(using the cookie from `XAUTHORITY` or `~/.Xauthority`) and stores the
status as the root window name, where a bar such as dwm's picks it up. On
exit the name is cleared. `SIGINT` and `SIGTERM` stop the loop cleanly and
`SIGUSR1` makes it refresh at once.

## Components

Every component is a function that takes a single argument and returns a
string, or `None` when the value cannot be read; in that case the status
shows `n/a`. The components are grouped by module:

| Module              | Functions |
|---------------------|-----------|
| `slstatus.sysinfo`  | `datetime`, `hostname`, `kernel_release`, `load_avg`, `uptime`, `gid`, `uid`, `username`, `entropy` |
| `slstatus.files`    | `cat`, `num_files`, `run_command`, `temp` |
| `slstatus.disk`     | `disk_free`, `disk_perc`, `disk_total`, `disk_used` |
| `slstatus.battery`  | `battery_perc`, `battery_state`, `battery_remaining` |
| `slstatus.cpu`      | `cpu_freq`, `cpu_perc` |
| `slstatus.memory`   | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` |
| `slstatus.network`  | `ipv4`, `ipv6`, `netspeed_rx`, `netspeed_tx` |
| `slstatus.wifi`     | `wifi_perc`, `wifi_essid` |
| `slstatus.volume`   | `vol_perc` |
| `slstatus.keyboard` | `keyboard_indicators`, `keymap` |

Rates and percentages that depend on a previous reading (`cpu_perc`,
`netspeed_rx`, `netspeed_tx`) return `None` on their first call. The
classes `slstatus.cpu.CpuUsage` and `slstatus.network.NetSpeed` keep that
state and can be used directly, for example with another file or interval.

Byte sizes are shown in human form by `slstatus.util.fmt_human`, for example
`fmt_human(1536, 1024)` gives `"1.5 Ki"`.

## Configuration

The line that is shown is described by a list of `slstatus.config.Component`
entries, each holding a function, a printf-style format and an argument.
`slstatus.config.default_components()` returns the default list (CPU
percentage, used and total RAM, date and time) and
`slstatus.config.lookup(name)` finds a component function by name.
`slstatus.config` also holds `INTERVAL` (milliseconds between updates),
`UNKNOWN_STR` and `MAXLEN` (the longest status line, in bytes).

A status line can also be built and published directly:

```python
from slstatus.cli import build_status, set_root_name
from slstatus.config import default_components

line = build_status(default_components(), "n/a", 2048)
print(line)
set_root_name(line)
```

## Limitations

- There is no configuration file: the command always shows the list from
  `default_components()`; another bar needs code of your own built on
  `build_status`.
- Battery, CPU, memory, temperature and Wi-Fi components read Linux files
  under `/sys` and `/proc`; `vol_perc` reads an OSS mixer device. On other
  systems these return `None`.