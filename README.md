# slmon

slmon gathers small pieces of system information (CPU and memory use,
disk space, battery state, network addresses and speeds, the date and
time) and joins them into one status line, refreshed at a fixed interval.
The line goes either to standard output or to the name of the X root
window, where status bars of minimal window managers read it.

## Installing

```
pip install .
```

## Running

```
slmon
```

connects to the X display named by `DISPLAY` and sets the root window's
name to the status line on every update. When it stops, it clears the
name.

```
slmon -s
```

prints the status line to standard output on every update instead.

```
slmon -1
```

prints the status line to standard output once and exits.

```
slmon -v
```

prints the version and exits.

`SIGINT` and `SIGTERM` end the loop after the current line is written;
`SIGUSR1` cuts the wait short so the line is refreshed at once.

## Configuring

`slmon.config` holds the settings the command uses:

- `INTERVAL`: milliseconds between updates (1000).
- `UNKNOWN_STR`: text shown when a component has no value (`n/a`).
- `MAXLEN`: maximum length of the line in bytes, terminator included (2048).
- `ARGS`: the fields of the line, in order.

Each field is an `Arg` holding a component function, a printf-style format
with one `%s` slot, and the component's argument. `Arg.render(unknown)`
runs the component and formats its value, or `unknown` if it returned
none.

Components are looked up by name with `slmon.config.component(name)`:

| name | argument |
| --- | --- |
| `battery_perc`, `battery_state`, `battery_remaining` | battery name, e.g. `BAT0` |
| `cat` | path of a file; its first line |
| `cpu_freq`, `cpu_perc` | none |
| `datetime` | strftime format, e.g. `%F %T` |
| `disk_free`, `disk_perc`, `disk_total`, `disk_used` | mount point, e.g. `/` |
| `entropy`, `hostname`, `kernel_release`, `load_avg`, `uptime` | none |
| `gid`, `uid`, `username` | none |
| `ipv4`, `ipv6` | interface name, e.g. `eth0` |
| `netspeed_rx`, `netspeed_tx` | interface name |
| `num_files` | directory path |
| `ram_free`, `ram_perc`, `ram_total`, `ram_used` | none |
| `swap_free`, `swap_perc`, `swap_total`, `swap_used` | none |
| `run_command` | shell command; its first line of output |
| `temp` | sensor file in millidegrees Celsius |
| `vol_perc` | OSS mixer device, e.g. `/dev/mixer` |
| `wifi_essid`, `wifi_perc` | wireless interface name |

`cpu_perc`, `netspeed_rx` and `netspeed_tx` compare with the previous
reading, so they show the unknown text on their first update.

A line can be built from your own fields:

```python
from slmon.config import Arg, component
from slmon.status import render_status

line = render_status([Arg(component("datetime"), "%s", "%F %T")], "n/a", 2048)
```

`render_status` cuts the line short, with a warning on standard error, if
it would not fit in `maxlen` bytes.

`slmon.util.fmt_human(num, base)` formats a number with SI (base 1000) or
IEC (base 1024) prefixes, as the size components do.

## Limits

- Most components read Linux interfaces under `/proc` and `/sys`, or use
  Linux ioctls; where those are missing they report the unknown text.
- There are no caps/num lock or keyboard layout components, since these
  need queries to the X server. `slmon.components.keyboard` only offers
  the text handling for them: `format_indicators(fmt, led_mask)` renders a
  lock-indicator mask, and `get_layout(symbols, group)` picks a layout name
  out of an XKB symbols string.
- `vol_perc` reads an OSS mixer device only.
- The fields are set in `slmon.config`; there is no configuration file or
  command-line option to change them.