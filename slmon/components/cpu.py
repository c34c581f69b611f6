"""CPU usage and frequency components."""

from __future__ import annotations

from slmon.util import fmt_human, read_first_line, read_int

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"


def parse_cpu_times(line):
    """Parse the seven counters following the label of a /proc/stat cpu line.

    Returns (user, nice, system, idle, iowait, irq, softirq).
    """
    fields = line.split()
    if len(fields) < 8:
        raise ValueError(f"expected 7 cpu counters in {line!r}")
    return tuple(float(value) for value in fields[1:8])


class CpuSampler:
    """Computes CPU usage from successive readings of a stat file."""

    def __init__(self, stat_path="/proc/stat"):
        self.stat_path = stat_path
        self._previous = None

    def perc(self):
        """Return CPU usage since the previous call in percent, or None."""
        line = read_first_line(self.stat_path)
        if line is None:
            return None
        try:
            current = parse_cpu_times(line)
        except ValueError:
            return None

        previous, self._previous = self._previous, current
        if previous is None or previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None

        def busy(times):
            user, nice, system, _idle, _iowait, irq, softirq = times
            return user + nice + system + irq + softirq

        return str(int(100 * (busy(previous) - busy(current)) / total))


_sampler = CpuSampler()


def cpu_perc(unused=None):
    """Return system-wide CPU usage in percent since the previous call."""
    return _sampler.perc()


def cpu_freq(unused=None):
    """Return the current frequency of the first CPU."""
    khz = read_int(CPU_FREQ)
    if khz is None:
        return None
    return fmt_human(khz * 1000, 1000)