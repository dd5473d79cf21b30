#!/usr/bin/env python3

"""
Delay and Sound Timers

Both timers count down at 60Hz while they are above zero.  The CPU clock is
configurable, so the timers can't simply be decremented per instruction.
Instead, the clock rate is converted into a number of instructions per 60Hz
tick, and the timers are decremented whenever the CPU's running cycle count is
a multiple of it.

The conversion rounds down (never below 1), so at rates which don't divide
evenly the timers run very slightly fast rather than slow.  At 1000Hz, for
example, a tick happens every 16 cycles.  The host runs the same number of
cycles per displayed frame, which keeps the timers at 60Hz in real time.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ


class TimerError(Exception):
    pass


class Timers:
    def __init__(self, clock_hz=DEFAULT_CLOCK_SPEED):
        self.delay = 0
        self.sound = 0
        self.clock_hz = 0
        self.cycles_per_tick = 1
        self.set_clock_rate(clock_hz)

    def set_clock_rate(self, clock_hz):
        if clock_hz is None or clock_hz <= 0:
            raise TimerError("Clock rate must be a positive number of cycles per second")

        self.clock_hz = clock_hz
        self.cycles_per_tick = max(1, int(clock_hz // TIMER_FREQ))

    def on_cycle(self, cycles):
        # Returns True if the timers were ticked on this cycle
        if cycles % self.cycles_per_tick:
            return False

        self.tick_timers()
        return True

    def tick_timers(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def is_sounding(self):
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
