#!/usr/bin/env python3

"""
Host Frame Loop

Drives the CPU from the host side.  The display, inputs and buzzer are all
serviced at 60Hz, and in between, the CPU is ticked as many times as fit in
one 60Hz frame at the current clock rate.

Host commands coming from the input plugin are applied between frames:
    * Pause       - Hold the CPU (this is separate from waiting for a key)
    * Restart     - Reset the CPU and reload the ROM
    * Speed up    - Raise the clock rate by one step
    * Slow down   - Lower the clock rate by one step
    * Quit        - Leave the loop
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import (
    APP_NAME, TIMER_FREQ, MIN_CLOCK_SPEED, MAX_CLOCK_SPEED, CLOCK_SPEED_STEP, CMD_QUIT, CMD_PAUSE, CMD_RESTART,
    CMD_SPEED_UP, CMD_SLOW_DOWN
)

DISPLAY_INTERVAL = 1.0 / TIMER_FREQ


class Host:
    def __init__(self, cpu, rom, renderer, inputs, audio):
        self.cpu = cpu
        self.rom = rom
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.commands = {
            CMD_PAUSE:     self._toggle_pause,
            CMD_RESTART:   self._restart,
            CMD_SPEED_UP:  self._speed_up,
            CMD_SLOW_DOWN: self._slow_down
        }

        # Performance-related vars
        self.perf_counter_fps = 0
        self.next_perf_report_time = 0
        self.fps = 0
        self.renderer.set_resolution(*cpu.framebuffer.get_vid_size())
        self.report_status()

    def run(self, max_frames=None):
        frames = 0
        next_frame_time = perf_counter()

        while max_frames is None or frames < max_frames:
            if not self.run_frame():
                return

            frames += 1
            next_frame_time += DISPLAY_INTERVAL
            delay = next_frame_time - perf_counter()

            if delay > 0:
                sleep(delay)
            else:
                # Running behind, so don't try to catch up with a burst of frames
                next_frame_time = perf_counter()

    def run_frame(self):
        # Returns False when the user has asked to quit
        for command in self.inputs.process_messages():
            if command == CMD_QUIT:
                return False

            self.commands[command]()

        cpu = self.cpu

        if not cpu.is_held():
            for _ in range(cpu.get_cycles_per_tick()):
                cpu.tick()

        if cpu.framebuffer.take_changed():
            self.renderer.render(cpu.framebuffer)

        self.audio.enable_buzzer(cpu.timers.is_sounding() and not cpu.is_held())
        self._count_frame()
        return True

    def _count_frame(self):
        this_time = perf_counter()
        self.perf_counter_fps += 1

        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            self.fps = self.perf_counter_fps
            self.perf_counter_fps = 0
            self.report_status()

        # Reporting the status should be done before a refresh, as refreshing will likely show the report
        self.renderer.refresh_display()

    def report_status(self):
        # One timer tick runs per frame, so this is the rate instructions are really executed at
        clock_hz = self.cpu.get_cycles_per_tick() * TIMER_FREQ
        title = "{} - {} FPS, {} Hz".format(APP_NAME, self.fps, clock_hz)

        if self.cpu.is_held():
            title += " - Paused"
        elif self.cpu.is_awaiting_key():
            title += " - Waiting for key"

        self.renderer.set_title(title)

    def _toggle_pause(self):
        self.cpu.set_hold_mode(not self.cpu.is_held())
        self.report_status()

    def _restart(self):
        # Loading resets everything first, including the key latch and the screen
        self.cpu.load_rom(self.rom)

    def _change_clock(self, step):
        clock_hz = self.cpu.get_clock_rate() + step
        self.cpu.set_clock_rate(min(MAX_CLOCK_SPEED, max(MIN_CLOCK_SPEED, clock_hz)))
        self.report_status()

    def _speed_up(self):
        self._change_clock(CLOCK_SPEED_STEP)

    def _slow_down(self):
        self._change_clock(-CLOCK_SPEED_STEP)
