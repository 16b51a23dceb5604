#!/usr/bin/env python3

"""
System Clock

Drives the CPU at a fixed 60Hz tick.  Every tick runs a batch of instructions,
then counts both timers down by one, redraws the display and checks the host
for a request to quit, in that order.

The clock is a small state machine:

    RUNNING ---(LD Vx, K)---> WAITING_FOR_KEY ---(key pressed)---> RUNNING
       |                            |
       +---(fatal error / quit)-----+-----> HALTED

While waiting for a key, only the instruction stream stops.  Timers, display
refreshes and quit requests carry on as normal, so a waiting program can still
be closed.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import DEFAULT_CYCLES_PER_TICK, TICK_INTERVAL
from .cpu import CPUError
from .ram import RAMError
from .stack import StackError

RUNNING = "running"
WAITING_FOR_KEY = "waiting_for_key"
HALTED = "halted"

# Nothing is retried after one of these
FATAL_ERRORS = (CPUError, StackError, RAMError)


class Clock:
    def __init__(self, cpu, cycles_per_tick=None):
        self.cpu = cpu
        self.registers = cpu.registers
        self.framebuffer = cpu.framebuffer
        self.inputs = cpu.inputs
        self.audio = cpu.audio
        self.cycles_per_tick = DEFAULT_CYCLES_PER_TICK if cycles_per_tick is None else cycles_per_tick

        if self.cycles_per_tick < 1:
            raise ValueError("At least one instruction must be executed per tick")

        self.state = RUNNING
        self.fault = None

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def boot(self, start_location):
        self.registers.pc = start_location
        self.state = RUNNING
        self.fault = None

    def is_halted(self):
        return self.state == HALTED

    def halt(self):
        self.state = HALTED

    def tick(self):
        if self.state == HALTED:
            return

        try:
            self._run_cycles()
        except FATAL_ERRORS as error:
            # Stop here.  Nothing can be trusted after a fatal error.
            self.fault = error
            self.state = HALTED
            raise

        # Timers go down once per tick, however many instructions ran
        if self.registers.tick_timers():
            # Sound timer just reached zero.  Stop the audio.
            self.audio.enable_buzzer(False)

        self.framebuffer.refresh_display()
        self.perf_counter_fps += 1

        if self.inputs.process_messages():
            self.state = HALTED

    def _run_cycles(self):
        cpu = self.cpu

        for _ in range(self.cycles_per_tick):
            if self.state == WAITING_FOR_KEY:
                key = self.inputs.get_keypress()

                if key is None:
                    return

                cpu.supply_key(key)
                self.perf_counter_ops += 1
                self.state = RUNNING
                continue

            cpu.step()
            self.perf_counter_ops += 1

            if cpu.is_awaiting_key():
                self.state = WAITING_FOR_KEY

    def run(self):
        next_tick_time = perf_counter()

        while self.state != HALTED:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_fps = 0
                self.perf_counter_ops = 0

            if this_time < next_tick_time:
                # Unfortunately we have to do this to get the timing right
                continue

            self.tick()

            # Don't try to catch up on lost ticks if the host lagged badly
            next_tick_time = max(next_tick_time + TICK_INTERVAL, this_time)
