#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the emulated buzzer within PyGame / SDL.

The buzzer simply has an 'on' or 'off' status, controlled by the sound timer.
A single cycle of a square wave is built once, and looped for as long as the
buzzer stays on.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
BUZZER_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # Build one period of an unsigned 8-bit square wave: high for the first half, low for the second
        period = int(PLAYBACK_FREQUENCY / BUZZER_FREQUENCY)
        half_period = period // 2
        wave = bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period))
        self.sound = pygame.mixer.Sound(buffer=wave)
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # If the sound is already being played, it won't be restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        elif self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
