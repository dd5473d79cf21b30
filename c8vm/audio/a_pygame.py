#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer within PyGame / SDL.  The buzzer is a plain square wave,
built once per pitch into an 8-bit sample buffer and looped for as long as the
buzzer is enabled.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_VOLUME = 0.1
DEFAULT_TONE = 440.0


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        self.frequency = None
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()
        self.set_tone(DEFAULT_TONE)

    def set_tone(self, frequency):
        # Rebuilding the sample is slow, so only do it if the pitch actually changes
        if frequency == self.frequency:
            return

        self.frequency = frequency
        period = max(2, int(PLAYBACK_FREQUENCY / frequency))
        half_period = period // 2

        # One full cycle of a square wave, unsigned 8-bit
        sample = bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period))

        if self.buzzer_enabled:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=sample)
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            # If the tone has been replaced while the buzzer was playing, play the new sample now
            self.sound.play(-1)

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer, i.e. play or stop sample playback.  If the buzzer is already playing, it won't
        # be restarted.
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
