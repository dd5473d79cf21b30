#!/usr/bin/env python3

"""
PyGame Input Plugin

Unlike the Curses plugin, this scans the keyboard and properly detects key
'press' and 'release' events.  Note that the check should not be called more
often than 60Hz, as constantly checking the queue is time consuming.

If the application is quit, then this will control shutting PyGame down too, so
any linked Renderer must be able to handle that.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import CMD_QUIT


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, pressed_keys=None):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, renderer, pressed_keys)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        commands = []

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method:
                command = pygame_method(event)

                if command is not None:
                    commands.append(command)  # Process more events, even if planning to quit

        return commands

    def _pygame_quit(self, _):
        return CMD_QUIT

    def _pygame_keydown(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.set_key(hex_key, True)
            return None

        return self.host_keymap.get(event.key)

    def _pygame_keyup(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.set_key(hex_key, False)

        return None
