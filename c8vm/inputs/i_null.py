#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins write the state of the 16 keypad keys straight into the CPU's
pressed-key latch, and report any host commands (pause, restart, speed
changes, quit) back to the main loop from process_messages().
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import HOST_KEYMAP


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer, pressed_keys=None, force_lowercase=False):
        self.keymap_dict = {}
        self.host_keymap = dict(HOST_KEYMAP)
        self.renderer = renderer
        self.pressed_keys = [False] * 0x10 if pressed_keys is None else pressed_keys
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if force_lowercase:
                # If we are working with characters rather than keyscan codes, we should convert to lowercase
                key_defined_ord = ord(chr(key_defined_ord).lower())

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            if key_defined_ord in self.host_keymap:
                raise InputsError("Key {} is reserved for emulator controls".format(key_defined_ord))

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return []  # No host commands

    def set_key(self, key, pressed):
        self.pressed_keys[key] = pressed

    def shutdown(self):
        pass
