#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap Terminal inputs and redirects them to the emulator.  Note
that standard TTY Terminals only understand characters, they do not know when
an actual key is 'pressed' or 'released'.

What we can do (for this plugin) is assume a key is held for a very short time,
and then take advantage of keyboard repeats to fake a 'press' and 'release'.

To do this, I've stored the last time a character corresponding to a key has
been 'seen'.  If it was last seen a long time ago (when checked), then it has
almost certainly been released.

Host commands are passed through the same queue.  We will also quit if CTRL+C
(char 3) is detected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import time
from .i_null import Inputs as InputsBase
from ..constants import CMD_QUIT

# Terminals don't have separate key press/release, so we have to pause after a character is seen.
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2


# For thread safety, use proper queues to exchange information, avoiding shared variables.
def input_thread(thread_quitter_queue, input_queue, keymap_dict, host_keymap, curses_screen):
    while thread_quitter_queue.empty():
        # This blocks the thread from proceeding, so it won't get the quit message until at least one key is pressed.
        # However, if set as a daemon thread, it should be terminated when the main thread shuts down.
        char = curses_screen.getch()

        if char < 0:
            continue

        char = ord(chr(char).lower())

        if char == 3:  # Detect CTRL+C
            input_queue.put(CMD_QUIT, block=True)
            break

        message = keymap_dict.get(char)

        if message is None:
            message = host_keymap.get(char)

        if message is not None:
            try:
                input_queue.put(message, block=False)
            except queue.Full:
                pass

            if message == CMD_QUIT:
                break


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, pressed_keys=None):
        self.key_timers = [0.0] * 0x10
        super().__init__(keymap, renderer, pressed_keys, force_lowercase=True)

        self.thread_quitter_queue = queue.Queue(1)  # Used to inform the thread it should quit
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(
                self.thread_quitter_queue,
                self.input_queue,
                self.keymap_dict,
                self.host_keymap,
                renderer.get_curses_screen()
            )
        )
        # Terminate the thread when the main program quits (even if currently waiting for a keypress)
        self.thread.daemon = True
        self.thread.start()

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already requested the thread quits
            pass

        # Don't wait for the thread to quit (because this is likely to happen after a keypress)
        super().shutdown()

    def process_messages(self):
        # Deal with any keys pressed
        commands = []
        target_time = None

        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                message = self.input_queue.get(block=False)
            except queue.Empty:
                break

            if isinstance(message, str):
                commands.append(message)
                continue

            if target_time is None:
                target_time = time() + KEYBOARD_FAKE_KEYDOWN_TIME

            self.key_timers[message] = target_time

        # Keys not seen recently enough are treated as released
        now = time()

        for key_num, key_timer in enumerate(self.key_timers):
            self.set_key(key_num, key_timer > now)

        return commands
