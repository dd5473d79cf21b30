#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Each renderer comes with a matching input plugin of the same name, and an audio
plugin which is swapped for the null one when muted.  Plugins are imported only
once chosen, so PyGame and Curses are both optional.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from importlib import import_module
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from .cpu import CPU
from .debugger import Debugger
from .host import Host
from .hostio import Loader

# Renderer name: (host library needed, friendly library name, audio plugin when not muted)
PLUGIN_SETS = {
    "pygame": ("pygame", "PyGame", "a_pygame"),            # PyGame can handle proper waveforms
    "curses": ("curses", "Curses (or Windows-Curses)", "a_curses"),  # Terminals can only beep
    "null":   (None, None, "a_null")
}

# Tried in this order if no renderer is given
AUTO_RENDERERS = ("pygame", "curses")


class StartupError(Exception):
    pass


def _library_available(library):
    try:
        import_module(library)
    except ImportError:
        return False

    return True


def choose_renderer(opt_renderer):
    if opt_renderer is None:
        for renderer_name in AUTO_RENDERERS:
            if _library_available(PLUGIN_SETS[renderer_name][0]):
                return renderer_name

        raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")

    if opt_renderer not in PLUGIN_SETS:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    library, library_name, _ = PLUGIN_SETS[opt_renderer]

    if library is not None and not _library_available(library):
        raise StartupError("{} does not appear to be installed.".format(library_name))

    return opt_renderer


def load_plugins(renderer_name, mute_audio=None):
    # Returns the Renderer, Inputs and Audio classes.  Sound defaults to on for PyGame, and off in a terminal.
    if mute_audio is None:
        mute_audio = renderer_name == "curses"

    audio_plugin = "a_null" if mute_audio else PLUGIN_SETS[renderer_name][2]
    return (
        import_module(".renderers.r_{}".format(renderer_name), __name__).Renderer,
        import_module(".inputs.i_{}".format(renderer_name), __name__).Inputs,
        import_module(".audio.{}".format(audio_plugin), __name__).Audio
    )


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    renderer_name = choose_renderer(args["renderer"])
    mute_audio = args["mute"]
    Renderer, Inputs, Audio = load_plugins(renderer_name, None if mute_audio is None else bool(mute_audio))

    # Read the ROM before anything touches the screen, so errors are readable
    rom = Loader().load_binary(args["filename"])

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    clock_speed = args["clock_speed"]
    cpu = CPU(DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed, debugger=debugger)
    cpu.load_rom(rom)
    cpu.set_hold_mode(bool(args["paused"]))

    renderer = Renderer(scale=args["scale"], curses_cursor_mode=args["curses_cursor_mode"])

    try:
        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        keymap = args["keymap"]
        inputs = Inputs(DEFAULT_KEYMAP if keymap is None else keymap, renderer, cpu.pressed_keys)

        try:
            audio = Audio()

            try:
                Host(cpu, rom, renderer, inputs, audio).run()
            finally:
                audio.shutdown()
        finally:
            inputs.shutdown()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        renderer.shutdown()
