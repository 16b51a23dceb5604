#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

Only 'filename' is required.  Any other option left out, or given as 'None',
uses its default.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from .clock import Clock, FATAL_ERRORS
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_KEYMAP, MEMORY_SIZE, PROGRAM_START, SYSTEM_FONT, FONT_LOCATION
from .cpu import CPU
from .debugger import Debugger
from .framebuffer import Framebuffer
from .hostio import Loader, RomLoadError
from .ram import RAM
from .registers import RegisterFile


class StartupError(Exception):
    pass


def create_machine(rom, renderer, inputs, audio, debugger, seed=None):
    # Allocate memory, write the system font into it and protect everything below program space
    ram = RAM()
    ram.resize(MEMORY_SIZE)
    ram.write_block(FONT_LOCATION, SYSTEM_FONT)
    ram.protect(PROGRAM_START)

    # ROM is written verbatim at the start of program space
    ram.write_block(PROGRAM_START, rom)

    framebuffer = Framebuffer(renderer)
    return CPU(ram, RegisterFile(), framebuffer, inputs, audio, debugger, seed=seed)


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    # Read the ROM before anything else starts up
    try:
        rom = Loader().load_rom(args["filename"])
    except RomLoadError as error:
        print(error)
        return 1

    opt_renderer = args.get("renderer") or "pygame"

    # flake8: noqa: F401
    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Use the null renderer to run headless.")

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer

        if args.get("mute"):
            from .audio.a_null import Audio
        else:
            from .audio.a_pygame import Audio
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio
    else:
        raise StartupError("Unknown renderer '{}'".format(opt_renderer))

    renderer = Renderer(scale=args.get("scale"), pygame_palette=args.get("pygame_palette"))
    inputs = Inputs(args.get("keymap") or DEFAULT_KEYMAP, renderer)
    audio = Audio()

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(bool(args.get("debug")))

    cpu = create_machine(rom, renderer, inputs, audio, debugger, seed=args.get("seed"))
    clock = Clock(cpu, cycles_per_tick=args.get("cycles_per_tick"))
    clock.boot(PROGRAM_START)

    try:
        clock.run()
    except FATAL_ERRORS as error:
        print("".join((APP_INTRO, "Emulation halted.\n\n", str(error))))
        print("\nDebug info:\n{}".format(debugger.debug(cpu, cpu.instruction, verbose=True)))
        return 1
    finally:
        # The CPU has stopped, so shut down the host systems.  __del__ cannot be relied upon when using PyPy.
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

    return 0
