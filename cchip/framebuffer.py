#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are usually only drawn to the actual display (the
host rendering system) at 60Hz.  Rendering frameworks can lower speed
substantially when called thousands of times a second, so the renderer is only
told about pixels that actually changed, and only asked to present them when
the display is refreshed.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing each sprite bit against the existing
pixel.  Drawing the same sprite twice in the same place therefore erases it.

Collisions (where any pixel was set, but was unset by an XOR) are reported back
to the caller.  Coordinates always wrap around both edges of the screen.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT
from .ram import RAM


class Framebuffer:
    def __init__(self, renderer, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.renderer = renderer
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = RAM()
        self.vram.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)
        self.report_perf()

    def clear(self):
        vram = self.vram
        renderer = self.renderer
        vid_width = self.vid_width

        # Only tell the renderer about pixels which are actually switching off
        for vram_loc in range(self.vid_size):
            if vram.read(vram_loc):
                renderer.set_pixel(vram_loc % vid_width, vram_loc // vid_width, False)

        vram.clear()

    def xor_pixel(self, x, y):
        # Returns flagging any collision
        x %= self.vid_width
        y %= self.vid_height
        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        collision = (pixel != 0)
        new_pixel = pixel ^ 0xFF
        self.vram.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, not collision)

        return collision

    def draw_byte(self, x, y, byte):
        # Draw 8 pixels horizontally, most significant bit first.  Don't stop drawing after a collision.
        collided = False

        for bit in range(8):
            if byte & (0x80 >> bit) and self.xor_pixel(x + bit, y):
                collided = True

        return collided

    def get_pixel(self, x, y):
        return self.vram.read((y % self.vid_height) * self.vid_width + (x % self.vid_width)) != 0

    def get_grid(self):
        # Rows of lit (True) / unlit (False) pixels, top row first
        vid_width = self.vid_width
        mem = self.vram.mem

        return [
            [mem[row_loc + x] != 0 for x in range(vid_width)]
            for row_loc in range(0, self.vid_size, vid_width)
        ]

    def refresh_display(self):
        self.renderer.refresh_display()

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
