#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.renderers.r_null import Renderer
from cchip.framebuffer import Framebuffer


class RecordingRenderer(Renderer):
    def __init__(self):
        self.pixels = []
        super().__init__()

    def set_pixel(self, x, y, lit):
        self.pixels.append((x, y, lit))
        super().set_pixel(x, y, lit)


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.renderer = RecordingRenderer()
        self.framebuffer = Framebuffer(self.renderer)
        self.renderer_small = Renderer()
        self.framebuffer_small = Framebuffer(self.renderer_small, vid_width=4, vid_height=5)

    def test_framebuffer_resolution(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual((4, 5), (self.renderer_small.width, self.renderer_small.height))
        self.assertIn("0 FPS", self.renderer.title)

    def test_framebuffer_xor_pixel(self):
        fb = self.framebuffer_small
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("ff00000000000000000000000000000000000000", fb.vram.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("ff00000000ff0000000000000000000000000000", fb.vram.mem.hex())
        self.assertTrue(fb.xor_pixel(4, 5))  # Wraps onto 0, 0 and unsets it
        self.assertEqual("0000000000ff0000000000000000000000000000", fb.vram.mem.hex())

    def test_framebuffer_draw_byte(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw_byte(0, 0, 0b10100001))
        self.assertEqual(
            [True, False, True, False, False, False, False, True, False],
            [fb.get_pixel(x, 0) for x in range(9)]
        )
        self.assertEqual([(0, 0, True), (2, 0, True), (7, 0, True)], self.renderer.pixels)

    def test_framebuffer_draw_twice_restores(self):
        fb = self.framebuffer
        fb.draw_byte(10, 3, 0b00011000)  # Lights columns 13-14
        before = fb.get_grid()

        # Columns 8-9 are unlit, so no collision until the second draw
        self.assertFalse(fb.draw_byte(8, 3, 0b11000000))
        self.assertTrue(fb.draw_byte(8, 3, 0b11000000))
        self.assertEqual(before, fb.get_grid())

        # Column 14 is lit and column 15 unlit beforehand, so both draws collide
        self.assertTrue(fb.draw_byte(14, 3, 0b11000000))
        self.assertTrue(fb.draw_byte(14, 3, 0b11000000))
        self.assertEqual(before, fb.get_grid())

    def test_framebuffer_draw_collision(self):
        fb = self.framebuffer
        fb.draw_byte(0, 0, 0b00000001)
        self.assertTrue(fb.draw_byte(0, 0, 0b00000011))
        self.assertFalse(fb.get_pixel(7, 0))
        self.assertTrue(fb.get_pixel(6, 0))

    def test_framebuffer_draw_byte_zero(self):
        fb = self.framebuffer
        fb.draw_byte(0, 0, 0xFF)
        self.assertFalse(fb.draw_byte(0, 0, 0x00))
        self.assertTrue(all(fb.get_pixel(x, 0) for x in range(8)))

    def test_framebuffer_wraparound(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw_byte(63, 0, 0xFF))
        self.assertTrue(fb.get_pixel(63, 0))

        # The other 7 bits wrap onto columns 0-6
        for x in range(7):
            self.assertTrue(fb.get_pixel(x, 0))

        self.assertFalse(fb.get_pixel(7, 0))
        self.assertEqual(8, sum(fb.get_grid()[0]))

    def test_framebuffer_vertical_wraparound(self):
        fb = self.framebuffer
        fb.draw_byte(0, 32, 0x80)
        self.assertTrue(fb.get_pixel(0, 0))
        self.assertEqual(1, sum(sum(row) for row in fb.get_grid()))

    def test_framebuffer_grid(self):
        fb = self.framebuffer_small
        fb.xor_pixel(3, 4)
        grid = fb.get_grid()
        self.assertEqual(5, len(grid))
        self.assertEqual(4, len(grid[0]))
        self.assertEqual([False, False, False, True], grid[4])

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.draw_byte(0, 0, 0xF0)
        self.renderer.pixels = []
        fb.clear()
        self.assertFalse(any(any(row) for row in fb.get_grid()))

        # Only lit pixels are sent to the renderer
        self.assertEqual([(0, 0, False), (1, 0, False), (2, 0, False), (3, 0, False)], self.renderer.pixels)

    def test_framebuffer_refresh(self):
        fb = self.framebuffer
        fb.xor_pixel(0, 0)
        self.assertTrue(self.renderer.refresh_needed)
        fb.refresh_display()
        self.assertFalse(self.renderer.refresh_needed)

    def test_framebuffer_report_perf(self):
        self.framebuffer.report_perf(60, 720)
        self.assertTrue(self.renderer.title.endswith("60 FPS, 720 OPS"))
