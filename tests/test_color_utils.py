"""
Unit tests for the color primitives.
"""

from __future__ import annotations

import unittest

import numpy as np

from vibrant.utils.colors import (
    BLACK,
    WHITE,
    contrast,
    lightness,
    luminance,
    pack_color,
    rgb_to_hsl,
    rgb_to_lab,
    text_color,
    to_hex,
    unpack_channels,
    unpack_color,
)


class TestPacking(unittest.TestCase):
    """Packing, unpacking and hex formatting."""

    def test_pack_layout(self):
        self.assertEqual(pack_color(0xBA, 0xDA, 0x55), 0xBADA55)
        self.assertEqual(unpack_color(0xBADA55), (0xBA, 0xDA, 0x55))

    def test_unpack_channels_array(self):
        channels = unpack_channels(np.array([0xFF0000, 0x00FF00, 0x0000FF]))
        self.assertEqual(channels.shape, (3, 3))
        self.assertEqual(channels.tolist(), [[255, 0, 0], [0, 255, 0], [0, 0, 255]])

    def test_hex(self):
        self.assertEqual(to_hex(0xFF0000), "#ff0000")
        self.assertEqual(to_hex(0x00000A), "#00000a")


class TestHSL(unittest.TestCase):
    """RGB to HSL conversion."""

    def test_primaries(self):
        self.assertEqual(rgb_to_hsl(0xFF0000), (0.0, 1.0, 0.5))
        h, s, l = rgb_to_hsl(0x00FF00)
        self.assertAlmostEqual(h, 120.0)
        h, s, l = rgb_to_hsl(0x0000FF)
        self.assertAlmostEqual(h, 240.0)

    def test_grays_have_no_saturation(self):
        self.assertEqual(rgb_to_hsl(BLACK), (0.0, 0.0, 0.0))
        self.assertEqual(rgb_to_hsl(WHITE), (0.0, 0.0, 1.0))

    def test_vectorized_lightness_matches_scalar(self):
        colors = np.array([pack_color(v, v // 2, 255 - v) for v in range(0, 256, 5)])
        expected = [rgb_to_hsl(int(c))[2] for c in colors]
        self.assertEqual(lightness(colors).tolist(), expected)


class TestContrast(unittest.TestCase):
    """Luminance, WCAG contrast and text-color choice."""

    def test_luminance_extremes(self):
        self.assertAlmostEqual(luminance(0, 0, 0), 0.0)
        self.assertAlmostEqual(luminance(255, 255, 255), 1.0)

    def test_black_on_white(self):
        self.assertAlmostEqual(contrast(WHITE, BLACK), 21.0)
        self.assertAlmostEqual(contrast(BLACK, WHITE), 21.0)
        self.assertAlmostEqual(contrast(0x336699, 0x336699), 1.0)

    def test_text_color(self):
        self.assertEqual(text_color(BLACK, 4.5), WHITE)
        self.assertEqual(text_color(WHITE, 3.0), BLACK)
        self.assertEqual(text_color(0xFFFF00, 4.5), BLACK)
        self.assertEqual(text_color(0x000080, 4.5), WHITE)


class TestLab(unittest.TestCase):
    """CIE Lab conversion."""

    def test_white_and_black_lightness(self):
        l, _, _ = rgb_to_lab(WHITE)
        self.assertAlmostEqual(l, 100.0, places=4)
        l, a, b = rgb_to_lab(BLACK)
        self.assertAlmostEqual(l, 0.0, places=4)
        self.assertAlmostEqual(a, 0.0, places=4)
        self.assertAlmostEqual(b, 0.0, places=4)

    def test_reference_white_shifts_chroma(self):
        _, a, b = rgb_to_lab(WHITE, reference_white=(95.05, 100.0, 108.9))
        self.assertAlmostEqual(a, 0.0, places=2)
        self.assertAlmostEqual(b, 0.0, places=2)
        _, a_default, b_default = rgb_to_lab(WHITE)
        self.assertGreater(a_default, 0.1)
        self.assertNotAlmostEqual(b_default, b, places=2)


if __name__ == "__main__":
    unittest.main()
