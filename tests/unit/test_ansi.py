"""ANSI measurement and clipping tests."""

from __future__ import annotations

import unittest

from ccexp.ansi import clip_ansi_line, display_width, fit_ansi_line


class AnsiHelperTests(unittest.TestCase):
    def test_display_width_ignores_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[1mab\033[0m"), 2)
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("a\tb"), 9)

    def test_clip_keeps_escapes_and_drops_straddling_wide_char(self) -> None:
        self.assertEqual(clip_ansi_line("\033[31mabcdef", 3), "\033[31mabc")
        self.assertEqual(clip_ansi_line("a日", 2), "a")
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_fit_pads_to_exact_width_and_resets_styles(self) -> None:
        self.assertEqual(fit_ansi_line("ab", 4), "ab  ")
        self.assertEqual(fit_ansi_line("\033[1mabcdef", 3, "\033[0m"), "\033[1mabc\033[0m")
        self.assertEqual(fit_ansi_line("x", 0), "")


if __name__ == "__main__":
    unittest.main()
