"""Clipboard and default-opener command selection tests."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from ccexp.actions import clipboard, opener


class ClipboardTests(unittest.TestCase):
    def test_macos_uses_pbcopy(self) -> None:
        with mock.patch.object(clipboard.sys, "platform", "darwin"):
            self.assertEqual(clipboard.clipboard_commands(), [["pbcopy"]])

    def test_first_available_command_wins(self) -> None:
        commands = [["wl-copy"], ["xclip", "-selection", "clipboard"]]
        with (
            mock.patch.object(clipboard, "clipboard_commands", return_value=commands),
            mock.patch.object(clipboard.shutil, "which", side_effect=lambda name: None if name == "wl-copy" else "/usr/bin/xclip"),
            mock.patch.object(clipboard.subprocess, "run", return_value=subprocess.CompletedProcess([], 0)) as run,
        ):
            self.assertTrue(clipboard.copy_text_to_clipboard("hello"))

        run.assert_called_once()
        self.assertEqual(run.call_args.args[0], ["xclip", "-selection", "clipboard"])
        self.assertEqual(run.call_args.kwargs["input"], "hello")

    def test_returns_false_when_no_tool_available(self) -> None:
        with mock.patch.object(clipboard.shutil, "which", return_value=None):
            self.assertFalse(clipboard.copy_text_to_clipboard("hello"))


class OpenerTests(unittest.TestCase):
    def test_macos_uses_open(self) -> None:
        with mock.patch.object(opener.sys, "platform", "darwin"):
            self.assertEqual(opener.opener_command("/p/a.md"), ["open", "/p/a.md"])

    def test_linux_uses_xdg_open(self) -> None:
        with (
            mock.patch.object(opener.sys, "platform", "linux"),
            mock.patch.object(opener.os, "name", "posix"),
            mock.patch.object(opener.shutil, "which", return_value="/usr/bin/xdg-open"),
        ):
            self.assertEqual(opener.opener_command("/p/a.md"), ["/usr/bin/xdg-open", "/p/a.md"])

    def test_failed_opener_raises(self) -> None:
        with (
            mock.patch.object(opener, "opener_command", return_value=["xdg-open", "/p/a.md"]),
            mock.patch.object(
                opener.subprocess,
                "run",
                side_effect=subprocess.CalledProcessError(3, ["xdg-open"]),
            ),
        ):
            with self.assertRaises(subprocess.CalledProcessError):
                opener.open_with_default_application("/p/a.md")


if __name__ == "__main__":
    unittest.main()
