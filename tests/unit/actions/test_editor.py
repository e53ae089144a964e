"""Editor resolution and launch tests.

Covers the variable lookup order, shell-style splitting, TUI suspension
around the child process, and the three editor error kinds.
"""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from ccexp.actions import editor
from ccexp.actions.editor import EditorConfig, launch_editor, resolve_editor_config
from ccexp.errors import EditorLaunchFailure, EditorNotConfigured, EditorNotFound


class ResolveEditorConfigTests(unittest.TestCase):
    def test_editor_takes_precedence_over_visual(self) -> None:
        config = resolve_editor_config({"EDITOR": "vim", "VISUAL": "code --wait"})
        self.assertEqual(config.command, ("vim",))
        self.assertEqual(config.source, "EDITOR")

    def test_visual_used_when_editor_blank(self) -> None:
        config = resolve_editor_config({"EDITOR": "  ", "VISUAL": "code --wait"})
        self.assertEqual(config.command, ("code", "--wait"))
        self.assertEqual(config.source, "VISUAL")

    def test_unbalanced_quotes_fall_back_to_raw_value(self) -> None:
        config = resolve_editor_config({"EDITOR": "my 'editor"})
        self.assertEqual(config.command, ("my 'editor",))

    def test_nothing_configured(self) -> None:
        config = resolve_editor_config({})
        self.assertFalse(config.configured)
        self.assertIsNone(config.source)


class LaunchEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events: list[str] = []

    def _launch(self, config: EditorConfig) -> None:
        launch_editor(
            Path("/p/CLAUDE.md"),
            config,
            disable_tui_mode=lambda: self.events.append("disable"),
            enable_tui_mode=lambda: self.events.append("enable"),
        )

    def test_runs_editor_between_tui_suspend_and_resume(self) -> None:
        def fake_run(argv, check):
            self.events.append(f"run:{' '.join(argv)}")
            return subprocess.CompletedProcess(argv, 0)

        with mock.patch.object(editor.subprocess, "run", side_effect=fake_run):
            self._launch(EditorConfig(command=("vim", "-n"), source="EDITOR"))

        self.assertEqual(self.events, ["disable", "run:vim -n /p/CLAUDE.md", "enable"])

    def test_unconfigured_editor_does_not_touch_terminal(self) -> None:
        with self.assertRaises(EditorNotConfigured):
            self._launch(EditorConfig())
        self.assertEqual(self.events, [])

    def test_missing_binary_raises_not_found_and_restores_tui(self) -> None:
        with mock.patch.object(editor.subprocess, "run", side_effect=FileNotFoundError("nope")):
            with self.assertRaises(EditorNotFound) as ctx:
                self._launch(EditorConfig(command=("nvim",), source="VISUAL"))
        self.assertIn("nvim", str(ctx.exception))
        self.assertEqual(self.events, ["disable", "enable"])

    def test_other_os_error_raises_launch_failure(self) -> None:
        with mock.patch.object(editor.subprocess, "run", side_effect=PermissionError("denied")):
            with self.assertRaises(EditorLaunchFailure):
                self._launch(EditorConfig(command=("vim",), source="EDITOR"))
        self.assertEqual(self.events, ["disable", "enable"])

    def test_nonzero_exit_raises_launch_failure(self) -> None:
        with mock.patch.object(
            editor.subprocess,
            "run",
            return_value=subprocess.CompletedProcess(["vim"], 2),
        ):
            with self.assertRaises(EditorLaunchFailure) as ctx:
                self._launch(EditorConfig(command=("vim",), source="EDITOR"))
        self.assertEqual(str(ctx.exception), "Editor exited with status 2")


if __name__ == "__main__":
    unittest.main()
