"""Tests for runtime composition helpers and logging setup."""

from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ccexp.file_model import FileRecord, FileType
from ccexp.logging_setup import configure_logging, debug_enabled
from ccexp.runtime import app


class FileListingTests(unittest.TestCase):
    def test_listing_groups_in_display_order(self) -> None:
        records = [
            FileRecord(path="/p/.claude/settings.json", file_type=FileType.SETTINGS),
            FileRecord(path="/p/CLAUDE.md", file_type=FileType.PROJECT_CONFIG),
        ]
        self.assertEqual(
            app.format_file_listing(records),
            "PROJECT (1)\n  /p/CLAUDE.md\nSETTINGS (1)\n  /p/.claude/settings.json\n",
        )

    def test_empty_listing(self) -> None:
        self.assertEqual(app.format_file_listing([]), "")

    def test_non_interactive_run_prints_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "CLAUDE.md").write_text("x\n", encoding="utf-8")
            out = io.StringIO()
            with (
                mock.patch.object(app, "configure_logging", return_value=None),
                mock.patch.object(app.os, "isatty", return_value=False),
                mock.patch.object(app.sys, "stdin") as stdin,
                mock.patch.object(app.sys, "stdout", out),
                mock.patch.object(app, "scan_claude_files", return_value=[
                    FileRecord(path=str(root / "CLAUDE.md"), file_type=FileType.PROJECT_CONFIG),
                ]),
            ):
                stdin.fileno.return_value = 0
                app.run_app(root)
        self.assertIn("PROJECT (1)", out.getvalue())


class ThemeResolutionTests(unittest.TestCase):
    def test_explicit_theme_is_normalized_and_saved(self) -> None:
        with mock.patch.object(app, "save_theme_name") as save:
            self.assertEqual(app._resolve_theme_name("OCEAN"), "ocean")
        save.assert_called_once_with("ocean")

    def test_saved_theme_used_when_not_given(self) -> None:
        with mock.patch.object(app, "load_theme_name", return_value="ocean"):
            self.assertEqual(app._resolve_theme_name(None), "ocean")
        with mock.patch.object(app, "load_theme_name", return_value="bogus"):
            self.assertEqual(app._resolve_theme_name(None), "default")


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        package_logger = logging.getLogger("ccexp")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)

    def test_debug_flag_from_environment(self) -> None:
        self.assertTrue(debug_enabled({"CCEXP_DEBUG": "1"}))
        self.assertTrue(debug_enabled({"CCEXP_DEBUG": "yes"}))
        self.assertFalse(debug_enabled({"CCEXP_DEBUG": "0"}))
        self.assertFalse(debug_enabled({}))

    def test_records_go_to_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "ccexp.log"
            self.assertEqual(configure_logging(log_path, debug=True), log_path)
            logging.getLogger("ccexp.actions.menu").debug("menu opened")
            for handler in logging.getLogger("ccexp").handlers:
                handler.flush()
            self.assertIn("menu opened", log_path.read_text(encoding="utf-8"))
            self.tearDown()

    def test_reconfigure_replaces_file_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(Path(tmp) / "a.log", debug=False)
            configure_logging(Path(tmp) / "b.log", debug=False)
            handlers = logging.getLogger("ccexp").handlers
            self.assertEqual(len(handlers), 1)
            self.assertEqual(logging.getLogger("ccexp").level, logging.INFO)
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
