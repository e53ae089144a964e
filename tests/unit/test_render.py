"""Frame composition tests for the list, menu, and message screens."""

from __future__ import annotations

import unittest

from ccexp.actions import ActionMenuEngine, InlineExecutor, MenuAction, ConfirmationRequest
from ccexp.ansi import ANSI_ESCAPE_RE, display_width
from ccexp.file_model import FileRecord, FileType
from ccexp.navigation import NavigationController
from ccexp.render import (
    MENU_FOOTER,
    MenuView,
    RenderContext,
    build_empty_screen,
    build_error_screen,
    build_frame,
    build_menu_rows,
    display_name,
    format_group_row,
    frame_to_text,
    menu_header_path,
    scroll_start_for,
)
from ccexp.ui_theme import PLAIN_THEME


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def _files() -> list[FileRecord]:
    return [
        FileRecord(path="/p/CLAUDE.md", file_type=FileType.PROJECT_CONFIG),
        FileRecord(path="/p/.claude/commands/deploy.md", file_type=FileType.SLASH_COMMAND),
    ]


def _context(nav: NavigationController, **overrides) -> RenderContext:
    values = dict(
        nodes=nav.visible_nodes(),
        selection=nav.state.selection,
        list_start=0,
        filter_text=nav.state.filter_text,
        visible_file_count=nav.visible_file_count(),
        total_files=nav.state.total_files,
        width=100,
        height=20,
        theme=PLAIN_THEME,
    )
    values.update(overrides)
    return RenderContext(**values)


class RowFormattingTests(unittest.TestCase):
    def test_group_row_shows_glyph_label_and_count(self) -> None:
        nav = NavigationController.from_files(_files())
        header = nav.visible_nodes()[0]
        self.assertEqual(_plain(format_group_row(header, False, PLAIN_THEME)), "  ▼ PROJECT (1)")
        self.assertEqual(_plain(format_group_row(header, True, PLAIN_THEME)), "► ▼ PROJECT (1)")
        nav.toggle_group(FileType.PROJECT_CONFIG)
        collapsed = nav.visible_nodes()[0]
        self.assertIn("▶ PROJECT (1)", format_group_row(collapsed, False, PLAIN_THEME))

    def test_display_names(self) -> None:
        self.assertEqual(display_name(_files()[1]), "deploy")
        self.assertEqual(display_name(_files()[0]), "p/CLAUDE.md")
        settings = FileRecord(path="/repo/.claude/settings.json", file_type=FileType.SETTINGS)
        self.assertEqual(display_name(settings), "repo/.claude/settings.json")

    def test_menu_header_path_keeps_last_two_segments(self) -> None:
        self.assertEqual(menu_header_path("/a/b/commands/deploy.md"), "commands/deploy.md")
        self.assertEqual(menu_header_path("CLAUDE.md"), "CLAUDE.md")

    def test_scroll_start_keeps_selection_visible(self) -> None:
        self.assertEqual(scroll_start_for(0, 5, 10, 50), 0)
        self.assertEqual(scroll_start_for(25, 0, 10, 50), 16)
        self.assertEqual(scroll_start_for(12, 10, 10, 50), 10)
        self.assertEqual(scroll_start_for(3, 40, 10, 5), 0)


class FrameTests(unittest.TestCase):
    def test_frame_has_exact_height_and_width(self) -> None:
        nav = NavigationController.from_files(_files())
        rows = build_frame(_context(nav))
        self.assertEqual(len(rows), 20)
        for row in rows:
            self.assertLessEqual(display_width(_plain(row)), 100)

    def test_list_pane_shows_title_search_and_nodes(self) -> None:
        nav = NavigationController.from_files(_files())
        text = "\n".join(_plain(row) for row in build_frame(_context(nav)))
        self.assertIn("Claude Files (2)", text)
        self.assertIn("Type to search...", text)
        self.assertIn("► ▼ PROJECT (1)", text)
        self.assertIn("⚡ deploy", text)

    def test_zero_match_filter_shows_placeholder(self) -> None:
        nav = NavigationController.from_files(_files())
        nav.set_filter("zzz")
        text = "\n".join(_plain(row) for row in build_frame(_context(nav)))
        self.assertIn("Search: zzz", text)
        self.assertIn("No files match", text)
        self.assertIn("Claude Files (0)", text)

    def test_status_message_on_last_row(self) -> None:
        nav = NavigationController.from_files(_files())
        rows = build_frame(_context(nav, status_message="✅ File opened"))
        self.assertTrue(_plain(rows[-1]).startswith("✅ File opened"))

    def test_frame_to_text_repaints_from_home(self) -> None:
        self.assertEqual(frame_to_text(["a", "b"]), "\033[H\033[Ja\r\nb")


class MenuRenderTests(unittest.TestCase):
    def _engine(self, actions) -> ActionMenuEngine:
        return ActionMenuEngine(_files()[1], actions, executor=InlineExecutor())

    def test_menu_lists_actions_with_marker_and_footer(self) -> None:
        actions = [
            MenuAction(key="c", label="Copy Content", description="", action=lambda: "✅"),
            MenuAction(key="o", label="Open File", description="", action=lambda: "✅"),
        ]
        engine = self._engine(actions)
        engine.handle_key("DOWN")
        view = MenuView(record=engine.record, actions=engine.actions, state=engine.state)
        rows = [_plain(row) for row in build_menu_rows(view, PLAIN_THEME)]
        self.assertEqual(rows[0], "📋 Actions")
        self.assertEqual(rows[1], "commands/deploy.md")
        self.assertIn("  [C] Copy Content", rows)
        self.assertIn("► [O] Open File", rows)

        nav = NavigationController.from_files(_files())
        frame = build_frame(_context(nav, menu=view))
        self.assertTrue(_plain(frame[-2]).startswith(MENU_FOOTER))

    def test_confirmation_view(self) -> None:
        actions = [
            MenuAction(
                key="d",
                label="Copy To Directory",
                description="",
                action=lambda: ConfirmationRequest("⚠️  deploy.md already exists. Overwrite?", lambda: "✅"),
            )
        ]
        engine = self._engine(actions)
        engine.handle_key("d")
        view = MenuView(record=engine.record, actions=engine.actions, state=engine.state)
        rows = [_plain(row) for row in build_menu_rows(view, PLAIN_THEME)]
        self.assertIn("⚠️  deploy.md already exists. Overwrite?", rows)
        self.assertIn("Press Y to confirm or n to cancel: ", rows)
        self.assertNotIn("► [D] Copy To Directory", rows)


class MessageScreenTests(unittest.TestCase):
    def test_empty_screen(self) -> None:
        rows = build_empty_screen(60, 10, PLAIN_THEME)
        self.assertEqual(len(rows), 10)
        self.assertIn("No Claude files found", "\n".join(rows))

    def test_error_screen(self) -> None:
        rows = build_error_screen("Not a directory: /x", 60, 10, PLAIN_THEME)
        self.assertIn("Error: Not a directory: /x", "\n".join(rows))


if __name__ == "__main__":
    unittest.main()
