"""Browser session state: scan result, navigation, open menu, status line.

``BrowserSession`` is terminal-free. The loop feeds it key tokens, calls
``poll`` between reads, and asks it for frames; tests drive it the same way.
"""

from __future__ import annotations

import enum
import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from pathlib import Path

from ..actions import ActionContext, ActionMenuEngine, build_menu_actions
from ..errors import ScanError
from ..file_model import FileRecord
from ..navigation import Direction, NavigationController
from ..notification import ERROR_MESSAGE_SECONDS, SUCCESS_MESSAGE_SECONDS, NotificationTimer
from ..preview import DEFAULT_STYLE, PreviewDocument, colorize_preview, load_preview
from ..render import (
    MenuView,
    RenderContext,
    build_empty_screen,
    build_error_screen,
    build_frame,
    build_preview_header,
    list_view_rows,
    scroll_start_for,
)
from ..ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

PREVIEW_CACHE_SIZE = 32
QUIT_KEYS = frozenset({"q", "Q"})
SCAN_FAILED_MESSAGE = "Failed to scan files"


class SessionMode(enum.Enum):
    BROWSE = "browse"
    EMPTY = "empty"
    ERROR = "error"


Scanner = Callable[[], Sequence[FileRecord]]


class BrowserSession:
    """Route keys to navigation or the open action menu and compose frames."""

    def __init__(
        self,
        scanner: Scanner,
        *,
        action_context: ActionContext | None = None,
        theme: UITheme = DEFAULT_THEME,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
        clock: Callable[[], float] = time.monotonic,
        menu_executor_factory: Callable[[], Executor | None] = lambda: None,
    ) -> None:
        self._scanner = scanner
        self.action_context = action_context or ActionContext()
        self.theme = theme
        self.style = style
        self.no_color = no_color
        self._clock = clock
        self._menu_executor_factory = menu_executor_factory
        self.status = NotificationTimer(clock)
        self.navigation = NavigationController.from_files(())
        self.mode = SessionMode.EMPTY
        self.error_message = ""
        self.menu: ActionMenuEngine | None = None
        self.list_start = 0
        self.should_quit = False
        self._preview_cache: OrderedDict[str, tuple[PreviewDocument, tuple[str, ...]]] = OrderedDict()
        self.rescan()

    def rescan(self) -> None:
        """Replace navigation state wholesale with a fresh scan."""
        self._close_menu()
        self._preview_cache.clear()
        self.list_start = 0
        try:
            files = list(self._scanner())
        except ScanError as exc:
            logger.error("scan failed: %s", exc)
            self._enter_error_mode(str(exc))
            return
        except Exception as exc:
            # Any provider may be plugged in; its failures end up on the error screen too.
            logger.exception("scan provider raised")
            self._enter_error_mode(str(exc))
            return
        self.navigation = NavigationController.from_files(files)
        self.error_message = ""
        self.mode = SessionMode.BROWSE if files else SessionMode.EMPTY

    def _enter_error_mode(self, message: str) -> None:
        self.navigation = NavigationController.from_files(())
        self.mode = SessionMode.ERROR
        self.error_message = message or SCAN_FAILED_MESSAGE

    def _close_menu(self) -> None:
        if self.menu is not None:
            self.menu.close()
        self.menu = None

    def _on_menu_closed(self, last_message: str) -> None:
        self.menu = None
        if not last_message:
            return
        seconds = ERROR_MESSAGE_SECONDS if last_message.startswith("❌") else SUCCESS_MESSAGE_SECONDS
        self.status.show(last_message, seconds)

    def open_menu(self, record: FileRecord) -> ActionMenuEngine:
        self._close_menu()
        engine = ActionMenuEngine(
            record,
            build_menu_actions(record, self.action_context),
            on_close=self._on_menu_closed,
            executor=self._menu_executor_factory(),
            clock=self._clock,
        )
        self.menu = engine
        logger.debug("opened action menu for %s", record.path)
        return engine

    def quit(self) -> None:
        self._close_menu()
        self.should_quit = True

    def handle_key(self, key: str) -> bool:
        """Apply one key token; returns whether a redraw is needed."""
        if not key:
            return False
        if key == "CTRL_C":
            self.quit()
            return True
        if self.menu is not None:
            return self.menu.handle_key(key)
        if self.mode is not SessionMode.BROWSE:
            if key in QUIT_KEYS or key == "ESC":
                self.quit()
                return True
            if key == "CTRL_R":
                self.rescan()
                return True
            return False
        return self._handle_browse_key(key)

    def _handle_browse_key(self, key: str) -> bool:
        nav = self.navigation
        if key == "ESC":
            if not nav.clear_filter():
                self.quit()
            return True
        if key == "UP":
            return nav.move_selection(Direction.UP)
        if key == "DOWN":
            return nav.move_selection(Direction.DOWN)
        if key in {"ENTER", "SPACE"}:
            record = nav.activate_selection()
            if record is not None:
                self.open_menu(record)
            return True
        if key == "BACKSPACE":
            return nav.pop_filter_char()
        if key == "CTRL_U":
            return nav.clear_filter()
        if key == "CTRL_R":
            self.rescan()
            return True
        if len(key) == 1 and key.isprintable():
            nav.append_filter_char(key)
            return True
        return False

    def poll(self) -> bool:
        """Advance the open menu and the status timer; returns whether to redraw."""
        changed = False
        if self.menu is not None and self.menu.poll():
            changed = True
        if self.status.tick():
            changed = True
        return changed

    def preview_for(self, record: FileRecord) -> tuple[PreviewDocument, tuple[str, ...]]:
        cached = self._preview_cache.get(record.path)
        if cached is not None:
            self._preview_cache.move_to_end(record.path)
            return cached
        path = Path(record.path)
        document = load_preview(path)
        if document.error is not None:
            lines: tuple[str, ...] = (f"{self.theme.error}{document.error}{self.theme.reset}",)
        else:
            rendered = colorize_preview(document.text, path, self.style, self.no_color)
            lines = tuple(rendered.split("\n"))
        entry = (document, lines)
        self._preview_cache[record.path] = entry
        while len(self._preview_cache) > PREVIEW_CACHE_SIZE:
            self._preview_cache.popitem(last=False)
        return entry

    def status_message(self) -> str:
        if self.menu is not None:
            return ""
        return self.status.message

    def build_frame(self, width: int, height: int) -> list[str]:
        if self.mode is SessionMode.ERROR:
            return build_error_screen(self.error_message, width, height, self.theme)
        if self.mode is SessionMode.EMPTY:
            return build_empty_screen(width, height, self.theme)

        nav = self.navigation
        nodes = nav.visible_nodes()
        selection = nav.state.selection if nodes else 0
        self.list_start = scroll_start_for(selection, self.list_start, list_view_rows(height), len(nodes))

        preview_header: tuple[str, ...] = ()
        preview_lines: tuple[str, ...] = ()
        menu_view = None
        record = self.menu.record if self.menu is not None else nav.selected_file()
        if record is not None:
            document, preview_lines = self.preview_for(record)
            preview_header = tuple(
                build_preview_header(record, document.line_count, len(document.text), self.theme)
            )
        if self.menu is not None:
            menu_view = MenuView(record=self.menu.record, actions=self.menu.actions, state=self.menu.state)

        context = RenderContext(
            nodes=nodes,
            selection=selection,
            list_start=self.list_start,
            filter_text=nav.state.filter_text,
            visible_file_count=nav.visible_file_count(),
            total_files=nav.state.total_files,
            width=width,
            height=height,
            preview_header=preview_header,
            preview_lines=preview_lines,
            menu=menu_view,
            status_message=self.status_message(),
            theme=self.theme,
        )
        return build_frame(context)
