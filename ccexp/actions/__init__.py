"""Per-file action menu: the state machine and the six actions it offers."""

from __future__ import annotations

from .menu import (
    AUTO_CLOSE_SECONDS,
    ActionMenuEngine,
    ActionMenuState,
    InlineExecutor,
    MenuPhase,
    format_action_error,
)
from .operations import ActionContext, build_menu_actions, resolve_copy_destination
from .types import ActionResult, ConfirmationRequest, MenuAction

__all__ = [
    "AUTO_CLOSE_SECONDS",
    "ActionContext",
    "ActionMenuEngine",
    "ActionMenuState",
    "ActionResult",
    "ConfirmationRequest",
    "InlineExecutor",
    "MenuAction",
    "MenuPhase",
    "build_menu_actions",
    "format_action_error",
    "resolve_copy_destination",
]
