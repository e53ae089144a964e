"""Modal action-menu state machine for one selected file.

The engine owns exactly one phase object at a time. Each phase carries only
the fields valid for it, so e.g. a pending confirmation cannot exist outside
``AwaitingConfirmation``. Actions run through an executor; the runtime loop
calls ``poll`` to apply a finished action on the loop thread. At most one
action is in flight per engine and keys are ignored while it runs.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from ..file_model import FileRecord
from ..notification import ERROR_MESSAGE_SECONDS, SUCCESS_MESSAGE_SECONDS, NotificationTimer
from .types import ActionResult, ConfirmationRequest, MenuAction

logger = logging.getLogger(__name__)

AUTO_CLOSE_SECONDS = 1.0
UNKNOWN_ERROR = "Unknown error"
CONFIRM_KEYS = frozenset({"y", "Y"})
CANCEL_KEYS = frozenset({"n", "N", "ENTER"})


class MenuPhase(enum.Enum):
    IDLE = "idle"
    EXECUTING = "executing"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CLOSED = "closed"


@dataclass(frozen=True)
class _Idle:
    phase = MenuPhase.IDLE


@dataclass(frozen=True)
class _Executing:
    future: Future
    direct: bool
    phase = MenuPhase.EXECUTING


@dataclass(frozen=True)
class _AwaitingConfirmation:
    pending_action: Callable[[], str]
    confirm_message: str
    direct: bool
    phase = MenuPhase.AWAITING_CONFIRMATION


@dataclass(frozen=True)
class _Closed:
    phase = MenuPhase.CLOSED


@dataclass(frozen=True)
class ActionMenuState:
    """Read-only snapshot for rendering."""

    selected_index: int
    phase: MenuPhase
    message: str
    confirm_message: str = ""
    pending_action: Callable[[], str] | None = None


class InlineExecutor(Executor):
    """Executor that runs each call immediately on the calling thread."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


def format_action_error(exc: BaseException | None) -> str:
    """Normalize any failure into ``❌ Error: <reason>``."""
    reason = str(exc).strip() if exc is not None else ""
    return f"❌ Error: {reason or UNKNOWN_ERROR}"


class ActionMenuEngine:
    """Drive the action menu for ``record`` from key tokens."""

    def __init__(
        self,
        record: FileRecord,
        actions: Sequence[MenuAction],
        *,
        on_close: Callable[[str], None] | None = None,
        executor: Executor | None = None,
        foreground_executor: Executor | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not actions:
            raise ValueError("action menu needs at least one action")
        keys = [action.key.lower() for action in actions]
        if len(set(keys)) != len(keys):
            raise ValueError(f"duplicate action keys: {keys}")
        self.record = record
        self.actions: tuple[MenuAction, ...] = tuple(actions)
        self.selected_index = 0
        self.notifications = NotificationTimer(clock)
        self._clock = clock
        self._on_close = on_close
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(max_workers=1)
        self._foreground_executor = foreground_executor or InlineExecutor()
        self._phase: _Idle | _Executing | _AwaitingConfirmation | _Closed = _Idle()
        self._auto_close_at: float | None = None

    @property
    def phase(self) -> MenuPhase:
        return self._phase.phase

    @property
    def message(self) -> str:
        return self.notifications.message

    @property
    def is_closed(self) -> bool:
        return isinstance(self._phase, _Closed)

    @property
    def state(self) -> ActionMenuState:
        phase = self._phase
        if isinstance(phase, _AwaitingConfirmation):
            return ActionMenuState(
                selected_index=self.selected_index,
                phase=phase.phase,
                message=self.message,
                confirm_message=phase.confirm_message,
                pending_action=phase.pending_action,
            )
        return ActionMenuState(
            selected_index=self.selected_index,
            phase=phase.phase,
            message=self.message,
        )

    def action_for_key(self, key: str) -> MenuAction | None:
        if len(key) != 1:
            return None
        lowered = key.lower()
        for action in self.actions:
            if action.key.lower() == lowered:
                return action
        return None

    def handle_key(self, key: str) -> bool:
        """Apply one key token; returns whether anything changed."""
        phase = self._phase
        if isinstance(phase, (_Executing, _Closed)):
            return False
        if isinstance(phase, _AwaitingConfirmation):
            return self._handle_confirmation_key(phase, key)

        if key == "ESC":
            self.close()
            return True
        if key == "UP":
            previous = self.selected_index
            self.selected_index = max(0, self.selected_index - 1)
            return self.selected_index != previous
        if key == "DOWN":
            previous = self.selected_index
            self.selected_index = min(len(self.actions) - 1, self.selected_index + 1)
            return self.selected_index != previous
        if key == "ENTER":
            self._start(self.actions[self.selected_index], direct=False)
            return True
        action = self.action_for_key(key)
        if action is None:
            return False
        self.selected_index = self.actions.index(action)
        self._start(action, direct=True)
        return True

    def _handle_confirmation_key(self, phase: _AwaitingConfirmation, key: str) -> bool:
        """ESC closes the menu outright; cancel keys only drop the pending action."""
        if key == "ESC":
            self.close()
            return True
        if key in CONFIRM_KEYS:
            executor = self._executor
            future = executor.submit(phase.pending_action)
            self._phase = _Executing(future=future, direct=phase.direct)
            self.poll()
            return True
        if key in CANCEL_KEYS:
            self._phase = _Idle()
            return True
        return False

    def _start(self, action: MenuAction, *, direct: bool) -> None:
        self._auto_close_at = None
        executor = self._foreground_executor if action.foreground else self._executor
        logger.debug("running action %r on %s", action.label, self.record.path)
        future = executor.submit(action.action)
        self._phase = _Executing(future=future, direct=direct)
        self.poll()

    def poll(self) -> bool:
        """Apply a finished action and due timers; returns whether state changed."""
        changed = False
        phase = self._phase
        if isinstance(phase, _Executing) and phase.future.done():
            self._finish(phase)
            changed = True
        if self.notifications.tick():
            changed = True
        if (
            isinstance(self._phase, _Idle)
            and self._auto_close_at is not None
            and self._clock() >= self._auto_close_at
        ):
            self.close()
            changed = True
        return changed

    def _finish(self, phase: _Executing) -> None:
        try:
            outcome: ActionResult = phase.future.result()
        except Exception as exc:
            logger.warning("action failed for %s: %s", self.record.path, exc)
            self._phase = _Idle()
            self.notifications.show(format_action_error(exc), ERROR_MESSAGE_SECONDS)
            return

        if isinstance(outcome, ConfirmationRequest):
            self._phase = _AwaitingConfirmation(
                pending_action=outcome.proceed,
                confirm_message=outcome.message,
                direct=phase.direct,
            )
            return

        self._phase = _Idle()
        if not isinstance(outcome, str) or not outcome:
            self.notifications.show(format_action_error(None), ERROR_MESSAGE_SECONDS)
            return
        self.notifications.show(outcome, SUCCESS_MESSAGE_SECONDS)
        if phase.direct:
            self._auto_close_at = self._clock() + AUTO_CLOSE_SECONDS

    def close(self) -> None:
        """Close the menu, cancel pending timers, and notify the owner once."""
        if isinstance(self._phase, _Closed):
            return
        last_message = self.notifications.message
        self._phase = _Closed()
        self._auto_close_at = None
        self.notifications.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        if self._on_close is not None:
            self._on_close(last_message)
