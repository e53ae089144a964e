"""Menu action datatypes shared by the engine and the action builders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ConfirmationRequest:
    """Returned by an action that must ask before doing its work.

    Nothing has been written when this is returned; ``proceed`` performs the
    deferred operation.
    """

    message: str
    proceed: Callable[[], str]


ActionResult = Union[str, ConfirmationRequest]


@dataclass(frozen=True)
class MenuAction:
    """One entry of the per-file action menu.

    ``foreground`` actions take over the terminal and run on the loop thread.
    """

    key: str
    label: str
    description: str
    action: Callable[[], ActionResult]
    foreground: bool = False
