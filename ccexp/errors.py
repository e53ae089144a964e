"""Exception hierarchy shared by scanning, actions, and the CLI.

Action errors are caught by the menu engine and turned into status text.
Only ``ScanError`` changes top-level application state.
"""

from __future__ import annotations


class CcexpError(Exception):
    """Base class for all ccexp errors."""


class InvalidFilePathError(CcexpError, ValueError):
    """Raised when a file path fails validation."""


class ScanError(CcexpError):
    """File discovery could not complete."""


class ActionError(CcexpError):
    """Base class for failures raised by menu actions."""


class ActionFailure(ActionError):
    """Generic action failure carrying only a message."""


class ReadFailure(ActionError):
    """Target file could not be read at action time."""


class ClipboardFailure(ActionError):
    """No clipboard command accepted the text."""


class OpenerFailure(ActionError):
    """Default-application opener failed."""


class DestinationCheckFailure(ActionError):
    """Copy destination could not be checked for existence."""


class EditorNotConfigured(ActionError):
    """Neither editor environment variable is set."""


class EditorNotFound(ActionError):
    """Configured editor command could not be located or executed."""


class EditorLaunchFailure(ActionError):
    """Editor was found but failed to run."""
