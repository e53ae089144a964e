"""File record datatypes shared by discovery, navigation, and actions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import NewType

from ..errors import InvalidFilePathError

ClaudeFilePath = NewType("ClaudeFilePath", str)


def create_file_path(path: str) -> ClaudeFilePath:
    """Validate ``path`` and return it as a ``ClaudeFilePath``.

    Raises ``InvalidFilePathError`` for non-string or empty input.
    """
    if not isinstance(path, str):
        raise InvalidFilePathError(f"Path must be a string, got {type(path).__name__}")
    if not path:
        raise InvalidFilePathError("Path must not be empty")
    return ClaudeFilePath(path)


def safe_create_file_path(path: str) -> ClaudeFilePath | None:
    """Like ``create_file_path`` but returns ``None`` instead of raising."""
    try:
        return create_file_path(path)
    except InvalidFilePathError:
        return None


class FileType(enum.Enum):
    """Closed set of file classifications."""

    PROJECT_CONFIG = "claude-md"
    LOCAL_PROJECT_CONFIG = "claude-local-md"
    SLASH_COMMAND = "slash-command"
    GLOBAL_CONFIG = "global-md"
    SETTINGS = "settings-json"
    LOCAL_SETTINGS = "settings-local-json"
    OTHER = "unknown"


@dataclass(frozen=True)
class CommandInfo:
    """Lightweight descriptor of one slash command."""

    name: str
    description: str | None = None
    has_arguments: bool = False


@dataclass(frozen=True, eq=False)
class FileRecord:
    """One discovered file.

    Two records are the same entity iff their paths are equal.
    """

    path: ClaudeFilePath
    file_type: FileType
    size: int = 0
    last_modified: float = 0.0
    commands: tuple[CommandInfo, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        create_file_path(self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileRecord):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def name(self) -> str:
        """Base name of the path."""
        return self.path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class FileGroup:
    """Files sharing one ``FileType``, independently collapsible."""

    file_type: FileType
    files: tuple[FileRecord, ...]
    is_expanded: bool = True

    def __post_init__(self) -> None:
        for record in self.files:
            if record.file_type is not self.file_type:
                raise ValueError(
                    f"{record.path} has type {record.file_type.value}, "
                    f"group is {self.file_type.value}"
                )

    @property
    def count(self) -> int:
        return len(self.files)
