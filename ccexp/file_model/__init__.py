"""File records, per-type display lookups, and filesystem discovery."""

from __future__ import annotations

from .file_types import GROUP_ORDER, file_icon, group_label, group_rank, type_color
from .types import (
    ClaudeFilePath,
    CommandInfo,
    FileGroup,
    FileRecord,
    FileType,
    create_file_path,
    safe_create_file_path,
)

__all__ = [
    "ClaudeFilePath",
    "CommandInfo",
    "FileGroup",
    "FileRecord",
    "FileType",
    "GROUP_ORDER",
    "create_file_path",
    "safe_create_file_path",
    "file_icon",
    "group_label",
    "group_rank",
    "type_color",
]
