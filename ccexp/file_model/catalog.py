"""Filesystem discovery of Claude configuration files.

Walks a project root (and optionally the user's ``~/.claude`` directory) and
returns a flat list of ``FileRecord`` values. This is the default catalog
provider used by the runtime; anything returning ``list[FileRecord]`` can
stand in for it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..errors import ScanError
from ..preview import read_text
from .types import CommandInfo, FileRecord, FileType, create_file_path

logger = logging.getLogger(__name__)

MAX_SCAN_DEPTH = 20
MAX_CONFIG_FILE_BYTES = 1024 * 1024
MAX_SLASH_COMMAND_BYTES = 512 * 1024
COMMANDS_MARKER = (".claude", "commands")

PROJECT_CONFIG_NAME = "CLAUDE.md"
LOCAL_PROJECT_CONFIG_NAME = "CLAUDE.local.md"
SETTINGS_NAME = "settings.json"
LOCAL_SETTINGS_NAME = "settings.local.json"

# Security-sensitive and bulky directories never descended into.
DEFAULT_EXCLUSIONS = frozenset(
    {
        ".ssh",
        ".gnupg",
        ".gpg",
        ".pki",
        ".aws",
        ".azure",
        ".gcp",
        ".kube",
        ".docker",
        "credentials",
        "secrets",
        ".mozilla",
        ".chrome",
        ".chromium",
        ".password-store",
        ".pass",
        ".certificates",
        ".openvpn",
        ".wireguard",
        "node_modules",
        "vendor",
        "bower_components",
        "jspm_packages",
        ".pnpm",
        ".yarn",
        "dist",
        "build",
        "out",
        "target",
        ".next",
        ".nuxt",
        ".cache",
        ".tmp",
        "tmp",
        "temp",
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        ".vscode",
        ".idea",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        "venv",
        ".venv",
        "env",
        "site-packages",
        ".tox",
        "coverage",
        "htmlcov",
    }
)


def _is_under_commands_dir(path: Path) -> bool:
    parts = path.parent.parts
    for idx in range(len(parts) - 1):
        if (parts[idx], parts[idx + 1]) == COMMANDS_MARKER:
            return True
    return False


def detect_file_type(path: Path, home: Path | None = None) -> FileType:
    """Classify ``path`` by name and location."""
    home_dir = home if home is not None else Path.home()
    name = path.name
    parent = path.parent
    if name == PROJECT_CONFIG_NAME:
        if parent.name == ".claude" and parent.parent == home_dir:
            return FileType.GLOBAL_CONFIG
        return FileType.PROJECT_CONFIG
    if name == LOCAL_PROJECT_CONFIG_NAME:
        return FileType.LOCAL_PROJECT_CONFIG
    if parent.name == ".claude" and name == SETTINGS_NAME:
        return FileType.SETTINGS
    if parent.name == ".claude" and name == LOCAL_SETTINGS_NAME:
        return FileType.LOCAL_SETTINGS
    if name.endswith(".md") and _is_under_commands_dir(path):
        return FileType.SLASH_COMMAND
    return FileType.OTHER


def _is_candidate(path: Path) -> bool:
    if path.name in {PROJECT_CONFIG_NAME, LOCAL_PROJECT_CONFIG_NAME}:
        return True
    if path.parent.name == ".claude" and path.name in {SETTINGS_NAME, LOCAL_SETTINGS_NAME}:
        return True
    return path.name.endswith(".md") and _is_under_commands_dir(path)


def _iter_candidates(root: Path, max_depth: int):
    """Yield candidate file paths below ``root`` up to ``max_depth`` levels."""
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            with os.scandir(directory) as entries:
                children = sorted(entries, key=lambda entry: entry.name)
        except OSError as exc:
            if directory == root:
                raise
            logger.warning("skipping unreadable directory %s: %s", directory, exc)
            continue

        subdirs: list[Path] = []
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                continue
            child_path = Path(child.path)
            if is_dir:
                name = child.name
                if name in DEFAULT_EXCLUSIONS:
                    continue
                if name.startswith(".") and name != ".claude":
                    continue
                # .claude trees are always read in full, even when not recursive.
                if depth + 1 < max_depth or ".claude" in child_path.parts[len(root.parts) :]:
                    subdirs.append(child_path)
                continue
            if _is_candidate(child_path):
                yield child_path
        stack.extend((subdir, depth + 1) for subdir in reversed(subdirs))


def _slash_command_relative_name(path: Path) -> str:
    parts = path.parts
    for idx in range(len(parts) - 2, -1, -1):
        if (parts[idx], parts[idx + 1]) == COMMANDS_MARKER:
            return "/".join(parts[idx + 2 :])
    return path.name


def _command_description(content: str) -> str | None:
    lines = content.splitlines()
    if lines and lines[0].strip() == "---":
        for line in lines[1:]:
            stripped = line.strip()
            if stripped == "---":
                break
            if stripped.startswith("description:"):
                value = stripped[len("description:") :].strip().strip("\"'")
                if value:
                    return value
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()
    for line in lines:
        stripped = line.strip()
        if stripped and stripped != "---" and not stripped.startswith("#"):
            return stripped
    return None


def parse_slash_command(path: Path, content: str) -> tuple[CommandInfo, tuple[str, ...]] | None:
    """Return the command descriptor and tags for a command file.

    Empty command files are not commands and yield ``None``.
    """
    if not content.strip():
        return None
    relative = _slash_command_relative_name(path)
    name = relative[:-3] if relative.endswith(".md") else relative
    name = name.replace("/", ":")
    namespace_parts = relative.split("/")[:-1]
    tags = (namespace_parts[0],) if namespace_parts else ()
    info = CommandInfo(
        name=name,
        description=_command_description(content),
        has_arguments="$ARGUMENTS" in content,
    )
    return info, tags


def build_file_record(path: Path, home: Path | None = None) -> FileRecord | None:
    """Stat, read, and classify one file; ``None`` when it should be skipped."""
    try:
        stat = path.stat()
    except OSError as exc:
        logger.warning("cannot stat %s: %s", path, exc)
        return None

    file_type = detect_file_type(path, home)
    limit = MAX_SLASH_COMMAND_BYTES if file_type is FileType.SLASH_COMMAND else MAX_CONFIG_FILE_BYTES
    if stat.st_size > limit:
        logger.warning("file too large, skipping: %s (%d bytes)", path, stat.st_size)
        return None

    commands: tuple[CommandInfo, ...] = ()
    tags: tuple[str, ...] = ()
    if file_type is FileType.SLASH_COMMAND:
        try:
            content = read_text(path)
        except OSError as exc:
            logger.warning("cannot read %s: %s", path, exc)
            return None
        parsed = parse_slash_command(path, content)
        if parsed is None:
            return None
        command, tags = parsed
        commands = (command,)
    elif file_type in {FileType.SETTINGS, FileType.LOCAL_SETTINGS}:
        try:
            json.loads(read_text(path))
        except (OSError, ValueError) as exc:
            logger.warning("invalid settings file %s: %s", path, exc)
            return None

    return FileRecord(
        path=create_file_path(str(path)),
        file_type=file_type,
        size=int(stat.st_size),
        last_modified=float(stat.st_mtime),
        commands=commands,
        tags=tags,
    )


def _global_candidates(home: Path) -> list[Path]:
    claude_dir = home / ".claude"
    out: list[Path] = []
    for name in (PROJECT_CONFIG_NAME, SETTINGS_NAME, LOCAL_SETTINGS_NAME):
        candidate = claude_dir / name
        if candidate.is_file():
            out.append(candidate)
    commands_dir = claude_dir / "commands"
    if commands_dir.is_dir():
        out.extend(sorted(path for path in commands_dir.rglob("*.md") if path.is_file()))
    return out


def scan_claude_files(
    root: Path,
    *,
    recursive: bool = True,
    include_global: bool = True,
    home: Path | None = None,
) -> list[FileRecord]:
    """Discover Claude files under ``root``.

    Raises ``ScanError`` when ``root`` itself cannot be listed. Individual
    unreadable files are logged and skipped.
    """
    home_dir = home if home is not None else Path.home()
    max_depth = MAX_SCAN_DEPTH if recursive else 1
    if not root.is_dir():
        raise ScanError(f"Not a directory: {root}")

    try:
        paths = list(_iter_candidates(root, max_depth))
    except OSError as exc:
        raise ScanError(f"Failed to scan {root}: {exc}") from exc
    if include_global:
        paths.extend(_global_candidates(home_dir))

    records: list[FileRecord] = []
    seen: set[Path] = set()
    for path in paths:
        try:
            key = path.resolve()
        except OSError:
            key = path
        if key in seen:
            continue
        seen.add(key)
        record = build_file_record(path, home_dir)
        if record is not None:
            records.append(record)
    logger.info("scanned %s: %d files", root, len(records))
    return records
