"""Grouped file list navigation: selection, collapse state, and filtering.

``NavigationState`` is plain data derived once per scan. All mutation goes
through ``NavigationController`` so selection stays valid after every change.
Selection indexes the flattened list of visible nodes: group headers plus the
matching files of expanded groups.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .file_model import GROUP_ORDER, FileGroup, FileRecord, FileType, group_rank


class Direction(enum.IntEnum):
    UP = -1
    DOWN = 1


@dataclass(frozen=True)
class VisibleNode:
    """One selectable row: a group header or a file leaf."""

    file_type: FileType
    record: FileRecord | None = None
    count: int = 0
    is_expanded: bool = True

    @property
    def is_group(self) -> bool:
        return self.record is None

    @property
    def key(self) -> tuple[str, object]:
        if self.record is None:
            return ("group", self.file_type)
        return ("file", self.record.path)


@dataclass
class NavigationState:
    """Ordered groups, selection index, and current filter text."""

    groups: list[FileGroup] = field(default_factory=list)
    selection: int = 0
    filter_text: str = ""

    @property
    def total_files(self) -> int:
        return sum(group.count for group in self.groups)


def _file_sort_key(record: FileRecord) -> tuple[str, str]:
    return (record.name.casefold(), record.path)


def build_navigation_state(files: Iterable[FileRecord]) -> NavigationState:
    """Group ``files`` by type in ``GROUP_ORDER`` with every group expanded."""
    by_type: dict[FileType, list[FileRecord]] = {}
    seen: set[str] = set()
    for record in files:
        if record.path in seen:
            continue
        seen.add(record.path)
        by_type.setdefault(record.file_type, []).append(record)

    groups = [
        FileGroup(
            file_type=file_type,
            files=tuple(sorted(by_type[file_type], key=_file_sort_key)),
            is_expanded=True,
        )
        for file_type in sorted(by_type, key=group_rank)
    ]
    return NavigationState(groups=groups)


def matches_filter(record: FileRecord, filter_text: str) -> bool:
    """Case-insensitive substring match against the file's base name."""
    if not filter_text:
        return True
    return filter_text.casefold() in record.name.casefold()


class NavigationController:
    """Pure transition functions over one ``NavigationState``."""

    def __init__(self, state: NavigationState) -> None:
        self.state = state

    @classmethod
    def from_files(cls, files: Iterable[FileRecord]) -> "NavigationController":
        return cls(build_navigation_state(files))

    def matching_files(self, group: FileGroup) -> tuple[FileRecord, ...]:
        text = self.state.filter_text
        if not text:
            return group.files
        return tuple(record for record in group.files if matches_filter(record, text))

    def visible_nodes(self) -> list[VisibleNode]:
        """Flatten visible headers and leaves in display order."""
        nodes: list[VisibleNode] = []
        filtering = bool(self.state.filter_text)
        for group in self.state.groups:
            matched = self.matching_files(group)
            if filtering and not matched:
                continue
            nodes.append(
                VisibleNode(
                    file_type=group.file_type,
                    count=len(matched),
                    is_expanded=group.is_expanded,
                )
            )
            if group.is_expanded:
                nodes.extend(
                    VisibleNode(file_type=group.file_type, record=record)
                    for record in matched
                )
        return nodes

    def _clamped(self, index: int, node_count: int) -> int:
        if node_count <= 0:
            return 0
        return max(0, min(index, node_count - 1))

    def selected_node(self) -> VisibleNode | None:
        nodes = self.visible_nodes()
        if not nodes:
            return None
        return nodes[self._clamped(self.state.selection, len(nodes))]

    def selected_file(self) -> FileRecord | None:
        node = self.selected_node()
        return None if node is None else node.record

    def visible_file_count(self) -> int:
        return sum(len(self.matching_files(group)) for group in self.state.groups)

    def group_for(self, file_type: FileType) -> FileGroup | None:
        for group in self.state.groups:
            if group.file_type is file_type:
                return group
        return None

    def toggle_group(self, file_type: FileType) -> bool:
        """Flip ``is_expanded`` for ``file_type``; returns whether it existed.

        A selected leaf hidden by the collapse moves selection to its header.
        """
        group_idx = next(
            (idx for idx, group in enumerate(self.state.groups) if group.file_type is file_type),
            None,
        )
        if group_idx is None:
            return False

        previous = self.selected_node()
        group = self.state.groups[group_idx]
        self.state.groups[group_idx] = replace(group, is_expanded=not group.is_expanded)

        nodes = self.visible_nodes()
        if previous is None:
            self.state.selection = 0
            return True
        keys = [node.key for node in nodes]
        if previous.key in keys:
            self.state.selection = keys.index(previous.key)
            return True
        header_key = ("group", previous.file_type)
        self.state.selection = keys.index(header_key) if header_key in keys else 0
        return True

    def move_selection(self, direction: Direction, distance: int = 1) -> bool:
        """Move selection, clamping at both ends; returns whether it moved."""
        nodes = self.visible_nodes()
        if not nodes:
            self.state.selection = 0
            return False
        current = self._clamped(self.state.selection, len(nodes))
        target = self._clamped(current + int(direction) * max(0, distance), len(nodes))
        self.state.selection = target
        return target != current

    def select_file(self, record: FileRecord) -> bool:
        """Select ``record`` if it is currently visible."""
        for idx, node in enumerate(self.visible_nodes()):
            if node.record is not None and node.record == record:
                self.state.selection = idx
                return True
        return False

    def set_filter(self, text: str) -> None:
        """Replace filter text and keep selection on a visible node.

        When the selected node disappears, selection moves to the nearest
        preceding node that is still visible, or to node 0.
        """
        old_nodes = self.visible_nodes()
        old_selection = self._clamped(self.state.selection, len(old_nodes))
        self.state.filter_text = text
        new_nodes = self.visible_nodes()
        new_index = {node.key: idx for idx, node in enumerate(new_nodes)}

        self.state.selection = 0
        for idx in range(old_selection, -1, -1):
            if idx >= len(old_nodes):
                continue
            key = old_nodes[idx].key
            if key in new_index:
                self.state.selection = new_index[key]
                return

    def append_filter_char(self, ch: str) -> None:
        self.set_filter(self.state.filter_text + ch)

    def pop_filter_char(self) -> bool:
        if not self.state.filter_text:
            return False
        self.set_filter(self.state.filter_text[:-1])
        return True

    def clear_filter(self) -> bool:
        if not self.state.filter_text:
            return False
        self.set_filter("")
        return True

    def activate_selection(self) -> FileRecord | None:
        """Toggle a selected header, or return the selected file."""
        node = self.selected_node()
        if node is None:
            return None
        if node.is_group:
            self.toggle_group(node.file_type)
            return None
        return node.record


__all__ = [
    "Direction",
    "GROUP_ORDER",
    "NavigationController",
    "NavigationState",
    "VisibleNode",
    "build_navigation_state",
    "matches_filter",
]
