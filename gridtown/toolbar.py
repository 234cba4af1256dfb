"""Choosing the active tool."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from gridtown.events import ChangeToolRequest


class ToolState(Enum):
    BUILDING = "Building"
    ROAD = "Road"
    ERASER = "Eraser"
    VIEW = "View"

    @classmethod
    def default(cls) -> ToolState:
        return cls.VIEW


_KEY_TOOLS = {
    "1": ToolState.BUILDING,
    "2": ToolState.ROAD,
    "3": ToolState.ERASER,
    "`": ToolState.VIEW,
}


def tool_for_key(key: str) -> ToolState | None:
    """The tool a key selects, or None for keys that select nothing."""
    return _KEY_TOOLS.get(key)


@dataclass
class Toolbar:
    """The active tool plus change requests waiting to be applied."""

    state: ToolState = ToolState.VIEW
    pending: list[ChangeToolRequest] = field(default_factory=list)

    def request(self, tool: ToolState) -> None:
        self.pending.append(ChangeToolRequest(tool))

    def press_key(self, key: str) -> ToolState | None:
        """Queue a change for a tool key; returns the tool requested, if any."""
        tool = tool_for_key(key)
        if tool is not None:
            self.request(tool)
        return tool

    def apply(self) -> ToolState:
        """Apply queued requests; the last one wins."""
        for change in self.pending:
            self.state = change.tool
        self.pending.clear()
        return self.state