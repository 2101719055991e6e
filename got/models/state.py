"""View state model and UI modes"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

from got.models.file_status import FileEntry


class Mode(Enum):
    """Mutually exclusive UI modes. Exactly one is active at a time."""
    NO_REPO = "no_repo"
    AUTH_PROMPT = "auth_prompt"
    CREATING_REMOTE = "creating_remote"
    INITIALIZING = "initializing"
    BRANCH_MENU = "branch_menu"
    CREATING_BRANCH = "creating_branch"
    SWITCHING_BRANCH = "switching_branch"
    BRANCH_LIST = "branch_list"
    MAIN = "main"
    QUITTING = "quitting"


# Modes that wait for a background operation to finish
BUSY_MODES = frozenset({
    Mode.INITIALIZING,
    Mode.CREATING_REMOTE,
    Mode.CREATING_BRANCH,
    Mode.SWITCHING_BRANCH,
})


@dataclass(frozen=True)
class StatusMessage:
    """Outcome shown on the status line. Severity follows Textual's notify levels."""
    text: str
    severity: str = "information"  # information, warning, error


@dataclass
class ViewState:
    """The single authoritative UI state."""
    mode: Mode
    files: List[FileEntry] = field(default_factory=list)
    cursor: int = 0
    current_branch: str = ""
    branches: List[str] = field(default_factory=list)  # Only populated in BRANCH_LIST
    branch_cursor: int = 0
    message: Optional[StatusMessage] = None

    @property
    def selected_branch(self) -> Optional[str]:
        if 0 <= self.branch_cursor < len(self.branches):
            return self.branches[self.branch_cursor]
        return None
