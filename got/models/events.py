"""Completion events, effects and form values exchanged with the controller"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union

from got.constants import DEFAULT_BRANCH
from got.models.file_status import FileEntry


class Operation(Enum):
    """Background operations the controller can schedule."""
    INIT = "init"
    CREATE_REMOTE = "create_remote"
    CREATE_BRANCH = "create_branch"
    SWITCH_BRANCH = "switch_branch"
    LIST_BRANCHES = "list_branches"


class FormKind(Enum):
    """User input the controller can suspend on."""
    TOKEN = "token"
    REPOSITORY = "repository"
    COMMIT = "commit"
    BRANCH_NAME = "branch_name"
    BRANCH_SELECT = "branch_select"


@dataclass(frozen=True)
class RepositoryRequest:
    """Metadata for a new GitHub repository."""
    name: str
    description: str = ""
    private: bool = False
    default_branch: str = DEFAULT_BRANCH


@dataclass(frozen=True)
class CommitRequest:
    """Parts of a conventional commit message."""
    type: str
    subject: str
    scope: str = ""
    body: str = ""


@dataclass(frozen=True)
class CompletionEvent:
    """Result of a finished background operation: a payload or an error."""
    operation: Operation
    files: Tuple[FileEntry, ...] = ()
    branch: Optional[str] = None
    branches: Tuple[str, ...] = ()
    remote_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, operation: Operation, error: str) -> "CompletionEvent":
        return cls(operation=operation, error=error)


@dataclass(frozen=True)
class ScheduledOperation:
    """Fire-and-forget work; its result comes back as a CompletionEvent."""
    operation: Operation
    branch: Optional[str] = None
    repository: Optional[RepositoryRequest] = None
    token: Optional[str] = None
    save_token: bool = False


@dataclass(frozen=True)
class PendingForm:
    """Suspension point: collect input, then call resume with it (None = cancelled)."""
    kind: FormKind
    resume: Callable[[Any], Optional["Effect"]] = field(compare=False, repr=False)
    options: Tuple[str, ...] = ()
    error: Optional[str] = None
    initial: Any = None


Effect = Union[ScheduledOperation, PendingForm]
