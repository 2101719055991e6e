"""Data models for got."""

from .file_status import FileClassification, FileEntry
from .state import Mode, ViewState, StatusMessage, BUSY_MODES
from .events import (
    Operation,
    FormKind,
    RepositoryRequest,
    CommitRequest,
    CompletionEvent,
    ScheduledOperation,
    PendingForm,
    Effect,
)

__all__ = [
    "FileClassification",
    "FileEntry",
    "Mode",
    "ViewState",
    "StatusMessage",
    "BUSY_MODES",
    "Operation",
    "FormKind",
    "RepositoryRequest",
    "CommitRequest",
    "CompletionEvent",
    "ScheduledOperation",
    "PendingForm",
    "Effect",
]
