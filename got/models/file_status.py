"""File status model"""
from enum import Enum
from dataclasses import dataclass


class FileClassification(Enum):
    """How a changed path differs between HEAD, index and working tree."""
    STAGED = "staged"
    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"


@dataclass
class FileEntry:
    """A changed path as shown in the file list."""
    path: str
    classification: FileClassification
    selected: bool = False

    @property
    def is_staged(self) -> bool:
        return self.classification is FileClassification.STAGED
