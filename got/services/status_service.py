"""Working tree status service"""
from typing import Dict, List, Optional

import git

from got.exceptions import GitOperationError, RepositoryUnavailableError
from got.logging_config import get_logger
from got.models.file_status import FileClassification, FileEntry

logger = get_logger(__name__)

# Index-side status codes that count as a staged change
STAGED_CODES = frozenset("AMDRCT")
# Worktree-side status codes that count as an unstaged change
UNSTAGED_CODES = frozenset("MDT")


def classify(index_status: str, worktree_status: str) -> Optional[FileClassification]:
    """Classify a porcelain XY pair.

    A staged change wins over an unstaged one, which wins over untracked.
    Returns None for entries that are none of the three (e.g. unmerged).
    """
    if index_status == "?" and worktree_status == "?":
        return FileClassification.UNTRACKED
    if index_status in STAGED_CODES:
        return FileClassification.STAGED
    if worktree_status in UNSTAGED_CODES:
        return FileClassification.UNSTAGED
    return None


def parse_porcelain(output: str) -> List[FileEntry]:
    """Parse `git status --porcelain=v1 -z` output into sorted file entries."""
    entries: Dict[str, FileEntry] = {}
    records = output.split("\0")

    i = 0
    while i < len(records):
        record = records[i]
        i += 1
        if len(record) < 4:
            continue

        # Format: XY<space>path (X=index, Y=worktree)
        index_status, worktree_status, path = record[0], record[1], record[3:]

        # Renames and copies are followed by a record holding the source path
        if index_status in "RC" or worktree_status in "RC":
            i += 1

        classification = classify(index_status, worktree_status)
        if classification is None:
            logger.debug(f"Skipping {path} with status '{index_status}{worktree_status}'")
            continue

        entries[path] = FileEntry(path=path, classification=classification)

    return [entries[path] for path in sorted(entries)]


class StatusService:
    """Reconciles HEAD, index and working tree into a flat list of changed paths."""

    def __init__(self, repo_path: str):
        self.repo_path = repo_path

    def refresh_status(self) -> List[FileEntry]:
        """Classify every changed path.

        Side-effect free; calling it twice without changes in between gives
        equal results.

        Raises:
            RepositoryUnavailableError: If there is no repository at repo_path
        """
        try:
            repo = git.Repo(self.repo_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryUnavailableError(self.repo_path) from e

        try:
            output = repo.git.status("--porcelain=v1", "-z", "--untracked-files=all")
        except git.exc.GitCommandError as e:
            raise GitOperationError("status", message=str(e.stderr or e).strip()) from e

        files = parse_porcelain(output)
        logger.debug(f"Status: {len(files)} changed paths")
        return files
