"""Git operations service"""
from contextlib import contextmanager
from typing import List, Optional

import git

from got.constants import DETACHED_HEAD_NAME
from got.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    EmptyCommitError,
    GitOperationError,
    NoHeadError,
    RepositoryUnavailableError,
)
from got.logging_config import get_logger

logger = get_logger(__name__)

INITIAL_COMMIT_MESSAGE = "initial commit"


class GitService:
    """Service for Git operations on a single working tree."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path to the working tree (it may not be a repository yet)
        """
        self.repo_path = repo_path
        self.remote_name = "origin"
        logger.info(f"Git service initialized for {repo_path}")

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance.

        Creates a new repo instance for each call so background threads never
        share one. Opening a repo is cheap: it only reads the .git directory.

        Raises:
            RepositoryUnavailableError: If there is no repository at repo_path
        """
        try:
            return git.Repo(self.repo_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryUnavailableError(self.repo_path) from e

    @contextmanager
    def _git_operation(self, operation: str, branch: Optional[str] = None):
        """Wrap GitPython failures in GitOperationError."""
        try:
            yield
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip().removeprefix("stderr:").strip(" '\n")
            logger.error(f"{operation} failed: {stderr or e}")
            raise GitOperationError(operation, branch, stderr or str(e)) from e

    def is_repository(self) -> bool:
        """Check whether repo_path is inside a git working tree."""
        try:
            self._get_repo()
            return True
        except RepositoryUnavailableError:
            return False

    def init(self) -> None:
        """Initialize a new repository at repo_path."""
        with self._git_operation("init"):
            try:
                git.Repo.init(self.repo_path)
            except OSError as e:
                raise GitOperationError("init", message=str(e)) from e
        logger.info(f"Initialized repository in {self.repo_path}")

    def init_with_default_branch(self, branch_name: str) -> None:
        """Initialize a repository whose first branch is branch_name.

        Creates an empty initial commit so the branch exists, then points HEAD
        at branch_name instead of git's configured default.
        """
        with self._git_operation("init", branch_name):
            try:
                repo = git.Repo.init(self.repo_path)
            except OSError as e:
                raise GitOperationError("init", branch_name, str(e)) from e

            if not repo.head.is_valid():
                repo.index.commit(INITIAL_COMMIT_MESSAGE)

            if repo.active_branch.name != branch_name:
                repo.head.reference.rename(branch_name)

        logger.info(f"Initialized repository in {self.repo_path} on branch {branch_name}")

    def stage(self, path: str) -> None:
        """Add a path (including a deletion) to the index."""
        repo = self._get_repo()
        with self._git_operation("stage"):
            repo.git.add("--", path)
        logger.debug(f"Staged {path}")

    def unstage(self, path: str) -> None:
        """Remove a path's staged change from the index.

        With no commits yet the entry is dropped from the index; otherwise the
        entry is reset to HEAD's version.
        """
        repo = self._get_repo()
        with self._git_operation("unstage"):
            if repo.head.is_valid():
                repo.git.reset("-q", "HEAD", "--", path)
            else:
                # Only the index entry goes; the working-tree file is left alone
                repo.git.rm("--cached", "-f", "-q", "--", path)
        logger.debug(f"Unstaged {path}")

    def has_staged_changes(self) -> bool:
        """Check whether the index differs from HEAD."""
        repo = self._get_repo()
        if repo.head.is_valid():
            return bool(repo.index.diff("HEAD"))
        return bool(repo.index.entries)

    def commit(self, message: str) -> str:
        """Create a commit from the index.

        Returns:
            The new commit's short SHA

        Raises:
            EmptyCommitError: If nothing is staged
        """
        if not self.has_staged_changes():
            raise EmptyCommitError()

        repo = self._get_repo()
        with self._git_operation("commit"):
            commit = repo.index.commit(message)
        logger.info(f"Created commit {commit.hexsha[:7]}")
        return commit.hexsha[:7]

    def current_branch_name(self) -> str:
        """Name of the checked-out branch.

        An unborn branch still reports its name; a detached HEAD reports "HEAD".
        """
        repo = self._get_repo()
        if repo.head.is_detached:
            return DETACHED_HEAD_NAME
        return repo.active_branch.name

    def list_branches(self) -> List[str]:
        """Local branch names; remote-tracking refs are excluded."""
        repo = self._get_repo()
        return sorted(head.name for head in repo.heads)

    def create_branch(self, branch_name: str) -> None:
        """Create a branch at HEAD without checking it out."""
        repo = self._get_repo()
        if not repo.head.is_valid():
            raise NoHeadError("create_branch")
        if branch_name in [head.name for head in repo.heads]:
            raise BranchExistsError(branch_name)

        with self._git_operation("create_branch", branch_name):
            repo.create_head(branch_name)
        logger.info(f"Created branch {branch_name}")

    def switch_branch(self, branch_name: str) -> None:
        """Check out an existing local branch.

        Raises:
            BranchNotFoundError: If the branch does not exist
            GitOperationError: If local changes would be overwritten
        """
        repo = self._get_repo()
        if branch_name not in [head.name for head in repo.heads]:
            raise BranchNotFoundError(branch_name)

        with self._git_operation("switch_branch", branch_name):
            repo.git.checkout(branch_name)
        logger.info(f"Switched to branch {branch_name}")

    def rename_current_branch(self, branch_name: str) -> None:
        """Rename the checked-out branch (works on an unborn branch too)."""
        repo = self._get_repo()
        if not repo.head.is_detached and repo.active_branch.name == branch_name:
            return

        with self._git_operation("rename_branch", branch_name):
            repo.git.branch("-m", branch_name)
        logger.info(f"Renamed current branch to {branch_name}")

    def link_origin(self, url: str) -> None:
        """Add the origin remote."""
        repo = self._get_repo()
        if self.remote_name in [remote.name for remote in repo.remotes]:
            raise GitOperationError("link_origin", message=f"Remote '{self.remote_name}' already exists")

        with self._git_operation("link_origin"):
            repo.create_remote(self.remote_name, url)
        logger.info(f"Linked {self.remote_name} to {url}")

