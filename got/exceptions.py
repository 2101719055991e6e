"""Custom exceptions for got"""

from typing import Optional


class GotError(Exception):
    """Base exception for all got errors."""
    pass


class ConfigError(GotError):
    """Exception raised when the configuration file cannot be read or written."""
    pass


class ValidationError(GotError):
    """Exception raised when form input fails a local check."""
    pass


class GitOperationError(GotError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class RepositoryUnavailableError(GitOperationError):
    """Exception raised when there is no repository at the working path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("open_repository", message=f"No git repository at {path}")


class NoHeadError(GitOperationError):
    """Exception raised when an operation needs a commit but HEAD is unborn."""

    def __init__(self, operation: str):
        super().__init__(operation, message="Repository has no commits yet")


class EmptyCommitError(GitOperationError):
    """Exception raised when committing with nothing staged."""

    def __init__(self):
        super().__init__("commit", message="Nothing staged to commit")


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        super().__init__("switch_branch", branch, "Branch not found")


class BranchExistsError(GitOperationError):
    """Exception raised when creating a branch that already exists."""

    def __init__(self, branch: str):
        super().__init__("create_branch", branch, "Branch already exists")


class GitHubAPIError(GotError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class AuthenticationError(GitHubAPIError):
    """Exception raised when GitHub rejects the access token."""

    def __init__(self, operation: str, message: Optional[str] = None):
        super().__init__(operation, message or "Bad credentials")


class RepositoryNameConflictError(GitHubAPIError):
    """Exception raised when the repository name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("create_repository", f"Repository '{name}' already exists")


class NetworkError(GitHubAPIError):
    """Exception raised when GitHub cannot be reached."""
    pass
