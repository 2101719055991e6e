"""Services wrapping git, GitHub and form validation."""

from .git_service import GitService
from .status_service import StatusService
from .github_service import GitHubService, RemoteHandle, convert_to_ssh_url
from .validation_service import ValidationService

__all__ = [
    "GitService",
    "StatusService",
    "GitHubService",
    "RemoteHandle",
    "convert_to_ssh_url",
    "ValidationService",
]
