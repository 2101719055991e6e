"""GitHub API integration service"""
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING, Union
from urllib.parse import urlparse

from github import Auth, Github, GithubException

from got.exceptions import (
    AuthenticationError,
    GitHubAPIError,
    NetworkError,
    RepositoryNameConflictError,
)
from got.logging_config import get_logger

if TYPE_CHECKING:
    from got.config import Config
    from got.services.git_service import GitService

logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteHandle:
    """A repository created on GitHub."""
    full_name: str
    html_url: str
    clone_url: str


def convert_to_ssh_url(url: str, host: str = "github.com") -> str:
    """Rewrite an HTTPS clone URL to the SSH form for the given host.

    https://github.com/<owner>/<repo>.git -> git@github.com:<owner>/<repo>.git
    Any other URL is returned unchanged.
    """
    if not url.startswith("https://"):
        return url

    parsed = urlparse(url)
    if parsed.hostname != host:
        return url

    path = parsed.path.strip("/")
    if not path:
        return url
    if path.endswith(".git"):
        path = path[:-4]

    return f"git@{host}:{path}.git"


class GitHubService:
    """Creates repositories on GitHub and links them to the local working tree."""

    def __init__(self, git_service: "GitService", config: Union["Config", dict]):
        """Initialize the service.

        Args:
            git_service: Service for the local working tree
            config: Configuration dictionary or Config object
        """
        self.git_service = git_service
        self.config = config
        self.hosting_domain = config.get("hosting_domain", "github.com")
        self.ssh_remote = config.get("ssh_remote", True)

    def _client(self, token: str) -> Github:
        return Github(auth=Auth.Token(token))

    def _translate_error(self, operation: str, error: Exception, name: Optional[str] = None) -> GitHubAPIError:
        """Map PyGithub and transport errors onto the service's exceptions."""
        if isinstance(error, GithubException):
            message = error.data.get("message") if isinstance(error.data, dict) else None
            if error.status in (401, 403):
                return AuthenticationError(operation, message)
            if error.status == 422 and name:
                return RepositoryNameConflictError(name)
            return GitHubAPIError(operation, message or str(error))
        # requests' connection errors derive from OSError
        return NetworkError(operation, str(error))

    def validate_credential(self, token: str) -> str:
        """Check that GitHub accepts the token.

        Returns:
            The login of the authenticated user

        Raises:
            AuthenticationError: If the token is rejected
            NetworkError: If GitHub cannot be reached
        """
        github = self._client(token)
        try:
            login = github.get_user().login
        except (GithubException, OSError) as e:
            logger.error(f"[GitHub] Token validation failed: {e}")
            raise self._translate_error("validate_token", e) from e
        finally:
            github.close()

        logger.info(f"[GitHub] Authenticated as {login}")
        return login

    def remote_url_for(self, clone_url: str) -> str:
        """The URL to use for origin, honoring the ssh_remote setting."""
        if self.ssh_remote:
            return convert_to_ssh_url(clone_url, self.hosting_domain)
        return clone_url

    def create_remote_repository(
        self,
        token: str,
        name: str,
        description: str = "",
        private: bool = False,
        default_branch: str = "",
    ) -> RemoteHandle:
        """Create a repository for the authenticated user and link it as origin.

        After linking, the local branch is renamed to default_branch when given.

        Raises:
            AuthenticationError, RepositoryNameConflictError, NetworkError:
                From the GitHub API
            GitOperationError: If origin cannot be added or the branch renamed
        """
        github = self._client(token)
        try:
            user = github.get_user()
            created = user.create_repo(name, description=description, private=private)
            handle = RemoteHandle(
                full_name=created.full_name,
                html_url=created.html_url,
                clone_url=created.clone_url,
            )
        except (GithubException, OSError) as e:
            logger.error(f"[GitHub] Failed to create repository {name}: {e}")
            raise self._translate_error("create_repository", e, name) from e
        finally:
            github.close()

        logger.info(f"[GitHub] Created repository {handle.full_name}")

        self.git_service.link_origin(self.remote_url_for(handle.clone_url))

        if default_branch:
            self.git_service.rename_current_branch(default_branch)

        return handle
