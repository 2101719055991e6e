"""Pytest fixtures for got tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from got.config import Config
from got.controller import ViewController
from got.models.file_status import FileClassification, FileEntry
from got.services.git_service import GitService
from got.services.github_service import GitHubService
from got.services.status_service import StatusService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def empty_repo_dir(temp_dir):
    """A directory that is not a git repository yet."""
    path = temp_dir / "project"
    path.mkdir()
    return path


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def unborn_repo(empty_repo_dir):
    """A freshly initialized repository without commits."""
    repo = git.Repo.init(empty_repo_dir)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    yield repo

    repo.close()


@pytest.fixture
def sample_files():
    """One file of each classification, sorted by path."""
    return [
        FileEntry(path="a.txt", classification=FileClassification.STAGED),
        FileEntry(path="b.txt", classification=FileClassification.UNSTAGED),
        FileEntry(path="c.txt", classification=FileClassification.UNTRACKED),
    ]


@pytest.fixture
def mock_git_service():
    """Create a mock GitService for an existing repository on main."""
    service = Mock(spec=GitService)
    service.is_repository.return_value = True
    service.current_branch_name.return_value = "main"
    service.list_branches.return_value = ["feature", "main"]
    service.commit.return_value = "abc1234"
    return service


@pytest.fixture
def mock_status_service(sample_files):
    """Create a mock StatusService returning sample_files."""
    service = Mock(spec=StatusService)
    service.refresh_status.return_value = sample_files
    return service


@pytest.fixture
def mock_github_service():
    """Create a mock GitHubService."""
    service = Mock(spec=GitHubService)
    service.validate_credential.return_value = "octocat"
    return service


@pytest.fixture
def config_path(temp_dir):
    return temp_dir / "config" / "config.json"


@pytest.fixture
def controller(mock_git_service, mock_status_service, mock_github_service, config_path):
    """A controller over mock services, started in an existing repository."""
    return ViewController(
        mock_git_service,
        mock_status_service,
        mock_github_service,
        config=Config(),
        config_path=config_path,
    )


@pytest.fixture
def no_repo_controller(mock_git_service, mock_status_service, mock_github_service, config_path):
    """A controller started outside any repository."""
    mock_git_service.is_repository.return_value = False
    return ViewController(
        mock_git_service,
        mock_status_service,
        mock_github_service,
        config=Config(),
        config_path=config_path,
    )
