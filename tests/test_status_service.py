"""Tests for StatusService"""
import pytest
from pathlib import Path

from got.exceptions import RepositoryUnavailableError
from got.models.file_status import FileClassification
from got.services.status_service import StatusService, classify, parse_porcelain


def statuses(files):
    return {f.path: f.classification for f in files}


class TestClassify:
    """Test porcelain XY classification."""

    @pytest.mark.parametrize("index_status,worktree_status,expected", [
        ("A", " ", FileClassification.STAGED),
        ("M", "M", FileClassification.STAGED),
        ("D", " ", FileClassification.STAGED),
        ("R", " ", FileClassification.STAGED),
        (" ", "M", FileClassification.UNSTAGED),
        (" ", "D", FileClassification.UNSTAGED),
        ("?", "?", FileClassification.UNTRACKED),
    ])
    def test_precedence(self, index_status, worktree_status, expected):
        assert classify(index_status, worktree_status) == expected

    def test_unmerged_is_omitted(self):
        assert classify("U", "U") is None

    def test_ignored_is_omitted(self):
        assert classify("!", "!") is None


class TestParsePorcelain:
    """Test parsing of `git status --porcelain=v1 -z` output."""

    def test_empty_output(self):
        assert parse_porcelain("") == []

    def test_sorted_by_path(self):
        output = "?? z.txt\0 M a.txt\0A  m.txt\0"
        files = parse_porcelain(output)
        assert [f.path for f in files] == ["a.txt", "m.txt", "z.txt"]

    def test_rename_skips_source_record(self):
        output = "R  new.txt\0old.txt\0?? other.txt\0"
        files = parse_porcelain(output)
        assert statuses(files) == {
            "new.txt": FileClassification.STAGED,
            "other.txt": FileClassification.UNTRACKED,
        }

    def test_unmerged_entries_are_dropped(self):
        output = "UU conflict.txt\0 M ok.txt\0"
        assert [f.path for f in parse_porcelain(output)] == ["ok.txt"]

    def test_entries_are_not_selected(self):
        files = parse_porcelain(" M a.txt\0")
        assert files[0].selected is False


class TestRefreshStatus:
    """Test status against real repositories."""

    def test_clean_repository(self, git_repo):
        service = StatusService(git_repo.working_dir)
        assert service.refresh_status() == []

    def test_classifies_each_kind(self, git_repo):
        repo_path = Path(git_repo.working_dir)
        (repo_path / "README.md").write_text("changed\n")
        (repo_path / "new.txt").write_text("new\n")
        (repo_path / "staged.txt").write_text("staged\n")
        git_repo.index.add(["staged.txt"])

        files = StatusService(git_repo.working_dir).refresh_status()

        assert statuses(files) == {
            "README.md": FileClassification.UNSTAGED,
            "new.txt": FileClassification.UNTRACKED,
            "staged.txt": FileClassification.STAGED,
        }

    def test_staged_wins_over_unstaged(self, git_repo):
        repo_path = Path(git_repo.working_dir)
        (repo_path / "README.md").write_text("first\n")
        git_repo.index.add(["README.md"])
        (repo_path / "README.md").write_text("second\n")

        files = StatusService(git_repo.working_dir).refresh_status()

        assert statuses(files) == {"README.md": FileClassification.STAGED}

    def test_worktree_deletion_is_unstaged(self, git_repo):
        (Path(git_repo.working_dir) / "README.md").unlink()

        files = StatusService(git_repo.working_dir).refresh_status()

        assert statuses(files) == {"README.md": FileClassification.UNSTAGED}

    def test_untracked_directories_are_expanded(self, git_repo):
        nested = Path(git_repo.working_dir) / "pkg" / "sub"
        nested.mkdir(parents=True)
        (nested / "one.py").write_text("1\n")
        (nested.parent / "two.py").write_text("2\n")

        files = StatusService(git_repo.working_dir).refresh_status()

        assert [f.path for f in files] == ["pkg/sub/one.py", "pkg/two.py"]

    def test_unborn_repository(self, unborn_repo):
        (Path(unborn_repo.working_dir) / "first.txt").write_text("hello\n")

        files = StatusService(unborn_repo.working_dir).refresh_status()

        assert statuses(files) == {"first.txt": FileClassification.UNTRACKED}

    def test_idempotent(self, git_repo):
        (Path(git_repo.working_dir) / "new.txt").write_text("new\n")
        service = StatusService(git_repo.working_dir)

        assert service.refresh_status() == service.refresh_status()

    def test_no_repository(self, empty_repo_dir):
        with pytest.raises(RepositoryUnavailableError):
            StatusService(str(empty_repo_dir)).refresh_status()
