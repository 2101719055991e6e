"""Form validation and commit message formatting for got."""

from got.constants import COMMIT_TYPE_NAMES, MAX_SUBJECT_LENGTH
from got.exceptions import ValidationError
from got.models.events import CommitRequest, RepositoryRequest


class ValidationService:
    """Local checks applied to form input before anything is submitted."""

    @staticmethod
    def validate_token(token: str) -> str:
        """Return the stripped token or raise ValidationError if empty."""
        token = (token or "").strip()
        if not token:
            raise ValidationError("token cannot be empty")
        return token

    @staticmethod
    def validate_branch_name(name: str) -> str:
        """
        Check a new branch name.

        Args:
            name: Name typed by the user

        Returns:
            The name, unchanged

        Raises:
            ValidationError: If the name is empty or contains a space
        """
        if not name:
            raise ValidationError("branch name cannot be empty")
        if " " in name:
            raise ValidationError("branch name cannot contain spaces")
        return name

    @staticmethod
    def validate_commit_subject(subject: str) -> str:
        """Reject empty subjects and subjects longer than 72 characters."""
        if not subject:
            raise ValidationError("commit subject cannot be empty")
        if len(subject) > MAX_SUBJECT_LENGTH:
            raise ValidationError(
                f"commit subject should be {MAX_SUBJECT_LENGTH} characters or less"
            )
        return subject

    @staticmethod
    def validate_commit_type(commit_type: str) -> str:
        if commit_type not in COMMIT_TYPE_NAMES:
            raise ValidationError(f"unknown commit type '{commit_type}'")
        return commit_type

    @classmethod
    def validate_commit(cls, request: CommitRequest) -> CommitRequest:
        """Validate every part of a commit request."""
        cls.validate_commit_type(request.type)
        cls.validate_commit_subject(request.subject)
        return request

    @staticmethod
    def validate_repository(request: RepositoryRequest) -> RepositoryRequest:
        """Check repository metadata; the name is required."""
        if not request.name or not request.name.strip():
            raise ValidationError("repository name cannot be empty")
        if request.default_branch and " " in request.default_branch:
            raise ValidationError("default branch cannot contain spaces")
        return request

    @staticmethod
    def format_commit_message(request: CommitRequest) -> str:
        """
        Build the commit message.

        `type(scope): subject`, or `type: subject` when the scope is empty,
        followed by a blank line and the body when there is one.
        """
        if request.scope:
            message = f"{request.type}({request.scope}): {request.subject}"
        else:
            message = f"{request.type}: {request.subject}"

        if request.body:
            message += "\n\n" + request.body

        return message
