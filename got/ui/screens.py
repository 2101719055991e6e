"""Modal form screens for the got TUI.

Each screen collects one form value and dismisses with it, or with None when
cancelled. Input is checked with ValidationService before dismissing, and a
failure is shown inside the dialog instead.
"""

from typing import Optional, Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, OptionList, Select, Static, Switch, TextArea

from got.constants import COMMIT_TYPES, DEFAULT_BRANCH, GITHUB_TOKEN_URL
from got.exceptions import ValidationError
from got.models.events import CommitRequest, RepositoryRequest
from got.services.validation_service import ValidationService


class FormScreen(ModalScreen):
    """Base dialog: a title, the form body, an error line and Submit/Cancel buttons."""

    DEFAULT_CSS = """
    FormScreen {
        align: center middle;
    }

    #form-dialog {
        width: 80%;
        max-width: 100;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #form-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    #form-error {
        color: $error;
        height: auto;
        padding: 1 0 0 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0 0 0;
    }

    .field-row {
        height: auto;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    TITLE_TEXT = ""
    SUBMIT_LABEL = "Submit"

    def __init__(self, error: Optional[str] = None):
        super().__init__()
        self.error = error

    def compose(self) -> ComposeResult:
        with Vertical(id="form-dialog"):
            yield Static(self.TITLE_TEXT, id="form-title")
            yield from self.compose_fields()
            yield Static(self.error or "", id="form-error")
            with Container(id="button-container"):
                yield Button(self.SUBMIT_LABEL, variant="primary", id="submit")
                yield Button("Cancel", id="cancel")

    def compose_fields(self) -> ComposeResult:
        yield from ()

    def collect(self):
        """Read and validate the form value. Raises ValidationError."""
        raise NotImplementedError

    def show_error(self, message: str) -> None:
        self.query_one("#form-error", Static).update(message)

    def submit(self) -> None:
        try:
            value = self.collect()
        except ValidationError as e:
            self.show_error(str(e))
            return
        self.dismiss(value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.submit()

    def action_cancel(self) -> None:
        self.dismiss(None)


class TokenScreen(FormScreen):
    """Ask for a GitHub personal access token."""

    TITLE_TEXT = "github access token"
    SUBMIT_LABEL = "Continue"

    def compose_fields(self) -> ComposeResult:
        yield Label(f"create a token at: {GITHUB_TOKEN_URL} (scopes: repo, workflow)")
        yield Input(placeholder="ghp_...", password=True, id="token")

    def on_mount(self) -> None:
        self.query_one("#token", Input).focus()

    def collect(self) -> str:
        return ValidationService.validate_token(self.query_one("#token", Input).value)


class RepositoryScreen(FormScreen):
    """Collect the metadata of the GitHub repository to create."""

    TITLE_TEXT = "new github repository"
    SUBMIT_LABEL = "Create"

    def __init__(self, error: Optional[str] = None, initial: Optional[RepositoryRequest] = None):
        super().__init__(error)
        self.initial = initial or RepositoryRequest(name="")

    def compose_fields(self) -> ComposeResult:
        yield Label("repository name")
        yield Input(value=self.initial.name, placeholder="my-project", id="name")
        yield Label("description (optional)")
        yield Input(value=self.initial.description, id="description")
        yield Label("default branch")
        yield Input(value=self.initial.default_branch or DEFAULT_BRANCH, id="default-branch")
        with Horizontal(classes="field-row"):
            yield Label("private repository ")
            yield Switch(value=self.initial.private, id="private")

    def on_mount(self) -> None:
        self.query_one("#name", Input).focus()

    def collect(self) -> RepositoryRequest:
        request = RepositoryRequest(
            name=self.query_one("#name", Input).value.strip(),
            description=self.query_one("#description", Input).value.strip(),
            private=self.query_one("#private", Switch).value,
            default_branch=self.query_one("#default-branch", Input).value.strip() or DEFAULT_BRANCH,
        )
        return ValidationService.validate_repository(request)


class CommitScreen(FormScreen):
    """Compose a conventional commit message."""

    TITLE_TEXT = "commit staged changes"
    SUBMIT_LABEL = "Commit"

    DEFAULT_CSS = """
    CommitScreen TextArea {
        height: 6;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "submit", "Commit"),
    ]

    def __init__(self, error: Optional[str] = None, initial: Optional[CommitRequest] = None):
        super().__init__(error)
        self.initial = initial

    def compose_fields(self) -> ComposeResult:
        initial = self.initial
        yield Label("type")
        yield Select(
            [(f"{name}: {description}", name) for name, description in COMMIT_TYPES],
            value=initial.type if initial else COMMIT_TYPES[0][0],
            allow_blank=False,
            id="type",
        )
        yield Label("scope (optional)")
        yield Input(value=initial.scope if initial else "", id="scope")
        yield Label("subject")
        yield Input(value=initial.subject if initial else "", placeholder="short summary", id="subject")
        yield Label("body (optional)")
        yield TextArea(initial.body if initial else "", id="body")

    def on_mount(self) -> None:
        self.query_one("#subject", Input).focus()

    def collect(self) -> CommitRequest:
        request = CommitRequest(
            type=str(self.query_one("#type", Select).value),
            scope=self.query_one("#scope", Input).value.strip(),
            subject=self.query_one("#subject", Input).value.strip(),
            body=self.query_one("#body", TextArea).text.strip(),
        )
        return ValidationService.validate_commit(request)

    def action_submit(self) -> None:
        self.submit()


class BranchNameScreen(FormScreen):
    """Ask for the name of a new branch."""

    TITLE_TEXT = "create new branch"
    SUBMIT_LABEL = "Create"

    def __init__(self, error: Optional[str] = None, initial: Optional[str] = None):
        super().__init__(error)
        self.initial = initial or ""

    def compose_fields(self) -> ComposeResult:
        yield Input(value=self.initial, placeholder="feature/my-change", id="branch-name")

    def on_mount(self) -> None:
        self.query_one("#branch-name", Input).focus()

    def collect(self) -> str:
        return ValidationService.validate_branch_name(self.query_one("#branch-name", Input).value)


class BranchSelectScreen(ModalScreen):
    """Pick one branch from a list."""

    DEFAULT_CSS = """
    BranchSelectScreen {
        align: center middle;
    }

    #select-dialog {
        width: 60%;
        height: auto;
        max-height: 80%;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #select-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    #select-hint {
        color: $text-muted;
        padding: 1 0 0 0;
    }

    OptionList {
        height: auto;
        max-height: 20;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, branches: Sequence[str], current: str = ""):
        super().__init__()
        self.branches = list(branches)
        self.current = current

    def compose(self) -> ComposeResult:
        with Vertical(id="select-dialog"):
            yield Static("switch branch", id="select-title")
            yield OptionList(
                *[f"* {name}" if name == self.current else f"  {name}" for name in self.branches],
                id="branch-options",
            )
            yield Static("enter: switch • esc: cancel", id="select-hint")

    def on_mount(self) -> None:
        options = self.query_one("#branch-options", OptionList)
        if self.current in self.branches:
            options.highlighted = self.branches.index(self.current)
        options.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(self.branches[event.option_index])

    def action_cancel(self) -> None:
        self.dismiss(None)
