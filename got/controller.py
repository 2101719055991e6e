"""View-state controller for the got dashboard.

The controller owns the single ViewState and is the only place that decides
what happens next. Keystrokes and completion events go in; each transition
mutates the state and returns at most one effect:

- ScheduledOperation: background work. The shell runs it through
  run_operation() off the UI thread and feeds the resulting CompletionEvent
  back into handle_event().
- PendingForm: the transition is suspended until the shell has collected the
  form and calls its resume() with the value (None when cancelled).
"""

from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING, Union

from got.config import Config, save_config
from got.constants import DEFAULT_BRANCH, KEY_ALIASES
from got.exceptions import ConfigError, GotError, ValidationError
from got.logging_config import get_logger
from got.models.events import (
    CommitRequest,
    CompletionEvent,
    Effect,
    FormKind,
    Operation,
    PendingForm,
    RepositoryRequest,
    ScheduledOperation,
)
from got.models.file_status import FileEntry
from got.models.state import Mode, StatusMessage, ViewState
from got.services.validation_service import ValidationService

if TYPE_CHECKING:
    from got.services.git_service import GitService
    from got.services.github_service import GitHubService
    from got.services.status_service import StatusService

logger = get_logger(__name__)

QUIT_KEYS = frozenset({"q", "ctrl+c"})
UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})

# Operations whose success lands in MAIN with a reloaded file list
LOADING_OPERATIONS = frozenset({
    Operation.INIT,
    Operation.CREATE_REMOTE,
    Operation.CREATE_BRANCH,
    Operation.SWITCH_BRANCH,
})


def clamp(index: int, length: int) -> int:
    """Keep an index inside [0, length); 0 for an empty sequence."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


class ViewController:
    """Finite-state machine driving the dashboard."""

    def __init__(
        self,
        git_service: "GitService",
        status_service: "StatusService",
        github_service: "GitHubService",
        config: Optional[Config] = None,
        config_path: Optional[Union[str, Path]] = None,
    ):
        self.git_service = git_service
        self.status_service = status_service
        self.github_service = github_service
        self.config = config or Config()
        self.config_path = config_path

        self._pending: Optional[PendingForm] = None
        self._in_flight: Optional[Operation] = None
        self._return_mode: Optional[Mode] = None
        self._operation_lock = Lock()  # Repository operations never overlap

        self._key_handlers: Dict[Mode, Callable[[str], Optional[Effect]]] = {
            Mode.NO_REPO: self._on_no_repo_key,
            Mode.AUTH_PROMPT: self._on_auth_prompt_key,
            Mode.MAIN: self._on_main_key,
            Mode.BRANCH_MENU: self._on_branch_menu_key,
            Mode.BRANCH_LIST: self._on_branch_list_key,
        }

        self.state = self._probe_state()

    # ------------------------------------------------------------------
    # Start-up

    def _probe_state(self) -> ViewState:
        """Build the initial state from what is on disk."""
        if not self.git_service.is_repository():
            logger.info("No repository found, starting in setup menu")
            return ViewState(mode=Mode.NO_REPO)

        state = ViewState(mode=Mode.MAIN)
        try:
            state.files = self._fresh_entries(self.status_service.refresh_status())
            state.current_branch = self.git_service.current_branch_name()
        except GotError as e:
            logger.error(f"Failed to load repository state: {e}")
            state.message = StatusMessage(str(e), "error")
        return state

    # ------------------------------------------------------------------
    # Public API

    @property
    def pending_form(self) -> Optional[PendingForm]:
        """The form the controller is suspended on, if any."""
        return self._pending

    @property
    def in_flight(self) -> Optional[Operation]:
        """The scheduled operation that has not reported back yet."""
        return self._in_flight

    @property
    def quitting(self) -> bool:
        return self.state.mode is Mode.QUITTING

    def quit(self) -> None:
        """Enter the terminal state from any mode."""
        self._pending = None
        self._set_mode(Mode.QUITTING)

    def handle_key(self, key: str) -> Optional[Effect]:
        """Dispatch a keystroke to the active mode's transitions."""
        key = KEY_ALIASES.get(key, key)

        if self.quitting:
            return None
        if self._pending is not None:
            # The form has input focus
            logger.debug(f"Ignoring key {key!r} while {self._pending.kind.value} form is open")
            return None
        if key in QUIT_KEYS:
            self.quit()
            return None

        handler = self._key_handlers.get(self.state.mode)
        if handler is None:
            return None

        self.state.message = None
        return handler(key)

    def handle_event(self, event: CompletionEvent) -> Optional[Effect]:
        """Apply the result of a background operation."""
        if self._in_flight is event.operation:
            self._in_flight = None
        return_mode = self._return_mode or Mode.MAIN

        if self.quitting:
            return None

        if not event.succeeded:
            logger.warning(f"{event.operation.value} failed: {event.error}")
            self._revert(return_mode)
            self.state.message = StatusMessage(event.error or "", "error")
            return None

        if event.operation is Operation.LIST_BRANCHES:
            return self._on_branches_listed(list(event.branches))

        if event.operation in LOADING_OPERATIONS:
            self._enter_main(list(event.files), event.branch or "")
            if event.remote_url:
                self.state.message = StatusMessage(f"created {event.remote_url}", "information")

        return None

    def run_operation(self, scheduled: ScheduledOperation) -> CompletionEvent:
        """Run scheduled work to completion and report it as an event.

        Safe to call from a worker thread: it never touches the view state,
        and every failure becomes a failed event instead of an exception.
        """
        operation = scheduled.operation
        with self._operation_lock:
            logger.debug(f"Running {operation.value}")
            try:
                return self._execute(scheduled)
            except GotError as e:
                logger.error(f"{operation.value} failed: {e}")
                return CompletionEvent.failure(operation, str(e))
            except Exception as e:
                logger.error(f"Unexpected error during {operation.value}: {e}", exc_info=True)
                return CompletionEvent.failure(operation, str(e) or e.__class__.__name__)

    # ------------------------------------------------------------------
    # Key transitions

    def _on_no_repo_key(self, key: str) -> Optional[Effect]:
        if key == "1":
            return self._schedule(Operation.INIT, next_mode=Mode.INITIALIZING)
        if key == "2":
            self._set_mode(Mode.AUTH_PROMPT)
        return None

    def _on_auth_prompt_key(self, key: str) -> Optional[Effect]:
        if key == "esc":
            self._set_mode(Mode.NO_REPO)
            return None
        if key != "enter":
            return None

        token = self.config.usable_token
        if token:
            return self._repository_form(token, save_token=False)
        return self._suspend(FormKind.TOKEN, self._resume_token)

    def _on_main_key(self, key: str) -> Optional[Effect]:
        if key in UP_KEYS:
            self.state.cursor = clamp(self.state.cursor - 1, len(self.state.files))
        elif key in DOWN_KEYS:
            self.state.cursor = clamp(self.state.cursor + 1, len(self.state.files))
        elif key == "space":
            self._toggle_selection()
        elif key == "s":
            self._stage_selected()
        elif key == "u":
            self._unstage_selected()
        elif key == "c":
            return self._suspend(FormKind.COMMIT, self._resume_commit)
        elif key == "b":
            self._set_mode(Mode.BRANCH_MENU)
        return None

    def _on_branch_menu_key(self, key: str) -> Optional[Effect]:
        if key in ("1", "2", "3") and self._in_flight is not None:
            # Menu choices wait for the running operation
            self.state.message = StatusMessage(f"{self._in_flight.value} still running", "warning")
            return None
        if key == "1":
            return self._suspend(FormKind.BRANCH_NAME, self._resume_branch_name)
        if key == "2":
            return self._schedule(Operation.LIST_BRANCHES)
        if key == "3":
            self._open_branch_list()
        elif key == "esc":
            self._set_mode(Mode.MAIN)
        return None

    def _on_branch_list_key(self, key: str) -> Optional[Effect]:
        if key in UP_KEYS:
            self.state.branch_cursor = clamp(self.state.branch_cursor - 1, len(self.state.branches))
        elif key in DOWN_KEYS:
            self.state.branch_cursor = clamp(self.state.branch_cursor + 1, len(self.state.branches))
        elif key == "enter":
            branch = self.state.selected_branch
            if branch is None or branch == self.state.current_branch:
                return None
            return self._schedule(Operation.SWITCH_BRANCH, next_mode=Mode.SWITCHING_BRANCH, branch=branch)
        elif key == "esc":
            self._set_mode(Mode.BRANCH_MENU)
        return None

    # ------------------------------------------------------------------
    # Form resumptions

    def _resume_token(self, value: Optional[str]) -> Optional[Effect]:
        if value is None:
            self._set_mode(Mode.NO_REPO)
            return None
        try:
            token = ValidationService.validate_token(value)
        except ValidationError as e:
            return self._suspend(FormKind.TOKEN, self._resume_token, error=str(e))
        return self._repository_form(token, save_token=True)

    def _repository_form(self, token: str, save_token: bool, error: Optional[str] = None,
                         initial: Optional[RepositoryRequest] = None) -> PendingForm:
        def resume(value: Optional[RepositoryRequest]) -> Optional[Effect]:
            if value is None:
                return None
            try:
                request = ValidationService.validate_repository(value)
            except ValidationError as e:
                return self._repository_form(token, save_token, error=str(e), initial=value)
            return self._schedule(
                Operation.CREATE_REMOTE,
                next_mode=Mode.CREATING_REMOTE,
                repository=request,
                token=token,
                save_token=save_token,
            )

        return self._suspend(FormKind.REPOSITORY, resume, error=error, initial=initial)

    def _resume_commit(self, value: Optional[CommitRequest]) -> Optional[Effect]:
        if value is None:
            return None
        try:
            request = ValidationService.validate_commit(value)
        except ValidationError as e:
            return self._suspend(FormKind.COMMIT, self._resume_commit, error=str(e), initial=value)

        message = ValidationService.format_commit_message(request)
        try:
            sha = self.git_service.commit(message)
        except GotError as e:
            logger.error(f"Commit failed: {e}")
            self.state.message = StatusMessage(str(e), "error")
            return None

        logger.info(f"Committed {sha}: {message.splitlines()[0]}")
        self._refresh_files()
        return None

    def _resume_branch_name(self, value: Optional[str]) -> Optional[Effect]:
        if value is None:
            return None
        try:
            name = ValidationService.validate_branch_name(value)
        except ValidationError as e:
            return self._suspend(FormKind.BRANCH_NAME, self._resume_branch_name, error=str(e), initial=value)
        return self._schedule(Operation.CREATE_BRANCH, next_mode=Mode.CREATING_BRANCH, branch=name)

    def _resume_branch_select(self, value: Optional[str]) -> Optional[Effect]:
        if value is None or value == self.state.current_branch:
            return None
        return self._schedule(Operation.SWITCH_BRANCH, next_mode=Mode.SWITCHING_BRANCH, branch=value)

    # ------------------------------------------------------------------
    # Helpers

    def _set_mode(self, mode: Mode) -> None:
        if mode is not Mode.BRANCH_LIST:
            self.state.branches = []
            self.state.branch_cursor = 0
        self.state.mode = mode

    def _suspend(self, kind: FormKind, resume: Callable[[Any], Optional[Effect]], **kwargs) -> PendingForm:
        """Record a suspension point; resuming is only honoured in the same mode."""
        expected_mode = self.state.mode

        def _resume(value: Any) -> Optional[Effect]:
            self._pending = None
            if self.state.mode is not expected_mode:
                logger.debug(f"Dropping {kind.value} form result, mode is now {self.state.mode.value}")
                return None
            return resume(value)

        form = PendingForm(kind=kind, resume=_resume, **kwargs)
        self._pending = form
        return form

    def _schedule(self, operation: Operation, next_mode: Optional[Mode] = None, **kwargs) -> Optional[ScheduledOperation]:
        if self._in_flight is not None:
            logger.info(f"Not scheduling {operation.value}: {self._in_flight.value} still running")
            self.state.message = StatusMessage(f"{self._in_flight.value} still running", "warning")
            return None

        self._in_flight = operation
        self._return_mode = self.state.mode
        if next_mode is not None:
            self._set_mode(next_mode)
        logger.debug(f"Scheduled {operation.value}")
        return ScheduledOperation(operation=operation, **kwargs)

    def _revert(self, mode: Mode) -> None:
        """Return to the mode that started a failed operation."""
        if mode is Mode.BRANCH_LIST:
            self._open_branch_list()
        else:
            self._set_mode(mode)

    def _fresh_entries(self, files: List[FileEntry]) -> List[FileEntry]:
        # Entries are rebuilt, never patched, so selection never survives a reload
        return [FileEntry(path=f.path, classification=f.classification) for f in files]

    def _enter_main(self, files: List[FileEntry], branch: str) -> None:
        self._set_mode(Mode.MAIN)
        self.state.files = self._fresh_entries(files)
        self.state.cursor = 0
        self.state.current_branch = branch

    def _refresh_files(self) -> bool:
        """Re-derive the file list from the working tree and re-clamp the cursor."""
        try:
            files = self.status_service.refresh_status()
        except GotError as e:
            logger.error(f"Failed to refresh status: {e}")
            self.state.message = StatusMessage(str(e), "error")
            return False

        self.state.files = self._fresh_entries(files)
        self.state.cursor = clamp(self.state.cursor, len(self.state.files))
        return True

    def _toggle_selection(self) -> None:
        if not self.state.files:
            return
        entry = self.state.files[self.state.cursor]
        entry.selected = not entry.selected

    def _apply_to_selected(self, action: Callable[[str], None], want_staged: bool) -> None:
        """Run action on every selected entry whose staged-ness matches want_staged."""
        failures = []
        for entry in self.state.files:
            if not entry.selected or entry.is_staged != want_staged:
                continue
            try:
                action(entry.path)
            except GotError as e:
                logger.error(f"Failed on {entry.path}: {e}")
                failures.append(str(e))

        self._refresh_files()
        if failures:
            self.state.message = StatusMessage("\n".join(failures), "error")

    def _stage_selected(self) -> None:
        self._apply_to_selected(self.git_service.stage, want_staged=False)

    def _unstage_selected(self) -> None:
        self._apply_to_selected(self.git_service.unstage, want_staged=True)

    def _open_branch_list(self) -> None:
        try:
            branches = self.git_service.list_branches()
        except GotError as e:
            logger.error(f"Failed to list branches: {e}")
            self._set_mode(Mode.BRANCH_MENU)
            self.state.message = StatusMessage(str(e), "error")
            return

        self._set_mode(Mode.BRANCH_LIST)
        self.state.branches = branches
        current = self.state.current_branch
        self.state.branch_cursor = branches.index(current) if current in branches else 0

    def _on_branches_listed(self, branches: List[str]) -> Optional[Effect]:
        if self.state.mode is not Mode.BRANCH_MENU:
            logger.debug("Branch list arrived after leaving the branch menu")
            return None
        if self._pending is not None:
            logger.debug(f"Branch list arrived while the {self._pending.kind.value} form is open")
            return None
        if not branches:
            self.state.message = StatusMessage("no branches available", "warning")
            return None
        return self._suspend(FormKind.BRANCH_SELECT, self._resume_branch_select, options=tuple(branches))

    # ------------------------------------------------------------------
    # Background work (runs off the UI thread)

    def _execute(self, scheduled: ScheduledOperation) -> CompletionEvent:
        operation = scheduled.operation

        if operation is Operation.INIT:
            self.git_service.init()
            return self._loaded_event(operation)

        if operation is Operation.CREATE_REMOTE:
            return self._create_remote(scheduled)

        if operation is Operation.CREATE_BRANCH:
            self.git_service.create_branch(scheduled.branch)
            return self._loaded_event(operation)

        if operation is Operation.SWITCH_BRANCH:
            self.git_service.switch_branch(scheduled.branch)
            return self._loaded_event(operation)

        if operation is Operation.LIST_BRANCHES:
            return CompletionEvent(operation=operation, branches=tuple(self.git_service.list_branches()))

        raise ValueError(f"Unknown operation {operation}")

    def _create_remote(self, scheduled: ScheduledOperation) -> CompletionEvent:
        request = scheduled.repository
        token = scheduled.token
        default_branch = request.default_branch or DEFAULT_BRANCH

        self.github_service.validate_credential(token)
        if scheduled.save_token:
            self._store_token(token)

        self.git_service.init_with_default_branch(default_branch)
        handle = self.github_service.create_remote_repository(
            token,
            request.name,
            description=request.description,
            private=request.private,
            default_branch=default_branch,
        )
        return self._loaded_event(Operation.CREATE_REMOTE, remote_url=handle.html_url)

    def _loaded_event(self, operation: Operation, **kwargs) -> CompletionEvent:
        return CompletionEvent(
            operation=operation,
            files=tuple(self.status_service.refresh_status()),
            branch=self.git_service.current_branch_name(),
            **kwargs,
        )

    def _store_token(self, token: str) -> None:
        self.config.github_token = token
        try:
            save_config(self.config, self.config_path)
        except ConfigError as e:
            # The repository can still be created; the token is just not remembered
            logger.warning(f"Could not save token to config: {e}")
