"""Interactive TUI for got using Textual."""

from pathlib import Path
from typing import Any, Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Static
from textual import events

from .constants import DEFAULT_THEME, Theme
from .controller import ViewController
from .formatters import render_view
from .formatters.view import DEFAULT_CONFIG_LOCATION
from .logging_config import get_logger
from .models.events import CompletionEvent, Effect, FormKind, PendingForm, ScheduledOperation
from .models.state import BUSY_MODES, StatusMessage
from .ui.screens import (
    BranchNameScreen,
    BranchSelectScreen,
    CommitScreen,
    RepositoryScreen,
    TokenScreen,
)
from .ui.widgets import DashboardHeader

logger = get_logger(__name__)


class OperationCompleted(Message):
    """Posted by a worker thread when a scheduled operation has finished."""

    def __init__(self, event: CompletionEvent):
        super().__init__()
        self.event = event


class GotApp(App):
    """Terminal dashboard for a single git working tree."""

    ENABLE_COMMAND_PALETTE = False  # All keys go to the controller
    TITLE = "got"

    CSS = """
    Screen {
        background: $surface;
    }

    #frame-container {
        height: 1fr;
        padding: 1 2;
    }

    #frame {
        height: auto;
    }

    ToastRack {
        offset: 0 -1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        controller: ViewController,
        theme: Theme = DEFAULT_THEME,
        config_location: str = DEFAULT_CONFIG_LOCATION,
    ):
        super().__init__()
        self.controller = controller
        self.view_theme = theme
        self.config_location = config_location
        self._last_message: Optional[StatusMessage] = None

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield DashboardHeader(Path(self.controller.git_service.repo_path).name)
        with Vertical(id="frame-container"):
            yield Static(id="frame")

    def on_mount(self) -> None:
        self.refresh_frame()

    def refresh_frame(self) -> None:
        """Re-render the frame from the controller's state; exit once quitting."""
        state = self.controller.state
        self.query_one("#frame", Static).update(
            render_view(state, self.view_theme, self.config_location)
        )
        if self.controller.quitting:
            self.workers.cancel_all()
            self.exit()
            return

        self.sub_title = "working..." if state.mode in BUSY_MODES else state.current_branch

        message = state.message
        if message is not None and message is not self._last_message:
            self.notify(message.text, severity=message.severity)
        self._last_message = message

    def on_key(self, event: events.Key) -> None:
        """Route keystrokes to the controller unless a form has focus."""
        if isinstance(self.screen, ModalScreen):
            return
        effect = self.controller.handle_key(event.key)
        event.stop()
        self.apply_effect(effect)
        self.refresh_frame()

    def apply_effect(self, effect: Optional[Effect]) -> None:
        """Carry out what a controller transition asked for."""
        if effect is None:
            return
        if isinstance(effect, PendingForm):
            self.push_screen(self._screen_for(effect), callback=lambda value: self._resume(effect, value))
        elif isinstance(effect, ScheduledOperation):
            logger.debug(f"Starting worker for {effect.operation.value}")
            self.run_operation(effect)

    def _resume(self, form: PendingForm, value: Any) -> None:
        self.apply_effect(form.resume(value))
        self.refresh_frame()

    def _screen_for(self, form: PendingForm) -> ModalScreen:
        if form.kind is FormKind.TOKEN:
            return TokenScreen(error=form.error)
        if form.kind is FormKind.REPOSITORY:
            return RepositoryScreen(error=form.error, initial=form.initial)
        if form.kind is FormKind.COMMIT:
            return CommitScreen(error=form.error, initial=form.initial)
        if form.kind is FormKind.BRANCH_NAME:
            return BranchNameScreen(error=form.error, initial=form.initial)
        if form.kind is FormKind.BRANCH_SELECT:
            return BranchSelectScreen(form.options, current=self.controller.state.current_branch)
        raise ValueError(f"Unknown form {form.kind}")

    @work(thread=True)
    def run_operation(self, scheduled: ScheduledOperation) -> None:
        """Run a scheduled operation off the event loop and post its result."""
        event = self.controller.run_operation(scheduled)
        self.post_message(OperationCompleted(event))

    def on_operation_completed(self, message: OperationCompleted) -> None:
        effect = self.controller.handle_event(message.event)
        self.apply_effect(effect)
        self.refresh_frame()

    async def action_quit(self) -> None:
        """Quit from anywhere, including from inside a form."""
        self.controller.quit()
        self.refresh_frame()
