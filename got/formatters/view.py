"""Frame rendering for the dashboard.

Every function here is pure: the same state and theme always give the same
Rich Text, and nothing is read from or written to the repository.
"""

from typing import Callable, Dict

from rich.text import Text

from got.constants import (
    DEFAULT_THEME,
    GITHUB_TOKEN_URL,
    SYMBOL_CURRENT_BRANCH,
    SYMBOL_CURSOR,
    SYMBOL_NO_CURSOR,
    SYMBOL_SELECTED,
    SYMBOL_UNSELECTED,
    Theme,
)
from got.models.file_status import FileClassification, FileEntry
from got.models.state import Mode, ViewState

DEFAULT_CONFIG_LOCATION = "~/.config/got/config.json"

MAIN_HELP = (
    "↑/↓ or j/k: navigate • space: toggle selection • s: stage selected • "
    "u: unstage selected • b: branches • c: commit • q: quit"
)
MAIN_HELP_EMPTY = "b: branches • c: commit • q: quit"
BRANCH_LIST_HELP = "↑/↓ or j/k: navigate • enter: switch to branch • esc: back"

PROGRESS_LINES: Dict[Mode, str] = {
    Mode.QUITTING: "goodbye!",
    Mode.CREATING_REMOTE: "creating github repository...",
    Mode.INITIALIZING: "initializing git repository...",
    Mode.CREATING_BRANCH: "creating branch...",
    Mode.SWITCHING_BRANCH: "switching branch...",
}


def _classification_style(classification: FileClassification, theme: Theme) -> str:
    return {
        FileClassification.STAGED: theme.staged,
        FileClassification.UNSTAGED: theme.unstaged,
        FileClassification.UNTRACKED: theme.untracked,
    }[classification]


def format_file_line(entry: FileEntry, under_cursor: bool, theme: Theme = DEFAULT_THEME) -> Text:
    """
    Format one row of the file list.

    Args:
        entry: File to show
        under_cursor: Whether the cursor is on this row
        theme: Colors to use

    Returns:
        "> [x] [staged] path" style line
    """
    line = Text()
    if under_cursor:
        line.append(SYMBOL_CURSOR, style=theme.cursor)
    else:
        line.append(SYMBOL_NO_CURSOR)
    line.append(" ")

    if entry.selected:
        line.append(SYMBOL_SELECTED, style=theme.selected)
    else:
        line.append(SYMBOL_UNSELECTED)
    line.append(" ")

    label = entry.classification.value
    line.append(f"[{label}]", style=_classification_style(entry.classification, theme))
    line.append(" ")
    line.append(entry.path, style=theme.cursor if under_cursor else "")
    return line


def format_branch_line(branch: str, current: bool, under_cursor: bool, theme: Theme = DEFAULT_THEME) -> Text:
    """Format one row of the branch list; the current branch is marked with '*'."""
    line = Text()
    line.append(SYMBOL_CURSOR if under_cursor else SYMBOL_NO_CURSOR, style=theme.cursor if under_cursor else "")
    line.append(" ")
    if current:
        line.append(SYMBOL_CURRENT_BRANCH + branch, style=theme.selected)
    else:
        line.append(branch, style=theme.cursor if under_cursor else "")
    return line


def _title(text: Text, title: str, theme: Theme) -> None:
    text.append(title, style=theme.title)
    text.append("\n\n")


def _help(text: Text, help_text: str, theme: Theme) -> None:
    text.append("\n")
    text.append(help_text, style=theme.help)


def _render_init_menu(state: ViewState, theme: Theme, config_location: str) -> Text:
    text = Text()
    _title(text, "got", theme)
    text.append("no git repository found in current directory.\n\n")
    text.append("choose an option:\n\n")
    text.append("1. initialize local git repository\n")
    text.append("2. create github repository & initialize locally\n")
    text.append("q. quit\n")
    _help(text, "press 1, 2, or q", theme)
    return text


def _render_auth_prompt(state: ViewState, theme: Theme, config_location: str) -> Text:
    text = Text()
    _title(text, "github repository setup", theme)
    text.append("this will create a new github repository and initialize it locally\n\n")
    text.append("if you haven't set a github access token, enter one below\n")
    text.append(f"the token will be saved to {config_location} for future use\n\n")
    text.append(f"create a token at: {GITHUB_TOKEN_URL}\n")
    text.append("required scopes: repo, workflow\n")
    _help(text, "press enter to continue, esc to go back", theme)
    return text


def _render_branch_menu(state: ViewState, theme: Theme, config_location: str) -> Text:
    text = Text()
    _title(text, "branch management", theme)
    text.append(f"current branch: {state.current_branch}\n\n")
    text.append("choose an option:\n\n")
    text.append("1. create new branch\n")
    text.append("2. switch branch\n")
    text.append("3. list all branches\n")
    text.append("esc. back to main menu\n")
    _help(text, "press 1, 2, 3, or esc", theme)
    return text


def _render_branch_list(state: ViewState, theme: Theme, config_location: str) -> Text:
    text = Text()
    _title(text, "all branches", theme)
    text.append(f"current branch: {state.current_branch}\n\n")

    if not state.branches:
        text.append("no branches found.\n")
    for i, branch in enumerate(state.branches):
        text.append_text(
            format_branch_line(branch, branch == state.current_branch, i == state.branch_cursor, theme)
        )
        text.append("\n")

    _help(text, BRANCH_LIST_HELP, theme)
    return text


def _render_main(state: ViewState, theme: Theme, config_location: str) -> Text:
    text = Text()
    title = "got"
    if state.current_branch:
        title += f" ({state.current_branch})"
    _title(text, title, theme)

    if not state.files:
        text.append("no changes to stage.\n")
    for i, entry in enumerate(state.files):
        text.append_text(format_file_line(entry, i == state.cursor, theme))
        text.append("\n")

    _help(text, MAIN_HELP if state.files else MAIN_HELP_EMPTY, theme)
    return text


LAYOUTS: Dict[Mode, Callable[[ViewState, Theme, str], Text]] = {
    Mode.NO_REPO: _render_init_menu,
    Mode.AUTH_PROMPT: _render_auth_prompt,
    Mode.BRANCH_MENU: _render_branch_menu,
    Mode.BRANCH_LIST: _render_branch_list,
    Mode.MAIN: _render_main,
}


def render_view(
    state: ViewState,
    theme: Theme = DEFAULT_THEME,
    config_location: str = DEFAULT_CONFIG_LOCATION,
) -> Text:
    """Render the frame for the active mode, followed by the status message line."""
    if state.mode in PROGRESS_LINES:
        text = Text(PROGRESS_LINES[state.mode])
        if state.mode is Mode.QUITTING:
            return text
    else:
        text = LAYOUTS[state.mode](state, theme, config_location)

    if state.message is not None:
        style = getattr(theme, state.message.severity, theme.error)
        text.append("\n\n")
        text.append(state.message.text, style=style)

    return text
