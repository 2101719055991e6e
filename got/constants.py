"""Shared constants for got."""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# Conventional commit types offered by the commit form (value, description)
COMMIT_TYPES: List[Tuple[str, str]] = [
    ("feat", "a new feature"),
    ("fix", "a bug fix"),
    ("docs", "documentation only changes"),
    ("style", "changes that do not affect the meaning of the code"),
    ("refactor", "a code change that neither fixes a bug nor adds a feature"),
    ("test", "adding missing tests or correcting existing tests"),
    ("chore", "changes to the build process or auxiliary tools"),
    ("perf", "a code change that improves performance"),
    ("ci", "changes to CI configuration files and scripts"),
    ("build", "changes that affect the build system or external dependencies"),
    ("revert", "reverts a previous commit"),
]

COMMIT_TYPE_NAMES = [name for name, _ in COMMIT_TYPES]

MAX_SUBJECT_LENGTH = 72

DEFAULT_BRANCH = "main"

# HEAD is not on a branch
DETACHED_HEAD_NAME = "HEAD"


# Symbol constants
SYMBOL_CURSOR = ">"
SYMBOL_NO_CURSOR = " "
SYMBOL_SELECTED = "[x]"
SYMBOL_UNSELECTED = "[ ]"
SYMBOL_CURRENT_BRANCH = "* "


# Textual key names mapped onto the keys the controller understands
KEY_ALIASES: Dict[str, str] = {
    "escape": "esc",
    "space": "space",
    " ": "space",
    "return": "enter",
}


@dataclass(frozen=True)
class Theme:
    """Colors used by the renderer (Rich style strings)."""

    title: str = "bold color(39)"
    selected: str = "color(205)"
    cursor: str = "color(11)"
    staged: str = "green"
    unstaged: str = "red"
    untracked: str = "yellow"
    help: str = "color(240)"
    information: str = "green"
    warning: str = "yellow"
    error: str = "bold red"


DEFAULT_THEME = Theme()

GITHUB_TOKEN_URL = "https://github.com/settings/tokens"
