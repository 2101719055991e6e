"""Header widgets for the got dashboard."""

from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.widgets import Header, Static
from textual.widgets._header import HeaderIcon, HeaderTitle
from rich.text import Text

from got.__version__ import __version__


def format_badge(repo_name: str, version: str = __version__) -> Text:
    """Right-hand header text: the working tree's name, then got's version."""
    text = Text()
    if repo_name:
        text.append(repo_name, style="bold")
        text.append("  ")
    text.append(f"got v{version}", style="dim")
    return text


class RepoBadge(Static):
    """Names the working tree the dashboard is showing."""

    DEFAULT_CSS = """
    RepoBadge {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
    }
    """

    def __init__(self, repo_name: str):
        super().__init__()
        self.repo_name = repo_name

    def render(self) -> RenderResult:
        return format_badge(self.repo_name)


class DashboardHeader(Header):
    """One-line header: title and branch on the left, repository badge on the right."""

    def __init__(self, repo_name: str):
        super().__init__(icon="")
        self.repo_name = repo_name

    def compose(self) -> ComposeResult:
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield RepoBadge(self.repo_name)

    def on_click(self, event: Click) -> None:
        # Header would toggle its tall form
        event.stop()
