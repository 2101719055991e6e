"""Command-line entry point for got"""

import sys
from pathlib import Path

from rich.console import Console

from got.cli.args import parse_args
from got.config import get_config_path, load_config
from got.exceptions import ConfigError
from got.logging_config import get_logger, setup_logging

console = Console(stderr=True)
logger = get_logger(__name__)


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        console.print("[red]Error: got needs an interactive terminal[/red]")
        return 1

    try:
        # The dashboard owns the terminal, so log to ~/.got/got.log
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=True)

        config_path = Path(parsed_args.config).expanduser() if parsed_args.config else get_config_path()
        config = load_config(config_path)
        if parsed_args.https_remote:
            config.ssh_remote = False

        repo_path = str(Path(parsed_args.path).resolve())
        logger.info(f"Starting got in {repo_path}")

        # Imported late so --help and --version stay fast
        from got.controller import ViewController
        from got.services import GitHubService, GitService, StatusService
        from got.tui import GotApp

        git_service = GitService(repo_path)
        controller = ViewController(
            git_service,
            StatusService(repo_path),
            GitHubService(git_service, config),
            config=config,
            config_path=config_path,
        )

        app = GotApp(controller, config_location=str(config_path))
        app.run()
        return 0
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
