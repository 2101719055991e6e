"""Command-line argument parsing for got."""

import argparse
import os

from got.__version__ import __version__
from got.config import CONFIG_ENV_VAR


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="got",
        description="Terminal dashboard for staging, committing and branching in a git working tree",
        epilog="A GitHub token is only needed to create a GitHub repository. It is asked for once and "
        "saved to the config file. Get a token at https://github.com/settings/tokens (scopes: repo, workflow)",
    )
    parser.add_argument(
        "path", nargs="?", default=os.getcwd(), help="Working tree to open (default: current directory)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log informational messages")
    parser.add_argument(
        "--debug", action="store_true", help="Log debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"got {__version__}")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help=f"Config file to use (default: ${CONFIG_ENV_VAR} or ~/.config/got/config.json)",
    )
    parser.add_argument(
        "--https-remote",
        action="store_true",
        help="Link new GitHub repositories over HTTPS instead of SSH",
    )

    return parser.parse_args(argv)
