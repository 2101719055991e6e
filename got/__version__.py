"""Version information for got."""

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("got-tui")
except PackageNotFoundError:
    # Fallback when running from a source checkout that is not installed
    __version__ = "0.0.0+unknown"
