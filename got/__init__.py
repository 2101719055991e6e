"""
got - a terminal dashboard for everyday git work
"""

from .__version__ import __version__
from .controller import ViewController
from .cli.main import main

__all__ = ["ViewController", "main", "__version__"]
