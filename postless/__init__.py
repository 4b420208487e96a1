"""
postless - browse and execute saved HTTP requests from the terminal.

This package loads request definitions from a local ``postless/`` workspace,
lets the user pick one through a keyboard-driven collection browser, edit its
JSON body and fire it, then prints the captured response.
"""

from postless._version import __version__, __version_info__
from postless.config import settings
from postless.logger import logger

__all__ = [
    "settings",
    "logger",
    "__version__",
    "__version_info__",
]
