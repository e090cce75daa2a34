"""Package version, taken from the installed distribution's metadata."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("blogrender")
except PackageNotFoundError:
    # Source checkout that was never installed.
    __version__ = "0.0.0"
