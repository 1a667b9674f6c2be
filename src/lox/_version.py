"""Installed version of lox."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lox")
except PackageNotFoundError:
    # Imported from a source tree that was never installed
    __version__ = "0.0.0"


def get_version() -> str:
    return __version__
