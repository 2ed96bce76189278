"""Installed version of Calcamabob."""

from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "calcamabob"

# Reported when running from a source tree that was never installed.
UNKNOWN_VERSION = "0+unknown"


def get_version() -> str:
    """Version of the installed ``calcamabob`` distribution."""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
