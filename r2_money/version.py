"""Version information for the R2 money bot."""

__version__ = "1.0.0"


def get_version() -> str:
    """Get the current version string."""
    return __version__
