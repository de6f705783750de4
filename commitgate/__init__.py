"""AI commit message conformance engine."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commitgate")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
