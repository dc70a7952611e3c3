"""slsb - compiles animation scene packages into engine registry artifacts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("slsb")
except PackageNotFoundError:
    __version__ = "unknown"
