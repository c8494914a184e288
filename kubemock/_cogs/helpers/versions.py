"""
Detecting the package's own version.

The version is determined only once at import time, from the metadata
of the installed distribution. If the package is used from a source tree
without being installed, the version remains unknown (``None``).
"""
import importlib.metadata
from typing import Optional

version: Optional[str] = None

try:
    name, *_ = __name__.split('.')  # usually "kubemock", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # used from a source tree, not installed.
