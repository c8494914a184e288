"""
Rudimentary type [re-]definitions for cross-versioned Python & mypy.

The stdlib's logging adapters are generics for mypy, but not at runtime.
This module defines them in the most suitable and reusable way.
"""
import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# As publicly exposed: we only promise that it is based on one of the built-in loggable classes.
Logger = Union[logging.Logger, LoggerAdapter]
