"""Exception hierarchy for contextrank."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
)
from .base import ContextRankError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ContextRankError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
