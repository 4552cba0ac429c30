"""Analysis-related exceptions: file access and parsing."""

from pathlib import Path

from .base import ContextRankError


class AnalysisError(ContextRankError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised by a parse-backed strategy when a file cannot be parsed.

    Never escapes the structural analyzer: the strategy chain catches it
    and moves on to the next, weaker strategy.
    """

    def __init__(self, filepath: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
