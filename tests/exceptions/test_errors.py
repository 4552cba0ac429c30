"""Tests for the contextrank exception hierarchy."""

from pathlib import Path

from contextrank.exceptions import (
    AnalysisError,
    ConfigurationError,
    ContextRankError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    ParsingError,
)


class TestHierarchy:
    """Every error is catchable as ContextRankError."""

    def test_analysis_family(self):
        assert issubclass(FileAccessError, AnalysisError)
        assert issubclass(ParsingError, AnalysisError)
        assert issubclass(AnalysisError, ContextRankError)

    def test_configuration_family(self):
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigurationError, ContextRankError)


class TestDetails:
    """Test message and details rendering."""

    def test_plain_message(self):
        assert str(ContextRankError("boom")) == "boom"

    def test_details_in_str(self):
        error = InvalidPathError(Path("/nope"), "does not exist")
        assert str(error) == "Invalid path: /nope (path=/nope, reason=does not exist)"
        assert error.reason == "does not exist"

    def test_parsing_error_fields(self):
        error = ParsingError("a.ts", "typescript", "syntax errors in parse tree")
        assert error.language == "typescript"
        assert error.details["filepath"] == "a.ts"

    def test_invalid_config_error_fields(self):
        error = InvalidConfigError("ast_weight", 2.0, "must be between 0.0 and 1.0")
        assert error.key == "ast_weight"
        assert error.details["value"] == "2.0"

    def test_file_access_error(self):
        error = FileAccessError(Path("x.bin"), "not valid UTF-8")
        assert "x.bin" in error.message
