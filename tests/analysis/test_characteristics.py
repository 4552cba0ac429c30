"""Tests for file characteristic detection."""

import pytest

from contextrank.analysis.characteristics import (
    detect_frameworks,
    is_config_file,
    is_entry_point,
    is_test_file,
)


class TestDetectFrameworks:
    """Test framework vocabulary matching."""

    def test_no_frameworks(self):
        assert detect_frameworks("const x = 1;") == []

    def test_react_and_express(self):
        content = "import React from 'react';\nconst app = express();"
        assert detect_frameworks(content) == ["react", "express"]

    def test_reporting_order_follows_vocabulary(self):
        """Tags come out in vocabulary order, not content order."""
        content = "prisma; jest; vue"
        assert detect_frameworks(content) == ["vue", "jest", "prisma"]

    def test_scoped_package_names(self):
        assert "nestjs" in detect_frameworks("import { Module } from '@nestjs/common';")
        assert "angular" in detect_frameworks("import { Component } from '@angular/core';")


class TestEntryPoint:
    """Test entry point detection by filename and content."""

    @pytest.mark.parametrize("path", ["src/index.ts", "main.js", "server.ts", "app.js"])
    def test_entry_filenames(self, path):
        assert is_entry_point(path, "")

    def test_plain_module_is_not_entry(self):
        assert not is_entry_point("src/utils.ts", "export const x = 1;")

    def test_listen_call_marks_entry(self):
        assert is_entry_point("src/http.ts", "app.listen(3000);")

    def test_python_main_guard(self):
        assert is_entry_point("tool.py", 'if __name__ == "__main__":\n    run()\n')


class TestTestFile:
    """Test test-file detection."""

    def test_name_contains_test(self):
        assert is_test_file("src/utils.test.ts", "")

    def test_name_contains_spec(self):
        assert is_test_file("src/utils.spec.js", "")

    def test_test_directory_segment(self):
        assert is_test_file("src/__tests__/helpers.ts", "")
        assert is_test_file("tests/helpers.py", "")

    def test_directory_name_substring_is_not_enough(self):
        """'contest' is not a test directory segment."""
        assert not is_test_file("contest/rules.ts", "export const rules = [];")

    def test_content_markers(self):
        assert is_test_file("check.js", "describe('x', () => {});")

    def test_content_marker_inside_string_is_reported(self):
        """Markers are bare substrings; string literals count too."""
        assert is_test_file("docs.ts", "const help = 'call expect(value)';")

    def test_plain_module(self):
        assert not is_test_file("src/utils.ts", "export const x = 1;")


class TestConfigFile:
    """Test config-file detection."""

    @pytest.mark.parametrize(
        "path",
        [
            "webpack.config.js",
            "jest.config.ts",
            ".eslintrc",
            ".babelrc.json",
            "package.json",
            "requirements.txt",
            "Dockerfile",
            "docker-compose.yml",
            ".env.local",
            "tsconfig.json",
            "app.config.json",
        ],
    )
    def test_config_files(self, path):
        assert is_config_file(path)

    @pytest.mark.parametrize("path", ["src/index.ts", "README.md", "utils.py"])
    def test_non_config_files(self, path):
        assert not is_config_file(path)
