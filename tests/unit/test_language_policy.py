"""
Unit tests for language policy loading and ignore-pattern matching.
"""

import pytest

from ai_code_reviewer.exceptions import PolicyConfigurationError
from ai_code_reviewer.review.policy import (
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_LANGUAGES_PATH,
    FALLBACK_EXTENSIONS,
    default_language_policy,
    load_language_policy,
    parse_language_document,
)


VALID_DOCUMENT = """
languages:
  python:
    displayName: Python
    extensions: [".py"]
  go:
    extensions: [".go"]
ignorePatterns:
  - "**/vendor/**"
"""


class TestIgnorePatterns:
    """Tests for glob matching on the default ignore list."""

    def setup_method(self):
        self.policy = default_language_policy()

    @pytest.mark.parametrize("path", [
        "node_modules/lib/index.js",
        "web/node_modules/lib/index.js",
        "./node_modules/a.js",
        "/abs/project/node_modules/a.js",
        "dist/bundle.js",
        "packages/app/build/out.js",
        "static/vendor.min.js",
        "app.min.js",
        "coverage/lcov-report/index.js",
        ".git/hooks/pre-commit.sh",
        "src\\node_modules\\a.js",
    ])
    def test_ignored_paths(self, path):
        assert self.policy.is_ignored(path)

    @pytest.mark.parametrize("path", [
        "src/app.js",
        "src/distribution/app.js",
        "builder/main.py",
        "src/app.minified.js",
        "my_node_modules_notes.py",
    ])
    def test_not_ignored_paths(self, path):
        assert not self.policy.is_ignored(path)

    def test_single_star_stays_in_segment(self):
        policy = parse_language_document(
            'languages: {python: {extensions: [".py"]}}\nignorePatterns: ["src/*.py"]'
        )
        assert policy.is_ignored("src/a.py")
        assert not policy.is_ignored("src/pkg/a.py")


class TestParseLanguageDocument:
    """Tests for the pure document parser."""

    def test_valid_document(self):
        policy = parse_language_document(VALID_DOCUMENT, source="test")
        assert policy.resolve_language(".py") == "python"
        assert policy.resolve_language(".go") == "go"
        assert policy.resolve_language(".js") is None
        assert policy.ignore_patterns == ("**/vendor/**",)
        assert policy.source == "test"

    def test_missing_ignore_patterns_uses_defaults(self):
        policy = parse_language_document('languages: {python: {extensions: [".py"]}}')
        assert list(policy.ignore_patterns) == DEFAULT_IGNORE_PATTERNS

    @pytest.mark.parametrize("text", [
        "languages: [",                                   # invalid YAML
        "- just\n- a list",                               # wrong top-level type
        "ignorePatterns: []",                             # no languages
        "languages: {}",                                  # empty languages
        'languages: {python: {extensions: ["py"]}}',      # extension without dot
        "languages: {python: {extensions: []}}",          # no extensions
    ])
    def test_invalid_documents(self, text):
        with pytest.raises(PolicyConfigurationError):
            parse_language_document(text)


class TestLoadLanguagePolicy:
    """Tests for loading with fallback."""

    def test_packaged_document_loads(self):
        assert DEFAULT_LANGUAGES_PATH.exists()
        policy = load_language_policy()
        assert policy.source == str(DEFAULT_LANGUAGES_PATH)
        for ext in FALLBACK_EXTENSIONS:
            assert policy.resolve_language(ext) is not None

    def test_missing_file_falls_back(self, tmp_path, caplog):
        policy = load_language_policy(tmp_path / "nope.yaml")
        assert policy.source == "builtin"
        assert dict(policy.extensions) == FALLBACK_EXTENSIONS
        assert "not found" in caplog.text

    def test_malformed_file_falls_back(self, tmp_path, caplog):
        path = tmp_path / "languages.yaml"
        path.write_text("languages: [oops", encoding="utf-8")

        policy = load_language_policy(path)

        assert policy.source == "builtin"
        assert len(policy.extensions) == 11
        assert list(policy.ignore_patterns) == DEFAULT_IGNORE_PATTERNS
        assert "Failed to load language configuration" in caplog.text

    def test_custom_file(self, tmp_path):
        path = tmp_path / "languages.yaml"
        path.write_text(VALID_DOCUMENT, encoding="utf-8")
        policy = load_language_policy(str(path))
        assert policy.supported_extensions == [".py", ".go"]
