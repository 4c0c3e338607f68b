"""Tests for YAML configuration loading."""

import pytest

from jdcheck.base import ConfigError
from jdcheck.config import CheckSettings, load_config, load_settings
from jdcheck.javadoc import DiagnosticKind


@pytest.fixture
def write_config(tmp_path):
    """Factory fixture writing a YAML config file and returning its path."""

    def _write(text: str, name: str = "jdcheck.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class TestLoadConfig:
    """Reading settings and suppressions from YAML."""

    def test_no_file_gives_defaults(self):
        """No config file means default settings."""
        settings, suppressions = load_config(None)
        assert settings == CheckSettings()
        assert suppressions == []

    def test_section_layout(self, write_config):
        """Settings under javadoc_method, suppressions beside them."""
        path = write_config(
            """
javadoc_method:
  allowNarrativeParamTags: true
  unusedParamFormat: "^unused.*"
  minLineCount: 3
  allowedAnnotations: [Override, Test]
suppressions:
  - files: "*/generated/*"
  - files: "*Test.java"
    kinds: [MissingJavadoc, UnusedTag]
"""
        )
        settings, suppressions = load_config(path)
        assert settings.allow_narrative_param_tags
        assert settings.unused_param_format.pattern == "^unused.*"
        assert settings.min_line_count == 3
        assert settings.allowed_annotations == ("Override", "Test")
        assert [s.files for s in suppressions] == ["*/generated/*", "*Test.java"]
        assert suppressions[1].kinds == (
            DiagnosticKind.MISSING_JAVADOC,
            DiagnosticKind.UNUSED_TAG,
        )

    def test_flat_layout(self, write_config):
        """A flat mapping is all settings."""
        path = write_config("allowUndeclaredRTE: true\nscope: protected\n")
        settings, suppressions = load_config(path)
        assert settings.allow_undeclared_rte
        assert settings.scope == "protected"
        assert suppressions == []

    def test_snake_case_keys(self, write_config):
        """snake_case keys work in files too."""
        path = write_config("javadoc_method:\n  allow_missing_throws_tags: true\n")
        assert load_settings(path).allow_missing_throws_tags

    def test_exception_hierarchy(self, write_config):
        """Project exception classes come from the file."""
        path = write_config(
            """
javadoc_method:
  exceptionHierarchy:
    com.acme.WidgetError: java.lang.RuntimeException
"""
        )
        settings = load_settings(path)
        assert settings.exception_hierarchy == {
            "com.acme.WidgetError": "java.lang.RuntimeException"
        }

    def test_empty_file(self, write_config):
        """An empty file gives defaults."""
        assert load_settings(write_config("")) == CheckSettings()

    def test_empty_section(self, write_config):
        """An empty section gives defaults."""
        assert load_settings(write_config("javadoc_method:\n")) == CheckSettings()


class TestConfigErrors:
    """Every loading failure is a ConfigError."""

    def test_missing_file(self, tmp_path):
        """A missing file names its path."""
        path = tmp_path / "absent.yaml"
        with pytest.raises(ConfigError) as exc:
            load_config(path)
        assert exc.value.path == str(path)

    def test_invalid_yaml(self, write_config):
        """Unparsable YAML."""
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_config("javadoc_method: [unclosed\n"))

    def test_not_a_mapping(self, write_config):
        """The document must be a mapping."""
        with pytest.raises(ConfigError, match="mapping"):
            load_config(write_config("- just\n- a list\n"))

    def test_section_not_a_mapping(self, write_config):
        """javadoc_method must be a mapping."""
        with pytest.raises(ConfigError, match="javadoc_method"):
            load_config(write_config("javadoc_method: 3\n"))

    def test_unknown_setting(self, write_config):
        """Unknown settings are reported with the file path."""
        path = write_config("javadoc_method:\n  allowEverything: true\n")
        with pytest.raises(ConfigError, match="Invalid settings") as exc:
            load_config(path)
        assert exc.value.path == str(path)
        assert str(exc.value).startswith(str(path))

    def test_bad_regex(self, write_config):
        """Invalid patterns are reported."""
        with pytest.raises(ConfigError):
            load_config(write_config("ignoreMethodNamesRegex: '(get'\n"))

    def test_suppressions_not_a_list(self, write_config):
        """suppressions must be a list."""
        with pytest.raises(ConfigError, match="suppressions"):
            load_config(write_config("suppressions: everything\n"))

    def test_bad_suppression(self, write_config):
        """Each suppression needs files."""
        with pytest.raises(ConfigError, match="Invalid suppression"):
            load_config(write_config("suppressions:\n  - kinds: [UnusedTag]\n"))
