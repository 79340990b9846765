"""Tests for configuration loading, validation and merging."""

import pytest
from pathlib import Path
from unittest.mock import patch
import tempfile
import yaml

from codebase_analyzer.utils.config import (
    CONFIG_FILE_NAME,
    Config,
    ConfigValidationError,
    ConfigValidationWarning,
    create_default_config,
    merge_options,
    normalize_extensions,
)


class TestConfigValidation:
    """Test cases for Config.validate() method."""

    def test_valid_default_config(self):
        """Default config should pass validation."""
        config = Config()
        errors, warnings = config.validate()
        assert len(errors) == 0
        assert len(warnings) == 0

    def test_both_checks_disabled(self):
        """Disabling every check is an error."""
        config = Config()
        config.analysis.check_file_names = False
        config.analysis.check_file_content = False
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "check_file_names" in errors[0]

    def test_invalid_output_format(self):
        """Unknown output formats should cause error."""
        config = Config()
        config.reports.output_format = "pdf"
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "Invalid output format" in errors[0]

    def test_valid_output_formats(self):
        """All supported output formats should pass."""
        for output_format in ['table', 'json', 'csv', 'html']:
            config = Config()
            config.reports.output_format = output_format
            errors, warnings = config.validate()
            assert len(errors) == 0, f"Format '{output_format}' should be valid"

    def test_non_positive_concurrency(self):
        """max_concurrency below 1 should cause error."""
        config = Config()
        config.analysis.max_concurrency = 0
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "max_concurrency" in errors[0]

    def test_high_concurrency_warns(self):
        """Very high max_concurrency is a warning, not an error."""
        config = Config()
        config.analysis.max_concurrency = 500
        errors, warnings = config.validate()
        assert len(errors) == 0
        assert len(warnings) == 1
        assert isinstance(warnings[0], ConfigValidationWarning)
        assert "500" in str(warnings[0])

    def test_empty_translation_functions(self):
        """At least one translation function is required."""
        config = Config()
        config.i18n.functions = []
        errors, warnings = config.validate()
        assert any("i18n.functions" in e for e in errors)

    def test_invalid_extension(self):
        """Empty extensions should cause error."""
        config = Config()
        config.paths.extensions = ['.ts', '.']
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "Invalid extension" in errors[0]

    def test_missing_i18n_file_warns(self):
        """A configured i18n file that does not exist is a warning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Config()
            config.i18n.file = 'messages/en.json'
            config.source_path = Path(tmpdir) / CONFIG_FILE_NAME
            errors, warnings = config.validate()
            assert len(errors) == 0
            assert len(warnings) == 1
            assert "messages/en.json" in str(warnings[0])

    def test_raise_on_error(self):
        """raise_on_error should raise ConfigValidationError."""
        config = Config()
        config.reports.output_format = "pdf"
        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate(raise_on_error=True)
        assert len(exc_info.value.errors) == 1

    def test_raise_on_error_valid_config(self):
        """A valid config does not raise."""
        errors, warnings = Config().validate(raise_on_error=True)
        assert errors == []


class TestConfigFile:
    """Test cases for reading and writing config files."""

    def test_find_walks_upward(self):
        """The nearest config in a parent directory is found."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / CONFIG_FILE_NAME).write_text("project:\n  framework: react\n")
            nested = root / 'src' / 'components'
            nested.mkdir(parents=True)

            assert Config.find(nested) == root / CONFIG_FILE_NAME

    def test_load_without_file_gives_defaults(self):
        """Without a config file defaults are used."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.object(Config, 'find', return_value=None):
                config = Config.load(Path(tmpdir))
            assert config == Config()
            assert config.source_path is None

    def test_from_file(self):
        """Values are read from YAML and extensions normalized."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text(yaml.dump({
                'project': {'framework': 'next'},
                'paths': {'extensions': ['ts', '.tsx'], 'exclude': ['dist']},
                'analysis': {'parallel': False},
                'i18n': {'file': 'messages/en.json', 'functions': ['t']},
            }))

            config = Config.from_file(path)

            assert config.project.framework == 'next'
            assert config.paths.extensions == ['.ts', '.tsx']
            assert config.paths.exclude == ['dist']
            assert config.analysis.parallel is False
            assert config.analysis.check_file_names is True
            assert config.i18n.file == 'messages/en.json'
            assert config.i18n.functions == ['t']
            assert config.source_path == path

    def test_empty_file(self):
        """An empty config file yields defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text("")

            config = Config.from_file(path)

            assert config == Config()

    def test_save_and_reload(self):
        """Saved configs load back unchanged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            config = create_default_config('react')
            config.analysis.max_concurrency = 8

            assert config.save(path) == path
            loaded = Config.from_file(path)

            assert loaded == config
            assert loaded.to_dict() == config.to_dict()

    def test_default_config(self):
        """init writes web extensions and common excludes."""
        config = create_default_config()
        assert config.paths.extensions == ['.ts', '.tsx', '.js', '.jsx']
        assert config.paths.exclude == ['node_modules', 'dist', 'build']
        assert config.project.framework is None


class TestNormalizeExtensions:
    """Test cases for normalize_extensions."""

    def test_adds_missing_dot(self):
        """Bare extensions get a leading dot."""
        assert normalize_extensions(['ts', '.tsx']) == ['.ts', '.tsx']

    def test_empty(self):
        """None and empty lists normalize to an empty list."""
        assert normalize_extensions(None) == []
        assert normalize_extensions([]) == []


class TestMergeOptions:
    """Test cases for merge_options."""

    def test_cli_values_win(self):
        """Given CLI values override the config."""
        config = Config()
        config.paths.extensions = ['.js']
        config.analysis.max_concurrency = 4

        options = merge_options(config, {
            'directory': 'src',
            'extensions': ['ts'],
            'max_concurrency': 12,
            'check_file_names': False,
        })

        assert options.directory == 'src'
        assert options.extensions == ['.ts']
        assert options.max_concurrency == 12
        assert options.check_file_names is False
        assert options.check_file_content is True

    def test_config_values_fill_gaps(self):
        """Missing CLI values fall back to the config."""
        config = Config()
        config.project.framework = 'vue'
        config.paths.exclude = ['vendor']
        config.reports.write_json_output = True
        config.analysis.max_concurrency = 4

        options = merge_options(config, {'extensions': None, 'exclude': []})

        assert options.directory == '.'
        assert options.framework == 'vue'
        assert options.exclude == ['vendor']
        assert options.write_json_output is True
        assert options.max_concurrency == 4

    def test_sequential_config(self):
        """parallel: false runs one file at a time."""
        config = Config()
        config.analysis.parallel = False

        assert merge_options(config, {}).max_concurrency == 1

    def test_auto_concurrency(self):
        """Without any setting the CPU-based width is used."""
        with patch('codebase_analyzer.utils.config.optimal_concurrency', return_value=42):
            assert merge_options(None, {}).max_concurrency == 42

    def test_export_format_from_config(self):
        """A non-table output format in the config becomes the export format."""
        config = Config()
        config.reports.output_format = 'html'
        config.reports.output_path = 'out/report.html'

        options = merge_options(config, {})

        assert options.export_format == 'html'
        assert options.export_path == 'out/report.html'

    def test_table_format_does_not_export(self):
        """The default table format only prints."""
        assert merge_options(Config(), {}).export_format is None

    def test_both_checks_disabled(self):
        """Disabling both checks from the CLI is rejected."""
        with pytest.raises(ConfigValidationError):
            merge_options(Config(), {'check_file_names': False, 'check_file_content': False})
