"""Configuration management for codebase analyzer."""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..core.concurrency import optimal_concurrency
from ..exceptions import ConfigValidationError

CONFIG_FILE_NAME = '.analyze-codebase.yml'

DEFAULT_I18N_EXTENSIONS = ['.ts', '.tsx', '.js', '.jsx', '.vue']
DEFAULT_TRANSLATION_FUNCTIONS = ['t', 'i18n.t', '$t', 'translate']
VALID_OUTPUT_FORMATS = ['table', 'json', 'csv', 'html']


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


def normalize_extensions(extensions: Optional[List[str]]) -> List[str]:
    """Prefix bare extensions with a dot (``ts`` -> ``.ts``)."""
    if not extensions:
        return []
    return [ext if ext.startswith('.') else f'.{ext}' for ext in extensions]


@dataclass
class ProjectConfig:
    """Project configuration."""
    framework: Optional[str] = None


@dataclass
class PathsConfig:
    """Paths configuration."""
    extensions: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=lambda: ['node_modules', 'dist', 'build'])


@dataclass
class AnalysisConfig:
    """Content analysis configuration."""
    check_file_names: bool = True
    check_file_content: bool = True
    show_progress: bool = True
    parallel: bool = True
    max_concurrency: Optional[int] = None  # None: CPU-based optimum


@dataclass
class ReportsConfig:
    """Reports configuration."""
    write_json_output: bool = False
    output_format: str = 'table'  # table | json | csv | html
    output_path: Optional[str] = None


@dataclass
class I18nConfig:
    """Translation key analysis configuration."""
    file: Optional[str] = None
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_I18N_EXTENSIONS))
    functions: List[str] = field(default_factory=lambda: list(DEFAULT_TRANSLATION_FUNCTIONS))
    backup: bool = True


@dataclass
class AnalysisOptions:
    """Effective options of one content analysis run (config merged with CLI)."""
    directory: str
    framework: Optional[str] = None
    extensions: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    check_file_names: bool = True
    check_file_content: bool = True
    write_json_output: bool = False
    show_progress: bool = True
    max_concurrency: int = 20
    export_format: Optional[str] = None
    export_path: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)
    i18n: I18nConfig = field(default_factory=I18nConfig)

    source_path: Optional[Path] = field(default=None, compare=False, repr=False)

    @classmethod
    def find(cls, directory: Path) -> Optional[Path]:
        """
        Locate the nearest config file.

        Walks upward from ``directory`` to the filesystem root and returns
        the first ``.analyze-codebase.yml`` found.

        Args:
            directory: Directory to start searching from

        Returns:
            Path to the config file, or None
        """
        current = Path(directory).resolve()
        for candidate_dir in [current, *current.parents]:
            candidate = candidate_dir / CONFIG_FILE_NAME
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = cls.find(Path.cwd())

            if config_path is None:
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            project=ProjectConfig(**(data.get('project') or {})),
            paths=PathsConfig(**(data.get('paths') or {})),
            analysis=AnalysisConfig(**(data.get('analysis') or {})),
            reports=ReportsConfig(**(data.get('reports') or {})),
            i18n=I18nConfig(**(data.get('i18n') or {})),
        )
        config.paths.extensions = normalize_extensions(config.paths.extensions)
        config.i18n.extensions = normalize_extensions(config.i18n.extensions)
        config.source_path = Path(config_path)
        return config

    @classmethod
    def load(cls, directory: Path) -> 'Config':
        """Load the config governing ``directory``, or defaults if there is none."""
        config_path = cls.find(directory)
        if config_path is None:
            return cls()
        return cls.from_file(config_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'project': {
                'framework': self.project.framework,
            },
            'paths': {
                'extensions': self.paths.extensions,
                'exclude': self.paths.exclude,
            },
            'analysis': {
                'check_file_names': self.analysis.check_file_names,
                'check_file_content': self.analysis.check_file_content,
                'show_progress': self.analysis.show_progress,
                'parallel': self.analysis.parallel,
                'max_concurrency': self.analysis.max_concurrency,
            },
            'reports': {
                'write_json_output': self.reports.write_json_output,
                'output_format': self.reports.output_format,
                'output_path': self.reports.output_path,
            },
            'i18n': {
                'file': self.i18n.file,
                'extensions': self.i18n.extensions,
                'functions': self.i18n.functions,
                'backup': self.i18n.backup,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        return Path(config_path)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.analysis.check_file_names and not self.analysis.check_file_content:
            errors.append(
                "At least one of analysis.check_file_names and "
                "analysis.check_file_content must be true"
            )

        max_concurrency = self.analysis.max_concurrency
        if max_concurrency is not None:
            if not isinstance(max_concurrency, int) or max_concurrency < 1:
                errors.append(
                    f"analysis.max_concurrency must be a positive integer, got {max_concurrency!r}"
                )
            elif max_concurrency > 200:
                warnings.append(ConfigValidationWarning(
                    f"analysis.max_concurrency={max_concurrency} is above 200 and may exhaust file handles"
                ))

        if self.reports.output_format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid output format '{self.reports.output_format}'. "
                f"Valid options: {', '.join(VALID_OUTPUT_FORMATS)}"
            )

        if not self.i18n.functions:
            errors.append("i18n.functions cannot be empty")

        for ext in self.paths.extensions + self.i18n.extensions:
            if not isinstance(ext, str) or ext in ('', '.'):
                errors.append(f"Invalid extension: {ext!r}")

        if self.i18n.file and self.source_path is not None:
            i18n_path = self.source_path.parent / self.i18n.file
            if not i18n_path.exists():
                warnings.append(ConfigValidationWarning(
                    f"i18n file does not exist: {self.i18n.file}"
                ))

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def merge_options(config: Optional[Config], cli_options: Dict[str, Any]) -> AnalysisOptions:
    """
    Merge CLI options over config file values.

    A CLI value wins whenever it was given (not None, non-empty list).
    ``analysis.parallel: false`` forces a width of 1 unless the CLI passes
    an explicit ``max_concurrency``.

    Args:
        config: Loaded config, or None for defaults
        cli_options: Options parsed from the command line

    Returns:
        Effective AnalysisOptions

    Raises:
        ConfigValidationError: If both checks end up disabled
    """
    config = config or Config()

    def pick(name: str, fallback: Any) -> Any:
        value = cli_options.get(name)
        return fallback if value is None else value

    def pick_list(name: str, fallback: List[str]) -> List[str]:
        value = cli_options.get(name)
        return list(value) if value else list(fallback)

    if not config.analysis.parallel:
        max_concurrency = 1
    elif config.analysis.max_concurrency is not None:
        max_concurrency = config.analysis.max_concurrency
    else:
        max_concurrency = optimal_concurrency()
    max_concurrency = pick('max_concurrency', max_concurrency)

    options = AnalysisOptions(
        directory=cli_options.get('directory') or '.',
        framework=pick('framework', config.project.framework),
        extensions=normalize_extensions(pick_list('extensions', config.paths.extensions)),
        exclude=pick_list('exclude', config.paths.exclude),
        check_file_names=pick('check_file_names', config.analysis.check_file_names),
        check_file_content=pick('check_file_content', config.analysis.check_file_content),
        write_json_output=pick('write_json_output', config.reports.write_json_output),
        show_progress=pick('show_progress', config.analysis.show_progress),
        max_concurrency=max_concurrency,
        export_format=pick(
            'export_format',
            config.reports.output_format if config.reports.output_format != 'table' else None
        ),
        export_path=pick('export_path', config.reports.output_path),
    )

    if not options.check_file_names and not options.check_file_content:
        raise ConfigValidationError([
            "You must enable at least one of --check-file-names, --check-file-content"
        ])

    return options


def create_default_config(framework: Optional[str] = None) -> Config:
    """Create the default configuration written by ``init``."""
    config = Config()
    config.project.framework = framework
    config.paths.extensions = ['.ts', '.tsx', '.js', '.jsx']
    config.paths.exclude = ['node_modules', 'dist', 'build']
    return config
