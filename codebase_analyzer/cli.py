"""Command-line interface for codebase analyzer."""

import sys
import argparse
from pathlib import Path
from typing import Optional

from .__version__ import __version__
from .exceptions import AnalyzerError, CancellationRequested, TranslationFileError
from .utils.colors import Colors
from .utils.config import (
    CONFIG_FILE_NAME,
    AnalysisOptions,
    Config,
    ConfigValidationError,
    create_default_config,
    merge_options,
    normalize_extensions,
)
from .utils.backup import cleanup_old_backups, create_backup
from .utils.cancellation import CancellationToken, install_signal_handlers
from .utils.logging import configure_logging, get_logger
from .utils.progress import spinner
from .utils.watch import watch_directory
from .core.file_discovery import collect_files, collect_source_files, resolve_directory
from .core.content_analyzer import CodebaseContentAnalyzer
from .core.key_resolver import UnusedKeyResolver
from .features.translation_tree import flatten_keys, load_translation_file, prune_keys, write_translation_file
from .reports.console_reporter import ConsoleReporter
from .reports.json_reporter import JSONReporter
from .reports.exporter import EXPORT_FORMATS, export_results

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130

logger = get_logger()


def parse_bool(value: str) -> bool:
    """Parse ``true``/``false`` option values."""
    lowered = value.lower()
    if lowered in ('true', '1', 'yes'):
        return True
    if lowered in ('false', '0', 'no'):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{value}'")


def positive_int(value: str) -> int:
    """Parse a strictly positive integer option value."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def load_and_validate_config(directory: Path, verbose: bool = False) -> Config:
    """
    Load the config governing ``directory`` and validate it.

    Args:
        directory: Analysed directory (config is searched upward from it)
        verbose: Whether to print warnings

    Returns:
        Loaded Config object (defaults when no file exists)

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.load(directory)

    if config.source_path is not None:
        logger.info(f"📋 Using config: {config.source_path}")

    errors, warnings = config.validate()

    if verbose and warnings:
        for warning in warnings:
            logger.warning(f"Config warning: {warning}")

    if errors:
        logger.error("Configuration errors:")
        for error in errors:
            logger.error(f"   • {error}")
        raise ConfigValidationError(errors)

    return config


def ask_confirmation(question: str) -> bool:
    """Ask a yes/no question on stdin; only ``y`` or ``yes`` confirm."""
    try:
        answer = input(question)
    except EOFError:
        return False
    return answer.strip().lower() in ('y', 'yes')


def run_content_analysis(
    options: AnalysisOptions,
    token: Optional[CancellationToken] = None
) -> int:
    """
    Collect files, analyze them and report.

    Args:
        options: Effective analysis options
        token: Cancellation token (fresh one if omitted)

    Returns:
        Exit code
    """
    root = resolve_directory(options.directory)

    framework = f" (framework: {options.framework})" if options.framework else ""
    logger.info(f"\nAnalyzing codebase in {Colors.info(str(root))}{framework}\n")

    with spinner("📁 Discovering files", disable=not options.show_progress) as status:
        files = collect_files(root, options.extensions, options.exclude)
        status.done(f"{len(files)} files")

    analyzer = CodebaseContentAnalyzer(
        files,
        check_file_names=options.check_file_names,
        check_file_content=options.check_file_content,
        max_concurrency=options.max_concurrency,
        token=token,
        show_progress=options.show_progress,
    )
    result = analyzer.run()

    if result.cancelled:
        logger.warning("Analysis cancelled by user")
        return EXIT_CANCELLED

    ConsoleReporter.print_content_report(result, options)

    if options.write_json_output and result.file_count:
        path = JSONReporter.write_analyze_result(root, result, options)
        logger.success(f"JSON output written to: {path}")

    if options.export_format and result.file_count:
        export_path = options.export_path or f"analyze-codebase-report.{options.export_format}"
        path = export_results(result, export_path, options.export_format, options)
        logger.success(f"📤 Exported {options.export_format.upper()} report to: {path}")

    logger.info(Colors.muted(f"\nTime taken: {result.duration_seconds:.2f}s"))
    return EXIT_OK


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        logger.fail(f"Config already exists: {config_path}")
        logger.hint("Use --force to overwrite")
        return EXIT_ERROR

    config = create_default_config(args.framework)
    config.save(config_path)

    logger.success(f"Created: {config_path}")
    logger.info(f"\n{Colors.bold('Next steps:')}")
    logger.info(f"1. Edit {CONFIG_FILE_NAME} to configure your project")
    logger.info("2. Run: analyze-codebase analyze")

    return EXIT_OK


def cmd_analyze(args):
    """Run content and file name analysis."""
    directory = Path(args.directory or '.')

    try:
        config = load_and_validate_config(directory, verbose=args.verbose)
    except ConfigValidationError:
        return EXIT_ERROR

    try:
        options = merge_options(config, {
            'directory': str(directory),
            'framework': args.framework,
            'extensions': args.extensions,
            'exclude': args.exclude,
            'check_file_names': args.check_file_names,
            'check_file_content': args.check_file_content,
            'write_json_output': args.write_json,
            'show_progress': False if args.no_progress or args.watch else None,
            'max_concurrency': args.max_concurrency,
            'export_format': args.export,
            'export_path': args.output,
        })
    except ConfigValidationError as e:
        for error in e.errors:
            logger.fail(error)
        return EXIT_ERROR

    try:
        if args.watch:
            root = resolve_directory(options.directory)
            watch_directory(root, lambda: run_content_analysis(options), exclude=options.exclude)
            return EXIT_OK

        token = CancellationToken()
        install_signal_handlers(token)
        return run_content_analysis(options, token)
    except CancellationRequested:
        logger.warning("Analysis cancelled by user")
        return EXIT_CANCELLED
    except AnalyzerError as e:
        logger.fail(str(e))
        return EXIT_ERROR


def cmd_i18n(args):
    """Find and remove unused translation keys."""
    directory = Path(args.directory or '.')

    try:
        config = load_and_validate_config(directory, verbose=args.verbose)
    except ConfigValidationError:
        return EXIT_ERROR

    i18n_file = args.i18n_file or config.i18n.file
    if not i18n_file:
        logger.fail("No i18n file given (pass I18N_FILE or set i18n.file in the config)")
        return EXIT_ERROR

    i18n_path = Path(i18n_file)
    if not i18n_path.is_absolute():
        i18n_path = directory / i18n_path

    logger.info(f"\nAnalyzing unused translation keys in {Colors.info(str(i18n_path))}\n")

    try:
        with spinner("📖 Loading translation file", disable=args.no_progress) as status:
            tree = load_translation_file(i18n_path)
            status.done(f"{len(flatten_keys(tree))} keys")

        extensions = normalize_extensions(args.extensions) or config.i18n.extensions
        with spinner("📁 Discovering files", disable=args.no_progress) as status:
            files = collect_source_files(directory, extensions, args.exclude or config.paths.exclude)
            status.done(f"{len(files)} files")
        logger.info(f"Found {Colors.info(str(len(files)))} files to analyze")

        token = CancellationToken()
        install_signal_handlers(token)

        resolver = UnusedKeyResolver(
            tree,
            files,
            max_concurrency=args.max_concurrency,
            token=token,
            call_names=config.i18n.functions,
            show_progress=not args.no_progress,
        )
        report = resolver.run()
    except TranslationFileError as e:
        logger.fail(str(e))
        return EXIT_ERROR
    except CancellationRequested:
        logger.warning("Analysis cancelled by user")
        return EXIT_CANCELLED
    except AnalyzerError as e:
        logger.fail(str(e))
        return EXIT_ERROR

    if report.cancelled:
        logger.warning("✅ Analysis cancelled by user")
        return EXIT_CANCELLED

    ConsoleReporter.print_key_report(report)

    if args.json:
        path = JSONReporter.generate_key_report(report, Path(args.json), i18n_path)
        logger.success(f"JSON report: {path}")

    if not report.unused_keys:
        return EXIT_OK

    if args.dry_run:
        logger.hint("Dry run: no changes written")
        return EXIT_OK

    count = len(report.unused_keys)
    if not args.yes and not ask_confirmation(
        Colors.warning(f"\nDo you want to remove these {count} unused key(s)? (y/n): ")
    ):
        logger.info(Colors.muted("\nOperation cancelled.\n"))
        return EXIT_OK

    if not args.no_backup and config.i18n.backup:
        create_backup(i18n_path)
        cleanup_old_backups(i18n_path)

    prune_keys(tree, report.unused_keys)
    write_translation_file(i18n_path, tree)

    logger.success(f"Successfully removed {count} unused translation key(s) from {i18n_path}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='analyze-codebase',
        description='Analyze codebase structure, naming conventions and translation key usage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Options shared by the analysis commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    common.add_argument('--quiet', '-q', action='store_true', help='Only show warnings and errors')
    common.add_argument('--log-file', metavar='PATH', help='Also write logs to PATH')
    common.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    common.add_argument('-e', '--extensions', nargs='+', metavar='EXT', help='File extensions (e.g. .ts .tsx)')
    common.add_argument('--exclude', nargs='+', metavar='NAME', help='Directory or file names to skip')
    common.add_argument('--max-concurrency', type=positive_int, metavar='N',
                        help='Max concurrent file reads (default: auto)')
    common.add_argument('--no-progress', action='store_true', help='Disable progress bar')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help=f'Create a default {CONFIG_FILE_NAME}')
    init_parser.add_argument('--framework', help='Framework name stored in the config')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # analyze command
    analyze_parser = subparsers.add_parser('analyze', parents=[common], help='Analyze file names and content')
    analyze_parser.add_argument('directory', nargs='?', default='.', help='Directory to analyze (default: .)')
    analyze_parser.add_argument('--framework', '-f', help='Framework name (informational)')
    analyze_parser.add_argument('--check-file-names', type=parse_bool, metavar='true|false',
                                help='Check file names (default: true)')
    analyze_parser.add_argument('--check-file-content', type=parse_bool, metavar='true|false',
                                help='Check file content (default: true)')
    analyze_parser.add_argument('-w', '--write-json', action='store_true', default=None,
                                help='Write analyze-codebase-result.json into the directory')
    analyze_parser.add_argument('--export', choices=EXPORT_FORMATS, help='Export format')
    analyze_parser.add_argument('--output', metavar='PATH', help='Output path for --export')
    analyze_parser.add_argument('--watch', action='store_true',
                                help='Re-analyze automatically on file changes')

    # i18n command
    i18n_parser = subparsers.add_parser('i18n', parents=[common], help='Find and remove unused translation keys')
    i18n_parser.add_argument('i18n_file', nargs='?', metavar='I18N_FILE',
                             help='Translation JSON file (e.g. messages/en.json)')
    i18n_parser.add_argument('directory', nargs='?', default='.', help='Directory to scan (default: .)')
    i18n_parser.add_argument('--yes', '-y', action='store_true', help='Remove unused keys without asking')
    i18n_parser.add_argument('--dry-run', action='store_true', help='Report only, never modify the file')
    i18n_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')
    i18n_parser.add_argument('--json', metavar='PATH', help='Write the key report as JSON')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ('analyze', 'i18n'):
        if args.no_color:
            Colors.set_enabled(False)
        configure_logging(
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=Path(args.log_file) if args.log_file else None,
            use_colors=Colors.enabled,
        )

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'analyze':
        return cmd_analyze(args)
    elif args.command == 'i18n':
        return cmd_i18n(args)
    else:
        parser.print_help()
        return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
