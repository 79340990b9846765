"""Version information for codebase-analyzer."""

__version__ = "1.4.0"
__author__ = "codebase-analyzer contributors"
__description__ = "Codebase content, naming and translation-key analyzer"

# Changelog:
# 1.4.0 - Unused translation key detection
#       - New 'i18n' command: analyze-codebase i18n messages/en.json
#       - Nested JSON trees flattened to dot-notation keys
#       - Dynamic key detection (template literals, string concatenation)
#       - Descendants of dynamically used prefixes are never reported unused
#       - Safe pruning with empty parent cleanup and file backup
#       - Batched concurrent scanning with cooperative cancellation
#
# 1.3.0 - Watch mode and exports
#       - --watch re-runs the analysis on file changes (watchdog)
#       - --export json|csv|html with --output PATH
#       - .analyze-codebase.yml config discovery (walks up to filesystem root)
#       - 'init' command writes a default config
#
# 1.2.0 - Structured logging and progress bars
#       - ColoredFormatter, --verbose / --quiet / --log-file
#       - tqdm progress bars, spinner() context manager
#
# 1.1.0 - Multi-line block comment handling
#       - Continuation lines of /* ... */ blocks are counted as comments
#       - Empty block openers (/**) tracked separately
#
# 1.0.0 - Initial release
#       - Line content classification (source, comment, empty, TODO)
#       - File name naming-convention distribution
