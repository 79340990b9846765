"""Report modules."""

from .json_reporter import JSONReporter
from .csv_reporter import CSVReporter
from .html_reporter import HTMLReporter
from .console_reporter import ConsoleReporter
from .exporter import export_results, EXPORT_FORMATS

__all__ = [
    'JSONReporter',
    'CSVReporter',
    'HTMLReporter',
    'ConsoleReporter',
    'export_results',
    'EXPORT_FORMATS',
]
