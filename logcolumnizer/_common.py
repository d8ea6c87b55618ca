# coding: utf-8

import collections
import enum
import logging
from concurrent.futures import ThreadPoolExecutor

_logger = logging.getLogger(__name__)

# keys in public
KEY_INDEX = "index"
KEY_TIMESTAMP = "timestamp"
KEY_LEVEL = "level"
KEY_MESSAGE = "message"
KEY_LOGGER = "logger"

LOGGER_COLUMN = "Logger"
NO_LOGGER = "No {0} column".format(LOGGER_COLUMN)

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


class LogLevel(enum.IntEnum):
    """Severity of a log record, ordered from least to most severe."""
    TRACE = 1
    DEBUG = 2
    INFO = 4
    WARNING = 8
    ERROR = 16
    FATAL = 32

    @classmethod
    def from_name(cls, name):
        """Get a LogLevel by its (case-insensitive) name.

        Accepts LogLevel members as is.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ValueError("unknown log level: {0}".format(name))


DEFAULT_LEVEL = LogLevel.INFO


class ColumnizerDefinitionError(Exception):
    """ColumnizerDefinitionError is raised when the given columns
    or level mappings are inappropriate (e.g., having syntax errors,
    missing capturing groups or duplicated column names).

    It is always raised when building a :class:`~columnizer.Columnizer`,
    never while parsing lines.
    """
    pass


class LogParseFailure(Exception):
    """LogParseFailure is raised when the input log line
    cannot be turned into a record.

    If you want to pass such mismatching log lines,
    use try-except with this exception.
    """
    pass


class RequiredColumnMismatch(LogParseFailure):
    """A non-optional column did not match the input line.

    Args:
        line (str): The rejected log line.
        column (:class:`~column.Column`): The column that did not match.
    """

    def __init__(self, line, column):
        self.line = line
        self.column = column
        if len(line) > 50:
            tmp_line = line[:50]
        else:
            tmp_line = line
        msg = "required column {0} mismatch: {1}".format(column.name, tmp_line)
        super().__init__(msg)


class LogParser:
    """Log parser object for bulk ingestion.

    LogParser applies one :class:`~columnizer.Columnizer` to many lines.
    Each line gets its index assigned before it is parsed,
    so the original line order survives parallel parsing.

    Lines rejected by the columnizer are counted in :attr:`rejected`
    and reported with a warning (or re-raised, see :meth:`process_lines`).

    Example:
        >>> parser = logcolumnizer.init_parser()  # default columnizer
        >>> record = parser.process_line("2024-01-01 10:00:00 [ERROR] app.db - disk failure", 1)
        >>> record.level
        <LogLevel.ERROR: 16>
        >>> record.message
        'disk failure'

    Args:
        columnizer (:class:`~columnizer.Columnizer`): column schema to use.
    """
    window_factor = 4

    def __init__(self, columnizer):
        from .columnizer import Columnizer
        if not isinstance(columnizer, Columnizer):
            raise TypeError("columnizer must be a Columnizer")
        self.columnizer = columnizer
        self.rejected = 0

    def process_line(self, line, index):
        """Parse a log line.

        Args:
            line (str): A log line. Line feed code will be removed.
            index (int): Sequence position of the line.

        Returns:
            :class:`~record.LogRecord`, or None for an empty line.

        Raises:
            RequiredColumnMismatch: a required column did not match.
        """
        from .parse import parse_line
        line = line.rstrip("\r\n")
        if line == "":
            return None
        return parse_line(line, index, self.columnizer)

    def _try_line(self, item):
        index, line = item
        try:
            return self.process_line(line, index)
        except LogParseFailure as e:
            return e

    def process_lines(self, lines, start_index=1, workers=None,
                      skip_failures=True):
        """Parse multiple log lines in order.

        With worker threads, at most ``workers * window_factor`` lines
        are read ahead of the record given to the caller.
        Lines are not read any more once a failure is raised
        or the caller stops iterating.

        Args:
            lines (iterable of str): Log lines.
            start_index (int, optional): Index of the first line.
            workers (int, optional): Number of worker threads.
                If not given, lines are parsed in the calling thread.
            skip_failures (bool, optional): If true, rejected lines are
                counted and logged; otherwise the failure is raised.

        Yields:
            :class:`~record.LogRecord` for every accepted (non-empty) line.
        """
        indexed = enumerate(lines, start_index)
        if workers is None or workers <= 1:
            results = map(self._try_line, indexed)
            yield from self._collect(results, skip_failures)
        else:
            results = self._iter_parallel(indexed, workers)
            try:
                yield from self._collect(results, skip_failures)
            finally:
                # cancels the lines not parsed yet
                results.close()

    def _iter_parallel(self, indexed, workers):
        window = workers * self.window_factor
        pending = collections.deque()
        with ThreadPoolExecutor(max_workers=workers) as executor:
            try:
                for item in indexed:
                    pending.append(executor.submit(self._try_line, item))
                    if len(pending) >= window:
                        yield pending.popleft().result()
                while pending:
                    yield pending.popleft().result()
            finally:
                for future in pending:
                    future.cancel()

    def _collect(self, results, skip_failures):
        for ret in results:
            if ret is None:
                continue
            if isinstance(ret, LogParseFailure):
                if not skip_failures:
                    raise ret
                self.rejected += 1
                _logger.warning("line rejected: %s", ret)
                continue
            yield ret


def init_parser(columnizer=None):
    """Generate :class:`LogParser` object.

    If no arguments are given,
    this function generates LogParser with the default columnizer.

    Args:
        columnizer (:class:`~columnizer.Columnizer`, optional):
            If not given, use :func:`preset.default_columnizer`.
    """

    if columnizer is None:
        from . import preset
        columnizer = preset.default_columnizer()
    return LogParser(columnizer)
