# coding: utf-8

import logging
import re
from collections.abc import Mapping

from . import _common
from .column import Column, ColumnType

_logger = logging.getLogger(__name__)


class Columnizer:
    """Column schema applied to every line of one log source.

    A Columnizer is an ordered list of :class:`~column.Column`
    with two pieces of auxiliary configuration:
    the datetime format for the timestamp column
    and the log level mapping for the level column.
    The order of the columns is the extraction order
    and the display order.

    The level mapping is an ordered list of (level, pattern) pairs.
    It is evaluated in the given order, and the first pattern
    found in the extracted level text decides the level.
    Entries with empty patterns never match.

    The Columnizer is validated on construction
    and is read-only afterwards, so one instance can be shared
    by any number of (concurrent) parse calls.

    Example:
        >>> from logcolumnizer import LogLevel
        >>> from logcolumnizer.column import *
        >>> columnizer = Columnizer(
        ...     [TimestampColumn("Time", r"^(\\S+)"),
        ...      LevelColumn("Level", r"\\[(\\w+)\\]"),
        ...      MessageColumn("Msg", r"\\]\\s(.*)$")],
        ...     datetime_format="%Y-%m-%dT%H:%M:%S",
        ...     log_level_mapping=[(LogLevel.ERROR, "ERR"), (LogLevel.INFO, "INFO")])

    Args:
        columns (list of :class:`~column.Column`): column rules.
        datetime_format (str, optional): ``datetime.strptime`` format
            of the timestamp column.
        log_level_mapping (list of tuple or dict, optional):
            (:class:`~_common.LogLevel` or level name, pattern) pairs.
        name (str, optional): Name of this columnizer.

    Raises:
        ColumnizerDefinitionError: the columns or the mapping are invalid.
    """

    def __init__(self, columns, datetime_format=_common.DEFAULT_DATETIME_FORMAT,
                 log_level_mapping=(), name=None):
        self._columns = tuple(columns)
        self._datetime_format = datetime_format
        self._name = name

        self._empty_check(self._columns)
        self._format_check(datetime_format)
        self._type_check(self._columns)
        self._duplication_check(self._columns)
        self._message_check(self._columns)
        self._level_mapping = self._make_level_mapping(log_level_mapping)
        self._column_index = {column.name: i
                              for i, column in enumerate(self._columns)}

    @staticmethod
    def _empty_check(columns):
        if len(columns) == 0:
            msg = "more than one column needs to be given"
            raise _common.ColumnizerDefinitionError(msg)

    @staticmethod
    def _format_check(datetime_format):
        if not isinstance(datetime_format, str) or datetime_format == "":
            msg = "datetime_format must be a non-empty string: {0!r}".format(
                datetime_format)
            raise _common.ColumnizerDefinitionError(msg)

    @staticmethod
    def _type_check(columns):
        for column in columns:
            if not isinstance(column, Column):
                msg = "not a Column: {0!r}".format(column)
                raise _common.ColumnizerDefinitionError(msg)

    @staticmethod
    def _duplication_check(columns):
        names = [column.name for column in columns]
        if len(names) > len(set(names)):
            msg = "Given columns include duplicated names: {0}".format(names)
            raise _common.ColumnizerDefinitionError(msg)

    @staticmethod
    def _message_check(columns):
        types = [column.column_type for column in columns]
        if ColumnType.MESSAGE not in types:
            _logger.warning("columnizer has no message column; "
                            "records will have empty messages")

    @staticmethod
    def _make_level_mapping(log_level_mapping):
        if isinstance(log_level_mapping, Mapping):
            items = log_level_mapping.items()
        else:
            items = log_level_mapping

        l_map = []
        for item in items:
            try:
                level, pattern = item
                level = _common.LogLevel.from_name(level)
            except (TypeError, ValueError) as e:
                msg = "invalid level mapping entry {0!r}: {1}".format(item, e)
                raise _common.ColumnizerDefinitionError(msg)
            if pattern:
                try:
                    reobj = re.compile(pattern)
                except (re.error, TypeError) as e:
                    msg = "invalid level pattern for {0}: {1}".format(level.name, e)
                    raise _common.ColumnizerDefinitionError(msg)
            else:
                # empty patterns never match
                reobj = None
            l_map.append((level, pattern or "", reobj))
        return l_map

    def __len__(self):
        return len(self._columns)

    def __iter__(self):
        return iter(self._columns)

    def __getitem__(self, index):
        return self._columns[index]

    def __repr__(self):
        return "Columnizer(name={0!r}, columns={1!r})".format(
            self._name, list(self._columns))

    @property
    def name(self):
        return self._name

    @property
    def columns(self):
        """tuple of :class:`~column.Column`: Columns in declared order."""
        return self._columns

    @property
    def column_names(self):
        return [column.name for column in self._columns]

    @property
    def datetime_format(self):
        return self._datetime_format

    @property
    def log_level_mapping(self):
        """tuple: (:class:`~_common.LogLevel`, pattern) pairs in declared order."""
        return tuple((level, pattern) for level, pattern, _ in self._level_mapping)

    def index_of(self, name):
        """Get the position of a column by its name.

        Returns:
            int, or None if no column has the name.
        """
        return self._column_index.get(name)

    def column(self, name):
        """Get a column by its name, or None."""
        index = self.index_of(name)
        if index is None:
            return None
        return self._columns[index]

    def resolve_level(self, text):
        """Classify a level text with the level mapping.

        Args:
            text (str): Extracted text of a level column.

        Returns:
            :class:`~_common.LogLevel` of the first matching entry,
            or None if no entry matches.
        """
        for level, _, reobj in self._level_mapping:
            if reobj is None:
                continue
            if reobj.search(text):
                return level
        return None
