# coding: utf-8

import datetime

from . import _common
from .column import ColumnType, UNSET_TIMESTAMP
from . import export


class TimeShift:
    """Shared, externally updated display offset.

    A TimeShift is owned by whoever presents the records
    (e.g., one per log session) and passed into
    :meth:`LogRecord.value_at` and the exporters.
    Setting a new offset replaces the stored value in one assignment,
    so readers in other threads see either the old or the new offset.

    Args:
        offset (datetime.timedelta or float, optional):
            Initial offset (seconds if given as a number).
    """

    def __init__(self, offset=None):
        self._offset = self._to_timedelta(offset)

    @staticmethod
    def _to_timedelta(offset):
        if offset is None:
            return datetime.timedelta(0)
        if isinstance(offset, datetime.timedelta):
            return offset
        return datetime.timedelta(seconds=offset)

    def __repr__(self):
        return "TimeShift({0!r})".format(self._offset)

    @property
    def offset(self):
        return self._offset

    def set(self, offset):
        self._offset = self._to_timedelta(offset)

    def reset(self):
        self._offset = datetime.timedelta(0)


def _shift_value(time_shift):
    if time_shift is None:
        return datetime.timedelta(0)
    if isinstance(time_shift, TimeShift):
        return time_shift.offset
    return TimeShift._to_timedelta(time_shift)


class LogRecord(export.Mappable):
    """One parsed log line.

    Records are built by :func:`~parse.parse_line` and are read-only.
    The time shift is not part of a record; it is given
    to :meth:`value_at` (and the exporters) on every call,
    so presenting a shifted timestamp never changes the stored one.

    Args:
        index (int): Sequence position of the line.
        raw_data (str): The original log line.
        fields (sequence of str): Extracted value for every column,
            in column order.
        columnizer (:class:`~columnizer.Columnizer`): Schema used for parsing.
        timestamp (datetime.datetime, optional): Resolved timestamp.
        level (:class:`~_common.LogLevel`, optional): Resolved level.
        message (str, optional): Resolved message.
        logger (str, optional): Logger label.
    """
    __slots__ = ("_index", "_raw_data", "_fields", "_columnizer",
                 "_timestamp", "_level", "_message", "_logger")

    def __init__(self, index, raw_data, fields, columnizer,
                 timestamp=UNSET_TIMESTAMP, level=_common.DEFAULT_LEVEL,
                 message="", logger=_common.NO_LOGGER):
        self._index = index
        self._raw_data = raw_data
        self._fields = tuple(fields)
        self._columnizer = columnizer
        self._timestamp = timestamp
        self._level = level
        self._message = message if message is not None else ""
        self._logger = logger

    def __repr__(self):
        return "LogRecord(index={0}, level={1}, message={2!r})".format(
            self._index, self._level.name, self._message)

    def _key(self):
        return (self._index, self._raw_data, self._fields, self._timestamp,
                self._level, self._message, self._logger)

    def __eq__(self, other):
        if not isinstance(other, LogRecord):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    @property
    def index(self):
        return self._index

    @property
    def raw_data(self):
        return self._raw_data

    @property
    def fields(self):
        """tuple of str: Extracted values in column order."""
        return self._fields

    @property
    def columnizer(self):
        return self._columnizer

    @property
    def timestamp(self):
        """datetime.datetime: Stored timestamp,
        :data:`~column.UNSET_TIMESTAMP` if not resolved."""
        return self._timestamp

    @property
    def has_timestamp(self):
        return self._timestamp != UNSET_TIMESTAMP

    @property
    def effective_timestamp(self):
        """datetime.datetime: Timestamp for presentation.
        Falls back to the current time if the timestamp is unset."""
        if self.has_timestamp:
            return self._timestamp
        return datetime.datetime.now()

    @property
    def level(self):
        return self._level

    @property
    def message(self):
        return self._message

    @property
    def logger(self):
        return self._logger

    def shifted_timestamp(self, time_shift=None):
        """Effective timestamp plus the time shift.
        The shift is ignored if the result is out of the datetime range."""
        ts = self.effective_timestamp
        try:
            return ts + _shift_value(time_shift)
        except OverflowError:
            return ts

    def value_at(self, position, time_shift=None,
                 timestamp_format=_common.DEFAULT_TIMESTAMP_FORMAT):
        """Get the value to display at a table position.

        Position 0 is reserved and position 1 shows the record index.
        Positions from 2 show the fields in column order.
        Timestamp columns show the resolved timestamp
        plus the time shift, formatted with timestamp_format.

        Args:
            position (int): Display position.
            time_shift (:class:`TimeShift`, datetime.timedelta or float, optional):
                Offset added to displayed timestamps.
            timestamp_format (str, optional): ``strftime`` format
                for displayed timestamps.

        Returns:
            str: The value, or an empty string if nothing is displayed.
        """
        if position == 1:
            return str(self._index)
        if position < 2 or position - 2 >= len(self._fields):
            return ""
        column = self._columnizer[position - 2]
        if column.column_type is ColumnType.TIMESTAMP:
            return self.shifted_timestamp(time_shift).strftime(timestamp_format)
        return self._fields[position - 2]

    def value_by_name(self, column_name, default="NotFound"):
        """Get the value of a column by the column name.

        Args:
            column_name (str): Name of the column.
            default (str, optional): Returned if no column has the name.

        Returns:
            str
        """
        index = self._columnizer.index_of(column_name)
        if index is None or index >= len(self._fields):
            return default
        return self._fields[index]

    def to_mapping(self, time_shift=None):
        """See :func:`~export.to_mapping`."""
        return export.to_mapping(self, time_shift)
