# coding: utf-8

import logging

from . import _common
from .record import LogRecord

_logger = logging.getLogger(__name__)


def parse_line(raw_line, index, columnizer):
    """Parse a log line with a columnizer.

    Every column of the columnizer is searched in the line in order.
    The parse is all-or-nothing: if a required column does not match,
    no record is built and :class:`~_common.RequiredColumnMismatch` is raised.
    An optional column not matching gets an empty string.

    The extracted texts are then resolved by their columns
    (timestamp, level and message); a text that cannot be resolved
    leaves the default value of the record as it is.
    Finally the logger label is taken from the column named "Logger".

    This function keeps no state, so it can be called
    from multiple threads with a shared columnizer.

    Args:
        raw_line (str): A log line.
        index (int): Sequence position of the line.
        columnizer (:class:`~columnizer.Columnizer`): Column schema.

    Returns:
        :class:`~record.LogRecord`

    Raises:
        RequiredColumnMismatch: a required column did not match.
    """
    fields = []
    d_items = {}
    for column in columnizer:
        text = column.extract(raw_line)
        if text is None:
            if not column.optional:
                raise _common.RequiredColumnMismatch(raw_line, column)
            _logger.debug("line %s: optional column %s: mismatch",
                          index, column.name)
            text = ""
        fields.append(text)

        tmp = column.pick(text, columnizer)
        if tmp is not None:
            key, val = tmp
            d_items[key] = val

    index_logger = columnizer.index_of(_common.LOGGER_COLUMN)
    if index_logger is None:
        d_items[_common.KEY_LOGGER] = _common.NO_LOGGER
    else:
        d_items[_common.KEY_LOGGER] = fields[index_logger]

    return LogRecord(index, raw_line, fields, columnizer, **d_items)
