# coding: utf-8

"""Exporters turning :class:`~record.LogRecord` into external representations.

Two formats are produced:

* Comma separated lines. Every value is quoted and quotes inside values
  are doubled, e.g., ``"12","2024-01-01T10:00:00","ERR","disk ""sda"" failure"``.
* Flat mappings for scripting engines and other consumers
  that need name based access to the record.
"""

import csv
import io
import os
from abc import ABC, abstractmethod

from . import _common


class Mappable(ABC):
    """Capability of objects that can be converted to a flat
    name-value mapping (str keys; str, int or float values).
    """
    __slots__ = ()

    @abstractmethod
    def to_mapping(self, time_shift=None):
        raise NotImplementedError

    @classmethod
    def __subclasshook__(cls, C):
        if cls is Mappable:
            if any("to_mapping" in B.__dict__ for B in C.__mro__):
                return True
        return NotImplemented


def _csv_row(values):
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator=os.linesep)
    writer.writerow(values)
    return buf.getvalue()


def to_csv_line(record):
    """Export a record into a comma separated line.

    Args:
        record (:class:`~record.LogRecord`)

    Returns:
        str: The index and every field, quoted,
        terminated with the platform line separator.
    """
    return _csv_row([record.index] + list(record.fields))


def csv_header(columnizer):
    """Header line for :func:`to_csv_line` output of a columnizer."""
    return _csv_row(["Index"] + columnizer.column_names)


def write_csv(records, fp, header=True, columnizer=None):
    """Write records into a file object as comma separated lines.

    Args:
        records (iterable of :class:`~record.LogRecord`)
        fp: Text file object. Open it with ``newline=""``
            to keep the platform line separator as is.
        header (bool, optional): Write a header line first.
        columnizer (:class:`~columnizer.Columnizer`, optional):
            Used for the header; defaults to the columnizer of the first record.

    Returns:
        int: Number of written records.
    """
    count = 0
    for record in records:
        if count == 0 and header:
            fp.write(csv_header(columnizer or record.columnizer))
        fp.write(to_csv_line(record))
        count += 1
    if count == 0 and header and columnizer is not None:
        fp.write(csv_header(columnizer))
    return count


def to_mapping(record, time_shift=None):
    """Export a record into a flat mapping.

    The mapping has the base keys
    ``index`` (int), ``timestamp`` (ISO 8601 str, time shift applied),
    ``level`` (level name), ``logger`` and ``message``,
    and one key per column name with the extracted value.
    A column named like a base key overwrites the base value.

    Args:
        record (:class:`~record.LogRecord`)
        time_shift (optional): see :meth:`~record.LogRecord.value_at`.

    Returns:
        dict
    """
    d = {
        _common.KEY_INDEX: record.index,
        _common.KEY_TIMESTAMP: record.shifted_timestamp(time_shift).isoformat(),
        _common.KEY_LEVEL: record.level.name,
        _common.KEY_LOGGER: record.logger,
        _common.KEY_MESSAGE: record.message,
    }
    for column, value in zip(record.columnizer, record.fields):
        d[column.name] = value
    return d
