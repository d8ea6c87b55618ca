# coding: utf-8

import datetime
import enum
import logging
import re
from abc import ABC, abstractmethod

from . import _common

_logger = logging.getLogger(__name__)

UNSET_TIMESTAMP = datetime.datetime.min


class ColumnType(enum.Enum):
    TIMESTAMP = "Timestamp"
    LEVEL = "Level"
    MESSAGE = "Message"
    GENERIC = "Generic"

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        for member in cls:
            if member.value.lower() == str(name).lower():
                return member
        raise ValueError("unknown column type: {0}".format(name))


class Column(ABC):
    """Base class of columns, components of a :class:`~columnizer.Columnizer`.

    A column is one named extraction rule.
    Its regular expression is searched in the whole log line
    (in multiline mode, so :regexp:`^` and :regexp:`$` match
    at line boundaries), and the first capturing group
    is the extracted value of the column.

    Subclasses decide what the extracted value means
    for the record (see :attr:`~Column.value_name`
    and :meth:`~Column.pick_value`).

    Args:
        name (str): Column name, unique in a columnizer.
        expression (str): Regular expression with at least
            one capturing group.
        optional (bool, optional): This column is optional.
            If true, a line not matching the expression
            gets an empty string for this column instead of being rejected.
    """
    column_type = ColumnType.GENERIC
    _value_name = None

    def __init__(self, name, expression, optional=False):
        self._name = name
        self._expression = expression
        self._optional = optional
        self._reobj = self._compile(name, expression)

    @staticmethod
    def _compile(name, expression):
        try:
            reobj = re.compile(expression, re.MULTILINE)
        except (re.error, TypeError) as e:
            msg = "invalid expression for column {0}: {1}".format(name, e)
            raise _common.ColumnizerDefinitionError(msg)
        if reobj.groups < 1:
            msg = ("expression for column {0} has no capturing group: "
                   "{1}".format(name, expression))
            raise _common.ColumnizerDefinitionError(msg)
        return reobj

    def __repr__(self):
        return "{0}({1!r}, {2!r}, optional={3})".format(
            self.__class__.__name__, self._name, self._expression, self._optional)

    @property
    def name(self):
        return self._name

    @property
    def expression(self):
        return self._expression

    @property
    def optional(self):
        return self._optional

    @property
    def pattern(self):
        """re.Pattern: Compiled expression of this column."""
        return self._reobj

    @property
    def value_name(self):
        """str: Key of the record attribute this column resolves,
        or None if the column only fills its field.
        """
        return self._value_name

    def extract(self, line):
        """Search this column in a log line.

        Args:
            line (str): A log line.

        Returns:
            str: Text of the first capturing group, or None if
            the expression does not match.
        """
        mo = self._reobj.search(line)
        if mo is None:
            return None
        return mo.group(1) or ""

    def pick(self, text, columnizer):
        """Get value name and the resolved value for an extracted text.

        Args:
            text (str): Extracted text of this column.
            columnizer (:class:`~columnizer.Columnizer`): Owner schema.

        Returns:
            tuple: :attr:`~Column.value_name` and the value
            given by :meth:`Column.pick_value`,
            or None if nothing is resolved.
        """
        if self.value_name is None:
            return None
        value = self.pick_value(text, columnizer)
        if value is None:
            return None
        return self.value_name, value

    @abstractmethod
    def pick_value(self, text, columnizer):
        """Resolve the extracted text of this column
        (None if nothing is resolved)."""
        raise NotImplementedError


class TimestampColumn(Column):
    """Column for the timestamp of a record.

    The extracted text is parsed with :attr:`~columnizer.Columnizer.datetime_format`
    (``datetime.strptime`` directives). Text not conforming
    to the format resolves to :data:`UNSET_TIMESTAMP`.
    """
    column_type = ColumnType.TIMESTAMP
    _value_name = _common.KEY_TIMESTAMP

    def pick_value(self, text, columnizer):
        """Returns :obj:`datetime.datetime`."""
        try:
            return datetime.datetime.strptime(text, columnizer.datetime_format)
        except ValueError:
            _logger.debug("timestamp %r does not match format %r",
                          text, columnizer.datetime_format)
            return UNSET_TIMESTAMP


class LevelColumn(Column):
    """Column for the severity of a record.

    The extracted text is classified with the level mapping
    of the columnizer. If no mapping entry matches,
    nothing is resolved and the record keeps the default level.
    """
    column_type = ColumnType.LEVEL
    _value_name = _common.KEY_LEVEL

    def pick_value(self, text, columnizer):
        """Returns :class:`~_common.LogLevel` or None."""
        level = columnizer.resolve_level(text)
        if level is None:
            _logger.debug("no level mapping matches %r", text)
        return level


class MessageColumn(Column):
    """Column for the message text of a record."""
    column_type = ColumnType.MESSAGE
    _value_name = _common.KEY_MESSAGE

    def pick_value(self, text, columnizer):
        return text


class GenericColumn(Column):
    """Column without semantics; the value is only kept in the fields."""
    column_type = ColumnType.GENERIC

    def pick_value(self, text, columnizer):
        return None


_COLUMN_CLASSES = {
    ColumnType.TIMESTAMP: TimestampColumn,
    ColumnType.LEVEL: LevelColumn,
    ColumnType.MESSAGE: MessageColumn,
    ColumnType.GENERIC: GenericColumn,
}


def make_column(name, expression, column_type=ColumnType.GENERIC,
                optional=False):
    """Generate a column from its plain description.

    Args:
        name (str): Column name.
        expression (str): Regular expression with a capturing group.
        column_type (:class:`ColumnType` or str, optional):
            e.g., ``ColumnType.LEVEL`` or ``"Level"``.
        optional (bool, optional): see :class:`Column`.

    Returns:
        :class:`Column` subclass instance for the column type.
    """
    try:
        ctype = ColumnType.from_name(column_type)
    except ValueError as e:
        raise _common.ColumnizerDefinitionError(str(e))
    return _COLUMN_CLASSES[ctype](name, expression, optional=optional)
