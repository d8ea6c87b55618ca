# coding: utf-8

import enum
import re

from . import _common


class FilterOperator(enum.Enum):
    MATCH = 0
    NOT_MATCH = 1


class FilterSetting:
    """Regular expression filter on one display column.

    The expression is searched in :meth:`~record.LogRecord.value_at`
    of the column (so position 1 filters on the index
    and positions from 2 filter on the fields).

    Args:
        expression (str): Regular expression.
        column_index (int): Display position to test.
        active (bool, optional): Inactive filters accept every record.
        operator (:class:`FilterOperator`, optional): MATCH keeps
            records where the expression is found, NOT_MATCH the others.
    """

    def __init__(self, expression, column_index, active=True,
                 operator=FilterOperator.MATCH):
        try:
            self._reobj = re.compile(expression)
        except re.error as e:
            msg = "invalid filter expression {0!r}: {1}".format(expression, e)
            raise _common.ColumnizerDefinitionError(msg)
        self.expression = expression
        self.column_index = column_index
        self.active = active
        self.operator = FilterOperator(operator)

    def __repr__(self):
        return "FilterSetting({0!r}, {1}, active={2}, operator={3})".format(
            self.expression, self.column_index, self.active, self.operator.name)

    def accepts(self, record, time_shift=None):
        if not self.active:
            return True
        value = record.value_at(self.column_index, time_shift=time_shift)
        found = self._reobj.search(value) is not None
        if self.operator is FilterOperator.MATCH:
            return found
        return not found


class FilterSettings(list):
    """List of :class:`FilterSetting`; a record passes
    if every active filter accepts it."""

    def matches(self, record, time_shift=None):
        return all(f.accepts(record, time_shift) for f in self)

    def apply(self, records, time_shift=None):
        for record in records:
            if self.matches(record, time_shift):
                yield record
