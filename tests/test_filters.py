import datetime
import unittest

from logcolumnizer import ColumnizerDefinitionError, TimeShift, init_parser
from logcolumnizer.filters import FilterOperator, FilterSetting, FilterSettings


class TestFilters(unittest.TestCase):

    def setUp(self):
        parser = init_parser()
        lines = ["2024-01-01 10:00:00 [ERROR] app.db - disk failure",
                 "2024-01-01 10:00:01 [INFO] app.web - request served",
                 "2024-01-01 10:00:02 [WARN] app.db - slow query"]
        self.records = list(parser.process_lines(lines))

    def test_match(self):
        filters = FilterSettings([FilterSetting(r"^app\.db$", 4)])
        assert [r.index for r in filters.apply(self.records)] == [1, 3]

    def test_not_match(self):
        f = FilterSetting(r"ERROR", 3, operator=FilterOperator.NOT_MATCH)
        assert [r.index for r in FilterSettings([f]).apply(self.records)] == [2, 3]

    def test_inactive(self):
        f = FilterSetting(r"nothing", 5, active=False)
        assert FilterSettings([f]).matches(self.records[0])

    def test_all_filters(self):
        filters = FilterSettings([FilterSetting(r"app\.db", 4),
                                  FilterSetting(r"^WARN", 3)])
        assert [r.index for r in filters.apply(self.records)] == [3]
        assert FilterSettings().matches(self.records[0])

    def test_timestamp_with_shift(self):
        f = FilterSetting(r"^2024-01-01 11:00:01", 2)
        shift = TimeShift(datetime.timedelta(hours=1))
        assert [r.index for r in FilterSettings([f]).apply(self.records, shift)] == [2]
        assert list(FilterSettings([f]).apply(self.records)) == []

    def test_invalid(self):
        with self.assertRaises(ColumnizerDefinitionError):
            FilterSetting(r"(", 2)
