import datetime
import threading
import unittest

from logcolumnizer import Columnizer, LogLevel, LogRecord, TimeShift, parse_line
from logcolumnizer.column import *

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def _record(line="2024-01-01T10:00:00 [ERR] disk failure", index=3):
    columns = [TimestampColumn("Time", r"^(\S+)"),
               LevelColumn("Level", r"\[(\w+)\]"),
               MessageColumn("Msg", r"\]\s(.*)$")]
    columnizer = Columnizer(columns,
                            datetime_format="%Y-%m-%dT%H:%M:%S",
                            log_level_mapping=[(LogLevel.ERROR, "ERR")])
    return parse_line(line, index, columnizer)


class TestValueAt(unittest.TestCase):

    def test_positions(self):
        record = _record()
        assert record.value_at(0) == ""
        assert record.value_at(1) == "3"
        assert record.value_at(2, timestamp_format=DISPLAY_FORMAT) == "2024-01-01 10:00:00"
        assert record.value_at(3) == "ERR"
        assert record.value_at(4) == "disk failure"
        assert record.value_at(5) == ""
        assert record.value_at(-1) == ""

    def test_default_timestamp_format(self):
        record = _record()
        assert record.value_at(2) == "2024-01-01 10:00:00.000000"

    def test_time_shift(self):
        record = _record()
        shift = TimeShift(datetime.timedelta(hours=1))
        assert record.value_at(2, shift, DISPLAY_FORMAT) == "2024-01-01 11:00:00"
        assert record.value_at(2, 90, DISPLAY_FORMAT) == "2024-01-01 10:01:30"
        assert record.value_at(2, datetime.timedelta(days=-1),
                               DISPLAY_FORMAT) == "2023-12-31 10:00:00"

        # stored data is not shifted
        assert record.timestamp == datetime.datetime(2024, 1, 1, 10, 0, 0)
        assert record.fields[0] == "2024-01-01T10:00:00"
        assert record.value_at(3, shift) == "ERR"

    def test_shared_time_shift(self):
        record = _record()
        shift = TimeShift()
        assert record.value_at(2, shift, DISPLAY_FORMAT) == "2024-01-01 10:00:00"

        t = threading.Thread(target=shift.set, args=(120,))
        t.start()
        t.join()
        assert shift.offset == datetime.timedelta(minutes=2)
        assert record.value_at(2, shift, DISPLAY_FORMAT) == "2024-01-01 10:02:00"

        shift.reset()
        assert shift.offset == datetime.timedelta(0)
        assert record.value_at(2, shift, DISPLAY_FORMAT) == "2024-01-01 10:00:00"

    def test_unset_timestamp(self):
        record = _record(line="yesterday [ERR] disk failure")
        assert not record.has_timestamp
        before = datetime.datetime.now()
        ts = record.effective_timestamp
        assert before <= ts <= datetime.datetime.now()
        # negative shifts on unset timestamps do not overflow
        shifted = record.shifted_timestamp(datetime.timedelta(days=-1))
        assert shifted < before
        assert record.value_at(3) == "ERR"

    def test_time_shift_out_of_range(self):
        record = _record(line="9999-12-31T23:59:59 [ERR] end of time")
        shift = datetime.timedelta(hours=1)
        assert record.shifted_timestamp(shift) == datetime.datetime(9999, 12, 31, 23, 59, 59)
        assert record.value_at(2, shift, DISPLAY_FORMAT) == "9999-12-31 23:59:59"
        assert record.to_mapping(shift)["timestamp"] == "9999-12-31T23:59:59"

        record = _record(line="0001-01-01T00:00:01 [ERR] start of time")
        assert record.shifted_timestamp(-3600) == datetime.datetime(1, 1, 1, 0, 0, 1)


class TestValueByName(unittest.TestCase):

    def test_value_by_name(self):
        record = _record()
        assert record.value_by_name("Msg") == "disk failure"
        assert record.value_by_name("Logger") == "NotFound"
        assert record.value_by_name("Logger", "") == ""

    def test_direct_record(self):
        columns = [GenericColumn("A", r"a=(\w+)"), MessageColumn("Msg", r"^(.*)$")]
        columnizer = Columnizer(columns)
        record = LogRecord(1, "a=1", ["1"], columnizer)
        assert record.level is LogLevel.INFO
        assert record.message == ""
        assert record.value_by_name("A") == "1"
        assert record.value_by_name("Msg", "none") == "none"
        assert record.value_at(3) == ""
