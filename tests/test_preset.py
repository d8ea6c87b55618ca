import datetime
import unittest

from logcolumnizer import LogLevel, LogParser, parse_line
from logcolumnizer import preset


class TestPreset(unittest.TestCase):

    def test_default(self):
        columnizer = preset.default_columnizer()
        record = parse_line("2024-01-01 10:00:00 [WARN] app.db - slow query",
                            1, columnizer)
        assert record.timestamp == datetime.datetime(2024, 1, 1, 10, 0, 0)
        assert record.level is LogLevel.WARNING
        assert record.logger == "app.db"
        assert record.message == "slow query"

        record = parse_line("2024-01-01 10:00:00 [info] started", 2, columnizer)
        assert record.level is LogLevel.INFO
        assert record.logger == ""
        assert record.message == "started"

    def test_log4net(self):
        columnizer = preset.log4net_columnizer()
        record = parse_line("2024-01-01 10:00:00,123 [7] ERROR App.Db - disk failure",
                            1, columnizer)
        assert record.timestamp == datetime.datetime(2024, 1, 1, 10, 0, 0, 123000)
        assert record.value_by_name("Thread") == "7"
        assert record.level is LogLevel.ERROR
        assert record.logger == "App.Db"
        assert record.message == "disk failure"

        record = parse_line("2024-01-01 10:00:00,500 [main] FATAL App - out of memory",
                            2, columnizer)
        assert record.level is LogLevel.FATAL

    def test_syslog(self):
        columnizer = preset.syslog_columnizer()
        line = "2024-01-01T10:00:00.123456+09:00 host-1 sshd[4321]: session opened"
        record = parse_line(line, 1, columnizer)
        tz = datetime.timezone(datetime.timedelta(hours=9))
        assert record.timestamp == datetime.datetime(2024, 1, 1, 10, 0, 0, 123456,
                                                     tzinfo=tz)
        assert record.has_timestamp
        assert record.value_by_name("Host") == "host-1"
        assert record.value_by_name("Pid") == "4321"
        assert record.logger == "sshd"
        assert record.message == "session opened"
        assert record.level is LogLevel.INFO

        line = "2024-01-01T10:00:01.000000+09:00 host-1 kernel: link up"
        record = parse_line(line, 2, columnizer)
        assert record.value_by_name("Pid") == ""
        assert record.logger == "kernel"
        assert record.message == "link up"

    def test_get_preset(self):
        for name in preset.PRESETS:
            columnizer = preset.get_preset(name)
            assert columnizer.name == name
            assert isinstance(LogParser(columnizer), LogParser)
        with self.assertRaises(ValueError):
            preset.get_preset("nginx")
