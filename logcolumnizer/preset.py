# coding: utf-8

"""logcolumnizer.preset is a submodule to provide some columnizers
for frequently used log formats."""


from ._common import LogLevel
from .column import *
from .columnizer import Columnizer


def default_log_level_mapping():
    """Level mapping matching the usual level names
    (case-insensitive, abbreviations allowed).

    Returns:
        list of (:class:`~_common.LogLevel`, str)
    """
    return [(LogLevel.TRACE, r"(?i)^trace"),
            (LogLevel.DEBUG, r"(?i)^debug"),
            (LogLevel.INFO, r"(?i)^info"),
            (LogLevel.WARNING, r"(?i)^warn"),
            (LogLevel.ERROR, r"(?i)^err"),
            (LogLevel.FATAL, r"(?i)^(fatal|crit)")]


def default_columnizer():
    """Generate :class:`~columnizer.Columnizer` with default settings.

    The default columnizer is designed for lines like
    ``2024-01-01 10:00:00 [ERROR] app.db - disk failure``.

    * Timestamp (:class:`~column.TimestampColumn`)
    * Level (:class:`~column.LevelColumn`, in brackets)
    * Logger (:class:`~column.GenericColumn`, optional, followed by " - ")
    * Message (:class:`~column.MessageColumn`)

    Returns:
        :class:`~columnizer.Columnizer`
    """
    columns = [
        TimestampColumn("Timestamp", r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})"),
        LevelColumn("Level", r"\[(\w+)\]"),
        GenericColumn("Logger", r"\]\s+(\S+)\s+-\s", optional=True),
        MessageColumn("Message", r"\]\s+(?:\S+\s+-\s+)?(.*)$"),
    ]
    return Columnizer(columns,
                      datetime_format="%Y-%m-%d %H:%M:%S",
                      log_level_mapping=default_log_level_mapping(),
                      name="default")


def log4net_columnizer():
    """Generate :class:`~columnizer.Columnizer` for the log4net/log4j
    layout ``%date [%thread] %-5level %logger - %message``.

    | e.g., :samp:`2024-01-01 10:00:00,123 [7] ERROR App.Db - disk failure`
    """
    columns = [
        TimestampColumn("Timestamp",
                        r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3})"),
        GenericColumn("Thread", r"^\S+ \S+ \[([^\]]*)\]"),
        LevelColumn("Level", r"\]\s+([A-Z]+)\s"),
        GenericColumn("Logger", r"\]\s+[A-Z]+\s+(\S+)\s+-\s"),
        MessageColumn("Message", r"\s-\s(.*)$"),
    ]
    return Columnizer(columns,
                      datetime_format="%Y-%m-%d %H:%M:%S,%f",
                      log_level_mapping=default_log_level_mapping(),
                      name="log4net")


def syslog_columnizer():
    """Generate :class:`~columnizer.Columnizer` for syslog files
    with high precision RFC 3339 timestamps (rsyslog file format).
    Syslog files have no level, so records keep the default level.

    | e.g., :samp:`2024-01-01T10:00:00.123456+09:00 host-1 sshd[4321]: session opened`
    """
    columns = [
        TimestampColumn("Timestamp", r"^(\S+)"),
        GenericColumn("Host", r"^\S+\s+(\S+)"),
        GenericColumn("Logger", r"^\S+\s+\S+\s+([^\s\[:]+)"),
        GenericColumn("Pid", r"^\S+\s+\S+\s+[^\s\[:]+\[(\d+)\]:", optional=True),
        MessageColumn("Message", r"^\S+\s+\S+\s+[^\s:]+:\s?(.*)$"),
    ]
    return Columnizer(columns,
                      datetime_format="%Y-%m-%dT%H:%M:%S.%f%z",
                      name="syslog")


PRESETS = {
    "default": default_columnizer,
    "log4net": log4net_columnizer,
    "syslog": syslog_columnizer,
}


def get_preset(name):
    """Generate the preset columnizer of the given name."""
    try:
        return PRESETS[name]()
    except KeyError:
        raise ValueError("unknown preset: {0}".format(name))
