# coding: utf-8

"""logcolumnizer parses log lines into records with configurable columns."""

__version__ = '0.3.0'

from ._common import LogLevel, LogParser, init_parser
from ._common import ColumnizerDefinitionError, LogParseFailure, RequiredColumnMismatch
from .column import ColumnType, make_column, UNSET_TIMESTAMP
from .columnizer import Columnizer
from .export import Mappable, to_csv_line, csv_header, write_csv, to_mapping
from .filters import FilterOperator, FilterSetting, FilterSettings
from .parse import parse_line
from .record import LogRecord, TimeShift
