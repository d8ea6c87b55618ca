#!/usr/bin/env python

import json
import logging
import sys

import click

_logger = logging.getLogger("logcolumnizer")

FORMAT_TYPES = ("csv", "object", "mapping")


def text_postprocess(line):
    return line.rstrip("\r\n")


def bin_postprocess(line, encoding="utf-8"):
    return line.decode(encoding).rstrip("\r\n")


def iter_lines(files, encoding="utf-8"):
    if len(files) == 0:
        for line in sys.stdin:
            yield text_postprocess(line)
    else:
        for fp in files:
            if fp.endswith(".bz2"):
                import bz2
                with bz2.open(fp, 'rt', encoding=encoding) as f:
                    for line in f:
                        yield text_postprocess(line)
            elif fp.endswith(".gz"):
                import gzip
                with gzip.open(fp, 'r') as f:
                    for line in f:
                        yield bin_postprocess(line, encoding=encoding)
            else:
                with open(fp, 'rt', encoding=encoding) as f:
                    for line in f:
                        yield text_postprocess(line)


def format_record(record, format_type, time_shift, timestamp_format):
    from .export import to_csv_line, to_mapping
    if format_type == "csv":
        return to_csv_line(record)
    elif format_type == "mapping":
        return json.dumps(to_mapping(record, time_shift)) + "\n"
    else:
        values = [record.value_at(i, time_shift, timestamp_format)
                  for i in range(1, len(record.fields) + 2)]
        return "\t".join(values) + "\n"


@click.command()
@click.argument("files", nargs=-1)
@click.option("--preset", "-p", "preset_name", default="default",
              help="name of the preset columnizer, one of [default, log4net, syslog]")
@click.option("--encoding", default="utf-8",
              help="encoding to load input data")
@click.option("--output", "-o", default=None,
              help="output filename")
@click.option("--type", "-t", "format_type", default="csv",
              type=click.Choice(FORMAT_TYPES),
              help="output format type")
@click.option("--no-header", "no_header", is_flag=True,
              help="do not write the csv header line")
@click.option("--time-shift", "time_shift", default=0.0, type=float,
              help="seconds added to displayed timestamps")
@click.option("--timestamp-format", "timestamp_format", default=None,
              help="strftime format of displayed timestamps (type object)")
@click.option("--filter", "-f", "filters", nargs=2, multiple=True,
              type=(int, str),
              help="keep records whose display column POSITION matches REGEX")
@click.option("--workers", "-w", default=None, type=int,
              help="number of parser threads")
@click.option("--strict", is_flag=True,
              help="stop at the first line not matching the columnizer")
@click.option("--verbose", "-v", is_flag=True,
              help="verbose output to stderr")
def main(files, preset_name, encoding, output, format_type, no_header,
         time_shift, timestamp_format, filters, workers, strict, verbose):
    """Parse log lines given in FILES (or stdin if FILES not given)
    into records of the selected columnizer."""

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)

    from ._common import LogParser, LogParseFailure, DEFAULT_TIMESTAMP_FORMAT
    from .export import csv_header
    from .filters import FilterSetting, FilterSettings
    from .preset import get_preset
    from .record import TimeShift

    try:
        columnizer = get_preset(preset_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--preset")
    lp = LogParser(columnizer)
    shift = TimeShift(time_shift)
    if timestamp_format is None:
        timestamp_format = DEFAULT_TIMESTAMP_FORMAT
    l_filter = FilterSettings(FilterSetting(regex, position)
                              for position, regex in filters)

    if output:
        f_output = open(output, "w", encoding=encoding, newline="")
    else:
        f_output = sys.stdout

    count = 0
    try:
        if format_type == "csv" and not no_header:
            f_output.write(csv_header(columnizer))
        records = lp.process_lines(iter_lines(files, encoding=encoding),
                                   workers=workers, skip_failures=not strict)
        for record in l_filter.apply(records, shift):
            f_output.write(format_record(record, format_type,
                                         shift, timestamp_format))
            count += 1
    except LogParseFailure as e:
        _logger.error("%s", e)
        sys.exit(1)
    finally:
        if f_output is not sys.stdout:
            f_output.close()

    _logger.info("%d records written, %d lines rejected", count, lp.rejected)


if __name__ == "__main__":
    main()
