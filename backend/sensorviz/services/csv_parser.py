"""
CSV sensor log parser.

Splits comma-separated text with a header row into a RawTable, dropping
malformed rows, then hands the table to the canonicalizer for typed
records. Malformed rows never abort a parse.
"""

import logging
from pathlib import Path

from sensorviz.errors import FileReadError, InputTypeError
from sensorviz.models.raw import RawTable
from sensorviz.models.record import SensorRecord
from sensorviz.services.canonicalizer import canonicalize_table


logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"


def split_table(text: str) -> RawTable:
    """
    Split CSV text into header and accepted rows.

    A row is accepted when it has exactly as many values as the header has
    columns and its first value is non-empty. Order is preserved.
    """
    lines = text.strip().split("\n")
    if len(lines) < 2:
        return RawTable(header=[])

    header = [name.strip() for name in lines[0].split(",")]
    table = RawTable(header=header)

    for line in lines[1:]:
        values = [value.strip() for value in line.split(",")]
        if len(values) != len(header) or not values[0]:
            table.skipped_rows += 1
            continue
        table.rows.append(values)

    return table


def parse_csv(text: str) -> list[SensorRecord]:
    """
    Parse a CSV sensor log into records.

    Returns an empty list when there is no header or no data line.
    """
    table = split_table(text)
    if not table.header:
        logger.info("CSV has no data lines, nothing to load")
        return []

    if table.skipped_rows:
        logger.info(f"Skipped {table.skipped_rows} malformed CSV rows")

    records = canonicalize_table(table)
    logger.debug(f"Parsed {len(records)} records from {len(table.header)} columns")
    return records


def check_file_type(filename: str) -> None:
    """Raise InputTypeError unless the file name has a .csv extension."""
    if not filename or not filename.lower().endswith(CSV_SUFFIX):
        raise InputTypeError(f"Not a CSV file: {filename or '<unnamed>'}")


def decode_upload(data: bytes) -> str:
    """Decode uploaded bytes as UTF-8 (a leading BOM is dropped)."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileReadError(f"File is not valid UTF-8: {e}") from e


def read_csv_file(filepath: Path) -> list[SensorRecord]:
    """Read and parse a CSV sensor log from disk."""
    check_file_type(filepath.name)
    try:
        data = filepath.read_bytes()
    except OSError as e:
        raise FileReadError(f"Could not read {filepath}: {e}") from e
    return parse_csv(decode_upload(data))
