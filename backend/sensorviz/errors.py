"""
Error types for sensor log ingestion.

Only file-level failures are exceptions. Malformed rows and cells are
absorbed by the parser (skipped or zero-filled) and never raised.
"""


class SensorVizError(Exception):
    """Base class for user-visible ingestion failures."""

    code = "sensorviz_error"


class InputTypeError(SensorVizError, ValueError):
    """The uploaded file is not a .csv file."""

    code = "invalid_file_type"


class FileReadError(SensorVizError, OSError):
    """The file's bytes could not be read or decoded."""

    code = "file_read_error"
