"""
Tests for the CSV sensor log parser.
"""

import pytest

from sensorviz.errors import FileReadError, InputTypeError
from sensorviz.models.record import SensorRecord
from sensorviz.services.csv_parser import (
    check_file_type,
    decode_upload,
    parse_csv,
    read_csv_file,
    split_table,
)


HEADER = "timestamp,lat,lon,alt,sats,accX,accY,accZ,gyroX,gyroY,gyroZ,pitch,roll"


@pytest.fixture
def sample_csv_content():
    """Three well-formed rows."""
    return f"""{HEADER}
2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
2024-01-01T00:00:01Z,10.001,20.001,5.5,9,0.2,0.1,9.7,0.01,0.02,0.03,1.5,2.5
2024-01-01T00:00:02Z,10.002,20.002,6,9,0.3,0.0,9.9,0.02,0.01,0.00,2,3
"""


@pytest.fixture
def sample_csv_file(sample_csv_content, tmp_path):
    """Create a temporary CSV file."""
    csv_file = tmp_path / "walk.csv"
    csv_file.write_text(sample_csv_content)
    return csv_file


class TestParseCsv:
    """Tests for parse_csv."""

    def test_single_row(self):
        """A header plus one row yields one fully populated record."""
        text = f"{HEADER}\n2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2\n"

        records = parse_csv(text)

        assert len(records) == 1
        record = records[0]
        assert record.timestamp == "2024-01-01T00:00:00Z"
        assert record.lat == 10.0
        assert record.lon == 20.0
        assert record.alt == 5.0
        assert record.sats == 8
        assert (record.accX, record.accY, record.accZ) == pytest.approx((0.1, 0.2, 9.8))
        assert (record.gyroX, record.gyroY, record.gyroZ) == (0.0, 0.0, 0.0)
        assert (record.pitch, record.roll) == (1.0, 2.0)

    def test_field_types(self, sample_csv_content):
        """Numeric fields are floats, sats is an int."""
        record = parse_csv(sample_csv_content)[1]

        assert isinstance(record, SensorRecord)
        assert isinstance(record.lat, float)
        assert isinstance(record.sats, int)
        assert record.sats == 9
        assert record.accZ == pytest.approx(9.7)

    def test_preserves_file_order(self):
        """Records come out in file order, unsorted and with duplicates kept."""
        text = f"""{HEADER}
2024-01-01T00:00:05Z,1,1,0,0,0,0,0,0,0,0,0,0
2024-01-01T00:00:01Z,1,1,0,0,0,0,0,0,0,0,0,0
2024-01-01T00:00:05Z,1,1,0,0,0,0,0,0,0,0,0,0
2024-01-01T00:00:03Z,1,1,0,0,0,0,0,0,0,0,0,0
"""
        records = parse_csv(text)

        assert [r.timestamp for r in records] == [
            "2024-01-01T00:00:05Z",
            "2024-01-01T00:00:01Z",
            "2024-01-01T00:00:05Z",
            "2024-01-01T00:00:03Z",
        ]

    def test_empty_input(self):
        assert parse_csv("") == []
        assert parse_csv("   \n  \n") == []

    def test_header_only(self):
        assert parse_csv(HEADER) == []
        assert parse_csv(HEADER + "\n") == []

    def test_surrounding_whitespace_trimmed(self):
        """Whitespace around the text, header names and values is ignored."""
        text = (
            "\n\n  timestamp , lat , lon ,sats\n"
            "  2024-01-01T00:00:00Z ,  1.5 , 2.5 , 7  \n\n"
        )
        records = parse_csv(text)

        assert len(records) == 1
        assert records[0].timestamp == "2024-01-01T00:00:00Z"
        assert records[0].lat == 1.5
        assert records[0].lon == 2.5
        assert records[0].sats == 7

    def test_crlf_line_endings(self):
        text = f"{HEADER}\r\n2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2\r\n"

        records = parse_csv(text)

        assert len(records) == 1
        assert records[0].roll == 2.0


class TestRowRejection:
    """Tests for malformed row handling."""

    def test_wrong_column_count_skipped(self):
        """Rows with too few or too many values are dropped, the rest kept."""
        text = f"""{HEADER}
2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
2024-01-01T00:00:01Z,10,20,5
2024-01-01T00:00:02Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2,99
2024-01-01T00:00:03Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
"""
        records = parse_csv(text)

        assert [r.timestamp for r in records] == [
            "2024-01-01T00:00:00Z",
            "2024-01-01T00:00:03Z",
        ]

    def test_empty_key_column_skipped(self):
        text = f"""{HEADER}
,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
2024-01-01T00:00:01Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
"""
        records = parse_csv(text)

        assert len(records) == 1
        assert records[0].timestamp == "2024-01-01T00:00:01Z"

    def test_blank_lines_inside_data_skipped(self):
        text = f"""{HEADER}
2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2

2024-01-01T00:00:01Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2
"""
        assert len(parse_csv(text)) == 2

    def test_accepted_count(self):
        """Accepted rows = data rows minus malformed rows."""
        good = "2024-01-01T00:00:00Z,10,20,5,8,0.1,0.2,9.8,0,0,0,1,2"
        bad_count = "2024-01-01T00:00:00Z,10"
        bad_key = ",10,20,5,8,0.1,0.2,9.8,0,0,0,1,2"
        rows = [good, bad_count, good, bad_key, good, bad_count]
        text = HEADER + "\n" + "\n".join(rows)

        table = split_table(text)

        assert len(parse_csv(text)) == 3
        assert len(table.rows) == 3
        assert table.skipped_rows == 3


class TestFieldCoercion:
    """Tests for permissive numeric coercion."""

    def test_empty_cells_become_zero(self):
        """A row with only a key is accepted and zero-filled."""
        text = f"{HEADER}\n2024-01-01T00:00:01Z,,30,,,,,,,,,,\n"

        records = parse_csv(text)

        assert len(records) == 1
        assert records[0].lat == 0.0
        assert records[0].lon == 30.0
        assert records[0].sats == 0
        assert records[0].roll == 0.0

    @pytest.mark.parametrize("cell", ["abc", "", "-", ".", "e5", "NaN", "Infinity"])
    def test_unparseable_float_is_zero(self, cell):
        text = f"timestamp,alt\n2024-01-01T00:00:00Z,{cell}\n"

        assert parse_csv(text)[0].alt == 0.0

    @pytest.mark.parametrize(
        "cell, expected",
        [
            ("12abc", 12.0),
            ("-3.5", -3.5),
            ("+2", 2.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e3", 1000.0),
            ("1.5e-2x", 0.015),
            ("1e", 1.0),
        ],
    )
    def test_leading_number_is_used(self, cell, expected):
        text = f"timestamp,alt\n2024-01-01T00:00:00Z,{cell}\n"

        assert parse_csv(text)[0].alt == pytest.approx(expected)

    def test_overflow_is_zero(self):
        text = "timestamp,alt\n2024-01-01T00:00:00Z,1e999\n"

        assert parse_csv(text)[0].alt == 0.0

    @pytest.mark.parametrize(
        "cell, expected",
        [("8", 8), ("8.7", 8), ("12 sats", 12), ("abc", 0), ("", 0), ("-3", 0)],
    )
    def test_satellite_count(self, cell, expected):
        text = f"timestamp,sats\n2024-01-01T00:00:00Z,{cell}\n"

        sats = parse_csv(text)[0].sats

        assert sats == expected
        assert isinstance(sats, int)


class TestHeaderMapping:
    """Tests for header-driven column mapping."""

    def test_column_order_independent(self):
        text = "roll,sats,lon,timestamp,lat\n2,7,20,2024-01-01T00:00:00Z,10\n"

        record = parse_csv(text)[0]

        assert record.timestamp == "2024-01-01T00:00:00Z"
        assert record.lat == 10.0
        assert record.lon == 20.0
        assert record.sats == 7
        assert record.roll == 2.0

    def test_unknown_columns_ignored(self):
        text = "timestamp,speed,lat,lon,note\n2024-01-01T00:00:00Z,50,10,20,hello\n"

        record = parse_csv(text)[0]

        assert record.lat == 10.0
        assert record.lon == 20.0

    def test_missing_columns_default_to_zero(self):
        text = "timestamp,lat\n2024-01-01T00:00:00Z,10\n"

        record = parse_csv(text)[0]

        assert record.lat == 10.0
        assert record.lon == 0.0
        assert record.gyroZ == 0.0
        assert record.sats == 0

    def test_header_names_are_case_sensitive(self):
        text = "timestamp,LAT,Lon\n2024-01-01T00:00:00Z,10,20\n"

        record = parse_csv(text)[0]

        assert record.lat == 0.0
        assert record.lon == 0.0

    def test_duplicate_header_last_wins(self):
        text = "timestamp,lat,lat\n2024-01-01T00:00:00Z,1,2\n"

        assert parse_csv(text)[0].lat == 2.0

    def test_no_timestamp_column(self):
        """The first column is still the key; timestamp defaults to empty."""
        text = "lat,lon\n10,20\n"

        records = parse_csv(text)

        assert len(records) == 1
        assert records[0].timestamp == ""
        assert records[0].lat == 10.0

    def test_timestamp_copied_verbatim(self):
        text = "timestamp,lat\nnot-a-date,10\n"

        assert parse_csv(text)[0].timestamp == "not-a-date"


class TestFileInput:
    """Tests for file-level checks and reading."""

    def test_check_file_type_accepts_csv(self):
        check_file_type("walk.csv")
        check_file_type("WALK.CSV")

    @pytest.mark.parametrize("name", ["walk.txt", "walk.csv.gz", "walk", ""])
    def test_check_file_type_rejects_others(self, name):
        with pytest.raises(InputTypeError):
            check_file_type(name)

    def test_decode_upload_strips_bom(self):
        assert decode_upload(b"\xef\xbb\xbftimestamp") == "timestamp"

    def test_decode_upload_invalid_utf8(self):
        with pytest.raises(FileReadError):
            decode_upload(b"\xff\xfe\xfa")

    def test_read_csv_file(self, sample_csv_file):
        records = read_csv_file(sample_csv_file)

        assert len(records) == 3
        assert records[0].timestamp == "2024-01-01T00:00:00Z"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileReadError):
            read_csv_file(tmp_path / "missing.csv")

    def test_read_wrong_extension(self, tmp_path):
        txt_file = tmp_path / "walk.txt"
        txt_file.write_text(HEADER)

        with pytest.raises(InputTypeError):
            read_csv_file(txt_file)
