"""
Tests for the output package — text, JSON and CSV rendering of tables

These tests validate:
- Exact text table layout (delimiter, header, rows)
- Width adjustment and its idempotence
- JSON and CSV emitters
- render_table() title and total lines
- Transposition into KEY/VALUE rows
- Type mismatches and ragged rows are reported, never rendered
"""

import copy

import orjson
import pytest

from metalcloud_cli.errors import RenderError
from metalcloud_cli.output import (
    FieldType,
    SchemaField,
    adjust_field_sizes,
    cell_text,
    convert_to_string_table,
    get_cell_size,
    get_renderer,
    get_table_as_csv_string,
    get_table_as_json_string,
    get_table_as_string,
    get_table_delimiter,
    get_table_header,
    get_table_row,
    is_text_format,
    render_table,
    render_transposed_table,
    transpose_table,
)
from metalcloud_cli.output.csv import CsvRenderer
from metalcloud_cli.output.json import JsonRenderer
from metalcloud_cli.output.table import TextTableRenderer


@pytest.fixture
def schema():
    return [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("LABEL", FieldType.STRING, 20),
        SchemaField("INST.", FieldType.FLOAT, 6, 2),
    ]


@pytest.fixture
def data():
    return [
        [4, "str", 20.1],
        [5, "st11r", 22.1],
        [6, "st11r444", 2.1],
    ]


@pytest.fixture
def wide_schema():
    return [
        SchemaField("ID", FieldType.INT, 3),
        SchemaField("LABEL", FieldType.STRING, 5),
        SchemaField("INST.", FieldType.FLOAT, 0, 4),
        SchemaField("VERY LONG FIELD NAME", FieldType.STRING, 4, 4),
    ]


@pytest.fixture
def wide_data():
    return [
        [4, "12345", 20.1, "tes"],
        [5, "12", 22.1, "te"],
        [6, "123456789", 1.2345, "t"],
    ]


EXPECTED_TABLE = (
    "+-------+---------------------+-------+\n"
    "| ID    | LABEL               | INST. |\n"
    "+-------+---------------------+-------+\n"
    "| 4     | str                 | 20.10 |\n"
    "| 5     | st11r               | 22.10 |\n"
    "| 6     | st11r444            | 2.10  |\n"
    "+-------+---------------------+-------+\n"
)


class TestTextTable:
    """Fixed-width text rendering."""

    def test_header(self, schema):
        assert get_table_header(schema) == "| ID    | LABEL               | INST. |"

    def test_delimiter(self, schema):
        assert get_table_delimiter(schema) == "+-------+---------------------+-------+"

    def test_table_as_string(self, schema, data):
        assert get_table_as_string(data, schema) == EXPECTED_TABLE

    def test_interface_cell_uses_str(self, schema):
        schema.append(SchemaField("INTF", FieldType.INTERFACE, 5))
        row = [10, "test", 33.3, {"test": "test1", "test2": "test3"}]

        actual = get_table_row(row, schema)

        assert "test1" in actual
        assert "test3" in actual

    def test_none_interface_cell_is_blank(self):
        field = SchemaField("X", FieldType.INTERFACE, 3)
        assert cell_text(None, field) == ""

    def test_datetime_cell_shown_as_given(self):
        field = SchemaField("CREATED", FieldType.DATETIME, 5)
        assert cell_text("2020-01-01T10:00:00Z", field) == "2020-01-01T10:00:00Z"

    def test_row_starts_and_ends_with_pipe(self, schema):
        row = get_table_row([1, "a", 1.0], schema)
        assert row.startswith("| ")
        assert row.endswith("|")
        assert row.count("|") == len(schema) + 1


class TestCellTypes:
    """Cells must match their column type."""

    def test_string_in_int_column(self):
        with pytest.raises(RenderError, match="ID expects int"):
            cell_text("4", SchemaField("ID", FieldType.INT, 2))

    def test_int_in_string_column(self):
        with pytest.raises(RenderError):
            cell_text(4, SchemaField("LABEL", FieldType.STRING, 2))

    def test_bool_in_float_column(self):
        with pytest.raises(RenderError):
            cell_text(True, SchemaField("INST.", FieldType.FLOAT, 2, 2))

    def test_int_in_float_column(self):
        assert cell_text(3, SchemaField("INST.", FieldType.FLOAT, 2, 2)) == "3.00"

    def test_cell_size_matches_rendered_text(self):
        field = SchemaField("INST.", FieldType.FLOAT, 0, 4)
        assert get_cell_size(1.2345, field) == len("1.2345")

    def test_mismatch_fails_whole_table(self, schema):
        with pytest.raises(RenderError):
            get_table_as_string([[4, "ok", 1.0], ["x", "bad", 1.0]], schema)


class TestAdjustFieldSizes:
    """Column widths grow to fit cells and headers."""

    def test_sizes(self, wide_schema, wide_data):
        adjust_field_sizes(wide_data, wide_schema)

        assert wide_schema[0].field_size == 3
        assert wide_schema[1].field_size == 10
        assert wide_schema[2].field_size == 8
        # grows to fit the header
        assert wide_schema[3].field_size == 21

    def test_idempotent(self, wide_schema, wide_data):
        adjust_field_sizes(wide_data, wide_schema)
        once = [f.field_size for f in wide_schema]

        adjust_field_sizes(wide_data, wide_schema)

        assert [f.field_size for f in wide_schema] == once

    def test_ragged_row(self, schema):
        with pytest.raises(RenderError, match="2 cells but schema has 3"):
            adjust_field_sizes([[1, "a"]], schema)


class TestJson:
    """JSON emitter."""

    def test_round_trip(self, schema, data):
        records = orjson.loads(get_table_as_json_string(data, schema))

        assert len(records) == 3
        assert records[0]["ID"] == 4
        assert records[0]["LABEL"] == "str"
        assert records[2]["LABEL"] == "st11r444"
        assert records[2]["INST."] == 2.1

    def test_keys_in_schema_order(self, schema, data):
        records = orjson.loads(get_table_as_json_string(data, schema))
        assert list(records[0].keys()) == ["ID", "LABEL", "INST."]

    def test_pretty_printed(self, schema, data):
        assert "\n  " in get_table_as_json_string(data, schema)

    def test_compact(self, schema, data):
        assert "\n" not in JsonRenderer(compact=True).render(data, schema)

    def test_empty_table(self, schema):
        assert orjson.loads(get_table_as_json_string([], schema)) == []

    def test_interface_value_serialized(self):
        schema = [SchemaField("TAGS", FieldType.INTERFACE, 5)]
        records = orjson.loads(get_table_as_json_string([[{"b", "a"}]], schema))
        assert records[0]["TAGS"] == ["a", "b"]


class TestCsv:
    """CSV emitter."""

    def test_exact(self, schema, data):
        expected = (
            "ID,LABEL,INST.\n"
            "4,str,20.100000\n"
            "5,st11r,22.100000\n"
            "6,st11r444,2.100000\n"
        )
        assert get_table_as_csv_string(data, schema) == expected

    def test_quotes_commas(self):
        schema = [SchemaField("NAME", FieldType.STRING, 5)]
        assert CsvRenderer().render([["a,b"]], schema) == 'NAME\n"a,b"\n'


class TestRenderTable:
    """render_table() format dispatch."""

    def test_text_has_title_and_total(self, wide_schema, wide_data):
        s = render_table("test", "", "", wide_data, wide_schema, user_email="me@example.com")

        assert s.startswith("test I have access to as user me@example.com:\n")
        assert "VERY LONG" in s
        assert s.endswith("Total: 3 test\n\n")

    def test_default_title_uses_configured_user(self, wide_schema, wide_data):
        s = render_table("Things", "", "", wide_data, wide_schema)
        assert s.startswith("Things I have access to as user user@example.com:\n")

    def test_custom_top_line(self, schema, data):
        s = render_table("rows", "My rows", "", data, schema)
        assert s == "My rows\n" + EXPECTED_TABLE + "Total: 3 rows\n\n"

    def test_json(self, wide_schema, wide_data):
        s = render_table("test", "", "json", wide_data, wide_schema)
        assert len(orjson.loads(s)) == 3

    def test_uppercase_csv(self, wide_schema, wide_data):
        s = render_table("test", "", "CSV", wide_data, wide_schema)
        assert s.startswith("ID,LABEL,INST.,VERY LONG FIELD NAME\n")

    def test_json_does_not_touch_sizes(self, wide_schema, wide_data):
        before = copy.deepcopy(wide_schema)
        render_table("test", "", "json", wide_data, wide_schema)
        assert wide_schema == before

    def test_unknown_format_is_text(self):
        assert is_text_format("yaml")
        assert isinstance(get_renderer("yaml"), TextTableRenderer)
        assert isinstance(get_renderer("JSON"), JsonRenderer)


class TestTranspose:
    """Transposition helpers and KEY/VALUE rendering."""

    def test_transpose_table(self):
        data = [[11, 12, 13], [21, 22, 23], [31, 32, 33]]
        assert transpose_table(data) == [[11, 21, 31], [12, 22, 32], [13, 23, 33]]

    def test_transpose_empty(self):
        assert transpose_table([]) == []

    def test_transpose_ragged(self):
        with pytest.raises(RenderError):
            transpose_table([[1, 2], [3]])

    def test_convert_to_string_table(self):
        data = [[11, "12", 13.4], [21, "22", 23.3], [31, "32", 33.4]]
        assert convert_to_string_table(data) == [
            ["11", "12", "13.4"],
            ["21", "22", "23.3"],
            ["31", "32", "33.4"],
        ]

    def test_convert_none_to_space(self):
        assert convert_to_string_table([[None]]) == [[" "]]

    def test_key_value_rows(self, wide_schema):
        s = render_transposed_table("test", "", "", [[4, "12345", 20.1, "tes"]], wide_schema)

        assert "KEY" in s
        assert "VALUE" in s
        assert "| VERY LONG FIELD NAME | tes" in s
        assert "12345" in s
        assert "20.1" in s
        assert s.endswith("Total: 4 test\n\n")

    def test_json_is_not_transposed(self, wide_schema):
        s = render_transposed_table("test", "", "json", [[4, "12345", 20.1, "tes"]], wide_schema)
        assert orjson.loads(s) == [
            {"ID": 4, "LABEL": "12345", "INST.": 20.1, "VERY LONG FIELD NAME": "tes"}
        ]

    def test_csv_is_not_transposed(self, wide_schema):
        s = render_transposed_table("test", "", "csv", [[4, "12345", 20.1, "tes"]], wide_schema)
        assert s.splitlines()[1] == "4,12345,20.100000,tes"

    def test_ragged_record(self, wide_schema):
        with pytest.raises(RenderError):
            render_transposed_table("test", "", "", [[4, "12345"]], wide_schema)
