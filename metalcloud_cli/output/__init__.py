"""
Output Module — View Layer for metalcloud-cli

Commands build a schema and a list of rows; this module turns them into
display strings. Three formats are supported:

    "json" / "JSON"   array of objects keyed by field name
    "csv" / "CSV"     header row plus one line per row
    anything else     bordered text table with a title and a total line

Usage:
    from metalcloud_cli.output import SchemaField, FieldType, render_table

    schema = [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("LABEL", FieldType.STRING, 20),
    ]
    print(render_table("Variables", "", fmt, rows, schema))

Schemas are single-use: the text format grows field sizes in place.
"""

from typing import Any, List, Optional, Sequence

from ..errors import RenderError
from .base import BaseRenderer
from .csv import CsvRenderer
from .json import JsonRenderer
from .schema import (
    FieldType,
    Row,
    SchemaField,
    Table,
    adjust_field_sizes,
    cell_text,
    check_row,
    get_cell_size,
)
from .sorter import TableSorter
from .table import TextTableRenderer


# =============================================================================
# Format Registry
# =============================================================================

# Maps format name to renderer class. Unknown formats fall back to text.
RENDERERS = {
    "json": JsonRenderer,
    "JSON": JsonRenderer,
    "csv": CsvRenderer,
    "CSV": CsvRenderer,
}

# Spellings that select a renderer; "" means human readable
VALID_FORMATS = ("",) + tuple(RENDERERS)


def get_renderer(fmt: Optional[str]) -> BaseRenderer:
    """Get the emitter for a format name; anything unrecognized is text."""
    renderer_class = RENDERERS.get(fmt or "", TextTableRenderer)
    return renderer_class()


def is_text_format(fmt: Optional[str]) -> bool:
    """True when the format selects the human readable table."""
    return (fmt or "") not in RENDERERS


# =============================================================================
# Convenience Functions
# =============================================================================

def get_table_delimiter(schema: List[SchemaField]) -> str:
    """Return the +----+ border line for the schema."""
    return TextTableRenderer().delimiter(schema)


def get_table_header(schema: List[SchemaField]) -> str:
    """Return the header row for the schema."""
    return TextTableRenderer().header(schema)


def get_table_row(row: Sequence[Any], schema: List[SchemaField]) -> str:
    """Return the | delimited text for one row."""
    return TextTableRenderer().row(row, schema)


def get_table_as_string(data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
    """Return the bordered text table (widths taken from the schema as-is)."""
    return TextTableRenderer().render(data, schema)


def get_table_as_json_string(data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
    """Return the rows as a pretty-printed JSON array."""
    return JsonRenderer().render(data, schema)


def get_table_as_csv_string(data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
    """Return the rows as CSV with a header line."""
    return CsvRenderer().render(data, schema)


# =============================================================================
# Main Render Functions
# =============================================================================

def render_table(
    table_name: str,
    top_line: str,
    fmt: Optional[str],
    data: Sequence[Sequence[Any]],
    schema: List[SchemaField],
    user_email: Optional[str] = None,
) -> str:
    """
    Render a table in the requested format.

    For the text format the output is a title line, the table with
    auto-adjusted widths, and a "Total: N <table_name>" line. JSON and CSV
    output carry no title or total.

    Args:
        table_name: Plural entity name used in the title and total line
        top_line: Title line; if empty a default title naming the user is used
        fmt: "json", "csv" (any case listed in RENDERERS) or anything else for text
        data: Rows, each with one cell per schema field
        schema: Column definitions (mutated by width adjustment in text mode)
        user_email: User shown in the default title (read from config if None)

    Returns:
        Formatted string ready for printing

    Raises:
        RenderError: If rows do not match the schema
    """
    if not is_text_format(fmt):
        return get_renderer(fmt).render(data, schema)

    lines = []
    if top_line:
        lines.append(f"{top_line}\n")
    else:
        if user_email is None:
            from ..config import get_user_email
            user_email = get_user_email()
        lines.append(f"{table_name} I have access to as user {user_email}:\n")

    adjust_field_sizes(data, schema)

    lines.append(TextTableRenderer().render(data, schema))
    lines.append(f"Total: {len(data)} {table_name}\n\n")

    return "".join(lines)


def transpose_table(data: Sequence[Sequence[Any]]) -> Table:
    """
    Turn columns into rows.

    Raises:
        RenderError: If rows do not all have the same length
    """
    if not data:
        return []

    row_length = len(data[0])
    for row in data:
        if len(row) != row_length:
            raise RenderError(
                f"cannot transpose ragged table: expected {row_length} cells, got {len(row)}"
            )

    return [[row[j] for row in data] for j in range(row_length)]


def convert_to_string_table(data: Sequence[Sequence[Any]]) -> Table:
    """Stringify every cell; None becomes a single space."""
    return [
        [" " if value is None else str(value) for value in row]
        for row in data
    ]


def render_transposed_table(
    table_name: str,
    top_line: str,
    fmt: Optional[str],
    data: Sequence[Sequence[Any]],
    schema: List[SchemaField],
    user_email: Optional[str] = None,
) -> str:
    """
    Render a record as KEY/VALUE rows.

    Only the default (empty) format is transposed. Any other format,
    including JSON and CSV, is rendered by render_table() unchanged.
    """
    if fmt:
        return render_table(table_name, top_line, fmt, data, schema, user_email=user_email)

    for row in data:
        check_row(row, schema)

    header_row = [field.field_name for field in schema]
    table = [header_row] + convert_to_string_table(data)

    key_value_schema = [
        SchemaField(field_name="KEY", field_type=FieldType.STRING, field_size=5),
        SchemaField(field_name="VALUE", field_type=FieldType.STRING, field_size=5),
    ]

    return render_table(
        table_name, top_line, fmt, transpose_table(table), key_value_schema,
        user_email=user_email,
    )


__all__ = [
    "FieldType", "SchemaField", "Row", "Table",
    "BaseRenderer", "TextTableRenderer", "JsonRenderer", "CsvRenderer",
    "TableSorter", "RENDERERS", "VALID_FORMATS",
    "adjust_field_sizes", "cell_text", "get_cell_size", "get_renderer", "is_text_format",
    "get_table_delimiter", "get_table_header", "get_table_row",
    "get_table_as_string", "get_table_as_json_string", "get_table_as_csv_string",
    "render_table", "render_transposed_table", "transpose_table", "convert_to_string_table",
]
