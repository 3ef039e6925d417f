"""
Schema — Typed column definitions for tables

A schema is an ordered list of SchemaField. Each cell of a row is rendered
according to the FieldType of the field at the same position. Cell text is
produced by cell_text() for both width measurement and rendering, so the two
never disagree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence

from ..errors import RenderError


class FieldType(Enum):
    """Column type used to pick the cell formatter."""
    INT = "int"
    STRING = "string"
    FLOAT = "float"
    DATETIME = "datetime"
    INTERFACE = "interface"


@dataclass
class SchemaField:
    """
    One column of a table.

    Attributes:
        field_name: Column header (also the JSON key and CSV header)
        field_type: How cells in this column are formatted
        field_size: Minimum display width; grown by adjust_field_sizes()
        field_precision: Decimals shown for FLOAT cells in text output
    """
    field_name: str
    field_type: FieldType = FieldType.STRING
    field_size: int = 0
    field_precision: int = 0


Row = List[Any]
Table = List[Row]


def _mismatch(value: Any, field: SchemaField) -> RenderError:
    return RenderError(
        f"column {field.field_name} expects {field.field_type.value}, "
        f"got {type(value).__name__} ({value!r})"
    )


def cell_text(value: Any, field: SchemaField) -> str:
    """
    Convert a cell to its display text (without padding).

    INT and FLOAT cells must be numbers and STRING cells must be strings;
    anything else raises RenderError. DATETIME cells are expected to be
    pre-formatted by the caller and are shown as-is.

    Args:
        value: Raw cell value
        field: Schema field for the cell's column

    Returns:
        Unpadded cell text
    """
    field_type = field.field_type

    if field_type is FieldType.INT:
        if not isinstance(value, int):
            raise _mismatch(value, field)
        return f"{value:d}"

    if field_type is FieldType.STRING:
        if not isinstance(value, str):
            raise _mismatch(value, field)
        return value

    if field_type is FieldType.FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch(value, field)
        return f"{value:.{field.field_precision}f}"

    # DATETIME and INTERFACE
    if value is None:
        return ""
    return str(value)


def get_cell_size(value: Any, field: SchemaField) -> int:
    """Width of a cell once converted to text."""
    return len(cell_text(value, field))


def check_row(row: Sequence[Any], schema: Sequence[SchemaField]) -> None:
    """Raise RenderError if a row does not have one cell per field."""
    if len(row) != len(schema):
        raise RenderError(
            f"row has {len(row)} cells but schema has {len(schema)} fields: {list(row)!r}"
        )


def adjust_field_sizes(data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> None:
    """
    Grow field sizes to fit the widest cell or header of each column.

    A column that needs to grow gets one extra character of padding on the
    right. Columns already wide enough are left untouched, so calling this
    twice gives the same widths as calling it once.

    Mutates the schema in place.
    """
    for row in data:
        check_row(row, schema)

    for i, field in enumerate(schema):
        max_len = max(field.field_size, len(field.field_name))

        for row in data:
            max_len = max(max_len, get_cell_size(row[i], field))

        if max_len > field.field_size:
            field.field_size = max_len + 1
