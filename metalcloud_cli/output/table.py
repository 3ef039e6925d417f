"""
TextTableRenderer — Render rows as a bordered fixed-width text table

Format:
    +-------+---------------------+-------+
    | ID    | LABEL               | INST. |
    +-------+---------------------+-------+
    | 4     | str                 | 20.10 |
    +-------+---------------------+-------+

Every cell is space-prefixed and left-justified to its field size.
Widths are taken from the schema as-is; call adjust_field_sizes() first
to fit the data.
"""

from typing import Any, List, Sequence

from .base import BaseRenderer
from .schema import FieldType, SchemaField, cell_text, check_row


class TextTableRenderer(BaseRenderer):
    """Render structured rows as a pipe-delimited table."""

    def render(self, data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
        self.check_table(data, schema)

        lines = [
            self.delimiter(schema),
            self.header(schema),
            self.delimiter(schema),
        ]
        for row in data:
            lines.append(self.row(row, schema))
        lines.append(self.delimiter(schema))

        return "\n".join(lines) + "\n"

    # =========================================================================
    # Row Rendering
    # =========================================================================

    def delimiter(self, schema: List[SchemaField]) -> str:
        """Render the horizontal border line."""
        parts = ["+"]
        for field in schema:
            parts.append("-" * (field.field_size + 1))
            parts.append("+")
        return "".join(parts)

    def header(self, schema: List[SchemaField]) -> str:
        """Render the header row; every header cell is treated as a string."""
        header_schema = [
            SchemaField(field_name=f.field_name, field_type=FieldType.STRING, field_size=f.field_size)
            for f in schema
        ]
        return self.row([f.field_name for f in schema], header_schema)

    def row(self, row: Sequence[Any], schema: List[SchemaField]) -> str:
        """Render a data row."""
        check_row(row, schema)
        cells = [
            " " + cell_text(value, field).ljust(field.field_size)
            for value, field in zip(row, schema)
        ]
        return "|" + "|".join(cells) + "|"
