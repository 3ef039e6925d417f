"""
CsvRenderer — Render rows as comma-separated values

First line holds the field names. Floats are written with six decimals
regardless of the field precision. Quoting follows the csv module defaults.
"""

import csv
import io
from typing import Any, List, Sequence

from .base import BaseRenderer
from .schema import FieldType, SchemaField, cell_text


class CsvRenderer(BaseRenderer):
    """Render rows as CSV with a header row."""

    def render(self, data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
        self.check_table(data, schema)

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")

        writer.writerow([field.field_name for field in schema])
        for row in data:
            writer.writerow([self._cell(value, field) for value, field in zip(row, schema)])

        return buf.getvalue()

    def _cell(self, value: Any, field: SchemaField) -> str:
        if field.field_type is FieldType.FLOAT:
            six_decimals = SchemaField(
                field_name=field.field_name,
                field_type=FieldType.FLOAT,
                field_precision=6,
            )
            return cell_text(value, six_decimals)
        return cell_text(value, field)
