"""
TableSorter — Multi-column, type-aware, stable row ordering

Usage:
    TableSorter(schema).order_by("ID", "LABEL").sort(data)

INT and FLOAT columns compare numerically; every other column compares the
cell's string form. Rows with equal keys keep their original order.
"""

from typing import Any, List, Sequence, Tuple

from ..errors import RenderError
from .schema import FieldType, SchemaField

_NUMERIC = (FieldType.INT, FieldType.FLOAT)


class TableSorter:
    """Sorts table rows in place by named columns, primary key first."""

    def __init__(self, schema: Sequence[SchemaField]):
        self.schema = list(schema)
        self._columns: List[Tuple[int, SchemaField]] = []

    def order_by(self, *field_names: str) -> "TableSorter":
        """
        Set the sort columns in priority order.

        Raises:
            RenderError: If a name is not a field of the schema
        """
        positions = {}
        for i, field in enumerate(self.schema):
            positions.setdefault(field.field_name, i)

        columns = []
        for name in field_names:
            if name not in positions:
                valid = ", ".join(positions)
                raise RenderError(f"cannot sort by unknown column '{name}'. Valid: {valid}")
            index = positions[name]
            columns.append((index, self.schema[index]))

        self._columns = columns
        return self

    def sort(self, data: List[List[Any]]) -> List[List[Any]]:
        """Sort rows in place and return them."""
        if self._columns:
            data.sort(key=self._row_key)
        return data

    def _row_key(self, row: Sequence[Any]) -> tuple:
        return tuple(self._cell_key(row[i], field) for i, field in self._columns)

    def _cell_key(self, value: Any, field: SchemaField) -> Any:
        if field.field_type in _NUMERIC:
            if not isinstance(value, (int, float)):
                raise RenderError(
                    f"cannot sort column {field.field_name}: {value!r} is not a number"
                )
            return value
        if value is None:
            return ""
        return str(value)
