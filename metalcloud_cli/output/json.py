"""
JsonRenderer — Render rows as a JSON array for piping

Each row becomes an object keyed by field name, in schema order.
Cell values are emitted raw: numbers stay numbers, strings stay strings.
"""

from typing import Any, List, Sequence

import orjson

from ..errors import RenderError
from .base import BaseRenderer
from .schema import SchemaField


class JsonRenderer(BaseRenderer):
    """
    Render rows as JSON.

    Useful for:
    - Piping to jq or other tools
    - Scripting against the CLI
    """

    def __init__(self, compact: bool = False):
        """
        Initialize JSON renderer.

        Args:
            compact: If True, output single line (no indentation)
        """
        self.compact = compact

    def render(self, data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
        self.check_table(data, schema)

        records = [
            {field.field_name: value for field, value in zip(schema, row)}
            for row in data
        ]

        option = orjson.OPT_NON_STR_KEYS
        if not self.compact:
            option |= orjson.OPT_INDENT_2

        try:
            return orjson.dumps(records, default=self._json_serializer, option=option).decode("utf-8")
        except orjson.JSONEncodeError as e:
            raise RenderError(f"cannot encode table as JSON: {e}") from e

    def _json_serializer(self, obj: Any) -> Any:
        """
        Custom JSON serializer for types orjson does not handle natively.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation
        """
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=str)
        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")
        if hasattr(obj, "__dict__"):
            return {
                k: v for k, v in obj.__dict__.items()
                if not k.startswith("_")
            }
        # Last resort: string representation
        return str(obj)
