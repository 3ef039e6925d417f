"""
BaseRenderer — Abstract base class for table emitters

All emitters inherit from this class and implement render().
Provides the shared row/schema consistency check.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from .schema import SchemaField, check_row


class BaseRenderer(ABC):
    """
    Abstract base class for all table emitters.

    Subclasses must implement render() method.
    """

    @abstractmethod
    def render(self, data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> str:
        """
        Render rows to a formatted string.

        Args:
            data: Rows, each with one cell per schema field
            schema: Column definitions

        Returns:
            Formatted string for output
        """
        pass

    def check_table(self, data: Sequence[Sequence[Any]], schema: List[SchemaField]) -> None:
        """Fail fast on ragged rows before anything is emitted."""
        for row in data:
            check_row(row, schema)
