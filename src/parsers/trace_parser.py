"""
Trace parser for recorded interaction sessions.

Reads a CSV trace (one host event per row) into validated
InteractionEvent objects. Malformed rows are skipped with a warning
rather than failing the whole trace.

Expected columns:
    timestamp_ms, event_type            (required)
    x, y, scroll_y, viewport_height,
    document_height                     (optional)
"""

import logging
from io import StringIO
from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from src.models.interaction_event import InteractionEvent
from src.utils.constants import (
    MAX_TRACE_SIZE,
    TRACE_COLUMN_TIMESTAMP,
    TRACE_COLUMN_EVENT,
    TRACE_COLUMN_X,
    TRACE_COLUMN_Y,
    TRACE_COLUMN_SCROLL_Y,
    TRACE_COLUMN_VIEWPORT_HEIGHT,
    TRACE_COLUMN_DOCUMENT_HEIGHT,
    TRACE_REQUIRED_COLUMNS,
)


logger = logging.getLogger(__name__)


class TraceParser:
    """
    Parser for interaction trace CSVs.

    Example usage:
        parser = TraceParser()
        events = parser.parse("session.csv")
        if parser.warnings:
            ...
    """

    def __init__(self) -> None:
        """Initialize parser with empty warning list."""
        self.warnings: List[str] = []

    def parse(self, source: Union[str, Path, StringIO]) -> List[InteractionEvent]:
        """
        Parse a trace into InteractionEvent objects.

        Args:
            source: File path or StringIO containing CSV data

        Returns:
            List of validated events in file order

        Raises:
            ValueError: If required columns are missing
            FileNotFoundError: If file path doesn't exist
        """
        self.warnings = []
        df = self._read_csv(source)
        self._validate_columns(df)
        return self._parse_rows(df)

    def parse_string(self, content: str) -> List[InteractionEvent]:
        """
        Parse trace CSV content held in memory.

        Raises:
            ValueError: If content exceeds the size limit
        """
        self.validate_size(content)
        return self.parse(StringIO(content))

    @staticmethod
    def validate_size(content: str) -> None:
        """Ensure trace is under the size limit."""
        size = len(content.encode('utf-8'))
        if size > MAX_TRACE_SIZE:
            raise ValueError(
                f"Trace exceeds 10MB limit ({size / 1024 / 1024:.1f}MB)"
            )

    def _read_csv(self, source: Union[str, Path, StringIO]) -> pd.DataFrame:
        if isinstance(source, StringIO):
            source.seek(0)
            return pd.read_csv(source)

        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Trace file not found: {path}")

        return pd.read_csv(path, encoding='utf-8-sig')

    def _validate_columns(self, df: pd.DataFrame) -> None:
        """
        Raises:
            ValueError: If required columns are missing
        """
        df.columns = [str(col).strip() for col in df.columns]
        missing = TRACE_REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required trace columns: {sorted(missing)}")

    def _parse_rows(self, df: pd.DataFrame) -> List[InteractionEvent]:
        """Parse each row, skipping malformed ones."""
        events = []
        for idx, row in df.iterrows():
            try:
                events.append(self._parse_single_row(row))
            except Exception as e:
                warning = f"Row {idx}: Skipping due to error - {e}"
                self.warnings.append(warning)
                logger.warning(warning)
        return events

    def _parse_single_row(self, row: pd.Series) -> InteractionEvent:
        timestamp = self._clean_number(row[TRACE_COLUMN_TIMESTAMP])
        if timestamp is None:
            raise ValueError("timestamp_ms is empty")

        event_type = row[TRACE_COLUMN_EVENT]
        if pd.isna(event_type):
            raise ValueError("event_type is empty")

        return InteractionEvent(
            timestamp_ms=timestamp,
            event_type=str(event_type),
            x=self._clean_number(row.get(TRACE_COLUMN_X)),
            y=self._clean_number(row.get(TRACE_COLUMN_Y)),
            scroll_y=self._clean_number(row.get(TRACE_COLUMN_SCROLL_Y)),
            viewport_height=self._clean_number(row.get(TRACE_COLUMN_VIEWPORT_HEIGHT)),
            document_height=self._clean_number(row.get(TRACE_COLUMN_DOCUMENT_HEIGHT)),
        )

    @staticmethod
    def _clean_number(value: Any) -> Optional[float]:
        """
        Convert a cell to float.

        Returns:
            None for empty cells

        Raises:
            ValueError: If the cell is not numeric
        """
        if value is None or pd.isna(value):
            return None
        if isinstance(value, (int, float)):
            return float(value)

        value_str = str(value).strip()
        if not value_str or value_str == '-':
            return None
        try:
            return float(value_str)
        except ValueError:
            raise ValueError(f"Cannot convert '{value}' to a number")


def parse_trace(source: Union[str, Path, StringIO]) -> List[InteractionEvent]:
    """
    Parse a trace file.

    Convenience function using default parser.
    """
    return TraceParser().parse(source)
