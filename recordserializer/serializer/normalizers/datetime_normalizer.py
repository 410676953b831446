"""Normalizer for date and time values."""

from datetime import date, datetime, timezone
from typing import Any, Optional

from recordserializer.config import get_settings
from recordserializer.exceptions import UnexpectedValueError

DATETIME_FORMAT_KEY = "datetime_format"


class DateTimeNormalizer:
    """Converts ``datetime``/``date`` values to strings and back.

    Output is ISO-8601 unless a strftime pattern is given, either through
    ``context["datetime_format"]`` or ``Settings.datetime_format``.
    Input may be a string in that same pattern (ISO-8601 when none is set,
    a trailing ``Z`` read as UTC), a POSIX timestamp, or an existing
    ``datetime``.
    """

    SUPPORTED_TYPES = (datetime, date)

    def __init__(self, datetime_format: Optional[str] = None):
        self.datetime_format = datetime_format or get_settings().datetime_format

    def supports_normalization(self, data: Any, format: Optional[str] = None) -> bool:
        return isinstance(data, self.SUPPORTED_TYPES)

    def normalize(self, data: date, format: Optional[str] = None, context: Optional[dict] = None) -> str:
        pattern = (context or {}).get(DATETIME_FORMAT_KEY, self.datetime_format)
        if pattern:
            return data.strftime(pattern)
        return data.isoformat()

    def supports_denormalization(self, data: Any, type_: type, format: Optional[str] = None) -> bool:
        return isinstance(type_, type) and issubclass(type_, self.SUPPORTED_TYPES)

    def denormalize(
        self, data: Any, type_: type, format: Optional[str] = None, context: Optional[dict] = None
    ) -> date:
        value = self._to_datetime(data, context or {})
        if issubclass(type_, datetime):
            return value
        return value.date()

    def _to_datetime(self, data: Any, context: dict) -> datetime:
        if isinstance(data, datetime):
            return data
        if isinstance(data, date):
            return datetime(data.year, data.month, data.day)
        if isinstance(data, bool):
            raise UnexpectedValueError(f"Cannot convert {data!r} to a date", data)
        if isinstance(data, (int, float)):
            return datetime.fromtimestamp(data, tz=timezone.utc)
        if isinstance(data, str) and data.strip():
            return self._parse(data.strip(), context)
        raise UnexpectedValueError(f"Cannot convert {data!r} to a date", data)

    def _parse(self, value: str, context: dict) -> datetime:
        pattern = context.get(DATETIME_FORMAT_KEY, self.datetime_format)
        try:
            if pattern:
                return datetime.strptime(value, pattern)
            if value.endswith(("Z", "z")):
                value = f"{value[:-1]}+00:00"
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise UnexpectedValueError(f"Invalid date '{value}': {e}", value) from e
