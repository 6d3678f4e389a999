#!/usr/bin/env python3
"""
validators.py
--------------------
Input validation and normalization for logbook operations.

Used at the boundary (command layer) and inside the managers so that
malformed input fails before anything is written.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

# Fractional seconds and a trailing UTC offset in the time portion.
_FRACTION = re.compile(r"\.(\d+)")
_OFFSET = re.compile(r"([+-]\d{2}):?(\d{2})$")


class DataValidator:
    """Centralized data validation for store operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If a field is missing or blank
        """
        for field in required_fields:
            value = data.get(field) if isinstance(data, dict) else None
            if isinstance(value, str):
                value = value.strip()
            if not value:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip a string value; blank strings and None become None.

        Args:
            value: Value to normalize

        Returns:
            Stripped string or None
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def require_name(value: Any, field: str = "name") -> str:
        """
        Normalize a unique-name field and reject blanks.

        Raises:
            ValidationError: If the name is missing or blank
        """
        name = DataValidator.normalize_string(value)
        if not name:
            raise ValidationError(f"Required field '{field}' missing or empty")
        return name

    @staticmethod
    def _to_isoformat(value: str) -> str:
        """
        Rewrite RFC 3339 text into the form datetime.fromisoformat reads.

        Handles a trailing Z, fractions of any length (cut or padded to
        microseconds) and offsets written without a colon.
        """
        text = value.strip()
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        if len(text) <= 10:
            return text

        date_part, time_part = text[:10], text[10:]
        time_part = _FRACTION.sub(
            lambda m: "." + m.group(1)[:6].ljust(6, "0"), time_part, count=1
        )
        time_part = _OFFSET.sub(r"\1:\2", time_part)
        return date_part + time_part

    @staticmethod
    def parse_datetime(value: Any) -> datetime:
        """
        Parse an ISO-8601 / RFC 3339 date-time into an aware UTC datetime.

        A trailing 'Z' is accepted. The value must carry a UTC offset.

        Args:
            value: String or datetime to parse

        Returns:
            Timezone-aware datetime in UTC

        Raises:
            ValidationError: If the value is not a valid aware date-time
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str) and value.strip():
            try:
                parsed = datetime.fromisoformat(DataValidator._to_isoformat(value))
            except ValueError as e:
                raise ValidationError(f"Invalid timestamp: {value!r} ({e})")
        else:
            raise ValidationError(f"Invalid timestamp: {value!r}")

        if parsed.tzinfo is None or parsed.utcoffset() is None:
            raise ValidationError(f"Invalid timestamp: {value!r} has no UTC offset")

        return parsed.astimezone(timezone.utc)

    @staticmethod
    def parse_optional_datetime(value: Any) -> Optional[datetime]:
        """
        Lenient variant of parse_datetime for optional date-times.

        Unparsable values are treated as absent rather than rejected.

        Returns:
            Aware UTC datetime, or None when missing or invalid
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return DataValidator.parse_datetime(value)
        except ValidationError:
            return None

    @staticmethod
    def normalize_string_list(values: Any) -> List[str]:
        """
        Normalize a list of names: strip, drop blanks, keep first occurrence.

        Args:
            values: Iterable of raw values (None means empty)

        Returns:
            Ordered list of unique, non-blank strings
        """
        if values is None:
            return []
        if isinstance(values, str):
            values = [values]

        result: List[str] = []
        for value in values:
            text = DataValidator.normalize_string(value)
            if text and text not in result:
                result.append(text)
        return result
