"""Pydantic models for sensor metadata and reading events."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from models.measures import Measure

_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp that carries an offset, returning it in UTC."""

    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"

    # datetime only keeps microseconds, so nanosecond fractions are truncated.
    candidate = _EXTRA_FRACTION.sub(r"\1", candidate, count=1)

    try:
        parsed = datetime.fromisoformat(candidate)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid timestamp format: {value!r}") from exc

    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp is missing a timezone offset: {value!r}")

    return _to_utc(parsed)


def _to_utc(value: datetime) -> datetime:
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(
            f"Timestamp is outside the representable UTC range: {value.isoformat()}"
        ) from exc


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class SensorDefinition(BaseModel):
    """Static metadata describing a sensor instance."""

    model_config = ConfigDict(frozen=True)

    sensor_id: str = ""
    sensor_type: str = ""
    component: str = ""


class SensorData(BaseModel):
    """One timestamped batch of measures reported by a sensor."""

    model_config = ConfigDict(frozen=True)

    sensor_id: str
    date: datetime
    measures: List[Measure]

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_timestamp(value)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return _to_utc(value)
        raise ValueError("date must be an RFC 3339 string or a datetime")

    @field_validator("measures", mode="before")
    @classmethod
    def _coerce_measures(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValueError("measures must be a list")
        return [Measure.from_wire(item) for item in value]

    @field_serializer("date")
    def _serialize_date(self, value: datetime) -> str:
        return format_timestamp(value)

    @field_serializer("measures")
    def _serialize_measures(self, value: List[Measure]) -> List[Dict[str, float]]:
        return [measure.to_wire() for measure in value]

    def formatted_measures(self) -> Dict[str, str]:
        """Map each measure kind to its display string.

        Later measures of the same kind replace earlier ones.
        """

        formatted: Dict[str, str] = {}
        for measure in self.measures:
            formatted[measure.kind.value] = measure.formatted()
        return formatted
