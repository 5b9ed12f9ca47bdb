"""Typed measurement values reported by sensors."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class MeasureKind(str, Enum):
    """Kinds of reading a sensor can report."""

    temperature = "temperature"
    humidity = "humidity"
    unknown = "unknown"


_WIRE_LABELS: Dict[MeasureKind, str] = {
    MeasureKind.temperature: "Temperature",
    MeasureKind.humidity: "Humidity",
    MeasureKind.unknown: "Unknown",
}

_KINDS_BY_LABEL: Dict[str, MeasureKind] = {
    label: kind for kind, label in _WIRE_LABELS.items()
}

_UNITS: Dict[MeasureKind, str] = {
    MeasureKind.temperature: " °C",
    MeasureKind.humidity: " %",
    MeasureKind.unknown: " °C",
}


def _to_single_precision(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass(frozen=True, slots=True, eq=False)
class Measure:
    """A single reading: a kind tag paired with a 32-bit float payload."""

    kind: MeasureKind
    value: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", MeasureKind(self.kind))
        object.__setattr__(self, "value", _to_single_precision(float(self.value)))

    @classmethod
    def temperature(cls, value: float) -> Measure:
        return cls(MeasureKind.temperature, value)

    @classmethod
    def humidity(cls, value: float) -> Measure:
        return cls(MeasureKind.humidity, value)

    @classmethod
    def unknown(cls, value: float) -> Measure:
        return cls(MeasureKind.unknown, value)

    @classmethod
    def default(cls) -> Measure:
        return cls(MeasureKind.unknown, 0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        # Plain float comparison keeps NaN unequal to itself.
        return self.kind is other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"{_WIRE_LABELS[self.kind]}({self.value!r})"

    def formatted(self) -> str:
        """Render the payload with one decimal place and the kind's unit."""
        return f"{self.value:.1f}{_UNITS[self.kind]}"

    def to_wire(self) -> Dict[str, float]:
        return {_WIRE_LABELS[self.kind]: self.value}

    @classmethod
    def from_wire(cls, payload: Any) -> Measure:
        """Build a measure from a single-key tagged mapping such as ``{"Humidity": 50.0}``."""

        if isinstance(payload, Measure):
            return payload
        if not isinstance(payload, Mapping):
            raise ValueError(f"measure must be an object, got {type(payload).__name__}")
        if len(payload) != 1:
            raise ValueError(f"measure must have exactly one key, got {len(payload)}")

        label, raw_value = next(iter(payload.items()))
        kind = _KINDS_BY_LABEL.get(label)
        if kind is None:
            expected = ", ".join(_KINDS_BY_LABEL)
            raise ValueError(f"unknown measure kind {label!r}, expected one of: {expected}")

        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            raise ValueError(f"{label} value must be a number, got {raw_value!r}")

        try:
            value = float(raw_value)
        except OverflowError:
            value = math.inf if raw_value > 0 else -math.inf
        return cls(kind, value)
