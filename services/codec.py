"""Conversions between sensor models and their JSON interchange form."""

from __future__ import annotations

import json
import logging
from typing import Any, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from models.sensors import SensorData, SensorDefinition

logger = logging.getLogger(__name__)

# Oversized integers surface as ValueError, deep nesting as RecursionError.
_DECODE_FAILURES = (ValueError, RecursionError, ValidationError)

Payload = Union[bytes, bytearray, memoryview, str]


class DecodeError(ValueError):
    """Raised when an interchange document cannot be turned into a model."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class EncodeError(ValueError):
    """Raised when a model cannot be rendered to the interchange format."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def _load_document(raw: Payload) -> Any:
    if isinstance(raw, str):
        text = raw
    else:
        text = bytes(raw).decode("utf-8")
    return json.loads(text)


def _payload_size(raw: Payload) -> int:
    if isinstance(raw, str):
        return len(raw.encode("utf-8", errors="replace"))
    return len(bytes(raw))


def _reject(raw: Payload, exc: Exception) -> DecodeError:
    reason = str(exc)
    logger.warning(
        "Rejecting sensor payload: %s",
        reason.splitlines()[0] if reason else type(exc).__name__,
        extra={"reason": type(exc).__name__, "payload_bytes": _payload_size(raw)},
    )
    return DecodeError(reason)


def _dump(model: BaseModel) -> str:
    try:
        return json.dumps(model.model_dump(), ensure_ascii=False)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(str(exc)) from exc


def decode_sensor_data(raw: Payload) -> SensorData:
    """Decode a UTF-8 JSON document into :class:`SensorData`.

    Decoding is all-or-nothing: any malformed text, missing field, unknown
    measure tag, non-numeric payload, out-of-range date or excessively nested
    document raises :class:`DecodeError`.
    """

    try:
        document = _load_document(raw)
        data = SensorData.model_validate(document)
    except _DECODE_FAILURES as exc:
        raise _reject(raw, exc) from exc

    logger.debug(
        "Decoded sensor payload",
        extra={"sensor_id": data.sensor_id, "measure_count": len(data.measures)},
    )
    return data


def encode_sensor_data(data: SensorData) -> bytes:
    """Encode :class:`SensorData` as UTF-8 JSON bytes.

    Keys are written as ``sensor_id``, ``date``, ``measures``; measures keep
    their order. Non-finite payloads use the ``NaN``/``Infinity`` tokens.
    """

    encoded = _dump(data).encode("utf-8")
    logger.debug(
        "Encoded sensor payload",
        extra={
            "sensor_id": data.sensor_id,
            "measure_count": len(data.measures),
            "payload_bytes": len(encoded),
        },
    )
    return encoded


def encode_definition(definition: SensorDefinition) -> str:
    """Encode a :class:`SensorDefinition` as a JSON string."""
    return _dump(definition)


def decode_definition(raw: Payload) -> SensorDefinition:
    try:
        document = _load_document(raw)
        return SensorDefinition.model_validate(document)
    except _DECODE_FAILURES as exc:
        raise _reject(raw, exc) from exc
