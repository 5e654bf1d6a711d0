"""Типизированные значения ячеек (text / int32 / float32) и приведение «сырых» токенов к ним."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from typing import Any, Callable, Union

from .constants import FLOAT_TYPE, INT32_MAX, INT32_MIN, INT_TYPE
from .errors import StorageError, TypeCoercionError

_INT_RE = re.compile(r"[+-]?[0-9]+")


def to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_float32(value: float) -> str:
    """Shortest decimal text that reads back as the same single precision value."""
    if math.isnan(value) or math.isinf(value):
        return str(value)
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if to_float32(float(text)) == value:
            return repr(float(text))
    return repr(value)


@dataclass(frozen=True)
class Text:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Int32:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeCoercionError(f"Int32 expects int, got {self.value!r}")
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise TypeCoercionError(f"Value {self.value} is out of 32-bit integer range")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float32:
    value: float

    def __post_init__(self) -> None:
        # stored already rounded, so equality compares single precision values
        object.__setattr__(self, "value", to_float32(float(self.value)))

    def __str__(self) -> str:
        return format_float32(self.value)


Value = Union[Text, Int32, Float32]


def parse_int32(raw: str) -> int:
    """Parse an ASCII decimal literal within the 32-bit signed range, else ValueError."""
    if not _INT_RE.fullmatch(raw):
        raise ValueError(raw)
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(raw)
    return value


def _to_int32(raw: str) -> Int32:
    return Int32(parse_int32(raw))


def _to_float32(raw: str) -> Float32:
    if not raw.isascii() or "_" in raw or raw != raw.strip():
        raise ValueError(raw)
    return Float32(float(raw))


_COERCIONS: dict[str, Callable[[str], Value]] = {
    INT_TYPE: _to_int32,
    FLOAT_TYPE: _to_float32,
}


def coerce(type_name: str | None, raw: str) -> Value:
    """Преобразует строковый токен в значение объявленного типа колонки.

    Теги ``int`` и ``float`` разбираются как 32-битные числа, любой другой тег
    (или его отсутствие) даёт текст без изменений.
    """
    cast = _COERCIONS.get(type_name or "")
    if cast is None:
        return Text(raw)
    try:
        return cast(raw)
    except (ValueError, TypeCoercionError) as exc:
        raise TypeCoercionError(f"Invalid {type_name} value: {raw!r}") from exc


# Externally tagged cell encoding: {"String": ...}, {"Integer32": ...}, {"Float32": ...}
_TEXT_TAG = "String"
_INT_TAG = "Integer32"
_FLOAT_TAG = "Float32"


def encode_value(value: Value) -> dict[str, Any]:
    if isinstance(value, Int32):
        return {_INT_TAG: value.value}
    if isinstance(value, Float32):
        return {_FLOAT_TAG: float(format_float32(value.value))}
    return {_TEXT_TAG: value.value}


def decode_value(cell: Any) -> Value:
    """Восстанавливает значение ячейки из JSON-документа таблицы.
"""
    if not isinstance(cell, dict) or len(cell) != 1:
        raise StorageError(f"Malformed cell: {cell!r}")
    ((tag, payload),) = cell.items()
    try:
        if tag == _TEXT_TAG and isinstance(payload, str):
            return Text(payload)
        if tag == _INT_TAG and isinstance(payload, int) and not isinstance(payload, bool):
            return Int32(payload)
        if tag == _FLOAT_TAG and isinstance(payload, (int, float)) and not isinstance(payload, bool):
            return Float32(payload)
    except TypeCoercionError as exc:
        raise StorageError(f"Malformed cell: {cell!r}") from exc
    raise StorageError(f"Malformed cell: {cell!r}")
