"""Схема таблицы и колоночное хранение строк."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from .constants import TEXT_TYPE
from .errors import ColumnCountMismatchError, ColumnNotFoundError, StorageError
from .values import Int32, Value, coerce, decode_value, encode_value


@dataclass(frozen=True)
class Schema:
    """Упорядоченный список колонок и их объявленные типы.

    Порядок колонок задаёт раскладку строки и порядок вывода.
    """
    columns: tuple[str, ...]
    types: dict[str, str]
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(set(self.columns)) != len(self.columns):
            raise ValueError(f"Duplicate column in {list(self.columns)}")
        if set(self.columns) != set(self.types):
            raise ValueError("Schema columns and types must name the same columns")
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(self.columns)})

    @staticmethod
    def from_specs(specs: Sequence[tuple[str, str]]) -> "Schema":
        return Schema(
            columns=tuple(name for name, _ in specs),
            types={name: type_name for name, type_name in specs},
        )

    def type_of(self, column: str) -> str:
        return self.types.get(column, TEXT_TYPE)

    def index_of(self, column: str) -> int:
        try:
            return self._index[column]
        except KeyError:
            raise ColumnNotFoundError(f"Column {column} not found") from None

    def __len__(self) -> int:
        return len(self.columns)


@dataclass
class Table:
    """Именованная таблица: схема плюс по одной последовательности значений на колонку.
"""
    name: str
    schema: Schema
    columns_data: dict[str, list[Value]]

    @staticmethod
    def empty(name: str, schema: Schema) -> "Table":
        return Table(name=name, schema=schema, columns_data={c: [] for c in schema.columns})

    @property
    def row_count(self) -> int:
        if not self.schema.columns:
            return 0
        return len(self.columns_data[self.schema.columns[0]])

    def row(self, index: int) -> tuple[Value, ...]:
        return tuple(self.columns_data[c][index] for c in self.schema.columns)

    def rows(self) -> Iterator[tuple[Value, ...]]:
        for i in range(self.row_count):
            yield self.row(i)

    def append_row(self, raw_values: Sequence[str]) -> tuple[Value, ...]:
        """Coerce one raw value per column and append them as a single row.

        Nothing is appended unless every value is valid for its column.
        """
        if len(raw_values) != len(self.schema):
            raise ColumnCountMismatchError(
                f"Column count mismatch: expected {len(self.schema)}, got {len(raw_values)}."
            )
        cells = tuple(
            coerce(self.schema.type_of(c), raw)
            for c, raw in zip(self.schema.columns, raw_values)
        )
        for column, cell in zip(self.schema.columns, cells):
            self.columns_data[column].append(cell)
        return cells

    def find_first_int(self, column: str, target: int) -> int | None:
        """Index of the first Int32 cell equal to ``target`` in ``column``."""
        self.schema.index_of(column)
        wanted = Int32(target)
        for i, cell in enumerate(self.columns_data[column]):
            if isinstance(cell, Int32) and cell == wanted:
                return i
        return None

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fields": dict(self.schema.types),
            "columns": list(self.schema.columns),
            "data": {
                c: [encode_value(v) for v in self.columns_data[c]]
                for c in self.schema.columns
            },
        }

    @staticmethod
    def from_document(doc: Any) -> "Table":
        """Собирает таблицу из JSON-документа, проверяя его согласованность.
"""
        if not isinstance(doc, dict):
            raise StorageError("Table document must be an object")
        try:
            name = doc["name"]
            fields = doc["fields"]
            columns = doc["columns"]
            data = doc["data"]
        except KeyError as exc:
            raise StorageError(f"Table document is missing key {exc}") from exc

        if not isinstance(name, str) or not isinstance(fields, dict):
            raise StorageError("Table document has malformed name or fields")
        if not isinstance(columns, list) or not isinstance(data, dict):
            raise StorageError("Table document has malformed columns or data")
        try:
            schema = Schema(columns=tuple(columns), types=dict(fields))
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Table {name!r} has inconsistent schema: {exc}") from exc

        columns_data: dict[str, list[Value]] = {}
        for column in schema.columns:
            cells = data.get(column)
            if not isinstance(cells, list):
                raise StorageError(f"Table {name!r} has no data for column {column!r}")
            columns_data[column] = [decode_value(cell) for cell in cells]

        if len({len(cells) for cells in columns_data.values()}) > 1:
            raise StorageError(f"Table {name!r} has columns of different length")
        return Table(name=name, schema=schema, columns_data=columns_data)
