from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from .constants import TABLE_SUFFIX, data_dir
from .errors import StorageError, TableNotFoundError
from .schema import Table


class TableGateway(Protocol):
    """Хранилище таблиц, адресуемое по имени таблицы.
"""
    def exists(self, name: str) -> bool: ...

    def save(self, table: Table) -> None: ...

    def load(self, name: str) -> Table: ...

    def delete(self, name: str) -> bool: ...

    def list_tables(self) -> list[str]: ...


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StorageError(f"Failed to read JSON: {path}") from exc


def _write_json_atomic(path: Path, payload: Any) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)
    except OSError as exc:
        raise StorageError(f"Failed to write JSON: {path}") from exc


class JsonFileGateway:
    """Одна таблица — один JSON-документ в директории data/.
"""
    def __init__(self, db_root: Path):
        self.db_root = db_root
        self.data_dir = data_dir(db_root)

    def table_path(self, name: str) -> Path:
        """Возвращает путь к файлу таблицы <name>.json.
"""
        return self.data_dir / f"{name}{TABLE_SUFFIX}"

    def ensure_data_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to create data directory: {self.data_dir}") from exc

    def exists(self, name: str) -> bool:
        return self.table_path(name).is_file()

    def save(self, table: Table) -> None:
        _write_json_atomic(self.table_path(table.name), table.to_document())

    def load(self, name: str) -> Table:
        path = self.table_path(name)
        if not path.is_file():
            raise TableNotFoundError(f"Table '{name}' does not exist")
        return Table.from_document(_read_json(path))

    def delete(self, name: str) -> bool:
        try:
            self.table_path(name).unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Failed to delete table file: {self.table_path(name)}") from exc
        return True

    def list_tables(self) -> list[str]:
        """Имена сохранённых таблиц в порядке обхода директории (без сортировки).
"""
        if not self.data_dir.is_dir():
            return []
        try:
            return [p.stem for p in self.data_dir.iterdir() if p.is_file() and p.suffix == TABLE_SUFFIX]
        except OSError as exc:
            raise StorageError(f"Failed to list tables in {self.data_dir}") from exc
