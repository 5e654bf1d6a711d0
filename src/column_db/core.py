from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .constants import default_db_root
from .decorators import log_command, log_time
from .errors import TableNotFoundError
from .schema import Schema, Table
from .storage import JsonFileGateway, TableGateway
from .values import Value


@dataclass(frozen=True)
class SelectResult:
    """Результат команды select: заголовок в порядке схемы и строки.
"""
    columns: tuple[str, ...]
    rows: list[tuple[Value, ...]]


class ColumnDB:
    """Выполнение операций над таблицами через хранилище.

    Таблица каждый раз заново читается из хранилища и не кэшируется между командами.
    """
    def __init__(self, db_root: Optional[Path] = None, gateway: Optional[TableGateway] = None):
        self.db_root = db_root or default_db_root()
        if gateway is None:
            json_gateway = JsonFileGateway(self.db_root)
            json_gateway.ensure_data_dir()
            gateway = json_gateway
        self.gateway = gateway

    @log_time
    @log_command
    def create_table(self, name: str, columns: Sequence[tuple[str, str]]) -> Table:
        # An existing table with the same name is replaced.
        table = Table.empty(name, Schema.from_specs(columns))
        self.gateway.save(table)
        return table

    @log_time
    @log_command
    def drop_table(self, name: str) -> None:
        if not self.gateway.delete(name):
            raise TableNotFoundError(f"Table '{name}' does not exists!")

    @log_time
    @log_command
    def show_tables(self) -> list[str]:
        return self.gateway.list_tables()

    @log_time
    @log_command
    def insert(self, table_name: str, values: Sequence[str]) -> tuple[Value, ...]:
        table = self.gateway.load(table_name)
        row = table.append_row(values)
        self.gateway.save(table)
        return row

    @log_time
    @log_command
    def select_all(self, table_name: str) -> SelectResult:
        table = self.gateway.load(table_name)
        return SelectResult(columns=table.schema.columns, rows=list(table.rows()))

    @log_time
    @log_command
    def select_where(self, table_name: str, column: str, target: int) -> SelectResult:
        """Первая (с наименьшим индексом) строка, где в колонке стоит Int32 равный target.
"""
        table = self.gateway.load(table_name)
        index = table.find_first_int(column, target)
        rows = [] if index is None else [table.row(index)]
        return SelectResult(columns=table.schema.columns, rows=rows)
