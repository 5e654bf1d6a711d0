"""Выполнение распарсенных команд и вывод результатов пользователю (PrettyTable, сообщения)."""

from __future__ import annotations

from prettytable import PrettyTable

from .core import ColumnDB, SelectResult
from .decorators import handle_db_errors
from .parser import (
    CreateTable,
    DropTable,
    Exit,
    Help,
    Insert,
    Operation,
    SelectAll,
    SelectWhere,
    ShowTables,
)


def render_table(result: SelectResult) -> str:
    t = PrettyTable()
    t.field_names = list(result.columns)
    for row in result.rows:
        t.add_row([str(cell) for cell in row])
    return t.get_string()


HELP = """DDL:
  CREATE TABLE <name> <column:type> ...
  DROP TABLE <name>
  SHOW TABLES

DML:
  INSERT <table> <value> ...
  SELECT * FROM <table>
  SELECT * FROM <table> WHERE <column> = <integer>

  HELP
  EXIT

Types: int (32-bit integer), float (32-bit float), anything else is text.

Example:
  CREATE TABLE users id:int name:text age:int
  INSERT users 1 Alice 30
  SELECT * FROM users WHERE id = 1
"""


class CommandExecutor:
    """Диспетчер команд: вызывает методы ColumnDB и форматирует вывод.
"""
    def __init__(self, db: ColumnDB):
        self._db = db

    def execute(self, op: Operation) -> bool:
        """Execute one operation. Returns False if should exit."""
        if isinstance(op, Exit):
            return False
        self._dispatch(op)
        return True

    @handle_db_errors
    def _dispatch(self, op: Operation) -> None:
        if isinstance(op, Help):
            print(HELP)
        elif isinstance(op, CreateTable):
            self._db.create_table(op.name, op.columns)
            print(f"Table '{op.name}' created")
        elif isinstance(op, DropTable):
            self._db.drop_table(op.name)
            print(f"Table '{op.name}' dropped")
        elif isinstance(op, ShowTables):
            for name in self._db.show_tables():
                print(name)
        elif isinstance(op, Insert):
            self._db.insert(op.table, op.values)
            print("1 row inserted")
        elif isinstance(op, SelectAll):
            print(render_table(self._db.select_all(op.table)))
        elif isinstance(op, SelectWhere):
            res = self._db.select_where(op.table, op.column, op.target)
            if res.rows:
                print(render_table(res))
            else:
                print(f"No row found with {op.column} = {op.target}")
        else:
            raise TypeError(f"Unknown operation: {op!r}")
