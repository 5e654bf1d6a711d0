"""Парсер пользовательских команд: токенизация и сопоставление с фиксированной грамматикой."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from .errors import NonIntegerFilterError, ParseError
from .values import parse_int32

# Names that would escape data/ when used as a file key.
_UNSAFE_NAME_CHARS = ("/", "\\", "\x00")
_UNSAFE_NAMES = {".", ".."}


@dataclass(frozen=True)
class CreateTable:
    name: str
    columns: tuple[tuple[str, str], ...]  # (column, type_name)


@dataclass(frozen=True)
class ShowTables:
    pass


@dataclass(frozen=True)
class DropTable:
    name: str


@dataclass(frozen=True)
class Insert:
    table: str
    values: tuple[str, ...]  # raw tokens, arity checked against the schema later


@dataclass(frozen=True)
class SelectAll:
    table: str


@dataclass(frozen=True)
class SelectWhere:
    table: str
    column: str
    target: int


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Exit:
    pass


Operation = Union[CreateTable, ShowTables, DropTable, Insert, SelectAll, SelectWhere, Help, Exit]


def tokenize(line: str) -> list[str]:
    """Split a command line on runs of whitespace. Never fails."""
    return line.split()


def ensure_table_name(name: str) -> str:
    """Проверяет имя таблицы (оно же ключ файла в хранилище).
"""
    if name in _UNSAFE_NAMES or any(ch in name for ch in _UNSAFE_NAME_CHARS):
        raise ParseError(f"Invalid table name: {name!r}")
    return name


def parse_column_spec(spec: str) -> tuple[str, str]:
    """Парсит спецификацию колонки вида name:type и возвращает (name, type).
"""
    parts = spec.split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ParseError(f"Column '{spec}' format is invalid. Use name:type")
    return parts[0], parts[1]


def _create_table(name: str, specs: list[str]) -> CreateTable:
    columns: list[tuple[str, str]] = []
    seen: set[str] = set()
    for spec in specs:
        column, type_name = parse_column_spec(spec)
        if column in seen:
            raise ParseError(f"Duplicate column: {column!r}")
        seen.add(column)
        columns.append((column, type_name))
    return CreateTable(name=ensure_table_name(name), columns=tuple(columns))


def _select_where(table: str, column: str, raw: str) -> SelectWhere:
    try:
        target = parse_int32(raw)
    except ValueError:
        raise NonIntegerFilterError("Only integer search supported currently.") from None
    return SelectWhere(table=ensure_table_name(table), column=column, target=target)


# Shape markers: _ARG captures one token, _REST captures all remaining tokens.
_ARG = object()
_REST = object()

# Order matters: the first shape that matches wins.
_GRAMMAR: list[tuple[tuple[object, ...], Callable[..., Operation]]] = [
    (("CREATE", "TABLE", _ARG, _REST), _create_table),
    (("SHOW", "TABLES"), ShowTables),
    (("DROP", "TABLE", _ARG), lambda name: DropTable(ensure_table_name(name))),
    (("INSERT", _ARG, _REST), lambda table, values: Insert(ensure_table_name(table), tuple(values))),
    (("SELECT", "*", "FROM", _ARG), lambda table: SelectAll(ensure_table_name(table))),
    (("SELECT", "*", "FROM", _ARG, "WHERE", _ARG, "=", _ARG), _select_where),
    (("HELP",), Help),
    (("EXIT",), Exit),
]


def match_shape(shape: Sequence[object], tokens: Sequence[str]) -> Optional[list]:
    """Return the captured tokens if ``tokens`` has the structure of ``shape``."""
    captures: list = []
    for i, part in enumerate(shape):
        if part is _REST:
            captures.append(list(tokens[i:]))
            return captures
        if i >= len(tokens):
            return None
        if part is _ARG:
            captures.append(tokens[i])
        elif tokens[i] != part:
            return None
    if len(tokens) != len(shape):
        return None
    return captures


def parse(tokens: Sequence[str]) -> Operation:
    """Сопоставляет токены с грамматикой и возвращает операцию.

    Бросает ParseError, если ни одна форма команды не подошла.
    """
    for shape, build in _GRAMMAR:
        captures = match_shape(shape, tokens)
        if captures is not None:
            return build(*captures)
    raise ParseError("Invalid command")


def parse_command(line: str) -> Operation:
    return parse(tokenize(line))
