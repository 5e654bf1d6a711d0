"""Исключения доменной области колоночной базы данных."""

from __future__ import annotations


class DBError(Exception):
    """Base class for all domain errors."""


class ParseError(DBError):
    """Ошибка разбора пользовательской команды.
"""
    pass


class NonIntegerFilterError(ParseError):
    """Значение в WHERE не является 32-битным целым.
"""
    pass


class ColumnCountMismatchError(DBError):
    """Число значений INSERT не совпадает с числом колонок.
"""
    pass


class TypeCoercionError(DBError):
    """Значение нельзя привести к типу колонки.
"""
    pass


class ColumnNotFoundError(DBError):
    """Колонка не найдена.
"""
    pass


class TableNotFoundError(DBError):
    """Таблица не найдена.
"""
    pass


class StorageError(DBError):
    """Ошибка чтения/записи файлового хранилища.
"""
    pass
