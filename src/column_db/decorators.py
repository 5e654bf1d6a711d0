"""Декораторы для CLI-приложения (обработка ошибок, логирование команд и времени выполнения)."""

from __future__ import annotations

import datetime as _dt
import functools
import traceback
from pathlib import Path
from typing import Any, Callable, TypeVar

from .constants import log_path
from .errors import DBError

F = TypeVar("F", bound=Callable[..., Any])


def _append_log(db_root: Path, line: str) -> None:
    try:
        lp = log_path(db_root)
        lp.parent.mkdir(parents=True, exist_ok=True)
        with lp.open("a", encoding="utf-8") as f:
            f.write(line)
    except OSError:
        # Logging must not break main flow.
        pass


def handle_db_errors(func: F) -> F:
    """Catches domain errors and prints a friendly message."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):  # type: ignore[no-untyped-def]
        try:
            return func(*args, **kwargs)
        except DBError as exc:
            print(f"Error: {exc}")
            return None
        except KeyboardInterrupt:
            print("\nInterrupted.")
            return None
        except Exception as exc:
            print("Unexpected error.")
            traceback.print_exception(type(exc), exc, exc.__traceback__)
            return None

    return wrapper  # type: ignore[return-value]


def log_command(func: F) -> F:
    """Logs command execution to logs/commands.log."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):  # type: ignore[no-untyped-def]
        # Expects instance method: args[0] is self with attribute `db_root`.
        self = args[0]
        ts = _dt.datetime.now().isoformat(timespec="seconds")
        _append_log(self.db_root, f"{ts}\t{func.__name__}\targs={args[1:]}\tkwargs={kwargs}\n")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def log_time(func: F) -> F:
    """Measures execution time of a command and appends it to the command log.

    Failed commands are timed too; the measurement never changes the outcome.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):  # type: ignore[no-untyped-def]
        start = _dt.datetime.now()
        try:
            return func(*args, **kwargs)
        finally:
            end = _dt.datetime.now()
            elapsed = (end - start).total_seconds() * 1000.0
            ts = end.isoformat(timespec="seconds")
            _append_log(args[0].db_root, f"{ts}\t{func.__name__}\t{elapsed:.2f} ms\n")

    return wrapper  # type: ignore[return-value]
