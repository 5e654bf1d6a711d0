"""Точка входа: интерактивный REPL для работы с колоночной БД."""

from __future__ import annotations

import argparse
from pathlib import Path

import prompt

from .commands import CommandExecutor
from .constants import APP_NAME, PROMPT, default_db_root
from .core import ColumnDB
from .errors import ParseError
from .parser import parse_command


def _read_line() -> str:
    # empty=True: an empty line comes back as None instead of re-prompting
    return prompt.string(PROMPT, empty=True) or ""


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="column-db", description=APP_NAME)
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory holding data/ and logs/ (default: current directory)",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Запускает интерактивную консоль (REPL) и обрабатывает команды пользователя."""
    args = _parse_args(argv)
    print(f"{APP_NAME}. Type HELP for the list of commands, EXIT to quit.")
    db = ColumnDB(args.root or default_db_root())
    executor = CommandExecutor(db)

    while True:
        try:
            line = _read_line().strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        try:
            op = parse_command(line)
        except ParseError as exc:
            print(f"Error: {exc}")
            continue

        if not executor.execute(op):
            break


if __name__ == "__main__":
    run()
