from __future__ import annotations

from pathlib import Path

APP_NAME = "Column DB"
PROMPT = "dbms> "

# Runtime artifacts (must be ignored in git)
DATA_DIRNAME = "data"
TABLE_SUFFIX = ".json"
LOG_DIRNAME = "logs"
LOG_FILENAME = "commands.log"

INT_TYPE = "int"
FLOAT_TYPE = "float"
TEXT_TYPE = "text"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
FLOAT32_MAX = 3.4028234663852886e38


def default_db_root() -> Path:
    """Возвращает директорию, относительно которой будут храниться данные БД.
"""
    # База живёт относительно текущей директории запуска.
    return Path.cwd()


def data_dir(db_root: Path) -> Path:
    """Путь к директории с таблицами (data/).
"""
    return db_root / DATA_DIRNAME


def log_dir(db_root: Path) -> Path:
    """Путь к директории логов (logs/).
"""
    return db_root / LOG_DIRNAME


def log_path(db_root: Path) -> Path:
    """Путь к файлу логов команд (logs/commands.log).
"""
    return log_dir(db_root) / LOG_FILENAME
