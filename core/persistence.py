"""
Load/save of whole collections as pretty-printed JSON files.

Loading never fails: a missing, unreadable or malformed file yields the
fallback value. Saving replaces the file atomically and propagates I/O and
encoding errors.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from core.logging_manager import setup_loggers

success_logger, fail_logger = setup_loggers(logger_name="persistence")


def load_json(path, fallback: Any) -> Any:
    path = Path(path)

    if not path.exists():
        success_logger.info(f"No state file at {path}, starting empty")
        return fallback

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        fail_logger.warning(f"Discarding unreadable state file {path}: {e}")
        return fallback

    if fallback is not None and not isinstance(data, type(fallback)):
        fail_logger.warning(
            f"Discarding state file {path}: expected {type(fallback).__name__}, got {type(data).__name__}"
        )
        return fallback

    return data


def save_json(path, data: Any) -> None:
    """
    Write ``data`` to ``path`` via a temp file in the same directory and
    ``os.replace``, so readers only ever see the old or the new document.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except Exception as e:
        # OSError (disk full, permissions) or TypeError/ValueError (unencodable data)
        fail_logger.error(f"Failed to write {path}: {e!r}")
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
