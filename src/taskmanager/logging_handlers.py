"""Custom logging handler utilities."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional


class DateStampedFileHandler(logging.FileHandler):
    """File handler writing to ``<directory>/<YYYY-MM-DD>/<prefix>_<time>.log``.

    Dates and times in the path are UTC so that files from one run always
    land in a single, sortable location.
    """

    def __init__(
        self,
        directory: str | Path = "logs/app",
        *,
        prefix: str = "tasks",
        encoding: str | None = "utf-8",
        mode: str = "a",
        delay: bool = False,
        errors: Optional[str] = None,
        current_time: datetime | None = None,
    ) -> None:
        timestamp = (current_time or datetime.now(timezone.utc)).astimezone(
            timezone.utc
        )
        date_folder = timestamp.strftime("%Y-%m-%d")
        file_name = f"{prefix}_{timestamp.strftime('%Y-%m-%d_%H-%M-%S')}_UTC.log"
        log_path = (Path(directory) / date_folder / file_name).resolve()

        log_path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            log_path,
            mode=mode,
            encoding=encoding,
            delay=delay,
            errors=errors,
        )


def cleanup_old_logs(
    log_directory: str | Path,
    retention_hours: int,
    logger: logging.Logger | None = None,
) -> int:
    """
    Delete ``*.log`` files older than the retention window.

    Args:
        log_directory: Directory holding the date-stamped folders
        retention_hours: Files older than this many hours are removed (0 = disabled)
        logger: Optional logger for reporting cleanup activity

    Returns:
        Number of files deleted
    """
    if retention_hours <= 0:
        return 0

    dir_path = Path(log_directory).resolve()
    if not dir_path.exists():
        return 0

    cutoff_time = datetime.now(timezone.utc) - timedelta(hours=retention_hours)
    files_deleted = 0

    for log_file in dir_path.rglob("*.log"):
        try:
            mtime = datetime.fromtimestamp(log_file.stat().st_mtime, tz=timezone.utc)
            if mtime < cutoff_time:
                log_file.unlink()
                files_deleted += 1
        except OSError as exc:
            if logger:
                logger.warning("Failed to delete %s: %s", log_file, exc)

    # Drop date folders emptied by the pass above
    for date_dir in dir_path.iterdir():
        if date_dir.is_dir() and not any(date_dir.iterdir()):
            date_dir.rmdir()

    if logger and files_deleted:
        logger.info("Log cleanup removed %d file(s) from %s", files_deleted, dir_path)

    return files_deleted


__all__ = ["DateStampedFileHandler", "cleanup_old_logs"]
