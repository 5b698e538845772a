"""
Log file access.

Creates the sample log on first run and streams lines for analysis.
"""

import logging
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "system.log"

SAMPLE_LOG_LINES = (
    "10:01:15 [INFO] - System startup sequence initiated.",
    "10:01:20 [INFO] - Network service successfully started on port 8080.",
    "10:02:30 [WARNING] - Disk space is running low (90% used).",
    "10:03:05 [INFO] - User 'admin' logged in from 192.168.1.100.",
    "10:04:45 [ERROR] - Failed to connect to database 'prod_db' at mysql.server.com.",
    "10:04:46 [INFO] - Retrying database connection...",
    "10:05:00 [ERROR] - Database connection timed out after 3 attempts.",
    "10:05:15 [WARNING] - High CPU usage detected: 95%.",
    "10:06:00 [INFO] - Performing scheduled backup.",
    "10:07:22 [INFO] - Backup completed successfully.",
    "10:08:00 [ERROR] - Unhandled exception: NullPointerException in module 'AuthService'.",
    "10:09:10 [INFO] - User 'guest' logged in.",
    "10:10:00 [WARNING] - Deprecated API endpoint '/v1/data' was accessed.",
)


class LogFileError(Exception):
    """Raised when the log file cannot be created or read."""


def ensure_log_file(path: Union[str, Path] = DEFAULT_LOG_FILE) -> bool:
    """Create the sample log file if it does not exist yet.

    Args:
        path: Location of the log file

    Returns:
        True if the file was created, False if it already existed

    Raises:
        LogFileError: If the file cannot be written
    """
    log_path = Path(path)
    if log_path.exists():
        return False

    logger.info("Log file %s not found, writing sample log", log_path)
    try:
        with open(log_path, 'w', encoding='utf-8') as f:
            for line in SAMPLE_LOG_LINES:
                f.write(line + "\n")
    except OSError as e:
        raise LogFileError(f"Could not create log file {log_path}: {e}") from e
    return True


def read_log_lines(path: Union[str, Path] = DEFAULT_LOG_FILE) -> Iterator[str]:
    """Yield each line of the log file without its line terminator.

    Raises:
        LogFileError: If the file cannot be opened
    """
    log_path = Path(path)
    try:
        f = open(log_path, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise LogFileError(f"Error opening log file {log_path}: {e}") from e

    with f:
        for line in f:
            yield line.rstrip("\r\n")
