"""Centralized configuration for storekit.

This module provides:
- Default locations for snapshot files, student records and session logs
- Environment variable overrides, read at call time

Usage:
    from storekit.env_config import get_data_dir, get_log_dir

    snapshot = get_data_dir() / "inventory.json"
"""

import os
from pathlib import Path


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

DATA_DIR_ENV_VAR = "STOREKIT_DATA_DIR"
LOG_DIR_ENV_VAR = "STOREKIT_LOG_DIR"
MAX_LOGS_ENV_VAR = "STOREKIT_MAX_LOGS"

DEFAULT_DATA_DIRNAME = "storekit_data"
DEFAULT_MAX_LOGS = 10

STUDENTS_FILENAME = "students.txt"
REPORT_FILENAME = "report.txt"


def get_data_dir() -> Path:
    """Directory for snapshot files and record input/output.

    Priority:
    1. Environment variable STOREKIT_DATA_DIR
    2. './storekit_data' under the current working directory
    """
    env_path = os.environ.get(DATA_DIR_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_DATA_DIRNAME


def get_log_dir(data_dir: Path = None) -> Path:
    """Directory for session logs.

    Args:
        data_dir: Data directory to nest logs under when STOREKIT_LOG_DIR
                  is not set. Defaults to get_data_dir().
    """
    env_path = os.environ.get(LOG_DIR_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    if data_dir is None:
        data_dir = get_data_dir()
    return Path(data_dir) / "logs"


def get_max_logs() -> int:
    """Number of session logs kept by rotation (1-100)."""
    raw = os.environ.get(MAX_LOGS_ENV_VAR)
    if not raw:
        return DEFAULT_MAX_LOGS
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_LOGS
    return max(1, min(value, 100))
