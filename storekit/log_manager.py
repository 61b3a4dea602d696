"""Session log capture and rotation for demo runs.

Everything printed during a run (stdout and stderr) is also written to a
timestamped file in the log directory. Only the newest logs are kept.

Usage:
    from storekit.log_manager import LogCapture

    with LogCapture(log_dir) as log:
        run_demos()

    print(log.get_log_path())
"""

import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from storekit.env_config import DEFAULT_MAX_LOGS, get_log_dir

LOG_SUFFIX = ".log"


class TeeWriter:
    """Write to several streams at once.

    A failing stream is skipped so the first stream (the terminal) keeps
    receiving output even when the log file cannot be written.
    """

    def __init__(self, *streams: TextIO):
        self.streams = streams

    def write(self, data: str) -> None:
        if not isinstance(data, str):
            data = str(data)

        for stream in self.streams:
            try:
                stream.write(data)
                stream.flush()
            except (OSError, ValueError):
                continue

    def flush(self) -> None:
        for stream in self.streams:
            try:
                stream.flush()
            except (OSError, ValueError):
                continue

    def isatty(self) -> bool:
        """Delegate to the first stream, which decides interactivity."""
        if self.streams:
            try:
                return self.streams[0].isatty()
            except (AttributeError, ValueError):
                pass
        return False


class LogCapture:
    """Context manager that tees stdout/stderr into a rotated session log.

    If the log file cannot be created the run continues without capture;
    logging never interrupts a demo.

    Attributes:
        log_dir: Directory where logs are stored
        max_logs: Maximum number of logs to keep
    """

    def __init__(self, log_dir: Optional[Path] = None, max_logs: int = DEFAULT_MAX_LOGS, title: str = "storekit"):
        """
        Args:
            log_dir: Directory for log files (default: env_config.get_log_dir())
            max_logs: Maximum number of logs to keep, clamped to 1..100
            title: Name written in the log header
        """
        self.log_dir = Path(log_dir) if log_dir is not None else get_log_dir()
        self.max_logs = max(1, min(max_logs, 100))
        self.title = title
        self.log_file: Optional[Path] = None
        self.log_handle: Optional[TextIO] = None
        self._logging_enabled = False

        self._original_stdout = sys.stdout if sys.stdout is not None else sys.__stdout__
        self._original_stderr = sys.stderr if sys.stderr is not None else sys.__stderr__

    def __enter__(self) -> "LogCapture":
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self._generate_log_filename()
            self.log_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_log_header()
        except OSError:
            self._logging_enabled = False
            if self.log_handle:
                self.log_handle.close()
            self.log_handle = None
            self.log_file = None
            return self

        sys.stdout = TeeWriter(self._original_stdout, self.log_handle)
        sys.stderr = TeeWriter(self._original_stderr, self.log_handle)
        self._logging_enabled = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Restore stdout/stderr, close the log and rotate old ones."""
        sys.stdout = self._original_stdout
        sys.stderr = self._original_stderr

        if self._logging_enabled and self.log_handle:
            try:
                if exc_type is not None:
                    self.log_handle.write(f"\n{'='*80}\n")
                    self.log_handle.write(f"FATAL ERROR: {exc_type.__name__}: {exc_val}\n")
                    self.log_handle.write(f"{'='*80}\n")
            except (OSError, ValueError):
                pass
            finally:
                self.log_handle.close()

            try:
                self._rotate_logs()
            except OSError:
                pass

        return False

    def _generate_log_filename(self) -> Path:
        """Timestamped filename, e.g. 20260119_143022_123456_storekit.log.

        Microseconds keep names unique within one second.
        """
        now = datetime.now()
        timestamp = now.strftime("%Y%m%d_%H%M%S")
        return self.log_dir / f"{timestamp}_{now.microsecond:06d}_{self.title}{LOG_SUFFIX}"

    def _write_log_header(self) -> None:
        command_str = ' '.join(str(arg) for arg in sys.argv)

        header = f"""{'='*80}
{self.title} session log
{'='*80}
Timestamp:       {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
Python Version:  {sys.version.split()[0]}
Platform:        {platform.platform()}
Command:         {command_str}
{'='*80}

"""
        self.log_handle.write(header)
        self.log_handle.flush()

    def _rotate_logs(self) -> None:
        """Keep only the newest max_logs log files."""
        for old_log in get_recent_logs(self.log_dir, count=None)[self.max_logs:]:
            old_log.unlink()

    def get_log_path(self) -> Optional[Path]:
        """Path to the current log file, or None if capture is disabled."""
        return self.log_file


def get_recent_logs(log_dir: Optional[Path] = None, count: Optional[int] = DEFAULT_MAX_LOGS) -> List[Path]:
    """List session logs, newest first.

    Args:
        log_dir: Directory containing logs (default: env_config.get_log_dir())
        count: Number of logs to return, or None for all
    """
    if log_dir is None:
        log_dir = get_log_dir()
    log_dir = Path(log_dir)
    if not log_dir.exists():
        return []

    log_files = sorted(
        log_dir.glob(f"*{LOG_SUFFIX}"),
        key=lambda p: (p.stat().st_mtime, p.name),
        reverse=True
    )
    return log_files if count is None else log_files[:count]
