"""Reporting sink - the single place where orchestrated failures are surfaced."""

import logging
import sys
from typing import Any, Callable, Optional, TextIO

from storekit.models.errors import RecordParseError, StoreError

logger = logging.getLogger(__name__)

UNEXPECTED_KIND = "unexpected"


class ReportSink:
    """
    Writes demo output and failure messages to a text stream.

    Failure messages are tagged with the error kind and the operation that
    produced them: ``[<operation>] <kind>: <message>``.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so LogCapture's stdout redirection is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def info(self, message: str = "") -> None:
        """Write a plain line."""
        print(message, file=self.stream)

    def heading(self, title: str) -> None:
        """Write a section heading."""
        print(f"=== {title} ===", file=self.stream)

    def report_failure(self, operation: str, error: BaseException) -> None:
        """Write a tagged failure line for any error."""
        if isinstance(error, (StoreError, RecordParseError)):
            kind = error.kind.value
            message = error.message
        else:
            kind = UNEXPECTED_KIND
            message = f"{type(error).__name__}: {error}"
        print(f"[{operation}] {kind}: {message}", file=self.stream)

    def run_step(self, operation: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run one orchestrated step, reporting instead of propagating failures.

        Returns:
            The step's result, or None if it failed
        """
        try:
            return fn(*args, **kwargs)
        except (StoreError, RecordParseError) as e:
            self.report_failure(operation, e)
        except Exception as e:
            logger.exception("Unexpected failure in %s", operation)
            self.report_failure(operation, e)
        return None
