"""Command-line entry point for the storekit demonstration programs.

Usage:
    storekit-demo                  # Run every demo
    storekit-demo warehouse        # Run one demo
    storekit-demo grading --input students.txt --output report.txt
    storekit-demo --no-log -v      # No session log, debug logging
"""

import argparse
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from storekit.env_config import REPORT_FILENAME, STUDENTS_FILENAME, get_data_dir, get_log_dir, get_max_logs
from storekit.log_manager import LogCapture
from storekit.services.finance_service import FinanceService
from storekit.services.grading_service import GradingService
from storekit.services.health_service import HealthService
from storekit.services.inventory_service import InventoryLogService
from storekit.services.reporting import ReportSink
from storekit.services.warehouse_service import WarehouseService

DEMO_ORDER = ["warehouse", "health", "inventory", "grading", "finance"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storekit-demo",
        description="Run the entity store demonstration programs.",
    )
    parser.add_argument(
        "demo",
        nargs="?",
        default="all",
        choices=DEMO_ORDER + ["all"],
        help="Demo to run (default: all)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for snapshot and record files (default: $STOREKIT_DATA_DIR or ./storekit_data)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for session logs (default: $STOREKIT_LOG_DIR or <data dir>/logs)",
    )
    parser.add_argument("--no-log", action="store_true", help="Don't write a session log")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--patient-id",
        type=int,
        default=2,
        help="Patient whose prescriptions the health demo prints (default: 2)",
    )
    parser.add_argument("--input", type=Path, default=None, help=f"Student records (default: <data dir>/{STUDENTS_FILENAME})")
    parser.add_argument("--output", type=Path, default=None, help=f"Grade report (default: <data dir>/{REPORT_FILENAME})")
    return parser


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@contextmanager
def stderr_logging(verbose: bool) -> Iterator[logging.Handler]:
    """Attach a root handler bound to the current sys.stderr for the block.

    Entered inside LogCapture, log records land in the session log too.
    """
    root = logging.getLogger()
    previous_level = root.level
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.addHandler(handler)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)


def _demo_steps(args: argparse.Namespace, data_dir: Path, sink: ReportSink) -> Dict[str, Callable[[], object]]:
    input_path = args.input or data_dir / STUDENTS_FILENAME
    output_path = args.output or data_dir / REPORT_FILENAME
    return {
        "warehouse": lambda: WarehouseService(sink).run(),
        "health": lambda: HealthService(sink).run(args.patient_id),
        "inventory": lambda: InventoryLogService.run(data_dir, sink),
        "grading": lambda: GradingService(sink).run(input_path, output_path),
        "finance": lambda: FinanceService(sink).run(),
    }


def run_demos(args: argparse.Namespace, sink: Optional[ReportSink] = None) -> None:
    """Run the selected demos in order; a failing demo never stops the next."""
    sink = sink or ReportSink()
    data_dir = args.data_dir or get_data_dir()
    steps = _demo_steps(args, data_dir, sink)
    selected = DEMO_ORDER if args.demo == "all" else [args.demo]

    for i, name in enumerate(selected):
        if i:
            sink.info()
        sink.info(f"##### {name} #####")
        sink.run_step(f"{name}_demo", steps[name])


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_log:
        with stderr_logging(args.verbose):
            run_demos(args)
        return 0

    data_dir = args.data_dir or get_data_dir()
    log_dir = args.log_dir or get_log_dir(data_dir)
    with LogCapture(log_dir, max_logs=get_max_logs()) as log:
        with stderr_logging(args.verbose):
            run_demos(args)

    if log.get_log_path():
        print(f"\nSession log: {log.get_log_path()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
