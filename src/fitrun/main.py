"""Console entry point for fitrun."""

import logging
import os
import sys

from fitrun.cli import run
from fitrun.config.paths import get_paths
from fitrun.config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    """Send all log records to the workspace debug log.

    The TUI owns the terminal, so nothing is logged to stderr. The level
    comes from FITRUN_LOG_LEVEL (INFO when unset or unknown).
    """
    log_file = get_paths().debug_log
    log_file.parent.mkdir(parents=True, exist_ok=True)
    level_name = os.environ.get("FITRUN_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_file, mode="a", encoding="utf-8")],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.info("Logging to %s; service at %s", log_file, settings.api_base_url)


def main() -> None:
    sys.exit(run(configure_logging=setup_logging))


if __name__ == "__main__":
    main()
