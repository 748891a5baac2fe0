# src/daylist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console list view.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort final save (no exceptions should escape)."""
    store = getattr(state, "task_store", None)
    if store is not None:
        # save() already swallows and logs persistence errors.
        store.save()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/daylist")
    # Console stays at WARNING so log lines do not interleave with the task list.
    setup_logging(log_dir=log_dir, console_level=logging.WARNING, file_level=file_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "daylist"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
            print(f"{settings.app_name}: console disabled (DAYLIST_CONSOLE_ENABLED=false).")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
