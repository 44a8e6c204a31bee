# src/taskpad/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the task store (fatal on failure), runs the console
task list, and closes the store on the way out.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.errors import StorageInitError

logger = logging.getLogger(__name__)


async def run_app(settings) -> int:
    try:
        state = await create_initial_state(settings=settings)
    except StorageInitError as e:
        logger.exception("Task store could not be opened.")
        print(f"Cannot start: {e}", file=sys.stderr)
        return 1

    try:
        await run_console_loop(state)
    finally:
        await state.task_store.close()
    return 0


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        exit_code = asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, exiting.")
        print()
        exit_code = 0

    logger.info("Bye.")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
