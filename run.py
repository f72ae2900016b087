"""
Main entrypoint for the Price Recorder application.
Usage: python run.py
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from price_recorder.scheduler.settings import scheduler_settings  # noqa: E402


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging() -> None:
    """
    Set up consistent logging configuration for the application.

    Informational lines go to stdout and failures to stderr. The level comes
    from the scheduler settings; format and file output from the environment.
    """
    log_level = scheduler_settings.log_level.upper()
    log_format = os.getenv("LOG_FORMAT", "%(message)s")
    log_file = os.getenv("LOG_FILE", "price_recorder.log")
    log_to_file = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    numeric_level = getattr(logging, log_level, logging.INFO)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowWarning())
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    handlers: list[logging.Handler] = [stdout_handler, stderr_handler]

    if log_to_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )


async def main() -> None:
    if len(sys.argv) != 1:
        print("Usage: python run.py")
        sys.exit(1)

    setup_logging()

    from price_recorder.scheduler.service import main as run_service

    await run_service()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(0)
    except Exception as e:
        print(f"Application failed: {e}", file=sys.stderr)
        sys.exit(1)
