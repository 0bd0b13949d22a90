"""nekofetch configuration and environment setup.

This module provides centralized configuration for nekofetch, including
development mode detection and log handler installation.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from nekofetch.logging import ModuleDispatchHandler, ThirdPartyHandler, start_run

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that belong to this project; everything else is third-party
_PROJECT_PREFIXES = ("nekofetch", "scripts", "testing", "__main__")


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if NEKOFETCH_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("NEKOFETCH_MODE", "prod").lower() == "dev"


def get_log_dir() -> Path:
    """Get/create the log directory (NEKOFETCH_LOG_DIR, default: logs)."""
    log_dir = Path(os.getenv("NEKOFETCH_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


class _ProjectFilter(logging.Filter):
    def __init__(self, project: bool):
        super().__init__()
        self.project = project

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(_PROJECT_PREFIXES) == self.project


def configure_logging(run_id: str | None = None) -> None:
    """Install per-module file logging on the root logger.

    When NEKOFETCH_MODE=dev:
        - Root level is DEBUG

    When NEKOFETCH_MODE=prod (or unset):
        - Root level is INFO

    Project modules go to logs/<area>.log, third-party libraries to
    logs/run-3p.log. Calling this again replaces the handlers it installed.

    Args:
        run_id: Optional run identifier; starts a new logging run (rotation)
    """
    log_dir = get_log_dir()
    root = logging.getLogger()

    for handler in list(root.handlers):
        if isinstance(handler, (ModuleDispatchHandler, ThirdPartyHandler)):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    module_handler = ModuleDispatchHandler(log_dir)
    module_handler.setFormatter(formatter)
    module_handler.addFilter(_ProjectFilter(project=True))

    third_party_handler = ThirdPartyHandler(log_dir)
    third_party_handler.setFormatter(formatter)
    third_party_handler.addFilter(_ProjectFilter(project=False))

    root.addHandler(module_handler)
    root.addHandler(third_party_handler)
    root.setLevel(logging.DEBUG if is_dev_mode() else logging.INFO)

    if run_id:
        start_run(run_id)
