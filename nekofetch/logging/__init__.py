"""Module-based logging with run-based rotation.

Per-area log files that rotate at run boundaries (a CLI invocation or a
test module).

Usage:
    # At run entry points (CLI, tests):
    from nekofetch.logging import start_run, end_run

    start_run("fetch-123")
    try:
        # ... do work ...
    finally:
        end_run()

    # In modules:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("This goes to the appropriate area log file")

Log files are created in logs/:
    - logs/images.log, logs/transport.log, logs/settings.log, ...
    - logs/run-3p.log (all third-party libraries)
    - logs/*.previous.log (previous run's logs)
"""

from nekofetch.logging.handlers import ModuleDispatchHandler, ThirdPartyHandler
from nekofetch.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    module_to_log_name,
    start_run,
)

__all__ = [
    "start_run",
    "end_run",
    "get_current_run_id",
    "module_to_log_name",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
