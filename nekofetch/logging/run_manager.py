"""Run-based log rotation manager.

Provides run lifecycle management for module-based logging. A "run" is a
logical unit of work (a CLI invocation or a test module) that triggers log
rotation on first write to each module's log file.

Usage:
    from nekofetch.logging import start_run, end_run

    start_run("fetch-abc123")  # Triggers rotation on first log to each module
    try:
        # ... do work ...
    finally:
        end_run()
"""

from contextvars import ContextVar

# Both must be ContextVars so concurrent async runs don't share state
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
_rotated_this_run: ContextVar[set[str] | None] = ContextVar("rotated_this_run", default=None)

# Module names don't change, so this cache is shared across runs
_module_log_cache: dict[str, str] = {}

# Mapping from module path prefixes to log file names
# Uses longest-prefix-match to resolve module paths to log names
# Unmapped modules go to "misc.log"
MODULE_TO_LOG = {
    # Image fetching
    "nekofetch.images": "images",
    "nekofetch.images.providers": "providers",
    "nekofetch.images.transport": "transport",
    "nekofetch.images.relay": "transport",
    "nekofetch.images.settings": "settings",
    # Shared infrastructure
    "nekofetch.utils": "utils",
    "nekofetch.config": "config",
    "nekofetch.logging": "logging-internal",
    # Entry points
    "scripts": "scripts",
    "testing": "testing",
}

_SORTED_PREFIXES = sorted(MODULE_TO_LOG.keys(), key=len, reverse=True)


def start_run(run_id: str) -> None:
    """Signal start of new run.

    Triggers log rotation on first log message to each module within this run.
    Safe to call multiple times - subsequent calls reset the rotation tracking.

    Args:
        run_id: Unique identifier for this run (e.g., CLI invocation, test name)
    """
    _current_run_id.set(run_id)
    _rotated_this_run.set(set())


def end_run() -> None:
    """Signal end of run.

    Best-effort cleanup - may not be called on crash. Rotation is triggered
    by start_run(), so missing end_run() calls don't affect correctness.
    """
    _current_run_id.set(None)
    _rotated_this_run.set(None)


def get_current_run_id() -> str | None:
    """Get the current run ID, if any."""
    return _current_run_id.get()


def should_rotate(log_name: str) -> bool:
    """Check if rotation is needed for this log file.

    Returns True if we're in a run and this log file hasn't been rotated yet
    in it. Also marks the log as rotated.

    Args:
        log_name: The log file name (without .log extension)
    """
    run_id = _current_run_id.get()
    rotated = _rotated_this_run.get()

    if run_id is None or rotated is None:
        return False

    if log_name in rotated:
        return False

    rotated.add(log_name)
    return True


def module_to_log_name(module_name: str) -> str:
    """Resolve module path to log filename.

    Uses longest-prefix-match against MODULE_TO_LOG mapping.
    Results are cached.

    Args:
        module_name: The __name__ of the module (e.g., "nekofetch.images.transport")

    Returns:
        Log file name without extension (e.g., "transport")
    """
    if module_name not in _module_log_cache:
        _module_log_cache[module_name] = _compute_log_name(module_name)
    return _module_log_cache[module_name]


def _compute_log_name(module_name: str) -> str:
    """Find longest matching prefix in MODULE_TO_LOG, or "misc"."""
    for prefix in _SORTED_PREFIXES:
        if module_name.startswith(prefix):
            return MODULE_TO_LOG[prefix]
    return "misc"
