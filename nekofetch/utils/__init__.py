"""Core utilities for async HTTP clients and cancellation."""

from .async_context import AsyncContextManager, OperationCancelled, run_cancellable
from .async_http_client import (
    BaseAsyncHttpClient,
    cleanup_all_clients,
    register_cleanup,
)

__all__ = [
    "AsyncContextManager",
    "OperationCancelled",
    "run_cancellable",
    "BaseAsyncHttpClient",
    "cleanup_all_clients",
    "register_cleanup",
]
