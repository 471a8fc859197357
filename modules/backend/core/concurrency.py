"""
Concurrency Infrastructure.

Shared resources that bound how much work the client puts on its
collaborators at once:

    get_io_pool()        - thread pool for blocking file I/O (LocalBlobStore)
    get_semaphore(name)  - per-store limit on in-flight remote calls

Both are created on first use from config/settings/concurrency.yaml and
released by shutdown_pools() when the CLI session closes.
"""

import asyncio
import contextvars
from concurrent.futures import ThreadPoolExecutor

from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SEMAPHORE_CAPACITY = 20

_io_pool: ThreadPoolExecutor | None = None
_semaphores: dict[str, asyncio.Semaphore] = {}


class TracedThreadPoolExecutor(ThreadPoolExecutor):
    """Thread pool whose workers see the submitting task's contextvars.

    Log fields bound with structlog in the caller stay attached to log
    lines written from the worker thread.
    """

    def submit(self, fn, /, *args, **kwargs):
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


def get_io_pool() -> TracedThreadPoolExecutor:
    """Return the shared blocking-I/O pool, creating it on first call."""
    global _io_pool
    if _io_pool is None:
        from modules.backend.core.config import get_app_config
        max_workers = get_app_config().concurrency.thread_pool.max_workers
        _io_pool = TracedThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="blob-io")
        logger.info("Thread pool created", extra={"max_workers": max_workers})
    return _io_pool


def get_semaphore(name: str) -> asyncio.Semaphore:
    """Return the semaphore limiting calls to the store called ``name``.

    Capacity comes from ``semaphores.<name>`` in concurrency.yaml, or
    DEFAULT_SEMAPHORE_CAPACITY for a store that is not listed there.
    """
    semaphore = _semaphores.get(name)
    if semaphore is None:
        from modules.backend.core.config import get_app_config
        capacity = getattr(get_app_config().concurrency.semaphores, name, DEFAULT_SEMAPHORE_CAPACITY)
        semaphore = _semaphores[name] = asyncio.Semaphore(capacity)
        logger.debug("Semaphore created", extra={"name": name, "capacity": capacity})
    return semaphore


async def shutdown_pools() -> None:
    """Release the thread pool and forget all semaphores."""
    global _io_pool

    if _io_pool is not None:
        # shutdown(wait=True) blocks until workers finish
        await asyncio.to_thread(_io_pool.shutdown, wait=True)
        logger.info("Thread pool shut down")
        _io_pool = None

    _semaphores.clear()
