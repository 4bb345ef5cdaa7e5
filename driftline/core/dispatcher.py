"""Launch-and-detach execution of delivery coroutines.

Each call to ``spawn`` starts one independent unit of work and returns
immediately. Units are never queued, batched or ordered relative to each
other; their results are discarded. Strong references are held until a
unit finishes so the event loop cannot garbage-collect a pending task.

Inside a running event loop a unit is an ``asyncio.Task``. Called from
plain synchronous code (no running loop) a unit runs on its own daemon
thread with a private event loop.
"""

import asyncio
import logging
import threading
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

CoroutineFactory = Callable[[], Awaitable[None]]


class BackgroundDispatcher:
    """Fire-and-forget runner for delivery coroutines.

    Usage:
        dispatcher = BackgroundDispatcher()
        dispatcher.spawn(lambda: send(event))
        ...
        await dispatcher.drain()  # at shutdown
    """

    def __init__(self, name: str = "driftline") -> None:
        """Initialize with no in-flight work."""
        self._name = name
        self._tasks: set[asyncio.Task[None]] = set()
        self._threads: set[threading.Thread] = set()
        self._lock = threading.Lock()

    @property
    def pending(self) -> int:
        """Number of units that have not finished yet."""
        with self._lock:
            return len(self._tasks) + len(self._threads)

    def spawn(self, factory: CoroutineFactory) -> None:
        """Start ``factory()`` in the background and return immediately."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._spawn_thread(factory)
            return

        task = loop.create_task(self._run(factory), name=f"{self._name}-send")
        with self._lock:
            self._tasks.add(task)
        task.add_done_callback(self._discard_task)

    async def drain(self) -> None:
        """Wait until every unit spawned so far has finished.

        Never raises on behalf of a unit; failures were already logged.
        """
        while True:
            with self._lock:
                tasks = list(self._tasks)
                threads = list(self._threads)
            if not tasks and not threads:
                return
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)
            for thread in threads:
                await asyncio.to_thread(thread.join)
            # Pick up anything spawned while waiting.
            await asyncio.sleep(0)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run(self, factory: CoroutineFactory) -> None:
        try:
            await factory()
        except Exception:
            logger.error("[%s] Background delivery failed", self._name, exc_info=True)

    def _discard_task(self, task: "asyncio.Task[None]") -> None:
        with self._lock:
            self._tasks.discard(task)

    def _spawn_thread(self, factory: CoroutineFactory) -> None:
        thread = threading.Thread(
            target=self._run_in_thread,
            args=(factory,),
            name=f"{self._name}-send",
            daemon=True,
        )
        with self._lock:
            self._threads.add(thread)
        thread.start()

    def _run_in_thread(self, factory: CoroutineFactory) -> None:
        try:
            asyncio.run(self._run(factory))
        finally:
            with self._lock:
                self._threads.discard(threading.current_thread())
