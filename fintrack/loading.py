"""Mini README: Simulated delayed data loads for dashboard widgets.

Structure:
    * SimulatedLoad - cancellable timer delivering a payload after a delay.

Chart widgets mimic a remote fetch by waiting a fixed delay before handing
their data to the view. If the view is torn down first it cancels the load,
after which the callback never runs, even when the timer has already fired
on its own thread.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Callable, Generic, Optional, TypeVar

from .logging_utils import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


class SimulatedLoad(Generic[T]):
    """Deliver ``loader()`` to ``callback`` after ``delay_seconds``."""

    def __init__(
        self,
        delay_seconds: float,
        loader: Callable[[], T],
        callback: Callable[[T], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self.delay_seconds = delay_seconds
        self._loader = loader
        self._callback = callback
        self._on_error = on_error
        self._lock = threading.Lock()
        self._cancelled = False
        self._delivered = False
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def delivered(self) -> bool:
        return self._delivered

    def start(self) -> "SimulatedLoad[T]":
        if self._timer is not None:
            raise RuntimeError("Load already started.")
        self._timer = threading.Timer(self.delay_seconds, self._fire)
        self._timer.daemon = True
        self._timer.start()
        return self

    def cancel(self) -> None:
        """Tear down the load; pending or in-flight results are discarded."""

        with self._lock:
            self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._timer is not None:
            self._timer.join(timeout)

    def _fire(self) -> None:
        try:
            payload = self._loader()
        except Exception as error:
            LOGGER.error("Simulated load failed: %s", error)
            if self._on_error is None:
                raise
            with self._lock:
                cancelled = self._cancelled
            if not cancelled:
                self._on_error(error)
            return
        with self._lock:
            if self._cancelled:
                LOGGER.debug("Discarding load result for a torn-down view")
                return
            self._delivered = True
        # Callbacks run outside the lock so they may cancel their own load.
        self._callback(payload)


async def load_after_delay(delay_seconds: float, loader: Callable[[], T]) -> T:
    """Await a ``SimulatedLoad`` from async code, cancelling it if the caller goes away."""

    loop = asyncio.get_running_loop()
    future: "asyncio.Future[T]" = loop.create_future()

    def _resolve(payload: T) -> None:
        if not future.done():
            future.set_result(payload)

    def _reject(error: Exception) -> None:
        if not future.done():
            future.set_exception(error)

    load = SimulatedLoad(
        delay_seconds,
        loader,
        lambda payload: loop.call_soon_threadsafe(_resolve, payload),
        lambda error: loop.call_soon_threadsafe(_reject, error),
    ).start()
    try:
        return await future
    except asyncio.CancelledError:
        load.cancel()
        raise
