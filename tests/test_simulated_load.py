"""Mini README: Tests for the cancellable simulated data load."""

from __future__ import annotations

import asyncio
import threading

from fintrack.loading import SimulatedLoad, load_after_delay


def test_load_delivers_payload_after_delay() -> None:
    received = []
    load = SimulatedLoad(0.01, lambda: [1, 2, 3], received.append).start()

    load.join(timeout=2)

    assert received == [[1, 2, 3]]
    assert load.delivered is True


def test_cancelled_load_never_calls_back() -> None:
    received = []
    load = SimulatedLoad(5.0, lambda: "late", received.append).start()

    load.cancel()
    load.join(timeout=2)

    assert load.cancelled is True
    assert received == []


def test_load_errors_reach_error_handler() -> None:
    errors = []

    def failing_loader() -> str:
        raise RuntimeError("backend unavailable")

    load = SimulatedLoad(0.0, failing_loader, lambda payload: None, on_error=errors.append).start()
    load.join(timeout=2)

    assert [str(error) for error in errors] == ["backend unavailable"]
    assert load.delivered is False


def test_async_helper_returns_loader_result() -> None:
    assert asyncio.run(load_after_delay(0.0, lambda: "ready")) == "ready"


def test_callback_may_cancel_its_own_load() -> None:
    finished = threading.Event()
    holder = {}

    def tear_down(payload: str) -> None:
        holder["load"].cancel()
        finished.set()

    holder["load"] = SimulatedLoad(0.0, lambda: "done", tear_down)
    holder["load"].start().join(timeout=2)

    assert finished.wait(2) is True
    assert holder["load"].delivered is True
    assert holder["load"].cancelled is True


def test_error_handler_may_cancel_its_own_load() -> None:
    finished = threading.Event()
    holder = {}

    def failing_loader() -> str:
        raise RuntimeError("backend unavailable")

    def on_error(error: Exception) -> None:
        holder["load"].cancel()
        finished.set()

    holder["load"] = SimulatedLoad(0.0, failing_loader, lambda payload: None, on_error=on_error)
    holder["load"].start().join(timeout=2)

    assert finished.wait(2) is True
    assert holder["load"].cancelled is True
