"""Tests for API health endpoint behavior.

These tests validate the response contract and the call counter, including
concurrent calls handled on the worker thread pool.
"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from spaserver.api.application import create_api_application
from spaserver.config import SpaConfiguration
from spaserver.domain import RequestCounter


def _build_configuration(spa_dir: Path) -> SpaConfiguration:
    """Create test configuration object.

    Args:
        spa_dir: Existing static file directory.

    Returns:
        SpaConfiguration: Deterministic test configuration.

    Raises:
        ValueError: Raised by SpaConfiguration when values are invalid.
    """

    return SpaConfiguration(
        environment="test",
        spa_dir=spa_dir,
        http_port=":5500",
        http_rw_timeout_seconds=5,
        http_idle_timeout_seconds=15,
        http_cache_control=True,
    )


def test_api_health_returns_live_status_with_counter(tmp_path: Path) -> None:
    """Return HTTP 200 with `live` health and a string counter.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = TestClient(create_api_application(_build_configuration(tmp_path)))

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"health": "live", "counter": "1"}


def test_api_health_increments_counter_once_per_call(tmp_path: Path) -> None:
    """Increment the injected counter exactly once per request.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate counter behavior.

    Raises:
        AssertionError: Raised when calls are miscounted.
    """

    request_counter = RequestCounter()
    client = TestClient(create_api_application(_build_configuration(tmp_path), request_counter=request_counter))

    counters = [client.get("/api/health").json()["counter"] for _ in range(3)]

    assert counters == ["1", "2", "3"]
    assert request_counter.counter_value() == 3


def test_api_health_redirects_trailing_slash(tmp_path: Path) -> None:
    """Redirect `/api/health/` to the canonical route.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate slash handling.

    Raises:
        AssertionError: Raised when the trailing slash is not redirected.
    """

    client = TestClient(create_api_application(_build_configuration(tmp_path)))

    response = client.get("/api/health/", follow_redirects=False)

    assert response.status_code == 301
    assert response.headers["location"] == "/api/health"


def test_api_health_counts_concurrent_calls_without_lost_updates(tmp_path: Path) -> None:
    """Count 100 concurrent calls exactly.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate counter consistency.

    Raises:
        AssertionError: Raised when updates are lost or duplicated.
    """

    request_counter = RequestCounter()
    application = create_api_application(_build_configuration(tmp_path), request_counter=request_counter)

    async def _call_concurrently() -> list[str]:
        transport = httpx.ASGITransport(app=application)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            responses = await asyncio.gather(*(client.get("/api/health") for _ in range(100)))
        return [response.json()["counter"] for response in responses]

    counters = asyncio.run(_call_concurrently())

    assert request_counter.counter_value() == 100
    assert sorted(int(counter) for counter in counters) == list(range(1, 101))


def test_domain_request_counter_is_thread_safe() -> None:
    """Serialize increments coming from many threads.

    Returns:
        None: Assertions validate counter consistency.

    Raises:
        AssertionError: Raised when increments are lost.
    """

    request_counter = RequestCounter()
    start_barrier = threading.Barrier(8)

    def _increment_many() -> None:
        start_barrier.wait()
        for _ in range(1000):
            request_counter.counter_increment()

    threads = [threading.Thread(target=_increment_many) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert request_counter.counter_value() == 8000
