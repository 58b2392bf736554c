"""Shared fakes for the benchmark tests."""
from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import List, Optional

import pytest

from pubbench.driver.benchmark_driver import BenchmarkDriver
from pubbench.driver.benchmark_producer import BenchmarkProducer


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self):
        self.now = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            return self.now

    def advance(self, nanos: int):
        with self._lock:
            self.now += nanos


class FakeProducer(BenchmarkProducer):
    """In-memory publisher; optionally fails on the n-th call (1-based)."""

    def __init__(self, fail_on_call: Optional[int] = None, clock: Optional[FakeClock] = None,
                 delays: Optional[List[int]] = None):
        self.fail_on_call = fail_on_call
        self.clock = clock
        self.delays = delays
        self.calls = 0
        self.payloads = []
        self.closed = False
        self._lock = threading.Lock()

    def send_async(self, payload):
        future = Future()
        with self._lock:
            self.calls += 1
            call = self.calls
            self.payloads.append(payload)

        if self.clock is not None and self.delays:
            self.clock.advance(self.delays[(call - 1) % len(self.delays)])

        if self.fail_on_call is not None and call >= self.fail_on_call:
            future.set_exception(ConnectionError("broker unavailable"))
        else:
            future.set_result(None)
        return future

    def close(self):
        self.closed = True


class FakeDriver(BenchmarkDriver):

    label = "Fake"

    def __init__(self, producer: FakeProducer):
        self.producer = producer
        self.configuration = None
        self.created_topics = []
        self.closed = False

    def initialize(self, configuration):
        self.configuration = configuration

    def get_topic_name(self, topic):
        return f"fake://{topic}"

    def create_topic(self, topic, partitions):
        self.created_topics.append((topic, partitions))
        future = Future()
        future.set_result(None)
        return future

    def create_producer(self, topic):
        future = Future()
        future.set_result(self.producer)
        return future

    def report_params(self):
        return "fake=1"

    def close(self):
        self.closed = True


@pytest.fixture
def fake_producer() -> FakeProducer:
    return FakeProducer()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
