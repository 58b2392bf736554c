"""Tests for the NATS JetStream publisher adapter."""
from __future__ import annotations

import asyncio
import threading

import pytest

pytest.importorskip("nats")

from pubbench.drivers.nats.nats_benchmark_producer import NatsBenchmarkProducer  # noqa: E402
from pubbench.errors import PublishError  # noqa: E402


class FakeJetStream:

    def __init__(self, error=None):
        self.error = error
        self.published = []

    async def publish(self, subject, payload):
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        self.published.append((subject, payload))
        return "ack"


@pytest.fixture
def event_loop_thread():
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    yield loop
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=5)
    loop.close()


class TestNatsBenchmarkProducer:

    def test_publish_once(self, event_loop_thread) -> None:
        js = FakeJetStream()
        producer = NatsBenchmarkProducer(js, "bench", event_loop_thread)

        producer.publish_once(b"hello")

        assert js.published == [("bench", b"hello")]

    def test_send_async_resolves_on_ack(self, event_loop_thread) -> None:
        js = FakeJetStream()
        producer = NatsBenchmarkProducer(js, "bench", event_loop_thread)

        assert producer.send_async(b"hello").result(timeout=5) == "ack"

    def test_publish_failure(self, event_loop_thread) -> None:
        producer = NatsBenchmarkProducer(FakeJetStream(error=TimeoutError("no ack")), "bench", event_loop_thread)

        with pytest.raises(PublishError):
            producer.publish_once(b"hello")
