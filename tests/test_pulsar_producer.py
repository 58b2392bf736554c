"""Tests for the Pulsar publisher adapter and topic naming."""
from __future__ import annotations

import pytest

pulsar = pytest.importorskip("pulsar")

from pubbench.driver_configuration import DriverConfiguration  # noqa: E402
from pubbench.drivers.pulsar.pulsar_benchmark_driver import PulsarBenchmarkDriver  # noqa: E402
from pubbench.drivers.pulsar.pulsar_benchmark_producer import PulsarBenchmarkProducer  # noqa: E402
from pubbench.errors import PublishError  # noqa: E402


class FakePulsarProducer:

    def __init__(self, result):
        self.result = result
        self.sent = []
        self.closed = False

    def send_async(self, content, callback):
        self.sent.append(content)
        callback(self.result, "msg-id")

    def flush(self):
        pass

    def close(self):
        self.closed = True


class TestPulsarBenchmarkProducer:

    def test_publish_once(self) -> None:
        fake = FakePulsarProducer(pulsar.Result.Ok)
        producer = PulsarBenchmarkProducer(fake)

        producer.publish_once(b"hello")

        assert fake.sent == [b"hello"]

    def test_send_async_resolves_with_message_id(self) -> None:
        fake = FakePulsarProducer(pulsar.Result.Ok)
        future = PulsarBenchmarkProducer(fake).send_async(b"hello")

        assert future.result() == "msg-id"

    def test_broker_rejection(self) -> None:
        producer = PulsarBenchmarkProducer(FakePulsarProducer(pulsar.Result.Timeout))

        with pytest.raises(PublishError):
            producer.publish_once(b"hello")

    def test_close(self) -> None:
        fake = FakePulsarProducer(pulsar.Result.Ok)
        PulsarBenchmarkProducer(fake).close()

        assert fake.closed


class TestPulsarTopicName:

    def test_persistent_topic(self) -> None:
        driver = PulsarBenchmarkDriver()
        driver.config = DriverConfiguration.from_dict({'pulsarTenant': 'acme', 'pulsarNamespace': 'perf'})

        assert driver.get_topic_name("bench") == "persistent://acme/perf/bench"
