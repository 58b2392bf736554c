"""Tests for backend selection."""
from __future__ import annotations

import pytest

from pubbench.benchmark import Benchmark
from pubbench.driver.driver_registry import DRIVER_CLASSES, BackendType, create_driver
from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import ConfigurationError
from tests.conftest import FakeDriver, FakeProducer


class TestBackendType:

    @pytest.mark.parametrize("value,expected", [
        ("nats", BackendType.NATS),
        ("KAFKA", BackendType.KAFKA),
        ("Pulsar", BackendType.PULSAR),
    ])
    def test_parse(self, value: str, expected: BackendType) -> None:
        assert BackendType.parse(value) is expected

    @pytest.mark.parametrize("value", ["rabbitmq", "", None])
    def test_unknown(self, value) -> None:
        with pytest.raises(ConfigurationError):
            BackendType.parse(value)

    def test_every_backend_has_a_driver(self) -> None:
        assert set(DRIVER_CLASSES) == set(BackendType)


class TestCreateDriver:

    def test_unknown_system(self) -> None:
        config = DriverConfiguration()
        config.system = "zeromq"
        config.servers = "tcp://localhost:5555"

        with pytest.raises(ConfigurationError):
            create_driver(config)

    def test_driver_closed_when_initialize_fails(self, monkeypatch) -> None:
        monkeypatch.setitem(DRIVER_CLASSES, BackendType.NATS, f"{__name__}.HalfInitializedDriver")
        HalfInitializedDriver.instances.clear()
        config = DriverConfiguration.from_dict({'system': 'nats', 'servers': 'nats://localhost:4222'})

        with pytest.raises(ConnectionRefusedError):
            create_driver(config)

        driver, = HalfInitializedDriver.instances
        assert driver.resources == []
        assert driver.closed

    def test_cli_exit_code_when_initialize_fails(self, monkeypatch) -> None:
        monkeypatch.setitem(DRIVER_CLASSES, BackendType.NATS, f"{__name__}.HalfInitializedDriver")
        HalfInitializedDriver.instances.clear()

        code = Benchmark.main(["--system", "nats", "--servers", "nats://localhost:4222", "--messages", "5"])

        assert code == 1
        driver, = HalfInitializedDriver.instances
        assert driver.closed


class HalfInitializedDriver(FakeDriver):
    """Acquires a resource in initialize() and then fails to connect."""

    instances = []

    def __init__(self):
        super().__init__(FakeProducer())
        self.resources = []
        HalfInitializedDriver.instances.append(self)

    def initialize(self, configuration):
        self.resources.append("event-loop")
        raise ConnectionRefusedError("connect refused")

    def close(self):
        self.resources.clear()
        super().close()
