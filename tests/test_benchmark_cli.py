"""Tests for the command line entry point."""
from __future__ import annotations

import json

import pytest

from pubbench.benchmark import Benchmark
from pubbench.driver import driver_registry
from tests.conftest import FakeDriver, FakeProducer


@pytest.fixture
def fake_driver(monkeypatch) -> FakeDriver:
    driver = FakeDriver(FakeProducer())

    def create_driver(configuration):
        driver.initialize(configuration)
        return driver

    monkeypatch.setattr(driver_registry, "create_driver", create_driver)
    return driver


class TestBenchmarkMain:

    def test_prints_report(self, fake_driver: FakeDriver, capsys) -> None:
        code = Benchmark.main([
            "--system", "kafka", "--servers", "localhost:9092",
            "--messages", "40", "--size", "16", "--concurrency", "4",
            "--partitions", "3",
        ])

        assert code == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Fake | msgs=40 size=16B conc=4 fake=1"
        assert out[1].startswith("Throughput: ")
        assert out[2].startswith("Latency: p50=")

        assert fake_driver.producer.calls == 40
        assert fake_driver.created_topics == [("fake://bench", 3)]
        assert fake_driver.closed

    def test_writes_json_output(self, fake_driver: FakeDriver, tmp_path) -> None:
        output = tmp_path / "result.json"

        code = Benchmark.main([
            "--system", "nats", "--servers", "nats://localhost:4222",
            "--messages", "10", "--size", "8", "--concurrency", "2",
            "-o", str(output),
        ])

        assert code == 0
        result = json.loads(output.read_text())
        assert result['system'] == "nats"
        assert result['messagesAcked'] == 10
        assert result['messageSize'] == 8

    def test_yaml_driver_file_with_overrides(self, fake_driver: FakeDriver, tmp_path) -> None:
        path = tmp_path / "kafka.yaml"
        path.write_text("system: kafka\nservers: localhost:9092\ntopic: from-file\npartitions: 9\n")

        code = Benchmark.main(["-d", str(path), "--topic", "from-cli", "--messages", "5", "--concurrency", "1"])

        assert code == 0
        assert fake_driver.configuration.topic == "from-cli"
        assert fake_driver.configuration.partitions == 9

    def test_missing_servers(self, fake_driver: FakeDriver) -> None:
        assert Benchmark.main(["--system", "kafka", "--messages", "5"]) == 1
        assert fake_driver.producer.calls == 0

    def test_invalid_concurrency(self, fake_driver: FakeDriver) -> None:
        code = Benchmark.main(["--system", "kafka", "--servers", "localhost:9092", "--concurrency", "0"])

        assert code == 1
        assert fake_driver.producer.calls == 0

    def test_publish_failure_prints_no_report(self, fake_driver: FakeDriver, capsys) -> None:
        fake_driver.producer.fail_on_call = 2

        code = Benchmark.main([
            "--system", "kafka", "--servers", "localhost:9092",
            "--messages", "100", "--concurrency", "2",
        ])

        assert code == 1
        assert capsys.readouterr().out == ""
        assert fake_driver.closed

    def test_unknown_system(self) -> None:
        assert Benchmark.main(["--system", "rabbitmq", "--servers", "localhost"]) == 1

    def test_csv_mode(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        results = tmp_path / "results"
        results.mkdir()
        (results / "a.json").write_text(json.dumps({
            'system': 'kafka', 'messageSize': 512, 'concurrency': 64, 'publishRate': 1000.0,
            'publishLatency50pct': 1.0, 'publishLatency95pct': 2.0,
        }))

        assert Benchmark.main(["-c", str(results)]) == 0
        assert len(list(tmp_path.glob("results-*.csv"))) == 1

    def test_logs_resolved_driver_configuration(self, fake_driver: FakeDriver, caplog) -> None:
        caplog.set_level("INFO", logger="pubbench.benchmark")

        Benchmark.main(["--system", "kafka", "--servers", "localhost:9092", "--messages", "4", "--concurrency", "2"])

        messages = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Driver configuration:")]
        assert len(messages) == 1
        assert '"servers": "localhost:9092"' in messages[0]
        assert '"topic": "bench"' in messages[0]
