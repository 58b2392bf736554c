"""Tests for the shared latency recorder."""
from __future__ import annotations

import threading

import pytest

from pubbench.worker.latency_recorder import LatencyRecorder


class TestLatencyRecorder:

    def test_record_and_snapshot(self) -> None:
        recorder = LatencyRecorder()
        recorder.record(1_500)
        recorder.record(2_000_000)

        assert recorder.snapshot() == [1_500, 2_000_000]
        assert len(recorder) == 2

    def test_counters_follow_samples(self) -> None:
        recorder = LatencyRecorder()
        for _ in range(5):
            recorder.record(1_000)

        counters = recorder.counters()
        assert counters.messages_sent == 5
        assert counters.messages_acked == 5

    def test_histogram_in_microseconds(self) -> None:
        recorder = LatencyRecorder()
        recorder.record(250_000)  # 250us

        histogram = recorder.histogram()
        assert histogram.get_total_count() == 1
        assert histogram.get_max_value() == pytest.approx(250, rel=0.01)

    def test_sub_microsecond_sample_still_counted(self) -> None:
        recorder = LatencyRecorder()
        recorder.record(10)

        assert recorder.snapshot() == [10]
        assert recorder.histogram().get_total_count() == 1

    @pytest.mark.stress
    def test_concurrent_records_are_not_lost(self) -> None:
        recorder = LatencyRecorder()
        threads_count = 16
        per_thread = 2_000
        barrier = threading.Barrier(threads_count)

        def produce(offset: int) -> None:
            barrier.wait()
            for i in range(per_thread):
                recorder.record(offset * per_thread + i + 1)

        threads = [threading.Thread(target=produce, args=(t,)) for t in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snapshot = recorder.snapshot()
        assert len(snapshot) == threads_count * per_thread
        assert sorted(snapshot) == list(range(1, threads_count * per_thread + 1))
        assert recorder.counters().messages_acked == threads_count * per_thread
        assert recorder.histogram().get_total_count() == threads_count * per_thread
