# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Optional

from pubbench.driver.benchmark_producer import BenchmarkProducer
from pubbench.errors import PublishError
from pubbench.run_config import RunConfig
from pubbench.run_metrics import RunMetrics
from pubbench.utils.payload.random_payload import RandomPayload
from pubbench.utils.percentiles import percentiles
from pubbench.utils.timer import Timer
from pubbench.utils.work_partition import WorkPartition
from pubbench.worker.latency_recorder import LatencyRecorder
from pubbench.worker.publish_worker import PublishWorker

logger = logging.getLogger(__name__)


class BenchmarkRunner:
    """
    Runs one closed-loop publish benchmark against a single producer.

    The join on all workers is the only synchronization point: nothing is read
    from the recorder before every worker has finished.
    """

    def __init__(
        self,
        config: RunConfig,
        producer: BenchmarkProducer,
        system: str = "",
        nano_clock: Optional[Callable[[], int]] = None
    ):
        self.config = config
        self.producer = producer
        self.system = system
        self.nano_clock = nano_clock if nano_clock is not None else time.perf_counter_ns
        self.recorder = LatencyRecorder()

    def run(self) -> RunMetrics:
        """
        Publish ``config.messages`` messages with ``config.concurrency`` workers.

        :return: the run metrics
        :raises ConfigurationError: invalid run configuration
        :raises PayloadGenerationError: the payload could not be generated
        :raises PublishError: a publish call failed, no metrics are produced
        """
        self.config.validate()
        payload = RandomPayload.generate(self.config.message_size)

        timer = Timer(self.nano_clock)
        assignments = WorkPartition.create_assignments(self.config.messages, self.config.concurrency)

        # 分到0条消息的worker直接跳过
        active = [a for a in assignments if not a.is_empty()]
        abort_event = threading.Event()

        logger.info("=" * 80)
        logger.info(
            f"🚀 Starting {len(active)} publishers: msgs={self.config.messages} "
            f"size={self.config.message_size}B conc={self.config.concurrency}"
        )
        logger.info("=" * 80)

        if active:
            with ThreadPoolExecutor(max_workers=len(active), thread_name_prefix="publisher") as executor:
                futures = [
                    executor.submit(
                        PublishWorker(
                            assignment,
                            payload,
                            self.producer,
                            self.recorder,
                            abort_event,
                            self.nano_clock
                        ).run
                    )
                    for assignment in active
                ]
                # 失败时也要等正在进行中的调用返回
                wait(futures)

            errors = [f.exception() for f in futures if f.exception() is not None]
            if errors:
                logger.error(f"❌ Run aborted: {len(errors)} publisher(s) failed")
                first = errors[0]
                if isinstance(first, PublishError):
                    raise first
                raise PublishError(f"Publisher failed: {first}") from first

        timer.stop()
        elapsed_seconds = timer.elapsed_seconds()

        p50, p95 = percentiles(self.recorder.snapshot())
        counters = self.recorder.counters()
        histogram = self.recorder.histogram()
        has_samples = histogram.get_total_count() > 0

        metrics = RunMetrics(
            system=self.system,
            messages=self.config.messages,
            message_size=self.config.message_size,
            concurrency=self.config.concurrency,
            elapsed_seconds=elapsed_seconds,
            messages_sent=counters.messages_sent,
            messages_acked=counters.messages_acked,
            publish_latency_50pct_ns=p50,
            publish_latency_95pct_ns=p95,
            publish_latency_avg_us=histogram.get_mean_value() if has_samples else 0.0,
            publish_latency_99pct_us=histogram.get_value_at_percentile(99) if has_samples else 0,
            publish_latency_999pct_us=histogram.get_value_at_percentile(99.9) if has_samples else 0,
            publish_latency_max_us=histogram.get_max_value() if has_samples else 0,
        )

        logger.info(f"✅ Run completed in {elapsed_seconds:.3f}s, {metrics.messages_acked} messages acknowledged")
        return metrics
