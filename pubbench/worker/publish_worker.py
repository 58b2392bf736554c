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
from typing import Callable, Optional

from pubbench.driver.benchmark_producer import BenchmarkProducer
from pubbench.errors import PublishError
from .commands.producer_work_assignment import ProducerWorkAssignment
from .latency_recorder import LatencyRecorder

logger = logging.getLogger(__name__)


class PublishWorker:
    """
    Closed-loop publisher: issues the next call only after the previous one returned.
    """

    def __init__(
        self,
        assignment: ProducerWorkAssignment,
        payload: bytes,
        producer: BenchmarkProducer,
        recorder: LatencyRecorder,
        abort_event: threading.Event,
        nano_clock: Optional[Callable[[], int]] = None
    ):
        """
        :param assignment: this worker's share of the messages
        :param payload: payload shared read-only by every worker
        :param producer: publisher shared by every worker
        :param recorder: shared latency recorder
        :param abort_event: set by the first failing worker, stops new calls everywhere
        :param nano_clock: Optional nanosecond clock function
        """
        self.assignment = assignment
        self.payload = payload
        self.producer = producer
        self.recorder = recorder
        self.abort_event = abort_event
        self.nano_clock = nano_clock if nano_clock is not None else time.perf_counter_ns

    def run(self) -> int:
        """
        Publish the assigned number of messages.

        :return: number of acknowledged messages
        :raises PublishError: on the first failed publish call
        """
        completed = 0
        for _ in range(self.assignment.message_count):
            # 其他worker失败了就不再发新消息
            if self.abort_event.is_set():
                break

            start = self.nano_clock()
            try:
                self.producer.publish_once(self.payload)
            except Exception as e:
                self.abort_event.set()
                logger.error(f"❌ Worker {self.assignment.worker_id} publish failed after {completed} messages: {e}")
                if isinstance(e, PublishError):
                    raise
                raise PublishError(f"Publish failed: {e}") from e
            elapsed = self.nano_clock() - start

            self.recorder.record(elapsed)
            completed += 1

        return completed
