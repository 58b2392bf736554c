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
from concurrent.futures import Future

from confluent_kafka import KafkaException, Producer

from pubbench.driver.benchmark_producer import BenchmarkProducer

logger = logging.getLogger(__name__)


class KafkaBenchmarkProducer(BenchmarkProducer):
    """
    Kafka producer implementation using confluent-kafka.

    confluent-kafka delivers acknowledgments through callbacks served by
    ``poll()``; a background thread keeps polling so that concurrent
    ``publish_once`` callers only wait on their own future.
    """

    POLL_INTERVAL_S = 0.05

    def __init__(self, topic: str, properties: dict, producer_factory=Producer):
        self.topic = topic
        self.producer = producer_factory(properties)
        self._closed = threading.Event()
        self._poll_thread = threading.Thread(
            target=self._poll_loop,
            name=f"kafka-poll-{topic}",
            daemon=True
        )
        self._poll_thread.start()

    def _poll_loop(self):
        while not self._closed.is_set():
            self.producer.poll(self.POLL_INTERVAL_S)

    def send_async(self, payload: bytes) -> Future:
        """
        Send message asynchronously.

        :param payload: Message payload
        :return: Future resolved by the delivery report
        """
        future = Future()

        def delivery_callback(err, msg):
            if err:
                future.set_exception(KafkaException(err))
            else:
                future.set_result(None)

        try:
            self.producer.produce(
                topic=self.topic,
                value=payload,
                on_delivery=delivery_callback
            )
        except (KafkaException, BufferError) as e:
            future.set_exception(e)

        return future

    def close(self):
        """Stop polling and flush pending messages."""
        self._closed.set()
        self._poll_thread.join(timeout=5)
        remaining = self.producer.flush(10)
        if remaining:
            logger.warning(f"⚠️  {remaining} messages still undelivered after flush")
