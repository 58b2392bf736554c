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

"""
Pulsar Benchmark Producer
"""

import logging
from concurrent.futures import Future

import pulsar

from pubbench.driver.benchmark_producer import BenchmarkProducer

logger = logging.getLogger(__name__)


class PulsarBenchmarkProducer(BenchmarkProducer):
    """
    Pulsar Benchmark Producer

    Wraps a Pulsar producer for benchmark use. The Pulsar client is thread
    safe, so one producer serves every worker.
    """

    def __init__(self, producer):
        """
        Initialize the benchmark producer.

        :param producer: Pulsar producer instance
        """
        self.producer = producer

    def send_async(self, payload: bytes) -> Future:
        """
        Send a message asynchronously.

        :param payload: Message payload
        :return: Future that completes when message is acknowledged
        """
        future = Future()

        def callback(res, msg_id):
            if res == pulsar.Result.Ok:
                future.set_result(msg_id)
            else:
                future.set_exception(RuntimeError(f"Send failed with result: {res}"))

        try:
            self.producer.send_async(payload, callback)
        except Exception as e:
            logger.error(f"Error sending message: {e}")
            future.set_exception(e)

        return future

    def close(self):
        """Close the producer."""
        if self.producer:
            self.producer.flush()
            self.producer.close()
