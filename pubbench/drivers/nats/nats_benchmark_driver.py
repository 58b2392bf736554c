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

import asyncio
import logging
import threading
from concurrent.futures import Future

import nats
from nats.js.api import RetentionPolicy, StorageType, StreamConfig

from pubbench.driver.benchmark_driver import BenchmarkDriver
from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import ConfigurationError
from .nats_benchmark_producer import NatsBenchmarkProducer

logger = logging.getLogger(__name__)


class NatsBenchmarkDriver(BenchmarkDriver):
    """NATS JetStream implementation of BenchmarkDriver using nats-py."""

    label = "NATS JetStream"

    STREAM_NAME = "S_BENCH"
    CLIENT_NAME = "bench-nats"
    CONNECT_TIMEOUT_S = 30

    def __init__(self):
        self.config = None
        self.nc = None
        self.js = None
        self.loop = None
        self.loop_thread = None

    def initialize(self, configuration: DriverConfiguration):
        if not configuration.servers:
            raise ConfigurationError("servers required")

        self.config = configuration

        # nats-py的所有操作都跑在这个后台事件循环上
        self.loop = asyncio.new_event_loop()
        self.loop_thread = threading.Thread(
            target=self.loop.run_forever,
            name="nats-event-loop",
            daemon=True
        )
        self.loop_thread.start()

        servers = [s.strip() for s in configuration.servers.split(',') if s.strip()]
        self.nc = self._run(nats.connect(
            servers=servers,
            name=self.CLIENT_NAME,
            connect_timeout=self.CONNECT_TIMEOUT_S,
        ))
        self.js = self.nc.jetstream()
        logger.info(f"Connected to NATS servers {servers}")

    def _run(self, coro):
        return asyncio.run_coroutine_threadsafe(coro, self.loop).result()

    def create_topic(self, topic: str, partitions: int) -> Future:
        """Ensure the JetStream stream; failures are logged and ignored."""
        future = Future()

        stream_config = StreamConfig(
            name=self.STREAM_NAME,
            subjects=[topic],
            num_replicas=self.config.js_replicas,
            storage=StorageType.FILE,
            retention=RetentionPolicy.LIMITS,
        )
        try:
            self._run(self.js.add_stream(stream_config))
            logger.info(f"✅ Stream {self.STREAM_NAME} ready for subject {topic} (replicas={self.config.js_replicas})")
        except Exception as e:
            logger.warning(f"⚠️  Could not create stream {self.STREAM_NAME}: {e}")

        future.set_result(None)
        return future

    def create_producer(self, topic: str) -> Future:
        future = Future()
        future.set_result(NatsBenchmarkProducer(self.js, topic, self.loop))
        return future

    def report_params(self) -> str:
        return f"replicas={self.config.js_replicas}"

    def close(self):
        if self.nc is not None:
            try:
                self._run(self.nc.drain())
            except Exception as e:
                logger.warning(f"Error draining NATS connection: {e}")
            self.nc = None

        if self.loop is not None:
            self.loop.call_soon_threadsafe(self.loop.stop)
            self.loop_thread.join(timeout=5)
            self.loop.close()
            self.loop = None
