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
from concurrent.futures import Future

from confluent_kafka.admin import AdminClient, NewTopic

from pubbench.driver.benchmark_driver import BenchmarkDriver
from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import ConfigurationError
from .kafka_benchmark_producer import KafkaBenchmarkProducer

logger = logging.getLogger(__name__)


class KafkaBenchmarkDriver(BenchmarkDriver):
    """Kafka implementation of BenchmarkDriver using confluent-kafka."""

    label = "Kafka"

    # 每条消息都等所有副本确认，不做批量
    DEFAULT_PRODUCER_PROPERTIES = {
        'acks': 'all',
        'linger.ms': 0,
        'batch.num.messages': 1,
        'enable.idempotence': False,
    }

    def __init__(self):
        self.config = None
        self.common_properties = {}
        self.producer_properties = {}
        self.producers = []
        self.admin = None

    def initialize(self, configuration: DriverConfiguration):
        """Initialize Kafka driver."""
        if not configuration.servers:
            raise ConfigurationError("servers required")

        self.config = configuration
        self.common_properties = {'bootstrap.servers': configuration.servers}

        self.producer_properties = dict(self.common_properties)
        self.producer_properties.update(self.DEFAULT_PRODUCER_PROPERTIES)
        self.producer_properties.update(configuration.producer_properties)

        self.admin = AdminClient(self.common_properties)
        logger.info(f"Kafka producer properties: {self.producer_properties}")

    def create_topic(self, topic: str, partitions: int) -> Future:
        """Best-effort topic creation; an existing topic is fine."""
        future = Future()

        new_topic = NewTopic(
            topic,
            num_partitions=partitions,
            replication_factor=self.config.replication_factor
        )

        try:
            fs = self.admin.create_topics([new_topic])
            for name, f in fs.items():
                try:
                    f.result()
                    logger.info(
                        f"✅ Created topic: {name} (partitions={partitions}, "
                        f"replication={self.config.replication_factor})"
                    )
                except Exception as e:
                    if "already exists" in str(e) or "TOPIC_ALREADY_EXISTS" in str(e):
                        logger.info(f"⚠️  Topic {name} already exists, skipping creation")
                    else:
                        # auto-create may still succeed on first publish
                        logger.warning(f"⚠️  Could not create topic {name}: {e}")
            future.set_result(None)
        except Exception as e:
            logger.warning(f"⚠️  Topic creation request failed: {e}")
            future.set_result(None)

        return future

    def create_producer(self, topic: str) -> Future:
        future = Future()

        try:
            producer = KafkaBenchmarkProducer(topic, self.producer_properties.copy())
            self.producers.append(producer)
            future.set_result(producer)
        except Exception as e:
            future.set_exception(e)

        return future

    def report_params(self) -> str:
        return f"partitions~{self.config.partitions}"

    def close(self):
        for producer in self.producers:
            try:
                producer.close()
            except Exception as e:
                logger.warning(f"Error closing producer: {e}")
        self.producers.clear()
