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

from abc import ABC, abstractmethod
from concurrent.futures import Future

from pubbench.driver_configuration import DriverConfiguration


class BenchmarkDriver(ABC):
    """
    Base driver interface.

    Owns the backend connection and provisioning. The harness only ever sees
    the BenchmarkProducer it hands out.
    """

    # 报告里显示的backend名字
    label = "Benchmark"

    @abstractmethod
    def initialize(self, configuration: DriverConfiguration):
        """
        Connect the client libraries using the provided configuration.

        :param configuration: driver configuration
        """
        pass

    def get_topic_name(self, topic: str) -> str:
        """
        Map the configured topic to the backend-specific name.

        :param topic: configured topic / subject
        :return: the topic name used by the producer
        """
        return topic

    @abstractmethod
    def create_topic(self, topic: str, partitions: int) -> Future:
        """
        Create (or ensure) a topic.

        :param topic: Topic name
        :param partitions: Number of partitions
        :return: a future that completes when the topic is ready
        """
        pass

    @abstractmethod
    def create_producer(self, topic: str) -> Future:
        """
        Create a producer for a given topic.

        :param topic: Topic name
        :return: a producer future
        """
        pass

    def report_params(self) -> str:
        """Backend specific run parameters appended to the report header."""
        return ""

    @abstractmethod
    def close(self):
        """Close the driver and cleanup resources."""
        pass
