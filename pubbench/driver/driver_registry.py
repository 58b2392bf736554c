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

import importlib
import logging
from enum import Enum

from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import ConfigurationError

logger = logging.getLogger(__name__)


class BackendType(Enum):
    NATS = 'nats'
    KAFKA = 'kafka'
    PULSAR = 'pulsar'

    @staticmethod
    def parse(value: str) -> 'BackendType':
        try:
            return BackendType(value.lower())
        except (ValueError, AttributeError):
            raise ConfigurationError(f"unknown system: {value}") from None


# 只导入选中backend的SDK
DRIVER_CLASSES = {
    BackendType.NATS: 'pubbench.drivers.nats.nats_benchmark_driver.NatsBenchmarkDriver',
    BackendType.KAFKA: 'pubbench.drivers.kafka.kafka_benchmark_driver.KafkaBenchmarkDriver',
    BackendType.PULSAR: 'pubbench.drivers.pulsar.pulsar_benchmark_driver.PulsarBenchmarkDriver',
}


def create_driver(configuration: DriverConfiguration):
    """Instantiate and initialize the driver for the configured backend."""
    backend = BackendType.parse(configuration.system)
    driver_class_name = DRIVER_CLASSES[backend]

    try:
        module_name, class_name = driver_class_name.rsplit('.', 1)
        module = importlib.import_module(module_name)
        driver_class = getattr(module, class_name)
    except ImportError as e:
        raise RuntimeError(f"Failed to load driver {driver_class_name}: {e}") from e

    logger.info(f"Using driver {driver_class_name}")
    driver = driver_class()
    try:
        driver.initialize(configuration)
    except Exception:
        # 初始化失败时释放已经建立的资源（事件循环、客户端）
        driver.close()
        raise
    return driver
