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
Pulsar Benchmark Driver
"""

import logging
from concurrent.futures import Future

import pulsar
import requests

from pubbench.driver.benchmark_driver import BenchmarkDriver
from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import ConfigurationError
from .pulsar_benchmark_producer import PulsarBenchmarkProducer

logger = logging.getLogger(__name__)


class PulsarBenchmarkDriver(BenchmarkDriver):
    """
    Pulsar Benchmark Driver

    Implements the benchmark driver interface for Apache Pulsar.
    """

    label = "Pulsar"

    OPERATION_TIMEOUT_S = 30
    CONNECTION_TIMEOUT_MS = 30_000

    def __init__(self):
        self.client = None
        self.config = None
        self.producers = []

    def initialize(self, configuration: DriverConfiguration):
        """
        Initialize the Pulsar driver.

        :param configuration: driver configuration
        """
        if not configuration.servers:
            raise ConfigurationError("servers required")

        self.config = configuration

        # admin地址可选，配置了才去建tenant/namespace
        if configuration.http_url:
            self._create_namespace_http(
                configuration.pulsar_tenant,
                f"{configuration.pulsar_tenant}/{configuration.pulsar_namespace}",
                configuration.http_url
            )

        self.client = pulsar.Client(
            configuration.servers,
            operation_timeout_seconds=self.OPERATION_TIMEOUT_S,
            connection_timeout_ms=self.CONNECTION_TIMEOUT_MS,
        )
        logger.info(f"Created Pulsar client for service URL {configuration.servers}")

    @staticmethod
    def _create_namespace_http(tenant: str, namespace: str, http_url: str):
        """
        Ensure tenant and namespace through the Pulsar admin REST API.
        Tenant creation is best-effort, namespace creation must succeed.
        """
        tenant_url = f"{http_url}/admin/v2/tenants/{tenant}"
        try:
            tenant_resp = requests.get(tenant_url, timeout=10)
            if tenant_resp.status_code == 404:
                logger.info(f"Tenant {tenant} not found, creating...")
                create_tenant_resp = requests.put(
                    tenant_url,
                    json={"allowedClusters": ["standalone"]},
                    timeout=10
                )
                if create_tenant_resp.status_code in (204, 409):
                    logger.info(f"✅ Tenant {tenant} created or already exists")
                else:
                    logger.warning(
                        f"⚠️  Failed to create tenant {tenant}: "
                        f"{create_tenant_resp.status_code} {create_tenant_resp.text}"
                    )
            elif tenant_resp.status_code == 200:
                logger.info(f"✅ Tenant {tenant} already exists")
        except requests.RequestException as e:
            logger.warning(f"⚠️  Could not verify/create tenant {tenant}: {e}")

        url = f"{http_url}/admin/v2/namespaces/{namespace}"
        try:
            resp = requests.put(url, timeout=10)
        except requests.RequestException as e:
            raise RuntimeError(f"Error creating namespace {namespace} via HTTP: {e}") from e

        # 204=created, 409=already exists
        if resp.status_code not in (204, 409):
            raise RuntimeError(f"Failed to create namespace {namespace}: {resp.status_code} {resp.text}")
        logger.info(f"✅ Namespace {namespace} is ready (created or already exists)")

    def get_topic_name(self, topic: str) -> str:
        return f"persistent://{self.config.pulsar_tenant}/{self.config.pulsar_namespace}/{topic}"

    def create_topic(self, topic: str, partitions: int) -> Future:
        """Pulsar creates non-partitioned topics on first use."""
        future = Future()
        future.set_result(None)
        return future

    def create_producer(self, topic: str) -> Future:
        future = Future()

        try:
            producer = self.client.create_producer(
                topic,
                batching_enabled=False,
                block_if_queue_full=True,
                send_timeout_millis=self.OPERATION_TIMEOUT_S * 1000,
            )
            benchmark_producer = PulsarBenchmarkProducer(producer)
            self.producers.append(benchmark_producer)
            future.set_result(benchmark_producer)
        except Exception as e:
            future.set_exception(e)

        return future

    def close(self):
        for producer in self.producers:
            try:
                producer.close()
            except Exception as e:
                logger.warning(f"Error closing producer: {e}")
        self.producers.clear()

        if self.client:
            self.client.close()
            self.client = None
