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
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pubbench.errors import ConfigurationError

logger = logging.getLogger(__name__)


class DriverConfiguration:
    """
    Backend selection plus the provisioning parameters consumed by the drivers.

    Values can come from a YAML driver file (camelCase keys) and are then
    overridden by the command line flags.
    """

    def __init__(self):
        self.system = 'nats'
        self.servers = ''
        self.topic = 'bench'

        # kafka: topic partitions / replication factor
        self.partitions = 6
        self.replication_factor = 1

        # nats: JetStream stream replicas
        self.js_replicas = 3

        # pulsar: persistent://<tenant>/<namespace>/<topic>
        self.pulsar_tenant = 'public'
        self.pulsar_namespace = 'default'
        self.http_url: Optional[str] = None

        # 额外的producer配置，原样传给客户端SDK
        self.producer_properties: Dict[str, Any] = {}

    @staticmethod
    def load(path: str) -> 'DriverConfiguration':
        """Read a YAML driver file."""
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(f"Driver configuration file not found: {path}")

        with open(file_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Driver configuration must be a mapping: {path}")

        logger.info(f"Driver config: {data}")
        return DriverConfiguration.from_dict(data)

    @staticmethod
    def from_dict(data: dict) -> 'DriverConfiguration':
        config = DriverConfiguration()
        config.system = data.get('system', config.system)
        config.servers = data.get('servers', config.servers)
        config.topic = data.get('topic', config.topic)
        config.partitions = data.get('partitions', config.partitions)
        config.replication_factor = data.get('replicationFactor', config.replication_factor)
        config.js_replicas = data.get('jsReplicas', config.js_replicas)
        config.pulsar_tenant = data.get('pulsarTenant', config.pulsar_tenant)
        config.pulsar_namespace = data.get('pulsarNamespace', config.pulsar_namespace)
        config.http_url = data.get('httpUrl', config.http_url)

        producer_config = data.get('producerConfig', {})
        if isinstance(producer_config, str):
            config.producer_properties = DriverConfiguration.parse_properties(producer_config)
        else:
            config.producer_properties = dict(producer_config or {})
        return config

    def validate(self) -> 'DriverConfiguration':
        if not self.servers:
            raise ConfigurationError("servers required")
        if not self.topic:
            raise ConfigurationError("topic required")
        return self

    @staticmethod
    def parse_properties(config_str: str) -> dict:
        """Parse `key=value` lines, keeping the dots in the keys."""
        properties = {}
        if not config_str:
            return properties

        for line in config_str.strip().split('\n'):
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            try:
                value = int(value)
            except ValueError:
                try:
                    value = float(value)
                except ValueError:
                    if value.lower() == 'true':
                        value = True
                    elif value.lower() == 'false':
                        value = False

            properties[key] = value
        return properties

    def to_dict(self) -> dict:
        return {
            'system': self.system,
            'servers': self.servers,
            'topic': self.topic,
            'partitions': self.partitions,
            'replicationFactor': self.replication_factor,
            'jsReplicas': self.js_replicas,
            'pulsarTenant': self.pulsar_tenant,
            'pulsarNamespace': self.pulsar_namespace,
            'httpUrl': self.http_url,
        }
