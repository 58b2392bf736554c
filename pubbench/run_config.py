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

from dataclasses import dataclass

from pubbench.errors import ConfigurationError


@dataclass(frozen=True)
class RunConfig:
    """Parameters of one run. Supplied once at start, never mutated."""

    # 总消息数
    messages: int = 100000

    # 每条消息的字节数
    message_size: int = 512

    # 并发publisher数量
    concurrency: int = 64

    def validate(self) -> 'RunConfig':
        if self.concurrency < 1:
            raise ConfigurationError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.messages < 0:
            raise ConfigurationError(f"messages must be >= 0, got {self.messages}")
        if self.message_size < 0:
            raise ConfigurationError(f"message size must be >= 0, got {self.message_size}")
        return self

    @property
    def total_bytes(self) -> int:
        return self.messages * self.message_size
