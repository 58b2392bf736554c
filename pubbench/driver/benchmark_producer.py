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
from typing import Optional

from pubbench.errors import PublishError


class BenchmarkProducer(ABC):
    """
    BenchmarkProducer interface.

    One instance is shared by every worker of a run, so implementations must
    be safe to call from many threads at once.
    """

    # 单条消息最多等待多久确认（秒），None表示交给SDK自己的超时
    publish_timeout: Optional[float] = None

    # 异步发送消息
    @abstractmethod
    def send_async(self, payload: bytes) -> Future:
        """
        Publish a message and return a future tracking its acknowledgment.

        :param payload: the message payload
        :return: a future that completes when the backend acknowledged the message
        """
        pass

    def publish_once(self, payload: bytes):
        """
        Publish one payload and block until it is acknowledged.

        :param payload: the message payload
        :raises PublishError: if the backend reports a failure or the wait times out
        """
        try:
            future = self.send_async(payload)
            future.result(timeout=self.publish_timeout)
        except PublishError:
            raise
        except Exception as e:
            raise PublishError(f"Publish failed: {e}") from e

    @abstractmethod
    def close(self):
        """Close the producer and cleanup resources."""
        pass
