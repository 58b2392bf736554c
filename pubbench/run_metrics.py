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

# 测试的一些指标
from dataclasses import dataclass


@dataclass(frozen=True)
class RunMetrics:
    """Summary of a completed run. Created once after every worker joined."""

    system: str
    messages: int
    message_size: int
    concurrency: int

    elapsed_seconds: float
    messages_sent: int
    messages_acked: int

    # nearest-rank percentiles over the raw samples, nanoseconds
    publish_latency_50pct_ns: int
    publish_latency_95pct_ns: int

    # HdrHistogram summary, microseconds
    publish_latency_avg_us: float = 0.0
    publish_latency_99pct_us: int = 0
    publish_latency_999pct_us: int = 0
    publish_latency_max_us: int = 0

    @property
    def total_bytes(self) -> int:
        return self.messages_acked * self.message_size

    @property
    def throughput_msgs(self) -> float:
        """Messages per second."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.messages_acked / self.elapsed_seconds

    @property
    def throughput_mb(self) -> float:
        """Decimal megabytes per second."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.total_bytes / 1e6 / self.elapsed_seconds
