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
LatencyRecorder - 所有worker共享的延迟收集器
一把锁保护：原始样本列表、HdrHistogram、发送/确认计数
"""

import threading
from typing import List

from hdrh.histogram import HdrHistogram

from .commands.counters_stats import CountersStats


class LatencyRecorder:
    """
    Append-only collector of per-call publish durations.

    Raw samples are kept in nanoseconds for the nearest-rank p50/p95. The same
    samples go into an HdrHistogram (microseconds) for the extended summary.
    """

    # 1us ~ 60s, 3位有效数字
    LOWEST_TRACKABLE_US = 1
    HIGHEST_TRACKABLE_US = 60 * 1_000_000
    SIGNIFICANT_FIGURES = 3

    def __init__(self):
        self._durations: List[int] = []
        self._histogram = HdrHistogram(
            self.LOWEST_TRACKABLE_US,
            self.HIGHEST_TRACKABLE_US,
            self.SIGNIFICANT_FIGURES
        )
        self._counters = CountersStats()
        self._lock = threading.Lock()

    def record(self, duration_ns: int):
        """
        Record one successful publish call.

        :param duration_ns: elapsed time of the call in nanoseconds
        """
        micros = min(max(duration_ns // 1000, self.LOWEST_TRACKABLE_US), self.HIGHEST_TRACKABLE_US)
        with self._lock:
            self._durations.append(duration_ns)
            self._histogram.record_value(micros)
            self._counters.messages_sent += 1
            self._counters.messages_acked += 1

    def snapshot(self) -> List[int]:
        """
        All samples recorded so far.

        Only valid once every worker has joined: returns the live list, not a copy.
        """
        return self._durations

    def histogram(self) -> HdrHistogram:
        return self._histogram

    def counters(self) -> CountersStats:
        with self._lock:
            return self._counters.copy()

    def __len__(self):
        with self._lock:
            return len(self._durations)
