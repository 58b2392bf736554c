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

from typing import List

from pubbench.run_metrics import RunMetrics

# (单位纳秒数, 后缀, 小数位)
_DURATION_UNITS = [
    (1_000_000_000, "s", 9),
    (1_000_000, "ms", 6),
    (1_000, "µs", 3),
]


def format_duration(nanos: int) -> str:
    """Render a duration like ``1.234567ms``, ``850µs``, ``2.5s`` or ``1m5s``."""
    if nanos == 0:
        return "0s"

    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    # 一分钟以上按 1h2m3.5s 的格式
    if nanos >= 60 * 1_000_000_000:
        hours, rest = divmod(nanos, 3600 * 1_000_000_000)
        minutes, rest = divmod(rest, 60 * 1_000_000_000)
        seconds, fraction = divmod(rest, 1_000_000_000)
        text = f"{hours}h" if hours else ""
        text += f"{minutes}m{seconds}"
        if fraction:
            text += "." + f"{fraction:09d}".rstrip("0")
        return f"{sign}{text}s"

    for unit, suffix, decimals in _DURATION_UNITS:
        if nanos >= unit:
            value = f"{nanos / unit:.{decimals}f}".rstrip('0').rstrip('.')
            return f"{sign}{value}{suffix}"
    return f"{sign}{nanos}ns"


def format_report(metrics: RunMetrics, label: str, extra_params: str = "") -> List[str]:
    """
    Human readable summary of a run.

    :param metrics: the run metrics
    :param label: backend display name
    :param extra_params: backend specific parameters for the header line
    :return: report lines
    """
    header = f"{label} | msgs={metrics.messages} size={metrics.message_size}B conc={metrics.concurrency}"
    if extra_params:
        header = f"{header} {extra_params}"

    return [
        header,
        f"Throughput: {metrics.throughput_msgs:.0f} msg/s, {metrics.throughput_mb:.2f} MB/s",
        f"Latency: p50={format_duration(metrics.publish_latency_50pct_ns)} "
        f"p95={format_duration(metrics.publish_latency_95pct_ns)}",
    ]


def to_dict(metrics: RunMetrics) -> dict:
    """Convert RunMetrics to a dictionary for JSON serialization."""
    return {
        'system': metrics.system,
        'messages': metrics.messages,
        'messageSize': metrics.message_size,
        'concurrency': metrics.concurrency,
        'elapsedSeconds': metrics.elapsed_seconds,
        'messagesSent': metrics.messages_sent,
        'messagesAcked': metrics.messages_acked,
        'publishRate': metrics.throughput_msgs,
        'publishThroughputMB': metrics.throughput_mb,
        'publishLatency50pct': metrics.publish_latency_50pct_ns / 1_000_000,
        'publishLatency95pct': metrics.publish_latency_95pct_ns / 1_000_000,
        'publishLatencyAvg': metrics.publish_latency_avg_us / 1000,
        'publishLatency99pct': metrics.publish_latency_99pct_us / 1000,
        'publishLatency999pct': metrics.publish_latency_999pct_us / 1000,
        'publishLatencyMax': metrics.publish_latency_max_us / 1000,
    }
