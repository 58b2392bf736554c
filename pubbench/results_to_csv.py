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

import json
import logging
import os
import time
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from hdrh.histogram import HdrHistogram

logger = logging.getLogger(__name__)


class ResultsToCsv:
    """
    Aggregate result JSON files into one CSV.

    Repeated runs of the same (system, message size, concurrency) are folded
    into one line with min/avg/std-dev/max of the publish rate.
    """

    HEADER = (
        "system,message-size,concurrency,runs,"
        + "prod-rate-min,prod-rate-avg,prod-rate-std-dev,prod-rate-max,"
        + "p50-ms-avg,p95-ms-avg"
    )

    def write_all_result_files(self, directory: str, output_file: Optional[str] = None) -> str:
        dir_path = Path(directory)
        if not dir_path.is_dir():
            raise ValueError(f"Not a directory: {directory}")

        results = []
        for file_path in sorted(dir_path.iterdir()):
            if file_path.is_file() and file_path.suffix == ".json":
                with open(file_path, 'r') as f:
                    results.append(json.load(f))

        lines = [self.HEADER]
        for key, group in self.group_results(results).items():
            lines.append(self.extract_results(key, group))

        results_file_name = output_file or f"results-{int(time.time())}.csv"
        with open(results_file_name, 'w') as writer:
            for line in lines:
                writer.write(line + os.linesep)

        logger.info(f"Results extracted into CSV {results_file_name}")
        return results_file_name

    @staticmethod
    def group_results(results: List[dict]) -> Dict[Tuple[str, int, int], List[dict]]:
        ordered = sorted(
            results,
            key=lambda r: (r.get('system', ''), r.get('messageSize', 0), r.get('concurrency', 0))
        )
        groups: Dict[Tuple[str, int, int], List[dict]] = OrderedDict()
        for r in ordered:
            key = (r.get('system', ''), r.get('messageSize', 0), r.get('concurrency', 0))
            groups.setdefault(key, []).append(r)
        return groups

    @staticmethod
    def extract_results(key: Tuple[str, int, int], group: List[dict]) -> str:
        system, message_size, concurrency = key

        rates = [max(int(r.get('publishRate', 0)), 0) for r in group]

        # 上限按数据取，record_value超出范围会静默丢值
        rate_histogram = HdrHistogram(1, max(max(rates), 2), 3)
        for rate in rates:
            if not rate_histogram.record_value(rate):
                raise ValueError(f"Publish rate {rate} out of histogram range for {key}")

        p50_avg = sum(r.get('publishLatency50pct', 0.0) for r in group) / len(group)
        p95_avg = sum(r.get('publishLatency95pct', 0.0) for r in group) / len(group)

        return (
            f"{system},"
            f"{message_size},"
            f"{concurrency},"
            f"{len(group)},"
            f"{rate_histogram.get_min_value()},"
            f"{rate_histogram.get_mean_value():.0f},"
            f"{rate_histogram.get_stddev():.2f},"
            f"{rate_histogram.get_max_value()},"
            f"{p50_avg:.3f},"
            f"{p95_avg:.3f}"
        )
