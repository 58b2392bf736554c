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

# pubbench包对外暴露的类

from .benchmark import Benchmark
from .benchmark_runner import BenchmarkRunner
from .driver_configuration import DriverConfiguration
from .errors import BenchmarkError, ConfigurationError, PayloadGenerationError, PublishError
from .results_to_csv import ResultsToCsv
from .run_config import RunConfig
from .run_metrics import RunMetrics

__all__ = [
    'Benchmark',
    'BenchmarkRunner',
    'DriverConfiguration',
    'BenchmarkError',
    'ConfigurationError',
    'PayloadGenerationError',
    'PublishError',
    'ResultsToCsv',
    'RunConfig',
    'RunMetrics'
]
