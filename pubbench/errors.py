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

# 所有错误都是致命的：没有可恢复的错误类型


class BenchmarkError(RuntimeError):
    """Base class for every failure that aborts a benchmark run."""


class ConfigurationError(BenchmarkError):
    """Invalid run or driver configuration, detected before any worker starts."""


class PayloadGenerationError(BenchmarkError):
    """The random source could not supply the payload bytes."""


class PublishError(BenchmarkError):
    """A publish call failed; the whole run is invalidated."""
