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


class ProducerWorkAssignment:
    """Share of the total message count owned by one worker."""

    def __init__(self, worker_id: int, message_count: int):
        self.worker_id = worker_id
        self.message_count = message_count

    def is_empty(self) -> bool:
        return self.message_count == 0

    def __repr__(self):
        return f"ProducerWorkAssignment(worker_id={self.worker_id}, message_count={self.message_count})"
