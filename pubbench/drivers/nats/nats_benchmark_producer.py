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

import asyncio
from concurrent.futures import Future

from pubbench.driver.benchmark_producer import BenchmarkProducer


class NatsBenchmarkProducer(BenchmarkProducer):
    """
    JetStream publisher.

    nats-py is asyncio based: each publish is scheduled on the driver's event
    loop thread and the returned future resolves on the JetStream PubAck.
    """

    def __init__(self, jetstream, subject: str, loop: asyncio.AbstractEventLoop):
        self.jetstream = jetstream
        self.subject = subject
        self.loop = loop

    def send_async(self, payload: bytes) -> Future:
        return asyncio.run_coroutine_threadsafe(
            self.jetstream.publish(self.subject, payload),
            self.loop
        )

    def close(self):
        # 连接由driver统一drain
        pass
