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

import argparse
import json
import logging
import sys
from typing import List

from pubbench.benchmark_runner import BenchmarkRunner
from pubbench.driver import driver_registry
from pubbench.driver_configuration import DriverConfiguration
from pubbench.errors import BenchmarkError
from pubbench.report import format_report, to_dict
from pubbench.results_to_csv import ResultsToCsv
from pubbench.run_config import RunConfig
from pubbench.utils.env import Env

logger = logging.getLogger(__name__)

#   例子：
#   python -m pubbench --system kafka --servers localhost:9092 --messages 100000 --size 512 --concurrency 64
#   python -m pubbench -d nats.yaml -o result.json


class Benchmark:
    """Main benchmark application."""

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog="messaging-benchmark")
        parser.add_argument(
            "-c", "--csv",
            dest="results_dir",
            help="Print results from this directory to a csv file"
        )
        parser.add_argument(
            "-d", "--driver",
            help="Driver configuration file. eg.: kafka.yaml"
        )
        parser.add_argument(
            "-o", "--output",
            help="Write the result as JSON into this file"
        )
        parser.add_argument("--system", help="nats|kafka|pulsar")
        parser.add_argument(
            "--servers",
            help="bootstrap URLs. nats: nats://host:4222; kafka: host:9092; pulsar: pulsar://host:6650"
        )
        parser.add_argument("--topic", help="subject/topic")
        parser.add_argument(
            "--messages", type=int,
            default=Env.get_int("BENCH_MESSAGES", 100000),
            help="number of messages"
        )
        parser.add_argument(
            "--size", type=int,
            default=Env.get_int("BENCH_SIZE", 512),
            help="payload bytes"
        )
        parser.add_argument(
            "--concurrency", type=int,
            default=Env.get_int("BENCH_CONCURRENCY", 64),
            help="parallel publishers"
        )
        parser.add_argument("--partitions", type=int, help="kafka partitions to use/create")
        parser.add_argument("--js-replicas", dest="js_replicas", type=int, help="nats jetstream replicas")
        parser.add_argument("--pulsar-tenant", dest="pulsar_tenant", help="pulsar tenant")
        parser.add_argument("--pulsar-namespace", dest="pulsar_namespace", help="pulsar namespace")
        return parser

    @staticmethod
    def main(args: List[str] = None) -> int:
        """Main entry point."""
        if args is None:
            args = sys.argv[1:]

        arguments = Benchmark.build_parser().parse_args(args)

        # Handle CSV export mode
        if arguments.results_dir is not None:
            ResultsToCsv().write_all_result_files(arguments.results_dir)
            return 0

        logger.info(f"Starting benchmark with config: {json.dumps(vars(arguments), indent=2)}")

        try:
            driver_configuration = Benchmark._driver_configuration(arguments)
            run_config = RunConfig(
                messages=arguments.messages,
                message_size=arguments.size,
                concurrency=arguments.concurrency
            ).validate()
            metrics, label, extra_params = Benchmark.run(driver_configuration, run_config)
        except BenchmarkError as e:
            logger.error(f"Benchmark aborted: {e}")
            return 1
        except Exception as e:
            logger.error(f"Failed to run the benchmark for system '{arguments.system}'", exc_info=e)
            return 1

        for line in format_report(metrics, label, extra_params):
            print(line)

        if arguments.output:
            logger.info(f"Writing test result into {arguments.output}")
            with open(arguments.output, 'w') as f:
                json.dump(to_dict(metrics), f, indent=2)

        return 0

    @staticmethod
    def run(driver_configuration: DriverConfiguration, run_config: RunConfig):
        """
        Provision the backend, run the benchmark and release the driver.

        :return: (metrics, backend label, backend report parameters)
        """
        logger.info(f"Driver configuration: {json.dumps(driver_configuration.to_dict())}")
        driver = driver_registry.create_driver(driver_configuration)
        try:
            topic = driver.get_topic_name(driver_configuration.topic)

            logger.info(f"--------------- SYSTEM : {driver_configuration.system} --- TOPIC : {topic} ---------------")

            driver.create_topic(topic, driver_configuration.partitions).result()
            producer = driver.create_producer(topic).result()

            runner = BenchmarkRunner(run_config, producer, system=driver_configuration.system)
            metrics = runner.run()
            return metrics, driver.label, driver.report_params()
        finally:
            driver.close()

    @staticmethod
    def _driver_configuration(arguments) -> DriverConfiguration:
        if arguments.driver:
            config = DriverConfiguration.load(arguments.driver)
        else:
            config = DriverConfiguration()

        # 命令行参数覆盖YAML文件
        overrides = {
            'system': arguments.system,
            'servers': arguments.servers,
            'topic': arguments.topic,
            'partitions': arguments.partitions,
            'js_replicas': arguments.js_replicas,
            'pulsar_tenant': arguments.pulsar_tenant,
            'pulsar_namespace': arguments.pulsar_namespace,
        }
        for name, value in overrides.items():
            if value is not None:
                setattr(config, name, value)

        return config.validate()
