from typing import List

from pubbench.errors import ConfigurationError
from pubbench.worker.commands.producer_work_assignment import ProducerWorkAssignment


class WorkPartition:

    @staticmethod
    def partition(total: int, worker_count: int) -> List[int]:
        """
        Split a message count as evenly as possible across workers.

        The first ``total % worker_count`` workers get one extra message.

        :param total: total number of messages
        :param worker_count: number of concurrent workers
        :return: per-worker message counts, summing to ``total``
        """
        if worker_count < 1:
            raise ConfigurationError(f"worker count must be >= 1, got {worker_count}")
        if total < 0:
            raise ConfigurationError(f"total must be >= 0, got {total}")

        base, remainder = divmod(total, worker_count)
        return [base + 1 if i < remainder else base for i in range(worker_count)]

    @staticmethod
    def create_assignments(total: int, worker_count: int) -> List[ProducerWorkAssignment]:
        return [
            ProducerWorkAssignment(worker_id, count)
            for worker_id, count in enumerate(WorkPartition.partition(total, worker_count))
        ]
