# Copyright 2016 Yelp Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
from __future__ import annotations

from typing import NamedTuple
from typing import TYPE_CHECKING

from .error import MissingDataError

if TYPE_CHECKING:
    from kafka_planner.reassignment.topic import Topic


class LogDir(NamedTuple):
    """Size of one partition replica as reported by the log directory of a
    broker. A non-empty error means the report can't be trusted.
    """
    broker_id: int
    partition_id: int
    size: float
    error: str | None = None

    @property
    def usable(self) -> bool:
        return not self.error


class Partition:
    """Class representing the partition object.
    It contains topic-partition_id tuple as name, topic, the ids of the
    brokers currently hosting its replicas and the log-dir reports.
    """

    def __init__(
        self,
        topic: Topic,
        id: int,
        replicas: list[int] | None = None,
        log_dirs: list[LogDir] | None = None,
    ) -> None:
        # Every partition name has (topic, partition) tuple
        self._name = (topic.id, id)
        self._topic = topic
        self._replicas = replicas or []
        self._log_dirs = log_dirs or []

    @property
    def name(self) -> tuple[str, int]:
        """Name of partition, consisting of (topic_id, partition_id) tuple."""
        return self._name

    @property
    def partition_id(self) -> int:
        """Partition id component of the partition-tuple."""
        return int(self._name[1])

    @property
    def topic(self) -> Topic:
        return self._topic

    @property
    def replicas(self) -> list[int]:
        """Ids of the brokers hosting the partition, preferred leader first."""
        return self._replicas

    @property
    def log_dirs(self) -> list[LogDir]:
        return self._log_dirs

    def count_replicas(self, broker_id: int) -> int:
        """Number of replicas of this partition hosted by the given broker."""
        return sum(1 for replica in self._replicas if replica == broker_id)

    def get_log_dir(self, broker_id: int, match_partition: bool = False) -> LogDir | None:
        """Return the first usable log-dir report of the given broker.

        :param match_partition: only accept reports whose partition id
            matches this partition.
        """
        for log_dir in self._log_dirs:
            if not log_dir.usable or log_dir.broker_id != broker_id:
                continue
            if match_partition and log_dir.partition_id != self.partition_id:
                continue
            return log_dir
        return None

    def estimate_size(self) -> float:
        """Estimate how much disk a new replica of this partition will use.

        A replica that was recently assigned may still be catching up and
        report a smaller size than it will end up with, so the largest
        reported size is used.
        """
        sizes = [log_dir.size for log_dir in self._log_dirs if log_dir.usable]
        if not sizes:
            raise MissingDataError(
                "No usable log-dir report for partition {topic}-{partition}, "
                "can't estimate replica size.".format(
                    topic=self._name[0],
                    partition=self._name[1],
                ),
                broker_id=None,
                partition=self._name,
            )
        return max(sizes)

    def __str__(self) -> str:
        return f"{self._name}"

    def __repr__(self) -> str:
        return f"{self}"
