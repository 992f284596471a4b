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
"""Per-broker usage counters used while planning a reassignment.

Keeping the counters on the broker avoids walking every topic, partition and
replica of the cluster each time a replica has to be placed.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable

from .broker import Broker
from .error import DataUnavailableError
from .error import MissingDataError
from .partition import Partition
from .snapshot import ClusterSnapshot


class ResetPolicy(enum.Enum):
    """What the reset phase does with the footprint of the selected
    partitions.

    SUBTRACT removes it from the initial counters.
    KEEP only verifies that it can be computed; initial stays equal to
    actual.
    """
    SUBTRACT = 'subtract'
    KEEP = 'keep'


class BrokerUsage:
    """Broker extended with usage tracking.

    :key-term:
    actual:   replicas and size hosted by the broker in the snapshot
    initial:  actual, minus what is about to be reassigned
    assigned: replicas and size given to the broker by the current plan
    """

    def __init__(self, broker: Broker, actual_replicas: int = 0, actual_size: float = 0) -> None:
        self._broker = broker
        self.actual_replicas = actual_replicas
        self.actual_size = actual_size
        self.initial_replicas = actual_replicas
        self.initial_size = actual_size
        self.assigned_replicas = 0
        self.assigned_size: float = 0
        self.log = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_snapshot(cls, broker: Broker, snapshot: ClusterSnapshot | None) -> BrokerUsage:
        """Compute the actual usage of a broker from the cluster snapshot.

        :raises: DataUnavailableError when the snapshot or the partitions of
            one of its topics can't be read.
        """
        if snapshot is None or snapshot.topics is None:
            raise DataUnavailableError(
                "Cannot compute usage of broker {broker}: cluster snapshot "
                "is not available (no permissions?)".format(broker=broker.id),
                broker_id=broker.id,
            )
        replicas = 0
        size: float = 0
        for topic_id, topic in snapshot.topics.items():
            if topic is None:
                raise DataUnavailableError(
                    "Cannot compute usage of broker {broker} for topic "
                    "{topic}: partitions are not available (no permissions?)"
                    .format(broker=broker.id, topic=topic_id),
                    broker_id=broker.id,
                    topic=topic_id,
                )
            for partition in topic.partitions:
                replicas += partition.count_replicas(broker.id)
                # A broker has at most one entry per partition, none if offline
                log_dir = partition.get_log_dir(broker.id)
                if log_dir is not None:
                    size += log_dir.size
        return cls(broker, replicas, size)

    @property
    def broker(self) -> Broker:
        return self._broker

    @property
    def id(self) -> int:
        return self._broker.id

    @property
    def rack(self) -> str | None:
        return self._broker.rack

    @property
    def total_replicas(self) -> int:
        """Replicas the broker will host once the plan is applied."""
        return self.initial_replicas + self.assigned_replicas

    @property
    def total_size(self) -> float:
        """Disk the broker will use once the plan is applied."""
        return self.initial_size + self.assigned_size

    def subtract(self, partitions: Iterable[Partition], policy: ResetPolicy = ResetPolicy.SUBTRACT) -> None:
        """Virtually remove the given partitions from the broker.

        Partitions the broker doesn't host contribute nothing and need no
        log-dir report.

        :raises: MissingDataError when the broker hosts one of the partitions
            but has no usable log-dir report for it.
        """
        delta_replicas = 0
        delta_size: float = 0
        for partition in partitions:
            replica_count = partition.count_replicas(self.id)
            if not replica_count:
                continue
            log_dir = partition.get_log_dir(self.id, match_partition=True)
            if log_dir is None:
                raise MissingDataError(
                    "Cannot find log-dir entry of partition {topic}-{partition} "
                    "on broker {broker}".format(
                        topic=partition.name[0],
                        partition=partition.name[1],
                        broker=self.id,
                    ),
                    broker_id=self.id,
                    partition=partition.name,
                )
            delta_replicas += replica_count
            delta_size += log_dir.size

        if policy is ResetPolicy.SUBTRACT:
            self.initial_replicas -= delta_replicas
            self.initial_size -= delta_size
        self.log.debug(
            "Broker %s reset by %s replicas, %s bytes (%s): initial %s replicas, %s bytes",
            self.id,
            delta_replicas,
            delta_size,
            policy.value,
            self.initial_replicas,
            self.initial_size,
        )

    def record_assignment(self, size: float) -> None:
        """Account a replica placed on this broker by the plan."""
        self.assigned_replicas += 1
        self.assigned_size += size

    def __str__(self) -> str:
        return f"{self._broker.id}"

    def __repr__(self) -> str:
        return (
            "BrokerUsage(id={id}, initial_replicas={ir}, assigned_replicas={ar}, "
            "initial_size={isz}, assigned_size={asz})".format(
                id=self.id,
                ir=self.initial_replicas,
                ar=self.assigned_replicas,
                isz=self.initial_size,
                asz=self.assigned_size,
            )
        )
