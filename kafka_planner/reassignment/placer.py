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

import enum
import logging
from collections import Counter
from typing import Collection

from .error import BrokerReferenceError
from .error import InvalidReplicationFactorError
from .error import ValidationError
from .partition import Partition
from .usage import BrokerUsage


class DiskComparison(enum.Enum):
    """How the disk usage of two candidate brokers is compared.

    SYMMETRIC compares the total size of each broker.
    LEGACY compares the sizes assigned by the plan only, reproducing the
    ordering of older planners where both sides used the base size of the
    first broker.
    """
    SYMMETRIC = 'symmetric'
    LEGACY = 'legacy'


def placement_key(
    usage: BrokerUsage,
    source_ids: Collection[int],
    source_racks: Collection[str],
    disk_comparison: DiskComparison = DiskComparison.SYMMETRIC,
) -> tuple[bool, bool, int, float]:
    """Sort key ranking candidate brokers for a replica, lowest first.

    1. brokers already hosting the partition, no data has to move
    2. brokers in the rack of a current replica, traffic stays in the rack
    3. fewer replicas once the plan is applied
    4. less disk used once the plan is applied
    """
    if disk_comparison is DiskComparison.LEGACY:
        disk_usage = usage.assigned_size
    else:
        disk_usage = usage.total_size
    return (
        usage.id not in source_ids,
        usage.rack is None or usage.rack not in source_racks,
        usage.total_replicas,
        disk_usage,
    )


class ReplicaPlacer:
    """Greedy placement of the replicas of a single partition.

    :param disk_comparison: DiskComparison used for the last tie-break.
    """

    def __init__(self, disk_comparison: DiskComparison = DiskComparison.SYMMETRIC) -> None:
        self.disk_comparison = disk_comparison
        self.log = logging.getLogger(self.__class__.__name__)

    def place(
        self,
        partition: Partition,
        replication_factor: int,
        topic_counts: dict[int, int],
        targets: list[BrokerUsage],
        brokers: dict[int, BrokerUsage],
    ) -> list[int]:
        """Choose the brokers hosting each replica of the partition.

        :param partition: Partition to place.
        :param replication_factor: Number of replicas to place.
        :param topic_counts: broker-id: replicas of the current topic placed on
            the broker. Updated in place.
        :param targets: BrokerUsage of the brokers eligible for the replicas,
            remaining ties are resolved in this order.
        :param brokers: broker-id: BrokerUsage of every broker in the cluster.
        :returns: ordered list of broker ids, one per replica.
        :raises: InvalidReplicationFactorError, ValidationError when there is
            nothing to place replicas on, BrokerReferenceError when a current
            replica is on an unknown broker.
        """
        if replication_factor <= 0:
            raise InvalidReplicationFactorError(
                "Invalid replication factor {rf} for partition {p_name}".format(
                    rf=replication_factor,
                    p_name=partition.name,
                ),
            )
        if not targets:
            raise ValidationError(
                f"No target brokers to place partition {partition.name} on",
            )

        source_ids = set()
        for broker_id in partition.replicas:
            if broker_id not in brokers:
                self.log.error(
                    "Replicas %s of partition %s reference unknown broker %s.",
                    partition.replicas,
                    partition,
                    broker_id,
                )
                raise BrokerReferenceError(
                    "Replicas of partition {p_name} ({replicas}) reference "
                    "broker {broker} which is not among the known brokers "
                    "{brokers}".format(
                        p_name=partition.name,
                        replicas=partition.replicas,
                        broker=broker_id,
                        brokers=sorted(brokers.keys()),
                    ),
                    broker_id=broker_id,
                    partition=partition.name,
                )
            source_ids.add(broker_id)
        source_racks = {
            brokers[broker_id].rack for broker_id in source_ids
            if brokers[broker_id].rack is not None
        }
        replica_size = partition.estimate_size()

        result: list[int] = []
        placed: Counter[int] = Counter()
        for _ in range(replication_factor):
            best = self._elect_broker(
                targets,
                topic_counts,
                placed,
                source_ids,
                source_racks,
            )
            result.append(best.id)
            placed[best.id] += 1
            topic_counts[best.id] += 1
            best.record_assignment(replica_size)

        self.log.debug(
            "Partition %s: %s -> %s",
            partition,
            partition.replicas,
            result,
        )
        return result

    def _elect_broker(
        self,
        targets: list[BrokerUsage],
        topic_counts: dict[int, int],
        placed: Counter[int],
        source_ids: set[int],
        source_racks: set[str],
    ) -> BrokerUsage:
        # Brokers already holding a replica of this partition are only reused
        # once every target holds one.
        min_placed = min(placed[usage.id] for usage in targets)
        eligible = [usage for usage in targets if placed[usage.id] == min_placed]

        # Spread the replicas of the topic evenly, otherwise the tie-breaks
        # below would pile them up on the same broker.
        min_count = min(topic_counts[usage.id] for usage in eligible)
        candidates = [
            usage for usage in eligible
            if topic_counts[usage.id] == min_count
        ]
        if len(candidates) == 1:
            return candidates[0]
        # min() keeps the first of equal keys, so ties follow the target order
        return min(
            candidates,
            key=lambda usage: placement_key(
                usage,
                source_ids,
                source_racks,
                self.disk_comparison,
            ),
        )
