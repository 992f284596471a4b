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
"""Entry point of the reassignment planner.

The computation runs in two phases:

1. Reset: the selected partitions are virtually removed from the target
   brokers, so that planning starts from the load the brokers have without
   them.
2. Distribute: topic by topic, every replica of every selected partition is
   placed on the best target broker (see ReplicaPlacer).

All the state lives in the objects created for a single call, concurrent
calls don't share anything.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable
from typing import NamedTuple

from .broker import Broker
from .error import ValidationError
from .placer import DiskComparison
from .placer import ReplicaPlacer
from .snapshot import ClusterSnapshot
from .topic import TopicSelection
from .topic_planner import TopicPlanner
from .usage import BrokerUsage
from .usage import ResetPolicy


TopicAssignments = dict[str, dict[int, list[int]]]


class Plan(NamedTuple):
    """Result of a planning run.

    :param assignments: topic: partition-id: broker ids.
    :param targets: BrokerUsage of the target brokers once the plan applies.
    """
    assignments: TopicAssignments
    targets: list[BrokerUsage]


class ReassignmentCoordinator:
    """Compute where the replicas of the selected partitions should go.

    :param reset_policy: ResetPolicy applied during the reset phase.
    :param disk_comparison: DiskComparison used by the placer.
    """

    def __init__(
        self,
        reset_policy: ResetPolicy = ResetPolicy.SUBTRACT,
        disk_comparison: DiskComparison = DiskComparison.SYMMETRIC,
    ) -> None:
        self.reset_policy = reset_policy
        self.disk_comparison = disk_comparison
        self.log = logging.getLogger(self.__class__.__name__)

    def compute_reassignments(
        self,
        selections: list[TopicSelection],
        all_brokers: Iterable[Broker],
        target_brokers: Iterable[Broker | int],
        snapshot: ClusterSnapshot | None,
    ) -> TopicAssignments:
        """Return topic: partition-id: broker ids for every selected partition.

        Every selected partition has an entry; it is left empty for topics
        that are skipped.

        :param selections: partitions to reassign, grouped by topic, in the
            order they should be planned.
        :param all_brokers: every broker of the cluster.
        :param target_brokers: brokers (or broker ids) eligible for replicas.
        :param snapshot: ClusterSnapshot used to compute broker usage.
        :raises: ReassignmentError subclasses, no partial result is returned.
        """
        return self.plan(selections, all_brokers, target_brokers, snapshot).assignments

    def plan(
        self,
        selections: list[TopicSelection],
        all_brokers: Iterable[Broker],
        target_brokers: Iterable[Broker | int],
        snapshot: ClusterSnapshot | None,
    ) -> Plan:
        """Same as compute_reassignments, also returning the usage of the
        target brokers.
        """
        brokers = OrderedDict(
            (broker.id, BrokerUsage.from_snapshot(broker, snapshot))
            for broker in all_brokers
        )
        targets = self._get_targets(brokers, target_brokers)

        result: TopicAssignments = {}
        for selection in selections:
            partitions = result.setdefault(selection.topic.id, {})
            for partition in selection.partitions:
                # A repeated partition would be reset and placed twice
                if partition.partition_id in partitions:
                    raise ValidationError(
                        "Partition {p_name} is selected more than once".format(
                            p_name=partition.name,
                        ),
                    )
                partitions[partition.partition_id] = []

        # Reset
        for usage in targets:
            for selection in selections:
                usage.subtract(selection.partitions, self.reset_policy)

        # Distribute
        topic_planner = TopicPlanner(ReplicaPlacer(self.disk_comparison))
        for selection in selections:
            assignments = topic_planner.plan_topic(selection, targets, brokers)
            result[selection.topic.id].update(assignments)

        self.log.info(
            "Planned %s partitions of %s topics over brokers %s",
            sum(len(partitions) for partitions in result.values()),
            len(result),
            ', '.join(str(usage) for usage in targets),
        )
        return Plan(result, targets)

    def _get_targets(
        self,
        brokers: dict[int, BrokerUsage],
        target_brokers: Iterable[Broker | int],
    ) -> list[BrokerUsage]:
        target_ids = [
            target.id if isinstance(target, Broker) else int(target)
            for target in target_brokers
        ]
        for broker_id in target_ids:
            if broker_id not in brokers:
                self.log.warning(
                    "Target broker %s is not in the cluster, ignoring it.",
                    broker_id,
                )
        # Keep the cluster order, remaining placement ties depend on it
        return [
            usage for broker_id, usage in brokers.items()
            if broker_id in target_ids
        ]


def compute_reassignments(
    selections: list[TopicSelection],
    all_brokers: Iterable[Broker],
    target_brokers: Iterable[Broker | int],
    snapshot: ClusterSnapshot | None,
    reset_policy: ResetPolicy = ResetPolicy.SUBTRACT,
    disk_comparison: DiskComparison = DiskComparison.SYMMETRIC,
) -> TopicAssignments:
    """Shortcut for ReassignmentCoordinator.compute_reassignments."""
    return ReassignmentCoordinator(
        reset_policy,
        disk_comparison,
    ).compute_reassignments(selections, all_brokers, target_brokers, snapshot)


def to_assignment(result: TopicAssignments) -> dict[tuple[str, int], list[int]]:
    """Flatten the planner result into the (topic, partition): replicas
    assignment used by kafka tooling. Partitions that weren't planned are left
    out.
    """
    return OrderedDict(
        ((topic_id, partition_id), replicas)
        for topic_id, partitions in result.items()
        for partition_id, replicas in partitions.items()
        if replicas
    )
