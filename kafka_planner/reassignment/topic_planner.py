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

import logging

from .placer import ReplicaPlacer
from .topic import TopicSelection
from .usage import BrokerUsage


class TopicPlanner:
    """Place the selected partitions of one topic.

    Replicas of the topic are counted per target broker so that they are
    spread evenly before cluster-wide balance is considered.

    :param placer: ReplicaPlacer used for every partition.
    """

    def __init__(self, placer: ReplicaPlacer) -> None:
        self.placer = placer
        self.log = logging.getLogger(self.__class__.__name__)

    def plan_topic(
        self,
        selection: TopicSelection,
        targets: list[BrokerUsage],
        brokers: dict[int, BrokerUsage],
    ) -> dict[int, list[int]]:
        """Return partition-id: broker ids for the selected partitions.

        Topics with an invalid replication factor or without selected
        partitions are skipped and an empty dict is returned.
        """
        topic, partitions = selection
        if topic.replication_factor <= 0:
            self.log.warning(
                "Skipping topic %s: invalid replication factor %s.",
                topic,
                topic.replication_factor,
            )
            return {}
        if not partitions:
            self.log.debug("Skipping topic %s: no partitions selected.", topic)
            return {}

        topic_counts = {usage.id: 0 for usage in targets}
        assignments = {}
        for partition in partitions:
            assignments[partition.partition_id] = self.placer.place(
                partition,
                topic.replication_factor,
                topic_counts,
                targets,
                brokers,
            )
        self.log.debug(
            "Topic %s replicas per broker: %s",
            topic,
            topic_counts,
        )
        return assignments
