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
from kafka_planner.reassignment.broker import Broker
from kafka_planner.reassignment.partition import LogDir
from kafka_planner.reassignment.partition import Partition
from kafka_planner.reassignment.snapshot import ClusterSnapshot
from kafka_planner.reassignment.topic import Topic
from kafka_planner.reassignment.topic import TopicSelection


def broker_range(n, racks=None):
    racks = racks or {}
    return [
        Broker(i, address=f'kafka-{i}:9092', rack=racks.get(i))
        for i in range(n)
    ]


def create_snapshot(assignment, sizes=None, replication_factors=None):
    """Build a ClusterSnapshot from a (topic, partition): replicas dict.

    :param sizes: (topic, partition): size reported by every replica, or a
        broker_id: size dict. Default 1.
    :param replication_factors: topic: replication factor. Default to the
        number of replicas of the partition.
    """
    sizes = sizes or {}
    replication_factors = replication_factors or {}
    topics = {}
    for (topic_id, partition_id), replicas in assignment.items():
        if topic_id not in topics:
            topics[topic_id] = Topic(
                topic_id,
                replication_factors.get(topic_id, len(replicas)),
            )
        topic = topics[topic_id]
        size = sizes.get((topic_id, partition_id), 1)
        if not isinstance(size, dict):
            size = {broker_id: size for broker_id in replicas}
        log_dirs = [
            LogDir(broker_id, partition_id, broker_size)
            for broker_id, broker_size in size.items()
        ]
        topic.add_partition(
            Partition(topic, partition_id, list(replicas), log_dirs),
        )
    return ClusterSnapshot(topics)


def select(snapshot, topic_id, *partition_ids):
    """Select the given partitions of a topic, all of them if none given."""
    topic = snapshot.topics[topic_id]
    if partition_ids:
        partitions = [topic.get_partition(p_id) for p_id in partition_ids]
    else:
        partitions = list(topic.partitions)
    return TopicSelection(topic, partitions)
