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
"""Point-in-time view of the cluster the planner works on.

The snapshot is produced by whatever collects the metadata (admin client,
REST proxy, a file dumped by an operator). It can be loaded from a yaml or
json document with the following layout:

.. code-block:: yaml

   brokers:
     - {id: 1, address: "kafka-1:9092", rack: "r1", log_dir_size: 1024}
   topics:
     orders:
       replication_factor: 2
       partitions:
         - id: 0
           replicas: [1, 2]
           log_dirs:
             - {broker_id: 1, size: 100}
             - {broker_id: 2, size: 90, error: "KAFKA_STORAGE_ERROR"}
     restricted: null
"""
from __future__ import annotations

import logging
import os
from typing import Any
from typing import Optional

import yaml
from typing_extensions import TypedDict

from .broker import Broker
from .partition import LogDir
from .partition import Partition
from .topic import Topic
from kafka_planner.util.error import InvalidSnapshotError
from kafka_planner.util.error import MissingSnapshotError


_log = logging.getLogger(__name__)


class LogDirDict(TypedDict, total=False):
    broker_id: int
    partition_id: int
    size: float
    error: Optional[str]


class PartitionDict(TypedDict, total=False):
    id: int
    replicas: list[int]
    log_dirs: list[LogDirDict]


class TopicDict(TypedDict, total=False):
    replication_factor: int
    partitions: Optional[list[PartitionDict]]


class BrokerDict(TypedDict, total=False):
    id: int
    address: str
    rack: Optional[str]
    log_dir_size: float


class SnapshotDict(TypedDict):
    brokers: list[BrokerDict]
    topics: Optional[dict[str, Optional[TopicDict]]]


class ClusterSnapshot:
    """Topics and partitions of the cluster.

    :param topics: topic id to Topic. None if the topic list couldn't be read.
        A topic whose partitions couldn't be read is mapped to None.
    """

    def __init__(self, topics: dict[str, Topic | None] | None) -> None:
        self.topics = topics

    @property
    def available(self) -> bool:
        return self.topics is not None

    def get_topic(self, topic_id: str) -> Topic | None:
        if self.topics is None:
            return None
        return self.topics.get(topic_id)


def _build_partition(topic: Topic, data: PartitionDict) -> Partition:
    partition_id = int(data['id'])
    log_dirs = [
        LogDir(
            broker_id=int(log_dir['broker_id']),
            partition_id=int(log_dir.get('partition_id', partition_id)),
            size=float(log_dir.get('size', 0)),
            error=log_dir.get('error') or None,
        )
        for log_dir in data.get('log_dirs') or []
    ]
    return Partition(
        topic,
        partition_id,
        replicas=[int(b_id) for b_id in data.get('replicas') or []],
        log_dirs=log_dirs,
    )


def _build_topic(topic_id: str, data: TopicDict | None) -> Topic | None:
    if data is None or data.get('partitions') is None:
        _log.warning("Partitions of topic %s are not available.", topic_id)
        return None
    partitions_data = data['partitions']
    replication_factor = data.get('replication_factor')
    if replication_factor is None:
        replication_factor = len(partitions_data[0].get('replicas') or []) if partitions_data else 0
    topic = Topic(topic_id, int(replication_factor))
    for partition_data in partitions_data:
        topic.add_partition(_build_partition(topic, partition_data))
    return topic


def parse_snapshot(data: SnapshotDict) -> tuple[list[Broker], ClusterSnapshot]:
    """Build brokers and cluster snapshot from a decoded document.

    :raises: InvalidSnapshotError when the document is malformed.
    """
    try:
        brokers = [
            Broker(
                id=int(broker['id']),
                address=broker.get('address') or '',
                rack=broker.get('rack'),
                log_dir_size=float(broker.get('log_dir_size') or 0),
            )
            for broker in data['brokers']
        ]
        topics_data = data['topics']
        if topics_data is None:
            _log.warning("Topic metadata is not available in the snapshot.")
            return brokers, ClusterSnapshot(None)
        topics = {
            str(topic_id): _build_topic(str(topic_id), topic_data)
            for topic_id, topic_data in topics_data.items()
        }
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        _log.exception("Invalid cluster snapshot")
        raise InvalidSnapshotError(f"Invalid cluster snapshot: {e!r}")
    _log.debug(
        'Snapshot with {brokers} brokers and {topics} topics'.format(
            brokers=len(brokers),
            topics=len(topics),
        ),
    )
    return brokers, ClusterSnapshot(topics)


def load_snapshot(snapshot_path: str) -> tuple[list[Broker], ClusterSnapshot]:
    """Load brokers and cluster snapshot from a yaml or json file."""
    if not os.path.isfile(snapshot_path):
        raise MissingSnapshotError(
            f"Cluster snapshot {snapshot_path} does not exist",
        )
    _log.debug("Loading cluster snapshot from %s", snapshot_path)
    with open(snapshot_path) as snapshot_file:
        try:
            data: Any = yaml.safe_load(snapshot_file)
        except yaml.YAMLError:
            _log.exception("Could not decode %s", snapshot_path)
            raise InvalidSnapshotError(
                f"Cluster snapshot {snapshot_path} could not be decoded",
            )
    if not isinstance(data, dict):
        raise InvalidSnapshotError(
            f"Cluster snapshot {snapshot_path} should contain a mapping",
        )
    return parse_snapshot(data)  # type: ignore[arg-type]
